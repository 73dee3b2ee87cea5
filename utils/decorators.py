"""
Decorators Module - Authentication decorators for admin pages and API routes
"""

from functools import wraps
from flask import redirect, url_for, flash, request
from flask_login import current_user
from .helpers import api_error


def login_required(f):
    """Decorator to require an admin session on HTML pages"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            flash('Please sign in to access the admin panel.', 'error')
            return redirect(url_for('auth.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def api_login_required(f):
    """Decorator to reject API calls without a session"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_user.is_authenticated:
            return api_error('Not authenticated', 401)
        return f(*args, **kwargs)
    return decorated_function
