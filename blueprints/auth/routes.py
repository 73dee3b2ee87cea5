"""
Auth Routes - Admin sign-in through Flask-Login
"""

from urllib.parse import urlparse
from flask import render_template, redirect, url_for, request, flash, current_app
from flask_login import login_user, logout_user, current_user
from models import User
from utils.security import get_client_ip
from . import auth_bp


def _safe_next(target):
    """Only follow relative redirect targets"""
    if not target:
        return None
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith('/'):
        return None
    return target


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login"""
    if current_user.is_authenticated:
        return redirect(url_for('admin.index'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip().lower()
        password = request.form.get('password', '')

        user = User.query.filter_by(email=email).first() if email else None
        if user and user.is_active and user.check_password(password):
            login_user(user, remember=request.form.get('remember') == 'on')
            current_app.logger.info(f"Admin login: {email} from {get_client_ip()}")
            flash('Signed in successfully.', 'success')
            return redirect(_safe_next(request.args.get('next')) or url_for('admin.index'))

        current_app.logger.warning(f"Failed login for {email or 'empty email'} from {get_client_ip()}")
        flash('Invalid email or password.', 'error')
        return render_template('admin/login.html', email=email), 401

    return render_template('admin/login.html')


@auth_bp.route('/logout')
def logout():
    """Logout current user"""
    if current_user.is_authenticated:
        logout_user()
        flash('Logged out successfully', 'success')
    return redirect(url_for('auth.login'))
