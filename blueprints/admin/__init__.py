"""
Admin Blueprint - Admin panel pages
Handles: Portfolio management screens, per-service listings, user management screens
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__, url_prefix='/admin')

from . import routes
