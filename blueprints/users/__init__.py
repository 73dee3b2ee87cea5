"""
Users Blueprint - JSON API for administrator accounts
"""

from flask import Blueprint

users_bp = Blueprint('users', __name__, url_prefix='/api/admin/users')

from . import routes
