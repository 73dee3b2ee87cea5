"""
Users Routes - Administrator account management API
"""

from flask import request, current_app
from flask_login import current_user
from extensions import db
from models import User
from utils.decorators import api_login_required
from utils.helpers import api_response, api_error, is_valid_email, PASSWORD_MIN_LENGTH
from utils.security import log_audit_event
from . import users_bp


def _json_body():
    return request.get_json(silent=True) or {}


@users_bp.route('', methods=['GET'])
@api_login_required
def list_users():
    """List all accounts without their password hashes"""
    try:
        users = User.query.order_by(User.created_at.desc()).all()
        return api_response(data=[user.to_dict() for user in users])
    except Exception as e:
        current_app.logger.error(f"Error fetching users: {str(e)}")
        return api_error('Failed to fetch users', 500)


@users_bp.route('', methods=['POST'])
@api_login_required
def create_user():
    """Create a new account with a hashed password"""
    body = _json_body()
    email = (body.get('email') or '').strip().lower()
    password = body.get('password') or ''
    name = (body.get('name') or '').strip()

    if not email or not password:
        return api_error('Email and password are required', 400)

    if not is_valid_email(email):
        return api_error('Please enter a valid email address', 400)

    if len(password) < PASSWORD_MIN_LENGTH:
        return api_error(f'Password must be at least {PASSWORD_MIN_LENGTH} characters', 400)

    try:
        if User.query.filter_by(email=email).first():
            return api_error('User already exists with this email', 400)

        user = User(email=email, name=name or None, role='user', is_active=True)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()

        current_app.logger.info(f"User {email} created by {current_user.email}")
        log_audit_event('user_created', actor=current_user.email, details=email)
        return api_response(data=user.to_dict(), message='User created successfully', status=201)

    except Exception as e:
        current_app.logger.error(f"Error creating user: {str(e)}")
        db.session.rollback()
        return api_error('Internal server error', 500)


@users_bp.route('/<user_id>', methods=['GET'])
@api_login_required
def get_user(user_id):
    try:
        user = db.session.get(User, user_id)
        if not user:
            return api_error('User not found', 404)
        return api_response(data=user.to_dict())
    except Exception as e:
        current_app.logger.error(f"Error fetching user {user_id}: {str(e)}")
        return api_error('Failed to fetch user', 500)


@users_bp.route('/<user_id>', methods=['PUT'])
@api_login_required
def update_user(user_id):
    """Change an account's email and/or password (self or admin only)"""
    body = _json_body()
    email = (body.get('email') or '').strip().lower()
    password = body.get('password') or ''

    try:
        user = db.session.get(User, user_id)
        if not user:
            return api_error('User not found', 404)

        if current_user.id != user.id and not current_user.is_admin:
            return api_error('You can only update your own account', 403)

        if not email and not password:
            return api_error('Nothing to update', 400)

        if email and email != user.email:
            if not is_valid_email(email):
                return api_error('Please enter a valid email address', 400)
            if User.query.filter(User.email == email, User.id != user.id).first():
                return api_error('User already exists with this email', 400)
            user.email = email

        if password:
            if len(password) < PASSWORD_MIN_LENGTH:
                return api_error(f'Password must be at least {PASSWORD_MIN_LENGTH} characters', 400)
            user.set_password(password)

        db.session.commit()

        current_app.logger.info(f"User {user.id} updated by {current_user.email}")
        log_audit_event('user_updated', actor=current_user.email,
                        details=f"{user.id} password_changed={bool(password)}")
        return api_response(data=user.to_dict(), message='User updated successfully')

    except Exception as e:
        current_app.logger.error(f"Error updating user {user_id}: {str(e)}")
        db.session.rollback()
        return api_error('Internal server error', 500)


@users_bp.route('/<user_id>', methods=['DELETE'])
@api_login_required
def delete_user(user_id):
    """Delete an account (admin only); nobody can delete their own"""
    if current_user.id == user_id:
        return api_error('You cannot delete your own account', 400)

    try:
        user = db.session.get(User, user_id)
        if not user:
            return api_error('User not found', 404)

        if not current_user.is_admin:
            return api_error('Only administrators can delete accounts', 403)

        email = user.email
        db.session.delete(user)
        db.session.commit()

        current_app.logger.info(f"User {email} deleted by {current_user.email}")
        log_audit_event('user_deleted', actor=current_user.email, details=email)
        return api_response(message='User deleted successfully')

    except Exception as e:
        current_app.logger.error(f"Error deleting user {user_id}: {str(e)}")
        db.session.rollback()
        return api_error('Internal server error', 500)
