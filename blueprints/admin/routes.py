"""
Admin Routes - Admin panel pages
The forms talk to the JSON API from the browser; these views only render them.
"""

from flask import render_template, redirect, url_for, abort
from flask_login import current_user
from extensions import db
from models import PortfolioItem, User
from utils.data import get_service, get_services, get_portfolio_items, get_portfolio_counts
from utils.decorators import login_required
from . import admin_bp


@admin_bp.route('/')
@login_required
def index():
    return redirect(url_for('admin.portfolio'))


@admin_bp.route('/portfolio')
@login_required
def portfolio():
    """All portfolio items with per-service counts"""
    return render_template('admin/portfolio.html',
                           items=get_portfolio_items(),
                           services=get_services(),
                           counts=get_portfolio_counts(),
                           current_service=None)


@admin_bp.route('/services/<service>')
@login_required
def service_items(service):
    """Portfolio items of one service category"""
    service_info = get_service(service)
    if not service_info:
        abort(404)
    return render_template('admin/portfolio.html',
                           items=get_portfolio_items(service),
                           services=get_services(),
                           counts=get_portfolio_counts(),
                           current_service=service_info)


@admin_bp.route('/portfolio/add')
@admin_bp.route('/services/<service>/add')
@login_required
def add_portfolio_item(service=None):
    if service and not get_service(service):
        abort(404)
    return render_template('admin/portfolio_form.html',
                           item=None,
                           services=get_services(),
                           selected_service=service)


@admin_bp.route('/portfolio/edit/<item_id>')
@login_required
def edit_portfolio_item(item_id):
    item = db.session.get(PortfolioItem, item_id)
    if not item:
        abort(404)
    return render_template('admin/portfolio_form.html',
                           item=item.to_dict(),
                           services=get_services(),
                           selected_service=item.service)


@admin_bp.route('/users')
@login_required
def users():
    """Manage administrator accounts"""
    users_list = [user.to_dict() for user in User.query.order_by(User.created_at.desc()).all()]
    return render_template('admin/users.html', users=users_list, current_user_id=current_user.id)


@admin_bp.route('/users/add')
@login_required
def add_user():
    return render_template('admin/user_form.html', target_user=None)


@admin_bp.route('/users/<user_id>')
@login_required
def edit_user(user_id):
    """Change email or password of an account"""
    user = db.session.get(User, user_id)
    if not user:
        abort(404)
    return render_template('admin/user_form.html', target_user=user.to_dict())
