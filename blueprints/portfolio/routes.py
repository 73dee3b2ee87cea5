"""
Portfolio Routes - Portfolio item API
Media files live on the asset host; records keep their URLs and public ids.
"""

from flask import request, current_app
from flask_login import current_user
from extensions import db
from models import (
    PortfolioItem, SERVICE_TYPES, TITLE_MAX_LENGTH, DESCRIPTION_MAX_LENGTH,
    file_type_for_service
)
from utils import media
from utils.decorators import api_login_required
from utils.helpers import (
    api_response, api_error, allowed_file, has_file, parse_technologies, is_valid_project_url
)
from utils.security import log_audit_event
from . import portfolio_bp


def _missing_media_config_response():
    """500 response naming the absent asset host keys, or None when configured"""
    missing = media.get_missing_config()
    if not missing:
        return None
    error_message = f"Missing required Cloudinary environment variables: {', '.join(missing)}"
    current_app.logger.error(error_message)
    return api_error('Server configuration error', 500,
                     details=error_message, missingVariables=missing)


def _validate_fields(title, description, project_url):
    if len(title) > TITLE_MAX_LENGTH:
        return f'Title cannot be more than {TITLE_MAX_LENGTH} characters'
    if len(description) > DESCRIPTION_MAX_LENGTH:
        return f'Description cannot be more than {DESCRIPTION_MAX_LENGTH} characters'
    if project_url and not is_valid_project_url(project_url):
        return 'Project URL must start with http:// or https://'
    return None


@portfolio_bp.route('/items', methods=['GET'])
def list_items():
    """Public list of portfolio items, optionally filtered by service"""
    try:
        query = PortfolioItem.query
        service = request.args.get('service')
        if service:
            query = query.filter_by(service=service)
        items = query.order_by(PortfolioItem.created_at.desc()).all()
        return api_response(data=[item.to_dict() for item in items])
    except Exception as e:
        current_app.logger.error(f"Error fetching portfolio items: {str(e)}")
        db.session.rollback()
        return api_error('Internal server error', 500)


@portfolio_bp.route('/items/<item_id>', methods=['GET'])
def get_item(item_id):
    """Public view of a single portfolio item"""
    try:
        item = db.session.get(PortfolioItem, item_id)
        if not item:
            return api_error('Portfolio item not found', 404)
        return api_response(data=item.to_dict())
    except Exception as e:
        current_app.logger.error(f"Error fetching portfolio item {item_id}: {str(e)}")
        db.session.rollback()
        return api_error('Internal server error', 500)


@portfolio_bp.route('/items', methods=['POST'])
@api_login_required
def create_item():
    """Upload media to the asset host and create a portfolio item"""
    config_error = _missing_media_config_response()
    if config_error:
        return config_error

    title = request.form.get('title', '').strip()
    description = request.form.get('description', '').strip()
    service = request.form.get('service', '').strip()
    project_url = request.form.get('projectUrl', '').strip()
    technologies = parse_technologies(request.form.get('technologies'))
    file = request.files.get('file')
    thumbnail = request.files.get('thumbnail')

    if not title or not description or not service or not has_file(file):
        return api_error('Missing required fields', 400)

    if service not in SERVICE_TYPES:
        return api_error('Invalid service type', 400)

    field_error = _validate_fields(title, description, project_url)
    if field_error:
        return api_error(field_error, 400)

    file_type = file_type_for_service(service)
    if not allowed_file(file.filename, file_type):
        return api_error(f'The {service} service expects a {file_type} file', 400)

    try:
        upload_result = media.upload_file(file, service, file_type)

        thumbnail_result = None
        if has_file(thumbnail):
            try:
                thumbnail_result = media.upload_file(thumbnail, f"{service}/thumbnails")
            except media.MediaUploadError as e:
                # Continue without thumbnail if upload fails
                current_app.logger.warning(f"Thumbnail upload failed, saving item without it: {str(e)}")

        item = PortfolioItem(
            title=title,
            description=description,
            service=service,
            file_url=upload_result['url'],
            public_id=upload_result['public_id'],
            file_type=file_type,
            project_url=project_url or None,
            technologies=technologies
        )
        if thumbnail_result:
            item.thumbnail_url = thumbnail_result['url']
            item.thumbnail_public_id = thumbnail_result['public_id']

        db.session.add(item)
        db.session.commit()

        current_app.logger.info(f"Portfolio item created: {item.id} ({service})")
        log_audit_event('portfolio_item_created', actor=current_user.email, details=item.id)
        return api_response(data=item.to_dict(),
                            message='Portfolio item created successfully',
                            status=201)

    except Exception as e:
        current_app.logger.error(f"Error creating portfolio item: {str(e)}")
        db.session.rollback()
        return api_error(str(e) or 'Internal server error', 500)


@portfolio_bp.route('/items/<item_id>', methods=['PUT'])
@api_login_required
def update_item(item_id):
    """Update an item, replacing its media on the asset host when new files arrive"""
    title = request.form.get('title', '').strip()
    description = request.form.get('description', '').strip()
    file = request.files.get('file')
    thumbnail = request.files.get('thumbnail')
    project_url = request.form.get('projectUrl', '').strip()
    remove_thumbnail = request.form.get('removeThumbnail') == 'true'

    if not title or not description:
        return api_error('Missing required fields', 400)

    field_error = _validate_fields(title, description, project_url)
    if field_error:
        return api_error(field_error, 400)

    service = request.form.get('service', '').strip()
    if service and service not in SERVICE_TYPES:
        return api_error('Invalid service type', 400)

    try:
        item = db.session.get(PortfolioItem, item_id)
        if not item:
            return api_error('Portfolio item not found', 404)

        if has_file(file) or has_file(thumbnail):
            config_error = _missing_media_config_response()
            if config_error:
                return config_error

        if service:
            item.service = service

        if has_file(file):
            if not allowed_file(file.filename, item.file_type):
                return api_error(f'This item expects a {item.file_type} file', 400)
            # Upload the replacement before dropping the old file
            upload_result = media.upload_file(file, item.service, item.file_type)
            media.delete_file(item.public_id, item.file_type)
            item.file_url = upload_result['url']
            item.public_id = upload_result['public_id']

        if has_file(thumbnail):
            try:
                thumbnail_result = media.upload_file(thumbnail, f"{item.service}/thumbnails")
            except media.MediaUploadError as e:
                # Keep the current thumbnail if its replacement fails
                current_app.logger.warning(f"Thumbnail upload failed, keeping existing one: {str(e)}")
            else:
                if item.thumbnail_public_id:
                    media.delete_file(item.thumbnail_public_id, 'image')
                item.thumbnail_url = thumbnail_result['url']
                item.thumbnail_public_id = thumbnail_result['public_id']
        elif remove_thumbnail:
            if item.thumbnail_public_id:
                media.delete_file(item.thumbnail_public_id, 'image')
            item.thumbnail_url = None
            item.thumbnail_public_id = None

        item.title = title
        item.description = description
        item.project_url = project_url or None
        if 'technologies' in request.form:
            item.technologies = parse_technologies(request.form.get('technologies'))

        db.session.commit()

        current_app.logger.info(f"Portfolio item updated: {item.id}")
        log_audit_event('portfolio_item_updated', actor=current_user.email, details=item.id)
        return api_response(data=item.to_dict(), message='Portfolio item updated successfully')

    except Exception as e:
        current_app.logger.error(f"Error updating portfolio item {item_id}: {str(e)}")
        db.session.rollback()
        return api_error(str(e) or 'Internal server error', 500)


@portfolio_bp.route('/items/<item_id>', methods=['DELETE'])
@api_login_required
def delete_item(item_id):
    """Delete an item; asset cleanup on the host is best effort"""
    try:
        item = db.session.get(PortfolioItem, item_id)
        if not item:
            return api_error('Portfolio item not found', 404)

        media.delete_file(item.public_id, item.file_type)
        if item.thumbnail_public_id:
            media.delete_file(item.thumbnail_public_id, 'image')

        db.session.delete(item)
        db.session.commit()

        current_app.logger.info(f"Portfolio item deleted: {item_id}")
        log_audit_event('portfolio_item_deleted', actor=current_user.email, details=item_id)
        return api_response(message='Portfolio item deleted successfully')

    except Exception as e:
        current_app.logger.error(f"Error deleting portfolio item {item_id}: {str(e)}")
        db.session.rollback()
        return api_error('Internal server error', 500)
