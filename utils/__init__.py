"""
Utils Package - Centralized utility modules initialization
"""

from .decorators import login_required, api_login_required
from .data import get_service, get_services, get_portfolio_items, get_portfolio_counts
from .helpers import (
    api_response,
    api_error,
    allowed_file,
    has_file,
    parse_technologies,
    is_valid_email,
    is_valid_project_url
)
from .media import init_media, upload_file, delete_file, get_missing_config, MediaConfigError, MediaUploadError
from .notifications import send_contact_email, get_missing_smtp_config
from .security import get_client_ip, check_rate_limit, log_audit_event

__all__ = [
    # Decorators
    'login_required',
    'api_login_required',

    # Data
    'get_service',
    'get_services',
    'get_portfolio_items',
    'get_portfolio_counts',

    # Helpers
    'api_response',
    'api_error',
    'allowed_file',
    'has_file',
    'parse_technologies',
    'is_valid_email',
    'is_valid_project_url',

    # Media
    'init_media',
    'upload_file',
    'delete_file',
    'get_missing_config',
    'MediaConfigError',
    'MediaUploadError',

    # Notifications
    'send_contact_email',
    'get_missing_smtp_config',

    # Security
    'get_client_ip',
    'check_rate_limit',
    'log_audit_event'
]
