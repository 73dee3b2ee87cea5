"""
Helpers Module - Utility functions shared by the API blueprints
"""

import re
from urllib.parse import urlparse
from flask import jsonify

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
PASSWORD_MIN_LENGTH = 6

ALLOWED_EXTENSIONS = {
    'image': {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg', 'avif'},
    'video': {'mp4', 'mov', 'webm', 'm4v', 'avi', 'mkv'},
}

NO_CACHE_HEADERS = {
    'Cache-Control': 'no-store, max-age=0',
    'Pragma': 'no-cache',
    'Expires': '0',
    'CDN-Cache-Control': 'no-store',
}


def api_response(data=None, message=None, status=200, **extra):
    """Build the standard {success, data, message} JSON envelope"""
    payload = {'success': status < 400}
    if data is not None:
        payload['data'] = data
    if message:
        payload['message'] = message
    payload.update(extra)
    return jsonify(payload), status


def api_error(message, status=400, **extra):
    """Build an error envelope"""
    return api_response(message=message, status=status, **extra)


def allowed_file(filename, file_type='image'):
    """Check if file extension is allowed for the given file kind"""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS[file_type]


def has_file(file_storage):
    """True when a multipart field carries an actual uploaded file"""
    return bool(file_storage and file_storage.filename)


def parse_technologies(raw):
    """Split a comma-separated technologies string into trimmed, non-empty tags"""
    if not raw or not raw.strip():
        return []
    return [tech.strip()[:50] for tech in raw.split(',') if tech.strip()]


def is_valid_email(email):
    return bool(email) and EMAIL_PATTERN.match(email) is not None


def is_valid_project_url(url):
    """Only absolute http(s) links may be shown on the public gallery"""
    parsed = urlparse(url)
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)
