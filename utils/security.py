"""
Security Module - Client IP tracking, contact rate limiting, audit logging
"""

import os
import json
import time
from datetime import datetime
from flask import request, current_app


# Rate Limiting
RATE_LIMIT_REQUESTS = {}  # {ip: [(timestamp, endpoint), ...]}
RATE_LIMIT_MAX_REQUESTS = 10  # Max 10 requests
RATE_LIMIT_WINDOW = 60  # Per 60 seconds
AUDIT_LOG_FILE = 'security/audit_log.json'


def log_audit_event(event_type, actor=None, details=''):
    """Log administrative changes (portfolio and account mutations) for later review"""
    try:
        log_data = {
            'event': event_type,
            'actor': actor,
            'ip': get_client_ip(),
            'details': details,
            'timestamp': datetime.now().strftime('%Y-%m-%d %H:%M:%S')
        }

        audit_file = current_app.config.get('AUDIT_LOG_FILE', AUDIT_LOG_FILE)
        try:
            with open(audit_file, 'r', encoding='utf-8') as f:
                logs = json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            logs = []

        logs.append(log_data)
        logs = logs[-1000:]

        os.makedirs(os.path.dirname(audit_file) or '.', exist_ok=True)
        with open(audit_file, 'w', encoding='utf-8') as f:
            json.dump(logs, f, ensure_ascii=False, indent=2)
    except Exception as e:
        current_app.logger.error(f"Error logging audit event: {str(e)}")


def get_client_ip():
    """Get real client IP address"""
    forwarded = request.environ.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.environ.get('REMOTE_ADDR', 'unknown')


def check_rate_limit(endpoint='contact'):
    """Check if IP is within rate limit"""
    client_ip = get_client_ip()
    current_time = time.time()
    max_requests = current_app.config.get('RATE_LIMIT_MAX_REQUESTS', RATE_LIMIT_MAX_REQUESTS)
    window = current_app.config.get('RATE_LIMIT_WINDOW', RATE_LIMIT_WINDOW)

    # Clean old requests outside the window, dropping idle clients
    for ip in list(RATE_LIMIT_REQUESTS):
        recent = [(ts, ep) for ts, ep in RATE_LIMIT_REQUESTS[ip] if current_time - ts < window]
        if recent:
            RATE_LIMIT_REQUESTS[ip] = recent
        else:
            del RATE_LIMIT_REQUESTS[ip]

    RATE_LIMIT_REQUESTS.setdefault(client_ip, [])

    # Check if limit exceeded
    endpoint_requests = [
        ep for ts, ep in RATE_LIMIT_REQUESTS[client_ip] if ep == endpoint
    ]
    if len(endpoint_requests) >= max_requests:
        return False

    # Add current request
    RATE_LIMIT_REQUESTS[client_ip].append((current_time, endpoint))
    return True


__all__ = [
    'get_client_ip',
    'check_rate_limit',
    'log_audit_event',
]
