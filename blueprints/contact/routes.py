"""
Contact Routes - Public contact form relay
Nothing is stored; messages go straight to the studio inbox.
"""

import smtplib
from flask import request, current_app
from utils.helpers import api_response, api_error, is_valid_email
from utils.notifications import send_contact_email, get_missing_smtp_config
from utils.security import check_rate_limit
from . import contact_bp


@contact_bp.route('/contact', methods=['POST'])
def contact():
    """Validate a contact form submission and relay it by email"""
    body = request.get_json(silent=True) or {}

    # Honeypot spam protection
    if body.get('website'):
        return api_response(message='Message sent successfully!')

    if not check_rate_limit('contact'):
        current_app.logger.warning('Contact form rate limit exceeded')
        return api_error('Too many requests. Please try again later.', 429)

    name = str(body.get('name') or '').strip()
    email = str(body.get('email') or '').strip()
    subject = str(body.get('subject') or '').strip()
    message = str(body.get('message') or '').strip()

    if not all([name, email, subject, message]):
        return api_error('All fields are required', 400)

    if not is_valid_email(email):
        return api_error('Please enter a valid email address', 400)

    missing = get_missing_smtp_config()
    if missing:
        current_app.logger.error('Missing email configuration in environment variables')
        return api_error('Server configuration error: Missing email configuration', 500,
                         error=f"Missing {' or '.join(missing)} in environment variables")

    try:
        message_id = send_contact_email(name, email, subject, message[:5000])
        return api_response(message='Message sent successfully!', messageId=message_id)

    except smtplib.SMTPAuthenticationError as e:
        current_app.logger.error(f"Contact email authentication failed: {str(e)}")
        return api_error('Email authentication failed. Please check the email configuration.', 500)
    except (smtplib.SMTPException, OSError) as e:
        error_message = str(e)
        current_app.logger.error(f"Error sending contact email: {error_message}")
        user_message = 'Failed to send message. Please try again later.'
        if 'quota' in error_message.lower():
            user_message = 'Email sending quota exceeded. Please try again later or contact support.'
        return api_error(user_message, 500)
    except Exception as e:
        current_app.logger.error(f"Unexpected error in contact API: {str(e)}")
        return api_error('An unexpected error occurred. Please try again later.', 500)
