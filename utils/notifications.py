"""
Notifications Module - Outbound email for the public contact form
"""

import smtplib
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from email.utils import formataddr, make_msgid
from html import escape
from flask import current_app


def get_contact_smtp_config():
    """Load the mail relay settings used by the contact form"""
    return {
        'host': current_app.config.get('CONTACT_SMTP_HOST', 'smtp.gmail.com'),
        'port': current_app.config.get('CONTACT_SMTP_PORT', '587'),
        'email': current_app.config.get('CONTACT_SMTP_EMAIL', ''),
        'password': current_app.config.get('CONTACT_SMTP_PASSWORD', '')
    }


def get_missing_smtp_config():
    """Return the mail relay credential keys that are not configured"""
    smtp_cfg = get_contact_smtp_config()
    missing = []
    if not smtp_cfg.get('email'):
        missing.append('GMAIL_USER')
    if not smtp_cfg.get('password'):
        missing.append('GMAIL_APP_PASSWORD')
    return missing


def build_contact_message(name, email, subject, message, relay_address):
    """Build the multipart email relayed to the studio inbox"""
    msg = MIMEMultipart('alternative')
    msg['Subject'] = f"New Contact Form Submission: {subject}"
    msg['From'] = formataddr((name, relay_address))
    msg['To'] = relay_address
    msg['Reply-To'] = email
    msg['Message-ID'] = make_msgid()

    text_body = (
        "You have received a new message from your website contact form.\n\n"
        f"Name: {name}\n"
        f"Email: {email}\n"
        f"Subject: {subject}\n\n"
        f"Message:\n{message}\n"
    )
    html_body = (
        '<div style="font-family: Arial, sans-serif; line-height: 1.6; max-width: 600px; margin: 0 auto;">'
        '<h2 style="color: #4f46e5;">New Contact Form Submission</h2>'
        '<p>You have received a new message from your website contact form.</p>'
        f"<p><strong>Name:</strong> {escape(name)}</p>"
        f'<p><strong>Email:</strong> <a href="mailto:{escape(email)}">{escape(email)}</a></p>'
        f"<p><strong>Subject:</strong> {escape(subject)}</p>"
        f'<p><strong>Message:</strong></p><p style="white-space: pre-line;">{escape(message)}</p>'
        '</div>'
    )
    msg.attach(MIMEText(text_body, 'plain'))
    msg.attach(MIMEText(html_body, 'html'))
    return msg


def send_contact_email(name, email, subject, message):
    """
    Relay a contact form submission through the configured SMTP account

    The message is sent from the relay account to itself with Reply-To set
    to the visitor. SMTP errors propagate to the caller.

    Returns:
        str: Message-ID of the relayed email
    """
    smtp_cfg = get_contact_smtp_config()
    msg = build_contact_message(name, email, subject, message, smtp_cfg['email'])

    with smtplib.SMTP(smtp_cfg['host'], int(smtp_cfg['port']), timeout=30) as server:
        server.starttls()
        server.login(smtp_cfg['email'], smtp_cfg['password'])
        server.send_message(msg)

    current_app.logger.info(f"Contact email relayed from {email}, message id {msg['Message-ID']}")
    return msg['Message-ID']
