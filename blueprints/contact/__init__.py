"""
Contact Blueprint - Relays the public contact form by email
"""

from flask import Blueprint

contact_bp = Blueprint('contact', __name__, url_prefix='/api')

from . import routes
