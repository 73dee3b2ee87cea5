"""
Pages Blueprint - Public marketing pages
Handles: Home, service pages, portfolio gallery, sitemap and robots
"""

from flask import Blueprint

pages_bp = Blueprint('pages', __name__, url_prefix='')

from . import routes
