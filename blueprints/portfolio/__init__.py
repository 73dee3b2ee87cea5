"""
Portfolio Blueprint - JSON API over portfolio items
Handles: Listing, fetching, creating, updating and deleting items with their media
"""

from flask import Blueprint

portfolio_bp = Blueprint('portfolio', __name__, url_prefix='/api/portfolio')

from . import routes
