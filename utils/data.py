"""
Data Module - Service catalog and portfolio queries used by the public pages
"""

from flask import current_app
from extensions import db
from models import PortfolioItem, SERVICE_TYPES, file_type_for_service


SERVICES = {
    'video-editing': {
        'title': 'Video Editing',
        'headline': 'Professional Video Editing Services',
        'description': 'Transform your raw footage into captivating visual stories with our professional '
                       'video editing services. Perfect for businesses, content creators, and brands '
                       'looking to make an impact.',
        'features': ['4K/8K Video Editing', 'Color Grading & Correction', 'Motion Graphics & VFX',
                     'Social Media Content'],
    },
    'graphics-design': {
        'title': 'Graphics Design',
        'headline': 'Creative Graphics Design',
        'description': 'Elevate your brand with stunning visual identities and marketing materials that '
                       'tell your unique story and connect with your audience.',
        'features': ['Logo & Brand Identity', 'Print & Digital Marketing', 'Social Media Graphics',
                     'UI/UX Design'],
    },
    '3d-animation': {
        'title': '3D Animation',
        'headline': '3D Animation & Visualization',
        'description': 'Bring your ideas to life with our cutting-edge 3D animation services, from product '
                       'visualizations to immersive brand experiences.',
        'features': ['3D Product Visualization', 'Character Animation', 'Architectural Walkthroughs',
                     'Motion Graphics'],
    },
    'website-development': {
        'title': 'Website Development',
        'headline': 'Custom Website Development',
        'description': 'Custom-built websites that not only look stunning but also deliver exceptional user '
                       'experiences and drive conversions.',
        'features': ['Responsive Web Design', 'E-Commerce Solutions', 'Web Applications',
                     'Performance Optimization'],
    },
}


def get_service(slug):
    """Return the catalog entry for a service slug, or None"""
    if slug not in SERVICE_TYPES:
        return None
    return dict(SERVICES[slug], slug=slug, file_type=file_type_for_service(slug))


def get_services():
    return [get_service(slug) for slug in SERVICE_TYPES]


def get_portfolio_items(service=None):
    """
    Load portfolio items for display, newest first

    Args:
        service (str, optional): Only return items of this service category

    Returns:
        list: Serialized portfolio items; empty when the database is unavailable
    """
    try:
        query = PortfolioItem.query
        if service:
            query = query.filter_by(service=service)
        items = query.order_by(PortfolioItem.created_at.desc()).all()
        return [item.to_dict() for item in items]
    except Exception as e:
        current_app.logger.error(f"Error loading portfolio items for {service or 'all services'}: {str(e)}")
        db.session.rollback()
        return []


def get_portfolio_counts():
    """Number of portfolio items per service category"""
    counts = dict(
        db.session.query(PortfolioItem.service, db.func.count(PortfolioItem.id))
        .group_by(PortfolioItem.service)
        .all()
    )
    return {slug: counts.get(slug, 0) for slug in SERVICE_TYPES}
