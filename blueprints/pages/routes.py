"""
Pages Routes - Public marketing pages
"""

from datetime import datetime
from flask import render_template, request, current_app, abort
from models import SERVICE_TYPES
from utils.data import get_service, get_services, get_portfolio_items
from . import pages_bp


def _base_url():
    return (current_app.config.get('SITE_URL') or request.url_root).rstrip('/')


@pages_bp.route('/')
def index():
    """Landing page - hero, services, about and contact sections"""
    return render_template('index.html', services=get_services())


@pages_bp.route('/services/<service>')
def service_page(service):
    """Service page with its portfolio gallery"""
    service_info = get_service(service)
    if not service_info:
        abort(404)
    return render_template('service.html',
                           service=service_info,
                           items=get_portfolio_items(service))


@pages_bp.route('/portfolio')
def portfolio():
    """Full portfolio gallery, optionally filtered by service"""
    service = request.args.get('service')
    if service and service not in SERVICE_TYPES:
        service = None
    return render_template('portfolio.html',
                           items=get_portfolio_items(service),
                           services=get_services(),
                           current_service=service)


@pages_bp.route('/sitemap.xml')
def sitemap():
    """Generate dynamic sitemap for SEO"""
    base_url = _base_url()
    today = datetime.now().strftime('%Y-%m-%d')

    sitemap_entries = [
        {'loc': f'{base_url}/', 'changefreq': 'weekly', 'priority': '1.0'},
        {'loc': f'{base_url}/portfolio', 'changefreq': 'weekly', 'priority': '0.9'},
    ]
    for service in SERVICE_TYPES:
        sitemap_entries.append({
            'loc': f'{base_url}/services/{service}',
            'changefreq': 'weekly',
            'priority': '0.8'
        })

    sitemap_xml = ['<?xml version="1.0" encoding="UTF-8"?>']
    sitemap_xml.append('<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">')

    for entry in sitemap_entries:
        sitemap_xml.append('<url>')
        sitemap_xml.append(f'<loc>{entry["loc"]}</loc>')
        sitemap_xml.append(f'<lastmod>{today}</lastmod>')
        sitemap_xml.append(f'<changefreq>{entry["changefreq"]}</changefreq>')
        sitemap_xml.append(f'<priority>{entry["priority"]}</priority>')
        sitemap_xml.append('</url>')

    sitemap_xml.append('</urlset>')

    response = current_app.make_response('\n'.join(sitemap_xml))
    response.headers['Content-Type'] = 'application/xml; charset=utf-8'
    return response


@pages_bp.route('/robots.txt')
def robots():
    """Generate robots.txt for SEO"""
    robots_txt = """User-agent: *
Allow: /
Allow: /services/
Allow: /portfolio
Disallow: /admin/
Disallow: /api/

Sitemap: """ + _base_url() + """/sitemap.xml"""

    response = current_app.make_response(robots_txt)
    response.headers['Content-Type'] = 'text/plain; charset=utf-8'
    return response
