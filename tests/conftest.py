import io
import os

os.environ.setdefault('FLASK_ENV', 'testing')

import pytest

from app import create_app
from extensions import db
from models import User, PortfolioItem
from utils import media, security


ADMIN_EMAIL = 'admin@example.com'
ADMIN_PASSWORD = 'admin123'
EDITOR_EMAIL = 'editor@example.com'
EDITOR_PASSWORD = 'editor123'


@pytest.fixture
def app(tmp_path):
    app = create_app('testing')
    app.config['AUDIT_LOG_FILE'] = str(tmp_path / 'audit_log.json')
    security.RATE_LIMIT_REQUESTS.clear()
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def _create_user(app, email, password, role):
    with app.app_context():
        user = User(email=email, role=role, is_active=True)
        user.set_password(password)
        db.session.add(user)
        db.session.commit()
        return user.id


@pytest.fixture
def admin_id(app):
    return _create_user(app, ADMIN_EMAIL, ADMIN_PASSWORD, 'admin')


@pytest.fixture
def editor_id(app):
    return _create_user(app, EDITOR_EMAIL, EDITOR_PASSWORD, 'user')


def login(client, email, password):
    return client.post('/admin/login', data={'email': email, 'password': password})


@pytest.fixture
def auth_client(client, admin_id):
    response = login(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    assert response.status_code == 302
    return client


@pytest.fixture
def editor_client(app, admin_id, editor_id):
    client = app.test_client()
    response = login(client, EDITOR_EMAIL, EDITOR_PASSWORD)
    assert response.status_code == 302
    return client


class FakeMediaHost:
    """Stands in for the asset host, recording uploads and deletions"""

    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.fail_folders = set()

    def upload_file(self, file_storage, folder, resource_type='image'):
        if folder in self.fail_folders:
            raise media.MediaUploadError(f'Cloudinary upload failed: {folder} rejected')
        number = len(self.uploads) + 1
        public_id = f'portfolio/{folder}/asset{number}'
        self.uploads.append({
            'filename': file_storage.filename,
            'folder': folder,
            'resource_type': resource_type,
            'public_id': public_id,
        })
        return {
            'url': f'https://res.cloudinary.com/test-cloud/{resource_type}/upload/{public_id}',
            'public_id': public_id,
        }

    def delete_file(self, public_id, resource_type='image'):
        self.deleted.append((public_id, resource_type))
        return True


@pytest.fixture
def media_host(monkeypatch):
    host = FakeMediaHost()
    monkeypatch.setattr(media, 'upload_file', host.upload_file)
    monkeypatch.setattr(media, 'delete_file', host.delete_file)
    return host


def upload(name, content=b'binary-content'):
    return (io.BytesIO(content), name)


def item_form(**overrides):
    data = {
        'title': 'Brand Film',
        'description': 'A short film for a product launch',
        'service': 'video-editing',
        'technologies': 'Premiere Pro, After Effects',
        'file': upload('film.mp4'),
    }
    data.update(overrides)
    return {key: value for key, value in data.items() if value is not None}


def create_item(client, **overrides):
    return client.post('/api/portfolio/items', data=item_form(**overrides),
                       content_type='multipart/form-data')


def count_items(app):
    with app.app_context():
        return PortfolioItem.query.count()
