from extensions import db
from models import PortfolioItem

from conftest import create_item, count_items, upload


def test_create_requires_session(client, media_host):
    response = create_item(client)
    assert response.status_code == 401
    assert response.get_json() == {'success': False, 'message': 'Not authenticated'}
    assert media_host.uploads == []


def test_create_video_item(app, auth_client, media_host):
    response = create_item(auth_client, thumbnail=upload('poster.png'))
    assert response.status_code == 201

    body = response.get_json()
    assert body['success'] is True
    assert body['message'] == 'Portfolio item created successfully'
    item = body['data']
    assert item['fileType'] == 'video'
    assert item['service'] == 'video-editing'
    assert item['technologies'] == ['Premiere Pro', 'After Effects']
    assert item['publicId'] == 'portfolio/video-editing/asset1'
    assert item['thumbnailPublicId'] == 'portfolio/video-editing/thumbnails/asset2'
    assert item['projectUrl'] is None

    assert media_host.uploads[0]['resource_type'] == 'video'
    assert media_host.uploads[1]['folder'] == 'video-editing/thumbnails'
    assert media_host.uploads[1]['resource_type'] == 'image'
    assert count_items(app) == 1


def test_file_type_follows_service(auth_client, media_host):
    expected = {
        'video-editing': ('clip.mp4', 'video'),
        '3d-animation': ('render.mov', 'video'),
        'graphics-design': ('logo.png', 'image'),
        'website-development': ('homepage.jpg', 'image'),
    }
    for service, (filename, file_type) in expected.items():
        response = create_item(auth_client, service=service, file=upload(filename))
        assert response.status_code == 201, service
        assert response.get_json()['data']['fileType'] == file_type


def test_create_rejects_missing_fields(app, auth_client, media_host):
    for missing in ('title', 'description', 'service', 'file'):
        response = create_item(auth_client, **{missing: None})
        assert response.status_code == 400
        assert response.get_json()['message'] == 'Missing required fields'
    assert media_host.uploads == []
    assert count_items(app) == 0


def test_create_rejects_invalid_service(auth_client, media_host):
    response = create_item(auth_client, service='photography')
    assert response.status_code == 400
    assert response.get_json()['message'] == 'Invalid service type'


def test_create_rejects_file_of_wrong_kind(auth_client, media_host):
    response = create_item(auth_client, service='graphics-design', file=upload('clip.mp4'))
    assert response.status_code == 400
    assert media_host.uploads == []


def test_create_rejects_long_title(auth_client, media_host):
    response = create_item(auth_client, title='x' * 101)
    assert response.status_code == 400
    assert 'Title' in response.get_json()['message']


def test_create_reports_missing_host_config(app, auth_client, media_host):
    app.config['CLOUDINARY_API_KEY'] = None
    app.config['CLOUDINARY_API_SECRET'] = ''

    response = create_item(auth_client)
    assert response.status_code == 500
    body = response.get_json()
    assert body['success'] is False
    assert body['missingVariables'] == ['CLOUDINARY_API_KEY', 'CLOUDINARY_API_SECRET']
    assert 'CLOUDINARY_API_KEY' in body['details']


def test_upload_failure_writes_no_record(app, auth_client, media_host):
    media_host.fail_folders.add('video-editing')

    response = create_item(auth_client)
    assert response.status_code == 500
    assert 'upload failed' in response.get_json()['message']
    assert count_items(app) == 0


def test_thumbnail_failure_is_tolerated(app, auth_client, media_host):
    media_host.fail_folders.add('video-editing/thumbnails')

    response = create_item(auth_client, thumbnail=upload('poster.png'))
    assert response.status_code == 201
    item = response.get_json()['data']
    assert item['thumbnailUrl'] is None
    assert item['thumbnailPublicId'] is None
    assert count_items(app) == 1


def test_list_is_public_and_filters_by_service(client, auth_client, media_host):
    create_item(auth_client, service='video-editing', file=upload('a.mp4'))
    create_item(auth_client, service='graphics-design', file=upload('b.png'))
    create_item(auth_client, service='graphics-design', file=upload('c.png'))

    anonymous = client.application.test_client()
    response = anonymous.get('/api/portfolio/items?service=graphics-design')
    assert response.status_code == 200
    items = response.get_json()['data']
    assert len(items) == 2
    assert {item['service'] for item in items} == {'graphics-design'}

    everything = anonymous.get('/api/portfolio/items').get_json()['data']
    assert len(everything) == 3


def test_api_responses_are_not_cached(client):
    response = client.get('/api/portfolio/items')
    assert response.headers['Cache-Control'] == 'no-store, max-age=0'
    assert response.headers['Pragma'] == 'no-cache'


def test_get_single_item(auth_client, media_host):
    item_id = create_item(auth_client).get_json()['data']['id']

    response = auth_client.get(f'/api/portfolio/items/{item_id}')
    assert response.status_code == 200
    assert response.get_json()['data']['id'] == item_id


def test_update_replaces_primary_file(app, auth_client, media_host):
    created = create_item(auth_client).get_json()['data']

    response = auth_client.put(f"/api/portfolio/items/{created['id']}", data={
        'title': 'Brand Film v2',
        'description': 'Re-cut',
        'file': upload('film-v2.mp4'),
    }, content_type='multipart/form-data')

    assert response.status_code == 200
    updated = response.get_json()['data']
    assert (created['publicId'], 'video') in media_host.deleted
    assert updated['publicId'] != created['publicId']
    assert updated['publicId'] == media_host.uploads[-1]['public_id']
    assert updated['fileUrl'] != created['fileUrl']
    assert updated['title'] == 'Brand Film v2'
    assert updated['fileType'] == 'video'

    with app.app_context():
        stored = db.session.get(PortfolioItem, created['id'])
        assert stored.public_id == updated['publicId']


def test_update_without_files_keeps_media(auth_client, media_host):
    created = create_item(auth_client).get_json()['data']

    response = auth_client.put(f"/api/portfolio/items/{created['id']}", data={
        'title': 'Renamed',
        'description': 'Same media',
        'technologies': 'DaVinci Resolve',
        'projectUrl': 'https://example.com/film',
    }, content_type='multipart/form-data')

    updated = response.get_json()['data']
    assert media_host.deleted == []
    assert updated['fileUrl'] == created['fileUrl']
    assert updated['technologies'] == ['DaVinci Resolve']
    assert updated['projectUrl'] == 'https://example.com/film'


def test_update_replaces_and_removes_thumbnail(auth_client, media_host):
    created = create_item(auth_client, thumbnail=upload('poster.png')).get_json()['data']
    url = f"/api/portfolio/items/{created['id']}"

    replaced = auth_client.put(url, data={
        'title': created['title'],
        'description': created['description'],
        'thumbnail': upload('poster-2.png'),
    }, content_type='multipart/form-data').get_json()['data']
    assert (created['thumbnailPublicId'], 'image') in media_host.deleted
    assert replaced['thumbnailPublicId'] != created['thumbnailPublicId']

    removed = auth_client.put(url, data={
        'title': created['title'],
        'description': created['description'],
        'removeThumbnail': 'true',
    }, content_type='multipart/form-data').get_json()['data']
    assert (replaced['thumbnailPublicId'], 'image') in media_host.deleted
    assert removed['thumbnailUrl'] is None
    assert removed['thumbnailPublicId'] is None


def test_update_thumbnail_failure_keeps_new_primary(app, auth_client, media_host):
    created = create_item(auth_client, thumbnail=upload('poster.png')).get_json()['data']
    media_host.fail_folders.add('video-editing/thumbnails')

    response = auth_client.put(f"/api/portfolio/items/{created['id']}", data={
        'title': created['title'],
        'description': created['description'],
        'file': upload('film-v2.mp4'),
        'thumbnail': upload('poster-2.png'),
    }, content_type='multipart/form-data')

    assert response.status_code == 200
    updated = response.get_json()['data']
    assert updated['publicId'] == media_host.uploads[-1]['public_id']
    assert (created['publicId'], 'video') in media_host.deleted
    assert updated['thumbnailPublicId'] == created['thumbnailPublicId']
    assert (created['thumbnailPublicId'], 'image') not in media_host.deleted

    with app.app_context():
        stored = db.session.get(PortfolioItem, created['id'])
        assert stored.public_id == updated['publicId']
        assert stored.file_url == updated['fileUrl']


def test_update_primary_failure_keeps_current_file(app, auth_client, media_host):
    created = create_item(auth_client).get_json()['data']
    media_host.fail_folders.add('video-editing')

    response = auth_client.put(f"/api/portfolio/items/{created['id']}", data={
        'title': 'Brand Film v2',
        'description': 'Re-cut',
        'file': upload('film-v2.mp4'),
    }, content_type='multipart/form-data')

    assert response.status_code == 500
    assert 'upload failed' in response.get_json()['message']
    assert media_host.deleted == []

    with app.app_context():
        stored = db.session.get(PortfolioItem, created['id'])
        assert stored.public_id == created['publicId']
        assert stored.title == created['title']


def test_update_reports_missing_host_config(app, auth_client, media_host):
    created = create_item(auth_client).get_json()['data']
    app.config['CLOUDINARY_CLOUD_NAME'] = ''
    url = f"/api/portfolio/items/{created['id']}"

    response = auth_client.put(url, data={
        'title': created['title'],
        'description': created['description'],
        'file': upload('film-v2.mp4'),
    }, content_type='multipart/form-data')
    assert response.status_code == 500
    assert response.get_json()['missingVariables'] == ['CLOUDINARY_CLOUD_NAME']
    assert len(media_host.uploads) == 1

    text_only = auth_client.put(url, data={'title': 'Renamed', 'description': 'Same media'},
                                content_type='multipart/form-data')
    assert text_only.status_code == 200


def test_project_url_must_be_http(app, auth_client, media_host):
    response = create_item(auth_client, projectUrl='javascript:alert(1)')
    assert response.status_code == 400
    assert count_items(app) == 0

    created = create_item(auth_client, projectUrl='https://example.com/film').get_json()['data']
    assert created['projectUrl'] == 'https://example.com/film'

    response = auth_client.put(f"/api/portfolio/items/{created['id']}", data={
        'title': created['title'],
        'description': created['description'],
        'projectUrl': 'javascript:alert(1)',
    }, content_type='multipart/form-data')
    assert response.status_code == 400

    with app.app_context():
        assert db.session.get(PortfolioItem, created['id']).project_url == 'https://example.com/film'


def test_get_item_reports_lookup_failure(client, monkeypatch):
    real_get = db.session.get

    def broken_get(model, ident):
        if ident == 'broken':
            raise RuntimeError('database unavailable')
        return real_get(model, ident)

    monkeypatch.setattr(db.session, 'get', broken_get)
    response = client.get('/api/portfolio/items/broken')
    assert response.status_code == 500
    assert response.get_json() == {'success': False, 'message': 'Internal server error'}


def test_update_requires_title_and_description(auth_client, media_host):
    created = create_item(auth_client).get_json()['data']
    response = auth_client.put(f"/api/portfolio/items/{created['id']}",
                               data={'title': 'Only a title'},
                               content_type='multipart/form-data')
    assert response.status_code == 400


def test_update_missing_item(auth_client, media_host):
    response = auth_client.put('/api/portfolio/items/does-not-exist',
                               data={'title': 'x', 'description': 'y'},
                               content_type='multipart/form-data')
    assert response.status_code == 404
    assert response.get_json()['message'] == 'Portfolio item not found'


def test_delete_removes_assets_and_record(auth_client, media_host):
    created = create_item(auth_client, thumbnail=upload('poster.png')).get_json()['data']

    response = auth_client.delete(f"/api/portfolio/items/{created['id']}")
    assert response.status_code == 200
    assert response.get_json()['message'] == 'Portfolio item deleted successfully'
    assert (created['publicId'], 'video') in media_host.deleted
    assert (created['thumbnailPublicId'], 'image') in media_host.deleted

    assert auth_client.get(f"/api/portfolio/items/{created['id']}").status_code == 404


def test_delete_survives_failed_asset_cleanup(app, auth_client, media_host, monkeypatch):
    from utils import media

    created = create_item(auth_client).get_json()['data']
    monkeypatch.setattr(media, 'delete_file', lambda public_id, resource_type='image': False)

    response = auth_client.delete(f"/api/portfolio/items/{created['id']}")
    assert response.status_code == 200
    assert count_items(app) == 0


def test_delete_requires_session(client, auth_client, media_host):
    created = create_item(auth_client).get_json()['data']
    anonymous = client.application.test_client()
    assert anonymous.delete(f"/api/portfolio/items/{created['id']}").status_code == 401


def test_delete_missing_item(auth_client, media_host):
    assert auth_client.delete('/api/portfolio/items/nope').status_code == 404
