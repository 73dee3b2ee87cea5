"""
Media Module - Client for the Cloudinary asset host
Uploads portfolio images/videos and deletes them again by public id.
"""

import cloudinary
import cloudinary.uploader
import cloudinary.exceptions
from flask import current_app

ROOT_FOLDER = 'portfolio'
CONFIG_KEYS = ('CLOUDINARY_CLOUD_NAME', 'CLOUDINARY_API_KEY', 'CLOUDINARY_API_SECRET')
VIDEO_CHUNK_SIZE = 6000000  # 6MB parts for large videos


class MediaConfigError(Exception):
    """Raised when asset host credentials are not configured"""

    def __init__(self, missing):
        self.missing = list(missing)
        super().__init__(
            f"Missing required Cloudinary environment variables: {', '.join(self.missing)}")


class MediaUploadError(Exception):
    """Raised when the asset host rejects or fails an upload"""


def init_media(app):
    """Configure the Cloudinary SDK from the application config"""
    cloudinary.config(
        cloud_name=app.config.get('CLOUDINARY_CLOUD_NAME'),
        api_key=app.config.get('CLOUDINARY_API_KEY'),
        api_secret=app.config.get('CLOUDINARY_API_SECRET'),
        secure=True
    )
    missing = [key for key in CONFIG_KEYS if not app.config.get(key)]
    if missing:
        app.logger.warning(f"Cloudinary is not configured, uploads disabled: missing {', '.join(missing)}")


def get_missing_config():
    """Return the asset host configuration keys that are not set"""
    return [key for key in CONFIG_KEYS if not current_app.config.get(key)]


def upload_file(file_storage, folder, resource_type='image'):
    """
    Upload a file to the asset host

    Videos go up in chunks so large renders stay within the host's
    single-request limit.

    Args:
        file_storage (FileStorage): Uploaded file from the request
        folder (str): Sub-folder under the portfolio root, e.g. the service slug
        resource_type (str): 'image' or 'video'

    Returns:
        dict: {'url': secure URL, 'public_id': asset id needed for deletion}
    """
    missing = get_missing_config()
    if missing:
        raise MediaConfigError(missing)

    options = {
        'folder': f"{ROOT_FOLDER}/{folder}",
        'resource_type': resource_type,
        'timeout': current_app.config.get('MEDIA_UPLOAD_TIMEOUT', 30),
    }

    try:
        if resource_type == 'video':
            result = cloudinary.uploader.upload_large(
                file_storage.stream, chunk_size=VIDEO_CHUNK_SIZE, **options)
        else:
            result = cloudinary.uploader.upload(file_storage.stream, **options)
    except cloudinary.exceptions.Error as e:
        current_app.logger.error(f"Cloudinary upload error: {str(e)}")
        raise MediaUploadError(f"Cloudinary upload failed: {str(e)}") from e

    if not result or not result.get('secure_url') or not result.get('public_id'):
        raise MediaUploadError('No result received from Cloudinary')

    current_app.logger.info(f"Uploaded {resource_type} to Cloudinary: {result['public_id']}")
    return {'url': result['secure_url'], 'public_id': result['public_id']}


def delete_file(public_id, resource_type='image'):
    """
    Delete an asset from the host. Failures are logged, never raised.

    Returns:
        bool: True when the host confirmed the deletion
    """
    if not public_id:
        return False

    missing = get_missing_config()
    if missing:
        current_app.logger.warning(f"Skipping deletion of {public_id}: missing {', '.join(missing)}")
        return False

    try:
        result = cloudinary.uploader.destroy(public_id, resource_type=resource_type)
    except cloudinary.exceptions.Error as e:
        current_app.logger.error(f"Error deleting file {public_id}: {str(e)}")
        return False

    if (result or {}).get('result') != 'ok':
        current_app.logger.warning(f"Cloudinary could not delete {public_id}: {result}")
        return False

    current_app.logger.info(f"Deleted {resource_type} {public_id} from Cloudinary")
    return True
