from extensions import db, login_manager
from datetime import datetime
from flask_login import UserMixin
from sqlalchemy import JSON
from werkzeug.security import generate_password_hash, check_password_hash
import uuid

SERVICE_TYPES = ('video-editing', 'graphics-design', '3d-animation', 'website-development')
VIDEO_SERVICES = ('video-editing', '3d-animation')
FILE_TYPES = ('image', 'video')

TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def file_type_for_service(service):
    """Video-oriented categories store videos, the rest store images"""
    return 'video' if service in VIDEO_SERVICES else 'image'


def _isoformat(value):
    return value.isoformat() if value else None


# Custom JSON type that uses JSONB on PostgreSQL and JSON/Text on SQLite
class SafeJSON(db.TypeDecorator):
    impl = JSON
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == 'postgresql':
            from sqlalchemy.dialects.postgresql import JSONB
            return dialect.type_descriptor(JSONB())
        else:
            return dialect.type_descriptor(JSON())


class PortfolioItem(db.Model):
    __tablename__ = 'portfolio_items'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    service = db.Column(db.String(50), nullable=False, index=True)
    title = db.Column(db.String(TITLE_MAX_LENGTH), nullable=False)
    description = db.Column(db.String(DESCRIPTION_MAX_LENGTH), nullable=False)
    file_url = db.Column(db.String(500), nullable=False)
    public_id = db.Column(db.String(255), nullable=False)  # asset id at the host, needed for deletion
    thumbnail_url = db.Column(db.String(500))
    thumbnail_public_id = db.Column(db.String(255))
    project_url = db.Column(db.String(500))
    file_type = db.Column(db.String(10), nullable=False)  # image, video
    technologies = db.Column(SafeJSON, default=list)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint(
            "service IN ('video-editing', 'graphics-design', '3d-animation', 'website-development')",
            name='ck_portfolio_service'),
        db.CheckConstraint("file_type IN ('image', 'video')", name='ck_portfolio_file_type'),
        db.Index('idx_portfolio_service_created', 'service', 'created_at'),
    )

    def to_dict(self):
        return {
            'id': self.id,
            'service': self.service,
            'title': self.title,
            'description': self.description,
            'fileUrl': self.file_url,
            'publicId': self.public_id,
            'thumbnailUrl': self.thumbnail_url,
            'thumbnailPublicId': self.thumbnail_public_id,
            'projectUrl': self.project_url,
            'fileType': self.file_type,
            'technologies': list(self.technologies or []),
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(255))
    role = db.Column(db.String(50), default='user')  # admin, user
    is_active = db.Column(db.Boolean, default=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_admin(self):
        return self.role == 'admin'

    def set_password(self, password):
        self.password_hash = generate_password_hash(password)

    def check_password(self, password):
        return check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'isActive': self.is_active,
            'createdAt': _isoformat(self.created_at),
            'updatedAt': _isoformat(self.updated_at),
        }


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, user_id)
