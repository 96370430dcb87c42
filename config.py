import os
from datetime import timedelta

from sqlalchemy.pool import StaticPool

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


def _database_uri():
    uri = os.environ.get('DATABASE_URL')
    if uri:
        # Hosted Postgres still hands out the scheme SQLAlchemy dropped
        if uri.startswith("postgres://"):
            uri = uri.replace("postgres://", "postgresql://", 1)
        return uri
    return f'sqlite:///{os.path.join(BASE_DIR, "recipes.db")}'


def _split_origins(value):
    return [origin.strip() for origin in value.split(',') if origin.strip()]


class Config:
    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.environ.get('JWT_SECRET_KEY', 'change-me-in-production-recipe-share-secret')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=int(os.environ.get('JWT_ACCESS_TOKEN_MINUTES', '60')))
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=int(os.environ.get('JWT_REFRESH_TOKEN_DAYS', '30')))

    CORS_ORIGINS = _split_origins(os.environ.get('CORS_ORIGINS', 'http://localhost:3000'))
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO').upper()


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    # One shared connection so every session sees the same in-memory database
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
    JWT_SECRET_KEY = 'testing-secret-key-that-is-long-enough-for-hs256'
    LOG_LEVEL = 'DEBUG'
