"""Development configuration."""
import os

from .base import Config

class DevelopmentConfig(Config):
    """Development configuration class."""

    DEBUG = True
    TESTING = False

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv('DEV_DATABASE_URL') or 'sqlite:///gatepass_dev.db'
    SQLALCHEMY_ECHO = False

    # Allow any local frontend during development
    CORS_ORIGINS = ["*"]

    LOG_LEVEL = 'DEBUG'
