import os
from dotenv import load_dotenv

load_dotenv()


def parse_origins(value):
    """Split a comma separated CORS_ORIGINS value"""
    return [origin.strip() for origin in (value or '').split(',') if origin.strip()]


class Config:
    # Security
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production')

    # Flask
    FLASK_ENV = os.getenv('FLASK_ENV', 'development')
    DEBUG = os.getenv('FLASK_ENV') == 'development'

    # Logging
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

    # CORS
    CORS_ORIGINS = [
        'http://localhost:5173',  # Vite dev server
        'http://localhost:3000',
    ] + parse_origins(os.getenv('CORS_ORIGINS', ''))

    # Dynamic tags
    DYNTAGS_DEFAULT_CONTEXT = os.getenv('DYNTAGS_DEFAULT_CONTEXT', 'post')


class TestingConfig(Config):
    TESTING = True
    DEBUG = False
    LOG_LEVEL = 'WARNING'
    DYNTAGS_DEFAULT_CONTEXT = 'post'
