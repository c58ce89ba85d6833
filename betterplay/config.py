import os
from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), '.env'))

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-prod'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///betterplay.db'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    TOKEN_TTL_HOURS = int(os.environ.get('TOKEN_TTL_HOURS', 24))

    # Push notifications are handed off to an external dispatcher
    NOTIFIER_WEBHOOK_URL = os.environ.get('NOTIFIER_WEBHOOK_URL')

    # Business Rules Defaults
    DEFAULT_SLOT_PRICE = 150
    AVAILABILITY_WINDOW_DAYS = 14
    MAX_RANGE_DAYS = 93
    VENUE_TIMEZONE = os.environ.get('VENUE_TIMEZONE', 'UTC')
    REMINDER_LEAD_MINUTES = 60

class DevelopmentConfig(Config):
    DEBUG = True
    LOG_LEVEL = 'DEBUG'

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    NOTIFIER_WEBHOOK_URL = None

class ProductionConfig(Config):
    DEBUG = False
    # In prod, rely on env vars strictly
