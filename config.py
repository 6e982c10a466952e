import os

class Config:
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev_secret_key')
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI', 'sqlite:///ecofinds.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    UPLOAD_FOLDER = os.getenv('UPLOAD_FOLDER', os.path.join('static', 'uploads'))
    MIN_PASSWORD_LENGTH = int(os.getenv('MIN_PASSWORD_LENGTH', '6'))
    BANNER_DISMISS_MS = int(os.getenv('BANNER_DISMISS_MS', '5000'))
    CONTACT_SUBJECT = os.getenv('CONTACT_SUBJECT', 'Interested in your product on EcoFinds')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
