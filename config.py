import os

basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY") or "a-hard-to-guess-string"
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
    API_PREFIX = os.environ.get("API_PREFIX", "/api/v1")
    # 'database' keeps collections in SQLAlchemy, 'memory' in the process
    # and loses everything on restart.
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "database")
    SEED_ON_STARTUP = os.environ.get("SEED_ON_STARTUP") == "1"


class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DEV_DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "promptcraft-dev.db")


class TestingConfig(Config):
    TESTING = True
    STORAGE_BACKEND = "database"
    SEED_ON_STARTUP = False
    SQLALCHEMY_DATABASE_URI = (
        os.environ.get("TEST_DATABASE_URL") or "sqlite://"
    )  # In-memory database


class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL"
    ) or "sqlite:///" + os.path.join(basedir, "promptcraft.db")


config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}
