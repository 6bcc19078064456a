import os
from datetime import timedelta
from urllib.parse import quote_plus

BASEDIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def _database_uri():
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    db_user = os.getenv("DB_USER")
    db_password = quote_plus(os.getenv("DB_PASSWORD", ""))
    db_host = os.getenv("DB_HOST", "localhost")
    db_port = os.getenv("DB_PORT", "5432")
    db_name = os.getenv("DB_NAME", "navandex")
    return (
        f"postgresql+psycopg2://{db_user}:{db_password}"
        f"@{db_host}:{db_port}/{db_name}"
    )


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "secret")

    SQLALCHEMY_DATABASE_URI = _database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(days=7)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*").split(",")

    MAX_CONTENT_LENGTH = 5 * 1024 * 1024

    # Scan terminal
    SCAN_DEDUP_SECONDS = int(os.getenv("SCAN_DEDUP_SECONDS", 5))
    BARCODE_MAX_LENGTH = 10
    INVOICE_DUE_DAYS = int(os.getenv("INVOICE_DUE_DAYS", 30))

    # Object storage (S3 compatible)
    STORAGE_ENDPOINT = os.getenv("STORAGE_ENDPOINT")
    STORAGE_REGION = os.getenv("STORAGE_REGION", "eu2")
    STORAGE_ACCESS_KEY = os.getenv("STORAGE_ACCESS_KEY")
    STORAGE_SECRET_KEY = os.getenv("STORAGE_SECRET_KEY")
    STORAGE_BUCKET = os.getenv("STORAGE_BUCKET", "navandex")
    STORAGE_PUBLIC_URL = os.getenv(
        "STORAGE_PUBLIC_URL", "https://eu2.contabostorage.com"
    )

    # WhatsApp Cloud API
    WHATSAPP_ENABLED = os.getenv("WHATSAPP_ENABLED", "False") == "True"
    WHATSAPP_TOKEN = os.getenv("WHATSAPP_TOKEN")
    WHATSAPP_PHONE_NUMBER_ID = os.getenv("WHATSAPP_PHONE_NUMBER_ID")
    WHATSAPP_API_VERSION = os.getenv("WHATSAPP_API_VERSION", "v21.0")
    WHATSAPP_MAX_RETRIES = 3

    SCRAPER_TIMEOUT = int(os.getenv("SCRAPER_TIMEOUT", 15))


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SECRET_KEY = "test-secret-key"
    JWT_SECRET_KEY = "test-jwt-secret-key-with-enough-length"
    WHATSAPP_ENABLED = False
