import os
from pathlib import Path
from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent
load_dotenv(BASE_DIR / ".env")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", f"sqlite:///{BASE_DIR / 'moneytalk.db'}")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # AI endpoints (served by the functions blueprint unless pointed elsewhere)
    FUNCTIONS_BASE_URL = os.getenv("FUNCTIONS_BASE_URL", "http://127.0.0.1:5000/functions/v1")
    FUNCTIONS_TIMEOUT = float(os.getenv("FUNCTIONS_TIMEOUT", "60"))
    # Shared secret sent as a bearer token; the endpoints refuse every call while unset
    FUNCTIONS_TOKEN = os.getenv("FUNCTIONS_TOKEN")

    OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
    OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    OPENAI_TRANSCRIBE_MODEL = os.getenv("OPENAI_TRANSCRIBE_MODEL", "whisper-1")

    # "database" keeps one row per user, "file" keeps a single local slot
    RECOMMENDATIONS_CACHE = os.getenv("RECOMMENDATIONS_CACHE", "database")
    RECOMMENDATIONS_CACHE_PATH = os.getenv(
        "RECOMMENDATIONS_CACHE_PATH", str(BASE_DIR / "ai-recommendations-cache.json")
    )
    RECOMMENDATIONS_TTL_DAYS = 7

    PRO_PRODUCT = {
        "id": os.getenv("STRIPE_PRO_PRODUCT_ID", "prod_SaTZsp7fdLQ5oG"),
        "price_id": os.getenv("STRIPE_PRO_PRICE_ID", "price_1RfIc7P5IgjXtTnFWWG0WZnv"),
        "name": "MoneyTalk Pro",
        "description": "No need to add an OpenAI API key",
        "mode": "subscription",
    }


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    FUNCTIONS_BASE_URL = "http://functions.test/functions/v1"
    FUNCTIONS_TIMEOUT = 5
    FUNCTIONS_TOKEN = "test-functions-token"
    OPENAI_API_KEY = None
