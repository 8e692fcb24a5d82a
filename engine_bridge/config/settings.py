"""Application configuration settings"""

import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in {"1", "true", "yes", "on"}


class Config:
    # Server settings
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8080"))
    DEBUG = _flag("DEBUG", "false")

    # Logging
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG" if DEBUG else "INFO")
    LOG_PATH = os.getenv("LOG_PATH") or None
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
    )

    # Upstream engine
    ENGINE_URL = os.getenv("ENGINE_URL", "").rstrip("/")
    ENGINE_TEXT_PATH = os.getenv("ENGINE_TEXT_PATH", "/messages")
    ENGINE_IMAGE_PATH = os.getenv("ENGINE_IMAGE_PATH", "/kakao/message")
    # Identity token auth (Cloud Run style); disable for local engines
    ENGINE_AUTH_ENABLED = _flag("ENGINE_AUTH_ENABLED", "true")
    ENGINE_TIMEOUT_SECONDS = float(os.getenv("ENGINE_TIMEOUT_SECONDS", "120"))

    # Callback delivery
    CALLBACK_TIMEOUT_SECONDS = float(os.getenv("CALLBACK_TIMEOUT_SECONDS", "10"))

    # Slack mention bot
    SLACK_ENABLED = _flag("SLACK_ENABLED", "false")
    SLACK_BOT_TOKEN = os.getenv("SLACK_BOT_TOKEN", "")
    SLACK_BOT_USER_ID = os.getenv("SLACK_BOT_USER_ID", "")
    MENTION_SESSION_PREFIX = os.getenv("MENTION_SESSION_PREFIX", "slack")


class DevelopmentConfig(Config):
    """Development configuration"""

    DEBUG = True
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")


class TestingConfig(Config):
    """Testing configuration"""

    ENGINE_URL = "http://engine.test"
    ENGINE_AUTH_ENABLED = False
    SLACK_ENABLED = True
    SLACK_BOT_USER_ID = "UBOT"


class ProductionConfig(Config):
    """Production configuration"""

    pass


# Configuration dictionary
config = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": ProductionConfig,
}


def get_config(env=None):
    """Get configuration based on environment"""
    if env is None:
        env = os.getenv("APP_ENV", "production")
    return config.get(env, config["default"])
