from enum import Enum


class EnumEnvironment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    STAGING = "staging"
    PRODUCTION = "production"


class EnumLogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


SWITCHBOT_API_URL = "https://api.switch-bot.com/v1.1"
PROVIDER_SUCCESS_CODE = 100
CONNECTION_STATE_PATH = "info.connection"

# Keys whose values are masked in every structured log event.
SENSITIVE_LOG_KEYS = frozenset({"token", "secret", "sign", "authorization"})
