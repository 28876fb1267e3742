from enum import StrEnum


class TTL:
    """Durations in seconds."""

    # Default record retention period (7 days in seconds)
    ONE_WEEK = 604_800  # 60 * 60 * 24 * 7
    # Lease on the global store lock, released early by the holder (10 seconds)
    STORE_LOCK_LEASE = 10


class Defaults:
    """Default configuration values."""

    BASE_URL = 'http://short.url'
    MAX_TARGET_LENGTH = 100_000  # bytes
    REDIS_URL = 'redis://localhost:6379/0'
    SHORTCODE_LENGTH = 8
    SECRET_LENGTH = 8
    # Fresh identifiers drawn before a collision is reported to the caller
    MAX_SHORTCODE_ATTEMPTS = 5


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        LOG_LEVEL = 'LOG_LEVEL'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'

    class Shortener(StrEnum):
        BASE_URL = 'SHORT_URL_BASE'
        MAX_TARGET_LENGTH = 'MAX_LONG_URL_LENGTH'
        RETENTION = 'URL_RETENTION_DURATION'
        SWEEP_INTERVAL = 'SWEEP_INTERVAL'
        SHORTCODE_LENGTH = 'SHORTCODE_LENGTH'
        SECRET_LENGTH = 'SECRET_LENGTH'
        REDIS_URL = 'REDIS_URL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
