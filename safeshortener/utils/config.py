"""Utility functions for application configuration management.

The shortener core consumes a handful of values: the public base URL used to
build short URLs, the maximum target URL length, the record retention period
and the location of the record store. These are gathered in
`ShortenerSettings` and resolved by `load_settings()` from one of two sources:

1. **AWS AppConfig**, when `APPCONFIG_APP_ID`, `APPCONFIG_ENV_ID` and
   `APPCONFIG_PROFILE_ID` are all set. The deployed JSON document follows this
   structure and the `shortener` section is used:

    {
        "build": 42,
        "configs": {
            "shortener": {
                "base_url": "https://sho.rt",
                "max_target_length": 100000,
                "retention_seconds": 604800,
                "redis_url": "redis://redis.internal:6379/0"
            }
        }
    }

2. **Environment variables** otherwise:

    SHORT_URL_BASE          - public base URL (default: http://short.url)
    MAX_LONG_URL_LENGTH     - maximum target length in bytes (default: 100000)
    URL_RETENTION_DURATION  - retention in seconds, <= 0 disables expiry (default: 604800)
    SWEEP_INTERVAL          - seconds between expiry sweeps (default: retention)
    SHORTCODE_LENGTH        - shortcode length (default: 8)
    SECRET_LENGTH           - secret length (default: 8)
    REDIS_URL               - record store location (default: redis://localhost:6379/0)

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config(section: str) -> dict
        Load one section of the AppConfig document as a Python dictionary.

    load_settings() -> ShortenerSettings
        Resolve validated settings from AppConfig or the environment.

Example:
    Typical usage inside a Lambda handler:

        >>> from safeshortener.utils.config import load_settings
        >>> settings = load_settings()
        >>> settings.max_target_length
        100000
"""

import os
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any
from urllib.parse import urlsplit

import boto3

from safeshortener.constants import ENV, TTL, Defaults
from safeshortener.exceptions import BadConfigurationError
from safeshortener.utils.helpers import require_environment


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'safeshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'safeshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


@dataclass(frozen=True)
class ShortenerSettings:
    # fmt: off
    base_url: str = Defaults.BASE_URL                       # Public base URL of short links
    max_target_length: int = Defaults.MAX_TARGET_LENGTH     # Maximum target URL length (bytes)
    retention_seconds: int = TTL.ONE_WEEK                   # Record retention; <= 0 disables expiry
    sweep_interval_seconds: int | None = None               # Seconds between sweeps; None follows retention
    shortcode_length: int = Defaults.SHORTCODE_LENGTH       # Length of generated shortcodes
    secret_length: int = Defaults.SECRET_LENGTH             # Length of generated secrets
    redis_url: str = Defaults.REDIS_URL                     # Record store location
    # fmt: on

    @property
    def sweep_interval(self) -> int:
        """Seconds between expiry sweeps (the retention period unless overridden)."""
        return self.sweep_interval_seconds if self.sweep_interval_seconds is not None else self.retention_seconds

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> 'ShortenerSettings':
        """Build validated settings from a mapping of field names to raw values

        Args:
            values (Mapping[str, Any]):
                Field values, possibly as strings (e.g. read from the environment).
                Missing fields fall back to their defaults.

        Returns:
            ShortenerSettings: validated settings.

        Raises:
            BadConfigurationError:
                On unknown fields, non-integer numbers, non-positive lengths or
                a base URL that isn't an absolute http(s) URL.
        """
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(values) - known)
        if unknown:
            raise BadConfigurationError(f'Unknown shortener settings: {", ".join(unknown)}')

        parsed: dict[str, Any] = dict(values)
        for name in ('max_target_length', 'retention_seconds', 'shortcode_length', 'secret_length'):
            if name in parsed:
                parsed[name] = _as_int(name, parsed[name])
        if parsed.get('sweep_interval_seconds') is not None:
            parsed['sweep_interval_seconds'] = _as_int('sweep_interval_seconds', parsed['sweep_interval_seconds'])

        settings = cls(**parsed)
        settings._validate()
        return settings

    def _validate(self) -> None:
        for name in ('max_target_length', 'shortcode_length', 'secret_length'):
            if getattr(self, name) <= 0:
                raise BadConfigurationError(f'{name} must be a positive integer (given value: {getattr(self, name)}).')
        if self.sweep_interval_seconds is not None and self.sweep_interval_seconds <= 0:
            raise BadConfigurationError(f'sweep_interval_seconds must be a positive integer (given value: {self.sweep_interval_seconds}).')

        components = urlsplit(self.base_url)
        if components.scheme not in {'http', 'https'} or not components.hostname:
            raise BadConfigurationError(f'base_url must be an absolute http(s) URL (given value: {self.base_url!r}).')


def _as_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).')
    try:
        return int(value)
    except (TypeError, ValueError) as e:
        raise BadConfigurationError(f'{name} must be an integer (given value: {value!r}).') from e


# Environment variable -> ShortenerSettings field
_ENVIRONMENT_FIELDS = {
    ENV.Shortener.BASE_URL: 'base_url',
    ENV.Shortener.MAX_TARGET_LENGTH: 'max_target_length',
    ENV.Shortener.RETENTION: 'retention_seconds',
    ENV.Shortener.SWEEP_INTERVAL: 'sweep_interval_seconds',
    ENV.Shortener.SHORTCODE_LENGTH: 'shortcode_length',
    ENV.Shortener.SECRET_LENGTH: 'secret_length',
    ENV.Shortener.REDIS_URL: 'redis_url',
}


def _appconfig_enabled() -> bool:
    return all(os.environ.get(name) for name in ENV.AppConfig)


def _environment_values() -> dict[str, str]:
    return {field: os.environ[name] for name, field in _ENVIRONMENT_FIELDS.items() if os.environ.get(name)}


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_config(section: str) -> dict[str, Any]:
    """Load one section of the configuration document from AWS AppConfig

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        section (str):
            Name of the section under "configs" (e.g. "shortener").

    Returns:
        dict: The section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig identifier is missing.
        BadConfigurationError:
            If the document lacks the requested section.
        botocore.exceptions.BotoCoreError / ClientError:
            If the AppConfig Data API calls fail.

    Example:
        >>> load_config('shortener')['base_url']
        'https://sho.rt'
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'section': section})

    appconfig = boto3.client('appconfigdata')

    # Start an AppConfig data session
    session_token = appconfig.start_configuration_session(
        ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
        EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
        ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
    )['InitialConfigurationToken']

    # Fetch the configuration
    response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
    content = response['Configuration'].read()
    config = json.loads(content.decode('utf-8'))

    try:
        data = config['configs'][section]
    except KeyError as e:
        raise BadConfigurationError(f"AppConfig document has no '{section}' section.") from e

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'section': section, 'build': config.get('build')})
    return data


def load_settings() -> ShortenerSettings:
    """Resolve shortener settings from AppConfig, or the environment as a fallback

    Returns:
        ShortenerSettings: validated settings.

    Raises:
        BadConfigurationError:
            If any configured value is invalid.
    """
    if _appconfig_enabled():
        return ShortenerSettings.from_mapping(load_config('shortener'))

    logger.debug('AppConfig is not configured. Loading settings from environment variables.')
    return ShortenerSettings.from_mapping(_environment_values())
