from safeshortener.utils.config import app_env, app_name, app_prefix, load_config, load_settings, ShortenerSettings
from safeshortener.utils.helpers import (
    get_short_url,
    basic_credentials,
    request_fields,
    decode_long_url,
    require_environment,
    guarantee_500_response,
)
from safeshortener.utils.shortener import generate_shortcode, generate_secret
from safeshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'generate_secret',
    'app_env',
    'app_name',
    'app_prefix',
    'load_config',
    'load_settings',
    'ShortenerSettings',
    'get_short_url',
    'basic_credentials',
    'request_fields',
    'decode_long_url',
    'require_environment',
    'guarantee_500_response',
    'initialize_logging',
]
