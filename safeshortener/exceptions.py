class ShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortener_error'


class InvalidInputError(ShortenerError):
    """Raised when a target URL is empty or malformed."""

    error_code = 'input:invalid_input_error'


class TargetTooLargeError(ShortenerError):
    """Raised when a target URL exceeds the configured maximum length."""

    error_code = 'input:target_too_large_error'


class UnauthorizedError(ShortenerError):
    """Raised when the presented secret doesn't match the record's secret."""

    error_code = 'auth:unauthorized_error'


class ConfigurationError(ShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'
