import json
import logging

from safeshortener.types import LambdaEvent, LambdaContext
from safeshortener.dao.redis import RecordRedisDAO
from safeshortener.dao.exceptions import DAOError
from safeshortener.exceptions import ConfigurationError
from safeshortener.services import MappingService
from safeshortener.utils import initialize_logging, load_settings, app_prefix
from safeshortener.lambdas.sweep_expired.constants import SUCCESS, ERROR


initialize_logging()
logger = logging.getLogger(__name__)


def response_success(*, deleted: int) -> str:
    return json.dumps(
        {
            'status': SUCCESS,
            'deleted': deleted,
            'message': f'Successfully swept {deleted} expired records',
        }
    )


def response_error(*, error: DAOError | ConfigurationError) -> str:
    return json.dumps(
        {
            'status': ERROR,
            'message': 'Failed to sweep expired records',
            'reason': str(error),
            'error': error.__class__.__name__,
        }
    )


def lambda_handler(event: LambdaEvent, context: LambdaContext) -> str:
    """Delete every record older than the retention period

    Triggered on a schedule by EventBridge. This Lambda handler follows this
    procedure:
    - Step 1: Load settings and connect to the record store
    - Step 2: Sweep expired records (via MappingService)
    - Step 3: Respond with success or error

    Diagnostic responses:
        success:
            status: success
            deleted: <number of deleted records>
            message: Successfully swept <deleted> expired records
        error:
            status: error
            message: Failed to sweep expired records
            reason: <reason>
            error: <error class name> (e.g. DataStoreError, BadConfigurationError)

    Args:
        event (LambdaEvent):
            EventBridge event payload.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        str:
            JSON-encoded diagnostic response.

    Example:
        >>> response = json.loads(lambda_handler({}, None))
        >>> response['status']
        'success'
        >>> response['deleted']
        3
    """
    try:
        settings = load_settings()
        service = MappingService(RecordRedisDAO(redis_url=settings.redis_url, prefix=app_prefix()), settings)
        deleted = service.sweep()
    except (ConfigurationError, DAOError) as error:
        logger.exception(
            'Failed to sweep expired records.',
            extra={'event': ERROR, 'reason': str(error), 'error': error.__class__.__name__},
        )
        return response_error(error=error)
    else:
        logger.info('Successfully swept %s expired records.', deleted, extra={'event': SUCCESS, 'deleted': deleted})
        return response_success(deleted=deleted)
