import json
import logging

from safeshortener.types import LambdaEvent, LambdaContext, LambdaResponse
from safeshortener.dao.redis import RecordRedisDAO
from safeshortener.dao.exceptions import RecordNotFoundError, DataStoreError
from safeshortener.exceptions import InvalidInputError, TargetTooLargeError, UnauthorizedError
from safeshortener.services import MappingService
from safeshortener.utils import initialize_logging, load_settings, app_prefix, basic_credentials, request_fields, decode_long_url
from safeshortener.utils.helpers import guarantee_500_response
from safeshortener.lambdas.update_url.constants import (
    MISSING_SHORTCODE,
    MISSING_CREDENTIALS,
    INVALID_CREDENTIALS,
    INVALID_REQUEST_BODY,
    TARGET_URL_TOO_LARGE,
    SHORT_URL_NOT_FOUND,
    DATA_STORE_FAILURE,
    UPDATE_SUCCESS,
)


initialize_logging()
logger = logging.getLogger(__name__)


def response_200(*, shortcode: str) -> LambdaResponse:
    return {
        'statusCode': 200,
        'headers': {'Content-Type': 'application/json'},
        'body': json.dumps({'shortcode': shortcode, 'code': 1}),
    }


def response_error(status_code: int, base: str, message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    headers = {'Content-Type': 'application/json'}
    if status_code == 401:
        headers['WWW-Authenticate'] = 'Basic realm="safeshortener"'
    return {
        'statusCode': status_code,
        'headers': headers,
        'body': json.dumps(body),
    }


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to change the target of a short URL

    This Lambda handler follows this procedure to update URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Extract HTTP Basic credentials (username must equal the shortcode)
    - Step 3: Extract the base64-encoded new target URL from the request body
    - Step 4: Replace the record's target (via MappingService)

    HTTP responses:
        200: Successful update
            shortcode: updated shortcode
            code: 1
        400: Bad client request
            message: missing shortcode, invalid body or malformed target URL
        401: Unauthorized
            message: missing, mismatched or invalid credentials
        404: Not found
            message: no record matches the shortcode
        413: Payload too large
            message: target URL exceeds the configured maximum length
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object (not used directly).

    Returns:
        LambdaResponse:
            API Gateway-compatible response including statusCode, headers, and body.
    """
    # 0- Get application's settings
    settings = load_settings()

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info('Missing "shortcode" in path. Responding with 400.', extra={'event': MISSING_SHORTCODE})
        return response_error(400, 'Bad Request', "missing 'shortcode' in path", MISSING_SHORTCODE)

    # 2- Extract credentials
    credentials = basic_credentials(event)
    if credentials is None:
        logger.info('Missing credentials. Responding with 401.', extra={'shortcode': shortcode, 'event': MISSING_CREDENTIALS})
        return response_error(401, 'Unauthorized', 'missing credentials', MISSING_CREDENTIALS)

    username, password = credentials
    if username != shortcode:
        logger.info(
            'Credential username does not match the requested shortcode. Responding with 401.',
            extra={'shortcode': shortcode, 'event': INVALID_CREDENTIALS},
        )
        return response_error(401, 'Unauthorized', 'invalid credentials', INVALID_CREDENTIALS)

    # 3- Extract new target URL from request body
    try:
        target = decode_long_url(request_fields(event).get('longUrl'))
    except InvalidInputError as e:
        logger.info('Invalid request body. Responding with 400.', extra={'event': INVALID_REQUEST_BODY, 'reason': str(e)})
        return response_error(400, 'Bad Request', str(e), INVALID_REQUEST_BODY)

    # 4- Replace the record's target
    try:
        service = MappingService(RecordRedisDAO(redis_url=settings.redis_url, prefix=app_prefix()), settings)
        service.update(username, password, target)
    except TargetTooLargeError as e:
        logger.info('Target URL too large. Responding with 413.', extra={'event': TARGET_URL_TOO_LARGE, 'reason': str(e)})
        return response_error(413, 'Payload Too Large', str(e), TARGET_URL_TOO_LARGE)
    except InvalidInputError as e:
        logger.info('Invalid target URL. Responding with 400.', extra={'event': INVALID_REQUEST_BODY, 'reason': str(e)})
        return response_error(400, 'Bad Request', str(e), INVALID_REQUEST_BODY)
    except RecordNotFoundError:
        logger.info('Record not found in database. Responding with 404.', extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND})
        return response_error(404, 'Not Found', f"short url '{shortcode}' doesn't exist", SHORT_URL_NOT_FOUND)
    except UnauthorizedError:
        logger.info('Invalid credentials. Responding with 401.', extra={'shortcode': shortcode, 'event': INVALID_CREDENTIALS})
        return response_error(401, 'Unauthorized', 'invalid credentials', INVALID_CREDENTIALS)
    except DataStoreError:
        logger.exception('Record store failed. Responding with 500.', extra={'shortcode': shortcode, 'event': DATA_STORE_FAILURE})
        return response_error(500, 'Internal Server Error', error_code=DATA_STORE_FAILURE)

    logger.info('Updated target URL. Responding with 200.', extra={'shortcode': shortcode, 'event': UPDATE_SUCCESS})
    return response_200(shortcode=shortcode)
