# Log events and error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
MISSING_CREDENTIALS = 'MISSING_CREDENTIALS'
INVALID_CREDENTIALS = 'INVALID_CREDENTIALS'
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
TARGET_URL_TOO_LARGE = 'TARGET_URL_TOO_LARGE'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DATA_STORE_FAILURE = 'DATA_STORE_FAILURE'
UPDATE_SUCCESS = 'UPDATE_SUCCESS'
