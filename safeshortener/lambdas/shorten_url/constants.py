# Log events and error codes
INVALID_REQUEST_BODY = 'INVALID_REQUEST_BODY'
TARGET_URL_TOO_LARGE = 'TARGET_URL_TOO_LARGE'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
DATA_STORE_FAILURE = 'DATA_STORE_FAILURE'
SHORTEN_SUCCESS = 'SHORTEN_SUCCESS'
