# Log events and error codes
MISSING_SHORTCODE = 'MISSING_SHORTCODE'
MISSING_CREDENTIALS = 'MISSING_CREDENTIALS'
INVALID_CREDENTIALS = 'INVALID_CREDENTIALS'
SHORT_URL_NOT_FOUND = 'SHORT_URL_NOT_FOUND'
DATA_STORE_FAILURE = 'DATA_STORE_FAILURE'
REDIRECT_SUCCESS = 'REDIRECT_SUCCESS'
