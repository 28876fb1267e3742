"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    RecordNotFoundError:
        Raised when a RecordModel is not found in the data store.

    RecordAlreadyExistsError:
        Raised when attempting to insert a RecordModel whose shortcode is taken.

    DataStoreError:
        Raised when there is an error in the data store (e.g., connection issues, lock loss, OOM, etc.).

Example:
    >>> from safeshortener.dao.exceptions import RecordNotFoundError
    >>> raise RecordNotFoundError("Record with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    safeshortener.dao.exceptions.RecordNotFoundError: Record with code 'abc123' not found.
"""


class DAOError(Exception):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class RecordNotFoundError(DAOError):
    """Exception raised when a RecordModel is not found in the data store."""

    error_code = 'dao:record_not_found_error'


class RecordAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a RecordModel that already exists in the data store."""

    error_code = 'dao:record_already_exists_error'


class DataStoreError(DAOError):
    """Exception raised when there is an error in the data store.

    e.g. connection issues, timeouts, lost locks, OOM, etc.
    """

    error_code = 'dao:data_store_error'
