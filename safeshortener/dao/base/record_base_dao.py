"""Abstract base class for Record data access objects (DAOs).

This class establishes a consistent contract for all Record DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, DynamoDB, PostgreSQL).

Responsibilities:
    - Provide an interface for inserting, retrieving, updating, deleting and
      iterating RecordModel objects.
    - Serialize every operation behind a single store-wide guard, so that no
      operation observes a partially written record.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from datetime import datetime, UTC
        >>> from safeshortener.models import RecordModel
        >>> from safeshortener.dao import RecordRedisDAO

        >>> dao = RecordRedisDAO(...)

        >>> record = RecordModel(
        ...     shortcode='ab12cd34',
        ...     secret='xy98zw76',
        ...     target='https://example.com/blog/article-123',
        ...     created_at=datetime.now(UTC),
        ... )
        >>> dao.put(record)

        >>> dao.get('ab12cd34').target
        'https://example.com/blog/article-123'

        >>> dao.delete('ab12cd34')
        True
"""

from abc import ABC, abstractmethod
from collections.abc import Callable

from safeshortener.models import RecordModel


type RecordMutator = Callable[[RecordModel], RecordModel]
type RecordVisitor = Callable[[RecordModel], None]


class RecordBaseDAO(ABC):
    """Interface for Record data access objects (DAOs).

    Methods:
        put(record: RecordModel, overwrite: bool = True, **kwargs) -> RecordBaseDAO:
            Insert (or overwrite) a record keyed by its shortcode.
            Raises RecordAlreadyExistsError if overwrite=False and the shortcode is taken.
            Raises DataStoreError on connection or write failure.

        get(shortcode: str, **kwargs) -> RecordModel:
            Point lookup by shortcode.
            Raises RecordNotFoundError if the record does not exist.
            Raises DataStoreError on connection or read failure.

        find_by_username(username: str, **kwargs) -> RecordModel | None:
            Lookup by credential username. Returns None if not found.
            Raises DataStoreError on connection or read failure.

        update(shortcode: str, mutator: RecordMutator, **kwargs) -> RecordModel:
            Read-modify-write a single record.
            Raises RecordNotFoundError if the record does not exist.
            Raises DataStoreError on connection or write failure.

        delete(shortcode: str, **kwargs) -> bool:
            Remove a record. Absent shortcodes are not an error.
            Raises DataStoreError on connection or write failure.

        for_each(visit: RecordVisitor, **kwargs) -> int:
            Visit every live record in unspecified order.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations (e.g., RecordRedisDAO) must extend
        this class and implement all abstract methods. Each method must hold the
        store-wide guard for its full duration.

    NOTE:
        - The shortcode doubles as the username, so implementations are free to
          serve find_by_username() with a point lookup.
    """

    @abstractmethod
    def put(self, record: RecordModel, overwrite: bool = True, **kwargs) -> 'RecordBaseDAO':
        """Insert a RecordModel into the data store.

        Args:
            record (RecordModel):
                The RecordModel instance to be stored.

            overwrite (bool):
                If True, replace any record with the same shortcode.
                If False, refuse to touch an existing record.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            RecordBaseDAO: self (for method chaining)

        Raises:
            RecordAlreadyExistsError:
                If overwrite is False and a record with the same shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> RecordModel:
        """Retrieve a RecordModel from the data store by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the RecordModel to be retrieved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            RecordModel: The stored RecordModel instance.

        Raises:
            RecordNotFoundError:
                If no RecordModel with the given shortcode exists.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find_by_username(self, username: str, **kwargs) -> RecordModel | None:
        """Retrieve the RecordModel whose credential username matches.

        Args:
            username (str):
                Credential username (equal to the record's shortcode).

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            RecordModel | None: The matching RecordModel, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def update(self, shortcode: str, mutator: RecordMutator, **kwargs) -> RecordModel:
        """Atomically read, modify and write back a single record.

        Any exception raised by the mutator aborts the write and propagates
        to the caller unchanged.

        Args:
            shortcode (str):
                The shortcode of the RecordModel to be modified.

            mutator (Callable[[RecordModel], RecordModel]):
                Receives the current record and returns its replacement.
                Only the target may differ between the two.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            RecordModel: The record as written to the data store.

        Raises:
            RecordNotFoundError:
                If no RecordModel with the given shortcode exists.

            ValueError:
                If the mutator changed the shortcode, secret or creation time.

            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str, **kwargs) -> bool:
        """Remove a RecordModel from the data store.

        Args:
            shortcode (str):
                The shortcode of the RecordModel to be removed.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if a record was removed, False if none existed.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def for_each(self, visit: RecordVisitor, **kwargs) -> int:
        """Visit every live record in unspecified order.

        The visitor runs while the store-wide guard is held, so it must not
        call back into the DAO.

        Args:
            visit (Callable[[RecordModel], None]):
                Called once per live record.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            int: Number of records visited.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
