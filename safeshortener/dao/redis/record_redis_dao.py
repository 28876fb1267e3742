"""Data Access Object (DAO) implementation for credential-guarded records in Redis

This module provides a Redis-based implementation of RecordBaseDAO for CRUD-like
operations with RecordModel instances.

Responsibilities:
    - Store, retrieve, update and delete records in Redis;
    - Maintain an index of live shortcodes for full scans;
    - Serialize every operation behind one store-wide Redis lock;
    - Raise appropriate DAO exceptions on missing records and store failures.

Data layout (all keys namespaced by the optional prefix):
    - <prefix>:records:<shortcode>  -> hash {secret, target, created_at (ISO-8601 UTC)}
    - <prefix>:records:index        -> set of live shortcodes
    - <prefix>:records:lock         -> store-wide lock (redis.lock.Lock)

Classes:
    RecordRedisDAO:
        DAO for storing and retrieving RecordModel in a Redis datastore.

Example:
    >>> from datetime import datetime, UTC
    >>> from safeshortener.models import RecordModel
    >>> from safeshortener.dao.redis import RecordRedisDAO

    >>> dao = RecordRedisDAO(redis_url='redis://localhost:6379/0', prefix='app:dev')

    >>> record = RecordModel(
    ...     shortcode='ab12cd34',
    ...     secret='xy98zw76',
    ...     target='https://example.com/page',
    ...     created_at=datetime.now(UTC),
    ... )
    >>> dao.put(record, overwrite=False)
    <RecordRedisDAO>

    >>> dao.get('ab12cd34').target
    'https://example.com/page'

    >>> dao.delete('ab12cd34')
    True
"""

import logging
import redis
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from datetime import datetime

from beartype import beartype

from safeshortener.constants import TTL
from safeshortener.models import RecordModel
from safeshortener.dao.base import RecordBaseDAO
from safeshortener.dao.redis.mixins import RedisClientMixin
from safeshortener.dao.redis.helpers import handle_redis_errors
from safeshortener.dao.exceptions import DataStoreError, RecordAlreadyExistsError, RecordNotFoundError


logger = logging.getLogger(__name__)


class RecordRedisDAO(RedisClientMixin, RecordBaseDAO):
    """Redis-based Data Access Object (DAO) for managing credential-guarded records

    This class implements the RecordBaseDAO interface using Redis as a data store.
    Every public method holds the store-wide lock for its full duration, so at
    most one store operation runs at any instant across all processes sharing
    the same Redis database and prefix.

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        lock_lease (float | None):
            Seconds after which a lock abandoned by a crashed holder expires.
            None keeps the lock until it is released.

    Example:
        >>> dao = RecordRedisDAO(redis_host='localhost', prefix='shortener:test')
        >>> dao.find_by_username('missing') is None
        True
    """

    def __init__(self, *args, lock_lease: float | None = TTL.STORE_LOCK_LEASE, **kwargs):
        super().__init__(*args, **kwargs)
        self.lock_lease = lock_lease

    @contextmanager
    def _guard(self) -> Iterator[redis.lock.Lock]:
        # NOTE: Acquisition blocks without a deadline. The lease only bounds how
        #       long a crashed holder can keep everyone else out.
        lock = self.redis.lock(self.keys.store_lock_key(), timeout=self.lock_lease)
        with lock:
            yield lock

    def _renew(self, lock: redis.lock.Lock) -> None:
        # Resets the remaining lease to its full length
        if self.lock_lease is not None:
            lock.extend(self.lock_lease, replace_ttl=True)

    @handle_redis_errors
    @beartype
    def put(self, record: RecordModel, overwrite: bool = True, **kwargs) -> 'RecordRedisDAO':
        """Store a record in Redis

        The record hash and its index entry are written in a single Redis
        transaction, so a scan never sees an indexed shortcode without its hash
        being written in the same step.

        Args:
            record (RecordModel):
                RecordModel instance to be stored.
            overwrite (bool):
                If False, raise instead of replacing an existing record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            RecordRedisDAO: self (for method chaining)

        Raises:
            RecordAlreadyExistsError:
                If overwrite is False and the shortcode is already taken.
            DataStoreError:
                If a Redis failure occurs.
        """
        record_key = self.keys.record_key(record.shortcode)

        with self._guard():
            if not overwrite and self.redis.exists(record_key):
                raise RecordAlreadyExistsError(f"Record with code '{record.shortcode}' already exists.")

            with self.redis.pipeline(transaction=True) as pipe:
                pipe.hset(record_key, mapping=self._encode(record))
                pipe.sadd(self.keys.record_index_key(), record.shortcode)
                pipe.execute()

        logger.debug('Stored record %s.', record.shortcode, extra={'shortcode': record.shortcode, 'overwrite': overwrite})
        return self

    @handle_redis_errors
    @beartype
    def get(self, shortcode: str, **kwargs) -> RecordModel:
        """Retrieve a stored record by shortcode

        Args:
            shortcode (str):
                The shortcode identifier of the record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            RecordModel:
                The retrieved RecordModel instance.

        Raises:
            RecordNotFoundError:
                If the record does not exist in Redis.
            DataStoreError:
                If a Redis failure occurs or the stored hash is corrupted.
        """
        with self._guard():
            record = self._read(shortcode)

        if record is None:
            raise RecordNotFoundError(f"Record with code '{shortcode}' not found.")
        return record

    @handle_redis_errors
    @beartype
    def find_by_username(self, username: str, **kwargs) -> RecordModel | None:
        """Retrieve the record whose credential username matches

        The shortcode doubles as the username, so this is a point lookup on the
        record hash rather than a scan over every record.

        Args:
            username (str):
                Credential username.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            RecordModel | None: The matching record, or None.

        Raises:
            DataStoreError:
                If a Redis failure occurs or the stored hash is corrupted.
        """
        with self._guard():
            return self._read(username)

    @handle_redis_errors
    @beartype
    def update(self, shortcode: str, mutator: Callable[[RecordModel], RecordModel], **kwargs) -> RecordModel:
        """Read-modify-write a single record while holding the store lock

        Args:
            shortcode (str):
                The shortcode identifier of the record.
            mutator (Callable[[RecordModel], RecordModel]):
                Receives the current record and returns its replacement.
                Exceptions raised here abort the write and propagate unchanged.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            RecordModel: The record as written to Redis.

        Raises:
            RecordNotFoundError:
                If the record does not exist in Redis.
            ValueError:
                If the mutator changed the shortcode, secret or creation time.
            DataStoreError:
                If a Redis failure occurs.
        """
        with self._guard():
            current = self._read(shortcode)
            if current is None:
                raise RecordNotFoundError(f"Record with code '{shortcode}' not found.")

            updated = mutator(current)
            if (updated.shortcode, updated.secret, updated.created_at) != (current.shortcode, current.secret, current.created_at):
                raise ValueError(f"Only the target of record '{shortcode}' may be updated.")

            if updated.target != current.target:
                self.redis.hset(self.keys.record_key(shortcode), 'target', updated.target)

        logger.debug('Updated record %s.', shortcode, extra={'shortcode': shortcode})
        return updated

    @handle_redis_errors
    @beartype
    def delete(self, shortcode: str, **kwargs) -> bool:
        """Delete a record and its index entry

        Args:
            shortcode (str):
                The shortcode identifier of the record.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            bool: True if the record existed, False otherwise.

        Raises:
            DataStoreError:
                If a Redis failure occurs.
        """
        with self._guard():
            with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(self.keys.record_key(shortcode))
                pipe.srem(self.keys.record_index_key(), shortcode)
                removed, _ = pipe.execute()

        return bool(removed)

    @handle_redis_errors
    @beartype
    def for_each(self, visit: Callable[[RecordModel], None], **kwargs) -> int:
        """Visit every live record while holding the store lock

        Index entries whose hash has vanished are dropped from the index. The
        lock lease is renewed before each record, so a scan may outlast a single
        lease as long as no one record takes longer than the lease to read and visit.

        Args:
            visit (Callable[[RecordModel], None]):
                Called once per live record. Must not call back into this DAO.
            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            int: Number of records visited.

        Raises:
            DataStoreError:
                If a Redis failure occurs or a stored hash is corrupted.
        """
        index_key = self.keys.record_index_key()
        visited = 0

        with self._guard() as lock:
            for shortcode in self.redis.sscan_iter(index_key):
                self._renew(lock)
                record = self._read(shortcode)
                if record is None:
                    logger.warning('Dropping dangling index entry %s.', shortcode, extra={'shortcode': shortcode})
                    self.redis.srem(index_key, shortcode)
                    continue
                visit(record)
                visited += 1

        return visited

    def _read(self, shortcode: str) -> RecordModel | None:
        fields = self.redis.hgetall(self.keys.record_key(shortcode))
        if not fields:
            return None
        return self._decode(shortcode, fields)

    @staticmethod
    def _encode(record: RecordModel) -> dict[str, str]:
        return {
            'secret': record.secret,
            'target': record.target,
            'created_at': record.created_at.isoformat(),
        }

    @staticmethod
    def _decode(shortcode: str, fields: dict[str, str]) -> RecordModel:
        try:
            return RecordModel(
                shortcode=shortcode,
                secret=fields['secret'],
                target=fields['target'],
                created_at=datetime.fromisoformat(fields['created_at']),
            )
        except (KeyError, ValueError) as e:
            raise DataStoreError(f"Record with code '{shortcode}' is corrupted.") from e
