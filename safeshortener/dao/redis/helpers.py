import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from safeshortener.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def _redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f"{info.get('host')}:{info.get('port')}/{info.get('db')}"


def handle_redis_errors[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to surface store failures as DataStoreError

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations which may raise redis.exceptions.RedisError.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on connectivity issues,
            lost store locks or any other Redis failure.

    Example:
        >>> @handle_redis_errors
        ... def get_record(self, shortcode):
        ...     return self.redis.hgetall(shortcode)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {_redis_location(self.redis)}.") from e
        except redis.exceptions.LockError as e:
            raise DataStoreError(f'Lost the store lock at Redis {_redis_location(self.redis)} ({e}).') from e
        except redis.exceptions.RedisError as e:
            raise DataStoreError(f'Redis at {_redis_location(self.redis)} failed ({e}).') from e

    return wrapper
