"""Unit tests for handle_redis_errors decorator.

Test coverage includes:
    1. Normal function execution
       - Ensures the wrapped method executes and returns its result.
    2. Error handling
       - Ensures connection errors, lost locks and other Redis failures become DataStoreError.
       - Ensures non-Redis errors propagate unchanged.
    3. Function metadata preservation
       - Confirms functools.wraps preserves the original function's name and docstring.
"""

import pytest
import redis
from unittest.mock import MagicMock

from safeshortener.dao.redis.helpers import handle_redis_errors
from safeshortener.dao.exceptions import DataStoreError


class DummyDAO:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.redis = MagicMock()
        self.redis.connection_pool.connection_kwargs = {'host': 'localhost', 'port': 6379, 'db': 0}

    @handle_redis_errors
    def run(self):
        if self.error is not None:
            raise self.error
        return 'OK'


# -------------------------------
# 1. Normal execution
# -------------------------------


def test_decorator_allows_normal_execution():
    assert DummyDAO().run() == 'OK'


# -------------------------------
# 2. Error handling
# -------------------------------


@pytest.mark.parametrize(
    'error, message',
    [
        (redis.exceptions.ConnectionError('Cannot connect'), "Can't connect to Redis at localhost:6379/0."),
        (redis.exceptions.TimeoutError('Timed out'), "Can't connect to Redis at localhost:6379/0."),
        (redis.exceptions.LockNotOwnedError('expired'), 'Lost the store lock at Redis localhost:6379/0 (expired).'),
        (redis.exceptions.ResponseError('OOM'), 'Redis at localhost:6379/0 failed (OOM).'),
    ],
)
def test_decorator_transforms_redis_errors(error, message):
    with pytest.raises(DataStoreError) as exc_info:
        DummyDAO(error).run()

    assert str(exc_info.value) == message
    assert exc_info.value.__cause__ is error


def test_decorator_propagates_other_errors():
    with pytest.raises(KeyError):
        DummyDAO(KeyError('secret')).run()


# -------------------------------
# 3. Function metadata preservation
# -------------------------------


def test_decorator_preserves_function_metadata():
    """Ensure function name and docstring are preserved via functools.wraps."""

    @handle_redis_errors
    def sample_function():
        """This is a sample docstring."""
        return 'OK'

    assert sample_function.__name__ == 'sample_function'
    assert 'sample docstring' in sample_function.__doc__
