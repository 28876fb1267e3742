"""Unit tests for the RecordModel dataclass in record_model.py.

Test coverage includes:

1. Model creation
   - Ensures instances can be created with valid field types and values.

2. Equality semantics
   - Confirms that models with identical data compare equal and differ otherwise.

3. Immutability
   - Verifies that fields are frozen after object creation.

4. Expiry
   - Verifies the strict "older than retention" rule and disabled expiry.
"""

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, UTC

import pytest

from safeshortener.models import RecordModel


CREATED_AT = datetime(2025, 10, 15, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def record() -> RecordModel:
    return RecordModel(
        shortcode='ab12cd34',
        secret='xy98zw76',
        target='https://example.com/article/123',
        created_at=CREATED_AT,
    )


# -------------------------------------------------
# 1. Model creation
# -------------------------------------------------


def test_valid_record_model_creation(record):
    """Ensure RecordModel can be created with valid data and types."""
    assert record.shortcode == 'ab12cd34'
    assert record.secret == 'xy98zw76'
    assert record.target == 'https://example.com/article/123'
    assert record.created_at == CREATED_AT


# -------------------------------------------------
# 2. Equality semantics
# -------------------------------------------------


def test_equal_records(record):
    """Records holding the same data compare equal."""
    twin = RecordModel(shortcode='ab12cd34', secret='xy98zw76', target='https://example.com/article/123', created_at=CREATED_AT)
    assert record == twin


@pytest.mark.parametrize(
    'field, value',
    [
        ('shortcode', 'zz99zz99'),
        ('secret', 'other'),
        ('target', 'https://example.com/other'),
        ('created_at', CREATED_AT + timedelta(seconds=1)),
    ],
)
def test_unequal_records(record, field, value):
    """Records differing in any field are not equal."""
    other = RecordModel(**{**record.__dict__, field: value})
    assert record != other


# -------------------------------------------------
# 3. Immutability
# -------------------------------------------------


@pytest.mark.parametrize('field', ['shortcode', 'secret', 'target', 'created_at'])
def test_record_is_frozen(record, field):
    with pytest.raises(FrozenInstanceError):
        setattr(record, field, None)


# -------------------------------------------------
# 4. Expiry
# -------------------------------------------------


def test_record_not_expired_at_exact_retention(record):
    """A record exactly as old as the retention period is still live."""
    assert not record.expired(CREATED_AT + timedelta(seconds=3600), retention_seconds=3600)


def test_record_expired_past_retention(record):
    assert record.expired(CREATED_AT + timedelta(seconds=3601), retention_seconds=3600)


def test_fresh_record_not_expired(record):
    assert not record.expired(CREATED_AT, retention_seconds=3600)


@pytest.mark.parametrize('retention', [0, -1])
def test_non_positive_retention_disables_expiry(record, retention):
    assert not record.expired(CREATED_AT + timedelta(days=365), retention_seconds=retention)
