import threading
from collections.abc import Callable

import pytest

from safeshortener.models import RecordModel
from safeshortener.dao.base import RecordBaseDAO
from safeshortener.dao.exceptions import RecordAlreadyExistsError, RecordNotFoundError
from safeshortener.services import MappingService
from safeshortener.utils.config import ShortenerSettings


class InMemoryRecordDAO(RecordBaseDAO):
    """Dictionary-backed RecordBaseDAO serialized by a single lock."""

    def __init__(self):
        self.records: dict[str, RecordModel] = {}
        self.guard = threading.Lock()

    def put(self, record: RecordModel, overwrite: bool = True, **kwargs) -> 'InMemoryRecordDAO':
        with self.guard:
            if not overwrite and record.shortcode in self.records:
                raise RecordAlreadyExistsError(f"Record with code '{record.shortcode}' already exists.")
            self.records[record.shortcode] = record
        return self

    def get(self, shortcode: str, **kwargs) -> RecordModel:
        with self.guard:
            try:
                return self.records[shortcode]
            except KeyError as e:
                raise RecordNotFoundError(f"Record with code '{shortcode}' not found.") from e

    def find_by_username(self, username: str, **kwargs) -> RecordModel | None:
        with self.guard:
            return self.records.get(username)

    def update(self, shortcode: str, mutator: Callable[[RecordModel], RecordModel], **kwargs) -> RecordModel:
        with self.guard:
            if shortcode not in self.records:
                raise RecordNotFoundError(f"Record with code '{shortcode}' not found.")
            self.records[shortcode] = mutator(self.records[shortcode])
            return self.records[shortcode]

    def delete(self, shortcode: str, **kwargs) -> bool:
        with self.guard:
            return self.records.pop(shortcode, None) is not None

    def for_each(self, visit: Callable[[RecordModel], None], **kwargs) -> int:
        with self.guard:
            records = list(self.records.values())
            for record in records:
                visit(record)
            return len(records)


@pytest.fixture
def dao() -> InMemoryRecordDAO:
    return InMemoryRecordDAO()


@pytest.fixture
def settings() -> ShortenerSettings:
    return ShortenerSettings(base_url='http://short.url', max_target_length=64, retention_seconds=3600)


@pytest.fixture
def service(dao, settings) -> MappingService:
    return MappingService(dao, settings)
