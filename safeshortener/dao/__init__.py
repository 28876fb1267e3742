from safeshortener.dao.base import RecordBaseDAO
from safeshortener.dao.redis import RecordRedisDAO


__all__ = [
    'RecordBaseDAO',
    'RecordRedisDAO',
]
