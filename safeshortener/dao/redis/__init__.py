from safeshortener.dao.redis.redis_key_schema import RedisKeySchema
from safeshortener.dao.redis.mixins import RedisClientMixin
from safeshortener.dao.redis.record_redis_dao import RecordRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'RecordRedisDAO',
]
