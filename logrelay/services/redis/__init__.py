from .redis import close_redis_connection, connect_to_redis, get_redis

__all__ = ("close_redis_connection", "connect_to_redis", "get_redis")
