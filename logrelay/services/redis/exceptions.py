from redis.exceptions import RedisError


class RedisResponseError(RedisError):
    """Storage operation failed."""

    def __init__(self, message: str = None):
        super().__init__(message)
        self.message = message
