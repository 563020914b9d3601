from .pool import PoolStateError, close_pool, get_pool, init_pool, ping

__all__ = ["init_pool", "get_pool", "close_pool", "ping", "PoolStateError"]
