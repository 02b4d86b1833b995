from functools import wraps

from django.core.cache import cache


def cache_heavy_query(timeout=300, prefix="kioskads"):
    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            cache_key = f"{prefix}:{func.__name__}:{hash(str(args) + str(kwargs))}"
            result = cache.get(cache_key)
            if result is None:
                result = func(*args, **kwargs)
                if timeout:
                    cache.set(cache_key, result, timeout)
            return result
        return wrapper
    return decorator
