"""
Test-friendly helpers for caching.

Some lookups here are pure functions of static tables (role authorities, for
example), so they're worth memoizing. We still want tests to be able to reset
every such cache between runs.
"""
import functools

# Every function wrapped by our lru_cache decorator.
_lru_cached_fns = []


def lru_cache(*args, **kwargs):
    """
    Thin wrapper over functools.lru_cache that lets us clear all caches later.
    """
    def decorator(fn):
        wrapped_fn = functools.lru_cache(*args, **kwargs)(fn)
        _lru_cached_fns.append(wrapped_fn)
        return wrapped_fn
    return decorator


def clear_lru_caches():
    """
    Clear all LRU caches that use our lru_cache decorator.

    Useful for tests.
    """
    for fn in _lru_cached_fns:
        fn.cache_clear()
