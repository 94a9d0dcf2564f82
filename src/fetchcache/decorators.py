"""Read-through and invalidation decorators for async callables.

They cover data that does not come from a plain URL fetch (computed
views, SDK calls) but should live in the same hybrid store as fetched
responses, and mutations that make cached responses stale.

Example:
    configure(service)

    @cached(ttl=timedelta(minutes=10), key="place:{place_id}")
    async def get_place(place_id: str) -> dict:
        return await sdk.places.get(place_id)

    @invalidates(keys=["place:{place_id}"])
    async def toggle_bookmark(place_id: str) -> None:
        await sdk.bookmarks.toggle(place_id)
"""

import functools
import inspect
import string
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Any, TypeVar

from fetchcache.core.services.cache_service import CacheService

F = TypeVar("F", bound=Callable[..., Any])

# Set by configure(); decorated functions look it up on every call
_cache_service: CacheService | None = None

_MISSING = object()


def configure(cache_service: CacheService | None) -> None:
    """Route every decorated function through ``cache_service``.

    Passing None turns the decorators back into pass-throughs.
    """
    global _cache_service
    _cache_service = cache_service


def get_cache_service() -> CacheService | None:
    return _cache_service


def cached(
    ttl: timedelta | float | None = None,
    key: str | Callable[..., str] | None = None,
) -> Callable[[F], F]:
    """Cache a coroutine's result in the configured hybrid store.

    Results are written to the durable store as well, so they must be
    JSON-serializable to be served after a restart. None is a valid
    cached result.

    Args:
        ttl: Lifetime in both stores. None uses the store defaults.
        key: Key template with ``{argument}`` placeholders, or a callable
            receiving the call arguments. Defaults to a key derived from
            the function's qualified name and arguments, which then
            must be JSON-shaped.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            service = _cache_service
            if service is None:
                return await func(*args, **kwargs)

            cache_key = _key_for_call(service, func, signature, key, args, kwargs)
            hit = service.store.get(cache_key, _MISSING)
            if hit is not _MISSING:
                return hit

            result = await func(*args, **kwargs)
            service.store.set(cache_key, result, ttl, ttl)
            return result

        return wrapper  # type: ignore

    return decorator


def invalidates(keys: list[str]) -> Callable[[F], F]:
    """Drop cached values and failure records once a mutation succeeds.

    Nothing is invalidated when the wrapped coroutine raises.

    Args:
        keys: Key templates with ``{argument}`` placeholders.
    """

    def decorator(func: F) -> F:
        signature = inspect.signature(func)

        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            result = await func(*args, **kwargs)

            service = _cache_service
            if service is not None:
                arguments = _bind(signature, args, kwargs)
                for template in keys:
                    service.invalidate_key(_render(template, arguments))

            return result

        return wrapper  # type: ignore

    return decorator


def _key_for_call(
    service: CacheService,
    func: Callable[..., Any],
    signature: inspect.Signature,
    key: str | Callable[..., str] | None,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> str:
    if callable(key):
        return key(*args, **kwargs)
    arguments = _bind(signature, args, kwargs)
    if key is not None:
        return _render(key, arguments)
    return service.key_builder.build(
        f"fn:{func.__module__}.{func.__qualname__}", arguments
    )


def _bind(
    signature: inspect.Signature,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
) -> dict[str, Any]:
    """Map call arguments to parameter names, defaults included."""
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    return dict(bound.arguments)


class _KeepMissing(dict):  # type: ignore[type-arg]
    def __missing__(self, name: str) -> str:
        return "{" + name + "}"


def _render(template: str, arguments: Mapping[str, Any]) -> str:
    """Fill ``{name}`` placeholders, leaving unknown names in place."""
    return string.Formatter().vformat(template, (), _KeepMissing(arguments))
