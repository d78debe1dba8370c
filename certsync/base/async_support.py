"""
Async support for certsync services.

Provides an ``async_wrap`` decorator that converts any synchronous method
into an awaitable coroutine using :func:`asyncio.to_thread`. boto3 clients
are blocking; running them in worker threads lets the reconciler process
every notification of a batch concurrently while the service
implementations stay synchronous.

Usage::

    class Certificates(CertificateBlueprint, AsyncMixin):
        def list_tags(self, arn: str) -> list[Tag]: ...

    # Then in async code:
    tags = await certificates.alist_tags(arn)
"""

from __future__ import annotations

import asyncio
import functools
import inspect
from typing import Any, Callable, Coroutine, TypeVar

T = TypeVar("T")


def async_wrap(
    fn: Callable[..., T],
) -> Callable[..., Coroutine[Any, Any, T]]:
    """Return an async version of *fn* that runs it in a thread.

    The wrapper preserves the original function's signature and docstring.

    Args:
        fn: A synchronous callable to wrap.

    Returns:
        An async callable with the same parameters and return type.
    """

    @functools.wraps(fn)
    async def _wrapper(*args: Any, **kwargs: Any) -> T:
        return await asyncio.to_thread(fn, *args, **kwargs)

    return _wrapper


def _dispatcher(name: str, doc: str | None) -> Callable[..., Coroutine[Any, Any, Any]]:
    # Resolve the method on the instance at call time so overrides in
    # subclasses are honoured.
    def call(self: Any, *args: Any, **kwargs: Any) -> Any:
        return getattr(self, name)(*args, **kwargs)

    call.__name__ = call.__qualname__ = f"a{name}"
    call.__doc__ = doc
    return async_wrap(call)


class AsyncMixin:
    """Mixin that auto-generates ``a<method>`` async variants.

    Subclass this *alongside* a blueprint to gain async versions of every
    public method that is not already a coroutine. The async methods are
    created once at class definition time.
    """

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        for name in list(vars(cls)):
            if name.startswith("_"):
                continue
            attr = getattr(cls, name)
            if callable(attr) and not inspect.iscoroutinefunction(attr):
                async_name = f"a{name}"
                if async_name not in vars(cls):
                    setattr(cls, async_name, _dispatcher(name, attr.__doc__))
