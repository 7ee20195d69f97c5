"""Utilities for running async operations in CLI commands."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any


def coro[T](f: Callable[..., Awaitable[T]]) -> Callable[..., T]:
    """Make an async function usable as a Click command callback.

    Usage:
        @cli.command()
        @coro
        async def my_command():
            result = await some_async_function()
            click.echo(result)
    """

    @wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> T:
        return asyncio.run(f(*args, **kwargs))

    return wrapper
