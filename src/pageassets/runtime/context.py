"""Binds an AssetRegistry to the current request context."""
import contextvars
from contextlib import contextmanager
from typing import Iterator, Optional

from pageassets.runtime.registry import AssetRegistry

# Registry for the current request/task. Unset outside a request until first use.
registry_ctx: contextvars.ContextVar[Optional[AssetRegistry]] = contextvars.ContextVar(
    "pageassets_registry_ctx", default=None
)


def get_registry() -> AssetRegistry:
    """Return the registry for the current context, creating one on first access."""
    registry = registry_ctx.get()
    if registry is None:
        registry = AssetRegistry()
        registry_ctx.set(registry)
    return registry


@contextmanager
def use_registry(registry: Optional[AssetRegistry] = None) -> Iterator[AssetRegistry]:
    """Bind ``registry`` (or a fresh one) for the duration of the block."""
    if registry is None:
        registry = AssetRegistry()
    token = registry_ctx.set(registry)
    try:
        yield registry
    finally:
        registry_ctx.reset(token)
