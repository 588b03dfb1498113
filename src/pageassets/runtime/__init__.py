"""Runtime components."""

from pageassets.runtime.context import get_registry, use_registry
from pageassets.runtime.middleware import AssetsMiddleware
from pageassets.runtime.registry import AssetRegistry
from pageassets.runtime.style import StyleBuilder, StyleInterner

__all__ = ["AssetRegistry", "AssetsMiddleware", "StyleBuilder", "StyleInterner", "get_registry", "use_registry"]
