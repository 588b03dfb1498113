"""Starlette middleware giving each request its own AssetRegistry."""
from typing import Optional

from starlette.types import ASGIApp, Receive, Scope, Send

from pageassets.catalog import LibraryCatalog
from pageassets.runtime.context import use_registry
from pageassets.runtime.registry import AssetRegistry


class AssetsMiddleware:
    """
    Gives every request its own AssetRegistry.

    The registry is bound as the current registry while the app runs and is
    also reachable as ``request.state.assets``.
    """

    def __init__(self, app: ASGIApp, catalog: Optional[LibraryCatalog] = None, debug: Optional[bool] = None):
        self.app = app
        self.catalog = catalog
        self.debug = debug

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] not in ("http", "websocket"):
            await self.app(scope, receive, send)
            return

        registry = AssetRegistry(catalog=self.catalog, debug=self.debug)
        scope.setdefault("state", {})["assets"] = registry
        with use_registry(registry):
            await self.app(scope, receive, send)
