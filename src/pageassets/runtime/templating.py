"""Jinja2 helpers for emitting collected assets from templates."""
from typing import Any, Callable, Optional

from jinja2 import Environment
from markupsafe import Markup

from pageassets.runtime.context import get_registry
from pageassets.runtime.registry import AssetRegistry


def install_template_globals(env: Environment, registry: Optional[AssetRegistry] = None) -> Environment:
    """
    Register ``assets_add``, ``assets_scripts`` and ``assets_styles`` globals.

    Without an explicit registry each call uses the registry bound to the
    current context, so one Environment can serve many requests.
    """
    resolve: Callable[[], AssetRegistry] = (lambda: registry) if registry is not None else get_registry

    def assets_add(*assets: Any) -> str:
        resolve().add(list(assets))
        return ""

    def assets_scripts(flush: bool = True) -> Markup:
        return Markup(resolve().render_scripts(flush=flush))

    def assets_styles(flush: bool = True) -> Markup:
        return Markup(resolve().render_styles(flush=flush))

    env.globals.update(
        assets_add=assets_add,
        assets_scripts=assets_scripts,
        assets_styles=assets_styles,
    )
    return env
