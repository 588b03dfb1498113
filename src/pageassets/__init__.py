"""Collect scripts, stylesheets and inline code while a page renders."""
from typing import Any, Optional

from pageassets.catalog import DEFAULT_LIBRARIES, LibraryCatalog
from pageassets.config import AssetsConfig, configure, load_config, settings
from pageassets.exceptions import ClassNameExhaustedError, PageAssetsError
from pageassets.runtime.context import get_registry, use_registry
from pageassets.runtime.registry import AssetRegistry
from pageassets.runtime.style import StyleBuilder, StyleInput, StyleInterner

__version__ = "0.1.0"


def add(assets: Any) -> None:
    """Include library names or URLs in the current registry."""
    get_registry().add(assets)


def add_script(url: str) -> None:
    get_registry().add_script(url)


def add_style(url: str) -> None:
    get_registry().add_style(url)


def add_inline_script(code: str, dedup_key: Optional[str] = None) -> None:
    get_registry().add_inline_script(code, dedup_key)


def add_inline_style(style: StyleInput, selector: Optional[str] = None) -> None:
    get_registry().add_inline_style(style, selector)


def new_style(declarations: Optional[StyleInput] = None) -> StyleBuilder:
    return get_registry().new_style(declarations)


def render_scripts(flush: bool = True) -> str:
    return get_registry().render_scripts(flush=flush)


def render_styles(flush: bool = True) -> str:
    return get_registry().render_styles(flush=flush)


__all__ = [
    "AssetRegistry",
    "AssetsConfig",
    "ClassNameExhaustedError",
    "DEFAULT_LIBRARIES",
    "LibraryCatalog",
    "PageAssetsError",
    "StyleBuilder",
    "StyleInterner",
    "add",
    "add_inline_script",
    "add_inline_style",
    "add_script",
    "add_style",
    "configure",
    "get_registry",
    "load_config",
    "new_style",
    "render_scripts",
    "render_styles",
    "settings",
    "use_registry",
]
