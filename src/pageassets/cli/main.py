"""Main CLI entry point."""
from typing import Any, Optional, Tuple

import click

from pageassets.catalog import DEBUG_KEY, PROD_KEY, LibraryCatalog
from pageassets.config import AssetsConfig, load_config
from pageassets.runtime.registry import AssetRegistry


def _load(config_path: Optional[str]) -> Tuple[AssetsConfig, LibraryCatalog]:
    config = load_config(config_path)
    return config, LibraryCatalog().merged(config.libraries)


def _describe(ref: Any) -> str:
    if isinstance(ref, dict):
        parts = []
        for key in (DEBUG_KEY, PROD_KEY):
            if key in ref:
                parts.append(f"{key}: {ref[key]}")
        return ", ".join(parts) or str(ref)
    return str(ref)


@click.group()
@click.version_option(package_name="pageassets")
def cli():
    """pageassets CLI.

    Run 'pageassets libs' to list the library catalog.
    Run 'pageassets render NAME...' to preview the HTML for libraries or URLs.
    """
    pass


@cli.command()
@click.option('--config', 'config_path', default=None, type=click.Path(dir_okay=False), help='Config file (default: ./pageassets.config.py)')
def libs(config_path):
    """List catalog libraries and their references."""
    _, catalog = _load(config_path)
    for name in catalog.names():
        click.echo(name)
        for ref in catalog.get(name) or []:
            click.echo(f"  {_describe(ref)}")


@cli.command()
@click.argument('refs', nargs=-1, required=True)
@click.option('--debug/--prod', 'debug', default=None, help='Select debug or prod variants (default: from config)')
@click.option('--config', 'config_path', default=None, type=click.Path(dir_okay=False), help='Config file (default: ./pageassets.config.py)')
@click.option('--only', type=click.Choice(['scripts', 'styles', 'all']), default='all', help='Which tags to print')
def render(refs, debug, config_path, only):
    """Render tags for library names or asset URLs."""
    config, catalog = _load(config_path)
    registry = AssetRegistry(catalog=catalog, debug=config.debug if debug is None else debug)
    registry.add(list(refs))

    if only in ('styles', 'all'):
        styles = registry.render_styles()
        if styles:
            click.echo(styles, nl=False)
    if only in ('scripts', 'all'):
        scripts = registry.render_scripts()
        if scripts:
            click.echo(scripts, nl=False)


if __name__ == "__main__":
    cli()
