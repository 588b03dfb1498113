import pytest

from pageassets.config import settings
from pageassets.runtime.context import registry_ctx


@pytest.fixture(autouse=True)
def isolated_assets_state():
    """Reset the process-wide flag, library overrides and bound registry."""
    saved_debug, saved_libraries = settings.debug, dict(settings.libraries)
    settings.debug = False
    settings.libraries = {}
    token = registry_ctx.set(None)
    yield
    registry_ctx.reset(token)
    settings.debug = saved_debug
    settings.libraries = saved_libraries
