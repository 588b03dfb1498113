"""Named asset libraries."""
from typing import Any, Dict, Iterator, List, Mapping, Optional

# Reserved keys that select a nested group by the debug flag
DEBUG_KEY = "debug"
PROD_KEY = "prod"

DEFAULT_LIBRARIES: Dict[str, Any] = {
    "jquery": [
        "https://code.jquery.com/jquery-3.4.1.min.js",
    ],
    "jquery-ui": [
        "https://code.jquery.com/ui/1.12.1/themes/base/jquery-ui.css",
        "https://code.jquery.com/ui/1.12.1/jquery-ui.min.js",
    ],
    "bootstrap": [
        "https://maxcdn.bootstrapcdn.com/bootstrap/4.4.1/css/bootstrap.min.css",
        "https://maxcdn.bootstrapcdn.com/bootstrap/4.4.1/js/bootstrap.min.js",
    ],
    "eModal": [
        "bootstrap",
        "jquery",
        "https://rawgit.com/saribe/eModal/master/dist/eModal.min.js",
    ],
    "vue": {
        DEBUG_KEY: "https://cdnjs.cloudflare.com/ajax/libs/vue/2.6.10/vue.js",
        PROD_KEY: "https://cdnjs.cloudflare.com/ajax/libs/vue/2.6.10/vue.min.js",
    },
}


def _normalize_entry(refs: Any) -> List[Any]:
    # A debug/prod mapping becomes a single keyed group inside a list
    if isinstance(refs, Mapping):
        return [dict(refs)]
    if isinstance(refs, (list, tuple)):
        return list(refs)
    return [refs]


class LibraryCatalog:
    """Static table of library name -> ordered asset references.

    References may be URLs, other library names, or ``{"debug": ..., "prod": ...}``
    groups. Expansion itself happens in ``AssetRegistry.expand_library``.
    """

    def __init__(self, libraries: Optional[Mapping[str, Any]] = None):
        self._libraries: Dict[str, List[Any]] = {}
        source = DEFAULT_LIBRARIES if libraries is None else libraries
        for name, refs in source.items():
            self.register(name, refs)

    def register(self, name: str, refs: Any) -> None:
        """Add or replace a library entry."""
        self._libraries[name] = _normalize_entry(refs)

    def get(self, name: str) -> Optional[List[Any]]:
        refs = self._libraries.get(name)
        return list(refs) if refs is not None else None

    def names(self) -> List[str]:
        return sorted(self._libraries)

    def merged(self, overrides: Optional[Mapping[str, Any]]) -> "LibraryCatalog":
        """Return a new catalog with ``overrides`` layered on top of this one."""
        catalog = LibraryCatalog({})
        catalog._libraries = {name: list(refs) for name, refs in self._libraries.items()}
        for name, refs in (overrides or {}).items():
            catalog.register(name, refs)
        return catalog

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._libraries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._libraries)
