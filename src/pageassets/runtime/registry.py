"""Per-request accumulator for scripts, stylesheets and inline code."""
import logging
from typing import Any, Dict, FrozenSet, Iterable, List, Mapping, Optional, Tuple

from pageassets.catalog import DEBUG_KEY, PROD_KEY, LibraryCatalog
from pageassets.runtime.style import StyleBuilder, StyleInput, StyleInterner, style_to_text

logger = logging.getLogger(__name__)


def is_stylesheet(url: str) -> bool:
    """Classify a reference as a stylesheet by its suffix or a ``.css?v=`` marker."""
    return url.endswith(".css") or ".css?v=" in url


def _attr(value: str) -> str:
    return value.replace('"', "&quot;")


class AssetRegistry:
    """
    Collects assets requested while a page renders.

    URLs keep insertion order and are deduplicated. ``render_scripts`` and
    ``render_styles`` emit the pending HTML and, by default, flush it.
    Unknown references are never an error: anything that is not a library
    name is treated as a script or stylesheet URL.
    """

    def __init__(
        self,
        catalog: Optional[LibraryCatalog] = None,
        debug: Optional[bool] = None,
        interner: Optional[StyleInterner] = None,
    ) -> None:
        self._catalog = catalog
        # None -> follow the process-wide flag in pageassets.config.settings
        self._debug = debug
        self.interner = interner if interner is not None else StyleInterner()

        # Dicts used as ordered sets
        self._scripts: Dict[str, None] = {}
        self._styles: Dict[str, None] = {}
        self._included_libraries: set = set()
        self._inline_scripts: List[str] = []
        self._script_keys: set = set()  # never flushed
        self._inline_styles: Dict[str, str] = {}  # selector ('' = raw css) -> css

    @property
    def catalog(self) -> LibraryCatalog:
        if self._catalog is None:
            from pageassets.config import get_catalog

            self._catalog = get_catalog()
        return self._catalog

    @property
    def debug(self) -> bool:
        if self._debug is not None:
            return self._debug
        from pageassets.config import settings

        return settings.debug

    @debug.setter
    def debug(self, value: Optional[bool]) -> None:
        self._debug = value

    @property
    def scripts(self) -> Tuple[str, ...]:
        return tuple(self._scripts)

    @property
    def styles(self) -> Tuple[str, ...]:
        return tuple(self._styles)

    @property
    def inline_scripts(self) -> Tuple[str, ...]:
        return tuple(self._inline_scripts)

    @property
    def inline_styles(self) -> Dict[str, str]:
        return dict(self._inline_styles)

    @property
    def included_libraries(self) -> FrozenSet[str]:
        return frozenset(self._included_libraries)

    def add(self, assets: Any) -> None:
        """
        Include library names, script URLs or stylesheet URLs.

        Accepts a single reference, a list of references, or a mapping whose
        ``debug``/``prod`` keys hold groups that only apply when the debug
        flag is on/off respectively. Other mapping keys are ignored and
        their values added.
        """
        if assets is None:
            return
        if isinstance(assets, Mapping):
            for key, value in assets.items():
                if key == DEBUG_KEY:
                    if self.debug:
                        self.add(value)
                elif key == PROD_KEY:
                    if not self.debug:
                        self.add(value)
                else:
                    self.add(value)
            return
        if isinstance(assets, Iterable) and not isinstance(assets, (str, bytes)):
            for item in assets:
                self.add(item)
            return

        reference = assets.decode(errors="replace") if isinstance(assets, bytes) else str(assets)
        if reference in self.catalog:
            self.expand_library(reference)
        elif is_stylesheet(reference):
            self.add_style(reference)
        else:
            self.add_script(reference)

    def expand_library(self, name: str) -> None:
        """Add every reference of a catalog library, at most once per registry."""
        if name in self._included_libraries:
            return
        refs = self.catalog.get(name)
        if refs is None:
            logger.debug("Unknown library %r, nothing to expand", name)
            return
        # Mark first so self-referencing libraries terminate
        self._included_libraries.add(name)
        logger.debug("Expanding library %r", name)
        self.add(refs)

    def add_script(self, url: str) -> None:
        self._scripts[url] = None

    def add_style(self, url: str) -> None:
        self._styles[url] = None

    def add_inline_script(self, code: str, dedup_key: Optional[str] = None) -> None:
        """Append inline JS. A ``dedup_key`` is accepted only once for the registry's lifetime."""
        if dedup_key is not None:
            if dedup_key in self._script_keys:
                logger.debug("Skipping inline script with seen key %r", dedup_key)
                return
            self._script_keys.add(dedup_key)
        self._inline_scripts.append(code)

    def add_inline_style(self, style: Optional[StyleInput], selector: Optional[str] = None) -> None:
        """
        Include CSS code.

        ``style`` may be raw CSS text, a property mapping, or a StyleBuilder.
        Without a selector the text is appended to the raw block as written;
        with one, it holds declarations only and empty text is ignored.
        """
        css = style_to_text(style)
        if not selector:
            if "" in self._inline_styles:
                self._inline_styles[""] += "\n" + css
            else:
                self._inline_styles[""] = css
            return

        if not css:
            return
        if selector in self._inline_styles:
            self._inline_styles[selector] += "\n" + css
        else:
            self._inline_styles[selector] = css

    def has_inline_style(self, selector: Optional[str]) -> bool:
        return (selector or "") in self._inline_styles

    def get_inline_style(self, selector: Optional[str]) -> Optional[str]:
        return self._inline_styles.get(selector or "")

    def new_style(self, declarations: Optional[StyleInput] = None) -> StyleBuilder:
        """Return a StyleBuilder that saves into this registry."""
        return StyleBuilder(declarations, registry=self, interner=self.interner)

    def render_scripts(self, flush: bool = True) -> str:
        """Return ``<script>`` tags for pending URLs followed by one inline block."""
        urls = list(self._scripts)
        inline = list(self._inline_scripts)
        if flush:
            self._scripts.clear()
            self._inline_scripts.clear()

        html = "".join(f'<script src="{_attr(url)}"></script>\n' for url in urls)
        if inline:
            html += "<script>\n" + "".join(f"{code}\n" for code in inline) + "</script>"
        return html

    def render_styles(self, flush: bool = True) -> str:
        """Return ``<link>`` tags for pending URLs followed by one ``<style>`` block."""
        urls = list(self._styles)
        inline = list(self._inline_styles.items())
        if flush:
            self._styles.clear()
            self._inline_styles.clear()

        html = "".join(f'<link rel="stylesheet" href="{_attr(url)}">\n' for url in urls)
        if inline:
            html += "<style>\n"
            for selector, css in inline:
                if selector:
                    html += f"{selector} {{ {css} }}\n"
                elif css:
                    html += css if css.endswith("\n") else css + "\n"
            html += "</style>"
        return html

    def __repr__(self) -> str:
        return (
            f"AssetRegistry(scripts={len(self._scripts)}, styles={len(self._styles)}, "
            f"inline_scripts={len(self._inline_scripts)}, inline_styles={len(self._inline_styles)})"
        )
