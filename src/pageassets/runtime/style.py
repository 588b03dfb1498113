"""CSS declaration builder and class-name interning."""
import logging
import random
import re
import weakref
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Mapping, Optional, Set, Tuple, Union

from pageassets.exceptions import ClassNameExhaustedError

if TYPE_CHECKING:
    from pageassets.runtime.registry import AssetRegistry

logger = logging.getLogger(__name__)

# Dash goes before an uppercase run that follows a lowercase letter or digit
_CAMEL_BOUNDARY = re.compile(r"(?<=[^\-A-Z])(?=[A-Z])")

MAX_RANDOM_SUFFIX = 2_000_000_000


def canonical_property(name: Any) -> str:
    """Normalize a CSS property name: ``backgroundColor`` / ``background_color`` -> ``background-color``."""
    text = str(name).strip().replace("_", "-")
    return _CAMEL_BOUNDARY.sub("-", text).lower()


class StyleBuilder:
    """Collects CSS declarations and saves them as inline styles or classes.

    Properties can be set several ways, all of which share one canonical key::

        style = registry.new_style()
        style.background_color = "red"
        style["font"] = "12px bold Arial"
        style.add_declarations("background-color: red; font: 12px bold Arial")

    Then either ``style.save_as_inline_style("span.required")`` or
    ``class_name = style.intern_as_class()``.
    """

    def __init__(
        self,
        declarations: Union[str, Mapping[str, Any], "StyleBuilder", None] = None,
        registry: Optional["AssetRegistry"] = None,
        interner: Optional["StyleInterner"] = None,
    ) -> None:
        self._properties: Dict[str, str] = {}
        # Resolved lazily so detached builders can still serialize
        self._registry = registry
        self._interner = interner
        if declarations is not None:
            self.add_declarations(declarations)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._properties.get(canonical_property(name), default)

    def set(self, name: str, value: Any) -> "StyleBuilder":
        """Set a property. ``None`` removes it. Returns self for chaining."""
        key = canonical_property(name)
        if not key:
            return self
        if value is None:
            self._properties.pop(key, None)
        else:
            self._properties[key] = str(value)
        return self

    def has(self, name: str) -> bool:
        return canonical_property(name) in self._properties

    def remove(self, name: str) -> "StyleBuilder":
        self._properties.pop(canonical_property(name), None)
        return self

    def add_declarations(self, declarations: Union[str, Mapping[str, Any], "StyleBuilder"]) -> "StyleBuilder":
        """Merge declarations from a mapping, another builder, or ``prop: value;`` text.

        Text pieces without a ``:`` are ignored.
        """
        if isinstance(declarations, StyleBuilder):
            for prop, value in declarations.items():
                self.set(prop, value)
        elif isinstance(declarations, Mapping):
            for prop, value in declarations.items():
                self.set(prop, value)
        elif isinstance(declarations, str):
            for piece in declarations.split(";"):
                prop, sep, value = piece.partition(":")
                if sep:
                    self.set(prop, value)
        return self

    def to_css_text(self) -> str:
        """Serialize as ``prop:value;`` pairs sorted by property name."""
        return "".join(f"{prop}:{self._properties[prop]};" for prop in sorted(self._properties))

    def save_as_inline_style(self, selector: Optional[str]) -> None:
        """Register these declarations under ``selector`` in the registry."""
        self._resolve_registry().add_inline_style(self, selector)

    def intern_as_class(self, preferred_name: str = "") -> Optional[str]:
        """
        Save these declarations as a reusable class and return its name.

        Builders with identical CSS text share one class. ``preferred_name`` is
        used when free; otherwise a random numeric suffix is appended.
        Returns None when there are no declarations.
        """
        css = self.to_css_text()
        if not css:
            return None

        registry = self._resolve_registry()
        interner = self._interner if self._interner is not None else registry.interner
        class_name, _ = interner.intern(css, preferred_name)
        # A shared interner may hand out a name whose rule lives in another registry
        if interner.claim(class_name, registry):
            registry.add_inline_style(css, f".{class_name}")
        return class_name

    def items(self) -> List[Tuple[str, str]]:
        return sorted(self._properties.items())

    def _resolve_registry(self) -> "AssetRegistry":
        if self._registry is None:
            from pageassets.runtime.context import get_registry

            self._registry = get_registry()
        return self._registry

    # Mapping-style access

    def __getitem__(self, name: str) -> str:
        return self._properties[canonical_property(name)]

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __delitem__(self, name: str) -> None:
        del self._properties[canonical_property(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._properties))

    def __len__(self) -> int:
        return len(self._properties)

    # Attribute-style access: style.background_color = "red"

    def __getattr__(self, name: str) -> str:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self._properties[canonical_property(name)]
        except KeyError:
            raise AttributeError(f"'StyleBuilder' object has no property '{name}'") from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_"):
            object.__setattr__(self, name, value)
        else:
            self.set(name, value)

    def __delattr__(self, name: str) -> None:
        if name.startswith("_"):
            object.__delattr__(self, name)
        else:
            self.remove(name)

    def __repr__(self) -> str:
        return f"StyleBuilder({self.to_css_text()!r})"


StyleInput = Union[str, Mapping[str, Any], StyleBuilder]


def style_to_text(style: Optional[StyleInput]) -> str:
    """Normalize any accepted style input to CSS text.

    Builders and mappings go through the canonical ``prop:value;`` form;
    plain strings are kept as written, minus surrounding whitespace.
    """
    if style is None:
        return ""
    if isinstance(style, StyleBuilder):
        return style.to_css_text()
    if isinstance(style, Mapping):
        return StyleBuilder(style).to_css_text()
    return str(style).strip()


def _random_suffix() -> int:
    return random.randint(0, MAX_RANDOM_SUFFIX)


class StyleInterner:
    """Shared tables mapping CSS text to class names."""

    DEFAULT_PREFIX = "class"

    def __init__(self, name_source: Optional[Callable[[], int]] = None, max_attempts: int = 1000):
        self._by_css: Dict[str, str] = {}  # css text -> class name
        self._issued: Set[str] = set()
        self._holders: Dict[str, "weakref.WeakSet[AssetRegistry]"] = {}  # class name -> registries with the rule
        self._name_source = name_source or _random_suffix
        self.max_attempts = max_attempts

    def lookup(self, css: str) -> Optional[str]:
        return self._by_css.get(css)

    def is_issued(self, class_name: str) -> bool:
        return class_name in self._issued

    def intern(self, css: str, preferred_name: str = "") -> Tuple[str, bool]:
        """Return ``(class_name, created)`` for ``css``."""
        existing = self._by_css.get(css)
        if existing is not None:
            return existing, False

        if preferred_name:
            prefix = candidate = preferred_name
        else:
            prefix = self.DEFAULT_PREFIX
            candidate = f"{prefix}{self._name_source()}"

        attempts = 0
        while candidate in self._issued:
            if attempts >= self.max_attempts:
                raise ClassNameExhaustedError(prefix, attempts)
            attempts += 1
            candidate = f"{prefix}{self._name_source()}"

        self._issued.add(candidate)
        self._by_css[css] = candidate
        logger.debug("Interned class %s for %r", candidate, css)
        return candidate, True

    def claim(self, class_name: str, registry: "AssetRegistry") -> bool:
        """Record that ``registry`` holds the rule for ``class_name``.

        Returns True the first time a registry claims the name.
        """
        holders = self._holders.setdefault(class_name, weakref.WeakSet())
        if registry in holders:
            return False
        holders.add(registry)
        return True

    def __len__(self) -> int:
        return len(self._by_css)
