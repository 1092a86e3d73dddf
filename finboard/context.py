"""Scoped theme context.

A ``ThemeContext`` is one node in a tree. A node either overrides the theme
for its subtree or inherits its parent's. ``set_theme`` replaces only that
node's reference, and every subscriber that sees a new effective theme is
called before ``set_theme`` returns.

    root = ThemeContext(VIBRANT)
    with root.provide(NEUTRAL) as sidebar:
        sidebar.current_theme   # Neutral
    root.current_theme          # Vibrant
"""
import logging
from typing import Callable, List, Optional

from finboard.events import THEME_CHANGED, EventBus
from finboard.exceptions import ThemeError
from finboard.themes import DEFAULT_THEME, Theme

logger = logging.getLogger(__name__)


class ThemeContext:

    def __init__(self, theme: Optional[Theme] = None, parent: Optional["ThemeContext"] = None,
                 bus: Optional[EventBus] = None):
        if theme is not None and not isinstance(theme, Theme):
            raise ThemeError(f"Expected a Theme, got {type(theme).__name__}")
        self._theme = theme
        self._parent = parent
        self._children: List["ThemeContext"] = []
        self._unsubscribers: List[Callable[[], None]] = []
        self._bus = bus or (parent._bus if parent is not None else EventBus())
        if parent is not None:
            parent._children.append(self)
        self._effective = self.current_theme

    @property
    def current_theme(self) -> Theme:
        if self._theme is not None:
            return self._theme
        if self._parent is not None:
            return self._parent.current_theme
        return DEFAULT_THEME

    @property
    def parent(self) -> Optional["ThemeContext"]:
        return self._parent

    @property
    def overrides(self) -> bool:
        return self._theme is not None

    def set_theme(self, theme: Theme) -> None:
        if not isinstance(theme, Theme):
            raise ThemeError(f"Expected a Theme, got {type(theme).__name__}")
        self._theme = theme
        self._refresh()

    def clear_override(self) -> None:
        self._theme = None
        self._refresh()

    def provide(self, theme: Optional[Theme] = None) -> "ThemeContext":
        return ThemeContext(theme, parent=self)

    def detach(self) -> None:
        """Unlink from the parent and drop this node's bus handlers."""
        if self._parent is not None and self in self._parent._children:
            self._parent._children.remove(self)
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()

    def subscribe(self, callback: Callable[[Theme], None]) -> Callable[[], None]:
        def handler(event, payload):
            if payload["context"] is self:
                callback(payload["theme"])

        unsubscribe = self._bus.subscribe(THEME_CHANGED, handler)
        self._unsubscribers.append(unsubscribe)
        return unsubscribe

    def _refresh(self) -> None:
        new = self.current_theme
        if new is not self._effective:
            logger.debug("theme %s -> %s", self._effective.name, new.name)
            self._effective = new
            self._bus.publish(THEME_CHANGED, {"context": self, "theme": new})
        for child in list(self._children):
            if not child.overrides:
                child._refresh()

    def __enter__(self) -> "ThemeContext":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.detach()
