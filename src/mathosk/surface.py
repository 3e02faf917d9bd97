"""Visual surface capability: the display substrate the keyboard draws into.

The keyboard never touches a concrete UI toolkit. It builds its panel through
the VisualSurface protocol: create nested children, toggle visibility and
class-like style state, set text content, and subscribe to pointer events.

MemorySurface is the in-process implementation. It is a plain element tree
with observers, used headless (tests, CLI inspection) and as the model that
the Textual host mirrors on screen.

// [LAW:locality-or-seam] Toolkit specifics live behind this seam only.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Protocol

logger = logging.getLogger(__name__)

# Pointer event names understood by the keyboard.
CLICK = "click"
TOUCHEND = "touchend"
TOUCHMOVE = "touchmove"
SCROLL = "scroll"


@dataclass
class SurfaceEvent:
    """A pointer event delivered to surface handlers.

    default_prevented mirrors the platform notion of suppressing the
    toolkit's own reaction (focus change, text selection, ...).
    """

    type: str
    target: VisualSurface | None = None
    cancelable: bool = True
    default_prevented: bool = field(default=False, init=False)

    def prevent_default(self) -> None:
        if self.cancelable:
            self.default_prevented = True


SurfaceHandler = Callable[[SurfaceEvent], None]


class VisualSurface(Protocol):
    """Capability object for one visual element and its subtree."""

    @property
    def tag(self) -> str: ...

    @property
    def id(self) -> str | None: ...

    @property
    def parent(self) -> VisualSurface | None: ...

    def create_child(
        self,
        tag: str,
        *,
        id: str | None = None,
        classes: tuple[str, ...] | list[str] = (),
        content: str | None = None,
    ) -> VisualSurface: ...

    def append(self, child: VisualSurface) -> None: ...

    def set_attribute(self, name: str, value: object) -> None: ...

    def get_attribute(self, name: str, default: object = None) -> object: ...

    def set_visible(self, visible: bool) -> None: ...

    @property
    def visible(self) -> bool: ...

    def add_class(self, name: str) -> None: ...

    def remove_class(self, name: str) -> None: ...

    def has_class(self, name: str) -> bool: ...

    def set_content(self, content: str | None) -> None: ...

    def on(self, event_type: str, handler: SurfaceHandler) -> None: ...

    def dispatch(self, event: SurfaceEvent) -> SurfaceEvent: ...

    def remove(self) -> None: ...

    def dispose(self) -> None: ...


class MemorySurface:
    """In-memory element tree implementing VisualSurface.

    Observers registered on any node are notified (with the mutated node)
    whenever that node or a descendant changes structure or state.
    """

    def __init__(
        self,
        tag: str = "div",
        *,
        id: str | None = None,
        classes: tuple[str, ...] | list[str] = (),
        content: str | None = None,
    ) -> None:
        self._tag = tag
        self._id = id
        self._classes: list[str] = []
        for name in classes:
            if name and name not in self._classes:
                self._classes.append(name)
        self._content = content
        self._attributes: dict[str, object] = {}
        self._visible = True
        self._children: list[MemorySurface] = []
        self._parent: MemorySurface | None = None
        self._handlers: dict[str, list[SurfaceHandler]] = {}
        self._observers: list[Callable[[MemorySurface], None]] = []
        self._disposed = False

    def __repr__(self) -> str:
        ident = f"#{self._id}" if self._id else ""
        cls = "".join(f".{c}" for c in self._classes)
        return f"<MemorySurface {self._tag}{ident}{cls}>"

    # -- Tree ----------------------------------------------------------------

    @property
    def tag(self) -> str:
        return self._tag

    @property
    def id(self) -> str | None:
        return self._id

    @property
    def parent(self) -> MemorySurface | None:
        return self._parent

    @property
    def children(self) -> tuple[MemorySurface, ...]:
        return tuple(self._children)

    @property
    def content(self) -> str | None:
        return self._content

    @property
    def classes(self) -> tuple[str, ...]:
        return tuple(self._classes)

    @property
    def disposed(self) -> bool:
        return self._disposed

    def create_child(
        self,
        tag: str,
        *,
        id: str | None = None,
        classes: tuple[str, ...] | list[str] = (),
        content: str | None = None,
    ) -> MemorySurface:
        child = MemorySurface(tag, id=id, classes=classes, content=content)
        self.append(child)
        return child

    def append(self, child: MemorySurface) -> None:
        if child._parent is not None:
            child._parent._detach_child(child)
        child._parent = self
        self._children.append(child)
        self._notify()

    def _detach_child(self, child: MemorySurface) -> None:
        self._children.remove(child)
        child._parent = None

    def remove(self) -> None:
        """Remove this node from its parent. No-op for a root node."""
        parent = self._parent
        if parent is None:
            return
        parent._detach_child(self)
        parent._notify()

    def dispose(self) -> None:
        """Drop every handler and observer in this subtree.

        A disposed node still exists as data but can no longer react to
        events; dispatching to it is silently ignored.
        """
        for node in self.walk():
            node._handlers.clear()
            node._observers.clear()
            node._disposed = True

    def walk(self) -> Iterator[MemorySurface]:
        """Depth-first pre-order traversal, self included."""
        yield self
        for child in self._children:
            yield from child.walk()

    def find(self, element_id: str) -> MemorySurface | None:
        for node in self.walk():
            if node._id == element_id:
                return node
        return None

    def find_all(self, class_name: str) -> list[MemorySurface]:
        return [node for node in self.walk() if class_name in node._classes]

    def find_tag(self, tag: str) -> list[MemorySurface]:
        return [node for node in self.walk() if node._tag == tag]

    def ancestors(self) -> Iterator[MemorySurface]:
        node = self._parent
        while node is not None:
            yield node
            node = node._parent

    def is_shown(self) -> bool:
        """True if this node and every ancestor are visible."""
        return self._visible and all(a._visible for a in self.ancestors())

    # -- State ---------------------------------------------------------------

    def set_attribute(self, name: str, value: object) -> None:
        self._attributes[name] = value
        self._notify()

    def get_attribute(self, name: str, default: object = None) -> object:
        return self._attributes.get(name, default)

    def set_visible(self, visible: bool) -> None:
        if self._visible == visible:
            return
        self._visible = visible
        self._notify()

    @property
    def visible(self) -> bool:
        return self._visible

    def add_class(self, name: str) -> None:
        if name in self._classes:
            return
        self._classes.append(name)
        self._notify()

    def remove_class(self, name: str) -> None:
        if name not in self._classes:
            return
        self._classes.remove(name)
        self._notify()

    def set_class(self, add: bool, name: str) -> None:
        if add:
            self.add_class(name)
        else:
            self.remove_class(name)

    def has_class(self, name: str) -> bool:
        return name in self._classes

    def set_content(self, content: str | None) -> None:
        self._content = content
        self._notify()

    def text(self) -> str:
        """Concatenated content of this subtree."""
        return "".join(node._content or "" for node in self.walk())

    # -- Events --------------------------------------------------------------

    def on(self, event_type: str, handler: SurfaceHandler) -> None:
        if self._disposed:
            return
        self._handlers.setdefault(event_type, []).append(handler)

    def handler_count(self, event_type: str | None = None) -> int:
        if event_type is None:
            return sum(len(hs) for hs in self._handlers.values())
        return len(self._handlers.get(event_type, ()))

    def dispatch(self, event: SurfaceEvent) -> SurfaceEvent:
        """Run handlers for event.type in bind order. No bubbling."""
        if event.target is None:
            event.target = self
        # [LAW:dataflow-not-control-flow] Snapshot so handlers may rebind safely.
        for handler in list(self._handlers.get(event.type, ())):
            handler(event)
        return event

    def emit(self, event_type: str, *, cancelable: bool = True) -> SurfaceEvent:
        """Convenience: build and dispatch an event of event_type."""
        return self.dispatch(SurfaceEvent(event_type, target=self, cancelable=cancelable))

    # -- Observers -----------------------------------------------------------

    def observe(self, callback: Callable[[MemorySurface], None]) -> Callable[[], None]:
        """Register a change observer. Returns a disposer."""
        self._observers.append(callback)

        def _dispose() -> None:
            if callback in self._observers:
                self._observers.remove(callback)

        return _dispose

    def _notify(self) -> None:
        node: MemorySurface | None = self
        while node is not None:
            for callback in list(node._observers):
                callback(self)
            node = node._parent
