"""
Minimal DOM-like render tree.

The renderer builds a tree of Element nodes (tag, attributes, inline style,
text, children) which the document writer serializes to HTML/SVG.  Nodes are
addressable by id and class so tests and the tooltip controller can find the
parts of the chart they care about, and can carry event listeners (the cells
use them for hover).
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Iterator


@dataclass
class Element:
    tag: str
    attrs: dict[str, Any] = field(default_factory=dict)
    style: dict[str, Any] = field(default_factory=dict)
    text: str | None = None  # escaped on output
    html: str | None = None  # raw inner markup (tooltip body only)
    children: list[Element] = field(default_factory=list)
    listeners: dict[str, Callable[..., Any]] = field(default_factory=dict, repr=False)

    def append(self, tag: str, **attrs: Any) -> Element:
        """Create a child element and return it.

        Attribute names use underscores for dashes (``data_year`` →
        ``data-year``); ``class_`` maps to ``class``.
        """
        child = Element(tag, {_attr_name(k): v for k, v in attrs.items()})
        self.children.append(child)
        return child

    def on(self, event: str, handler: Callable[..., Any]) -> Element:
        """Register *handler* for *event*, replacing any previous one."""
        self.listeners[event] = handler
        return self

    def dispatch(self, event: str, *args: Any) -> None:
        handler = self.listeners.get(event)
        if handler is not None:
            handler(*args)

    @property
    def id(self) -> str | None:
        return self.attrs.get("id")

    @property
    def classes(self) -> list[str]:
        return str(self.attrs.get("class", "")).split()

    def iter(self) -> Iterator[Element]:
        """Depth-first walk including self."""
        yield self
        for child in self.children:
            yield from child.iter()

    def find(self, element_id: str) -> Element | None:
        for el in self.iter():
            if el.id == element_id:
                return el
        return None

    def find_all(self, class_name: str) -> list[Element]:
        return [el for el in self.iter() if class_name in el.classes]


def _attr_name(key: str) -> str:
    if key == "class_":
        return "class"
    return key.replace("_", "-")
