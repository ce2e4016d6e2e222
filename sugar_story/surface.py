# surface.py
# Retained-mode drawing surface and the page mount points the scenes draw into.
#
# Shapes are appended with their starting attributes and optional transitions
# towards target attributes. Exporters (render_altair, render_matplotlib) read
# the settled state; tests and interaction handlers read and update it in place.

import itertools
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional


@dataclass
class Transition:
    attrs: Dict[str, Any]
    duration: int = 0
    delay: int = 0

    @property
    def ends_at(self) -> int:
        return self.delay + self.duration


@dataclass(frozen=True)
class PointerEvent:
    page_x: float
    page_y: float


class Shape:
    """One element on the surface: rect, circle, line or text."""

    def __init__(self, shape_id: int, kind: str, group: str, attrs: Dict[str, Any],
                 text: Optional[str] = None, datum: Any = None):
        self.id = shape_id
        self.kind = kind
        self.group = group
        self.attrs = dict(attrs)
        self.text = text
        self.datum = datum
        self.transitions: List[Transition] = []
        self.handlers: Dict[str, Callable[["Shape", Optional[PointerEvent]], None]] = {}

    def _interrupt(self, keys) -> None:
        for t in self.transitions:
            for key in keys:
                t.attrs.pop(key, None)
        self.transitions = [t for t in self.transitions if t.attrs]

    def transition(self, duration: int = 0, delay: int = 0, **attrs) -> "Shape":
        # a newer transition takes over the attributes it animates
        self._interrupt(attrs)
        self.transitions.append(Transition(attrs, duration, delay))
        return self

    def set(self, **attrs) -> "Shape":
        self._interrupt(attrs)
        self.attrs.update(attrs)
        return self

    def retarget(self, **attrs) -> "Shape":
        """Change end values: a running transition keeps animating towards the new value."""
        for key, value in attrs.items():
            pending = [t for t in self.transitions if key in t.attrs]
            if pending:
                for t in pending:
                    t.attrs[key] = value
            else:
                self.attrs[key] = value
        return self

    @property
    def final(self) -> Dict[str, Any]:
        out = dict(self.attrs)
        for t in self.transitions:
            out.update(t.attrs)
        return out

    @property
    def settles_at(self) -> int:
        return max((t.ends_at for t in self.transitions), default=0)

    def on(self, event: str, handler: Callable[["Shape", Optional[PointerEvent]], None]) -> "Shape":
        self.handlers[event] = handler
        return self

    def dispatch(self, event: str, pointer: Optional[PointerEvent] = None) -> None:
        handler = self.handlers.get(event)
        if handler is not None:
            handler(self, pointer)

    def snapshot(self) -> tuple:
        return (self.kind, self.group, tuple(sorted(self.final.items())), self.text)

    def __repr__(self):
        return f"Shape({self.id}, {self.kind!r}, group={self.group!r})"


class Surface:
    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.shapes: List[Shape] = []
        self._ids = itertools.count()

    def clear(self) -> None:
        """Drop every shape and its handlers."""
        self.shapes = []
        self._ids = itertools.count()

    def append(self, kind: str, group: str, attrs: Optional[Dict[str, Any]] = None, *,
               text: Optional[str] = None, datum: Any = None) -> Shape:
        shape = Shape(next(self._ids), kind, group, attrs or {}, text=text, datum=datum)
        self.shapes.append(shape)
        return shape

    def select(self, group: Optional[str] = None, kind: Optional[str] = None) -> List[Shape]:
        return [
            s for s in self.shapes
            if (group is None or s.group == group) and (kind is None or s.kind == kind)
        ]

    def snapshot(self) -> List[tuple]:
        return [s.snapshot() for s in self.shapes]

    @property
    def settles_at(self) -> int:
        return max((s.settles_at for s in self.shapes), default=0)


# ---------------------------------------------------------------
# Page mount points
# ---------------------------------------------------------------
@dataclass
class TextLabel:
    id: str
    text: str
    bold: bool = False


@dataclass
class Slider:
    id: str
    minimum: float
    maximum: float
    step: float
    value: float = 0
    handlers: List[Callable[[float], None]] = field(default_factory=list)

    def on_input(self, handler: Callable[[float], None]) -> None:
        self.handlers.append(handler)

    def set_value(self, value: float) -> None:
        self.value = min(max(value, self.minimum), self.maximum)
        for handler in self.handlers:
            handler(self.value)


class Controls:
    """Container for the scene-specific extra controls."""

    def __init__(self):
        self.widgets: List[Any] = []

    def clear(self) -> None:
        self.widgets = []

    def add_label(self, widget_id: str, text: str, bold: bool = False) -> TextLabel:
        label = TextLabel(widget_id, text, bold)
        self.widgets.append(label)
        return label

    def add_slider(self, widget_id: str, minimum: float, maximum: float, step: float,
                   value: float = 0) -> Slider:
        slider = Slider(widget_id, minimum, maximum, step, value)
        self.widgets.append(slider)
        return slider

    def get(self, widget_id: str):
        return next((w for w in self.widgets if w.id == widget_id), None)

    @property
    def slider(self) -> Optional[Slider]:
        return next((w for w in self.widgets if isinstance(w, Slider)), None)


class NarrativeText:
    def __init__(self):
        self.text = ""

    def update(self, text: str) -> None:
        self.text = text


class SceneButtons:
    """Scene selector buttons addressable by scene index."""

    def __init__(self, count: int):
        self.active = [False] * count
        self._handlers: List[Callable[[int], None]] = []

    def on_click(self, handler: Callable[[int], None]) -> None:
        self._handlers.append(handler)

    def click(self, index: int) -> None:
        for handler in self._handlers:
            handler(index)

    def activate(self, index: int) -> None:
        self.active = [i == index for i in range(len(self.active))]
