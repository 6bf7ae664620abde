from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple


class EventType(Enum):
    PRESS = auto()
    DRAG = auto()
    RELEASE = auto()
    WHEEL = auto()


class MouseButton(Enum):
    PRIMARY = auto()
    MIDDLE = auto()
    SECONDARY = auto()


@dataclass(frozen=True)
class InputEvent:
    """
    A raw pointer event in screen coordinates, as delivered by the host
    shell. `wheel_delta` is only meaningful for WHEEL events; a negative
    value means zoom in.
    """

    type: EventType
    x: float
    y: float
    button: MouseButton = MouseButton.PRIMARY
    shift: bool = False
    wheel_delta: float = 0.0

    @property
    def pos(self) -> Tuple[float, float]:
        return self.x, self.y

    @classmethod
    def press(cls, x: float, y: float, **kwargs) -> "InputEvent":
        return cls(EventType.PRESS, x, y, **kwargs)

    @classmethod
    def drag(cls, x: float, y: float, **kwargs) -> "InputEvent":
        return cls(EventType.DRAG, x, y, **kwargs)

    @classmethod
    def release(cls, x: float, y: float, **kwargs) -> "InputEvent":
        return cls(EventType.RELEASE, x, y, **kwargs)

    @classmethod
    def wheel(cls, x: float, y: float, delta: float) -> "InputEvent":
        return cls(EventType.WHEEL, x, y, wheel_delta=delta)
