# domain/entities/navigation.py
import re
from dataclasses import dataclass
from enum import IntEnum

UNKNOWN_ROAD = "unknown road"


class Direction(IntEnum):
    START = 0
    STRAIGHT = 1
    SLIGHT_LEFT = 2
    SLIGHT_RIGHT = 3
    RIGHT = 4
    LEFT = 5
    SHARP_LEFT = 6
    SHARP_RIGHT = 7

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "Direction":
        try:
            return _BY_LABEL[label]
        except KeyError:
            raise DirectionParseError(f"unknown direction label {label!r}") from None


_LABELS = {
    Direction.START: "Start",
    Direction.STRAIGHT: "Go straight",
    Direction.SLIGHT_LEFT: "Slight left",
    Direction.SLIGHT_RIGHT: "Slight right",
    Direction.LEFT: "Turn left",
    Direction.RIGHT: "Turn right",
    Direction.SHARP_LEFT: "Sharp left",
    Direction.SHARP_RIGHT: "Sharp right",
}
_BY_LABEL = {v: k for k, v in _LABELS.items()}

_STEP_RE = re.compile(
    r"(?P<label>[A-Za-z ]+?) on (?P<way>.*) and continue for (?P<distance>\S+) miles\."
)
_NUMBER_RE = re.compile(r"\d+(\.\d*)?|\.\d+")


class DirectionParseError(ValueError):
    """A direction string that does not describe a NavigationStep."""


@dataclass
class NavigationStep:
    """One instruction: how to enter a way and how far to stay on it (miles)."""

    direction: Direction = Direction.STRAIGHT
    way: str = UNKNOWN_ROAD
    distance: float = 0.0

    def __str__(self) -> str:
        return f"{Direction(self.direction).label} on {self.way} and continue for {self.distance:.3f} miles."

    @classmethod
    def parse(cls, text: str) -> "NavigationStep":
        m = _STEP_RE.fullmatch(text)
        if m is None:
            raise DirectionParseError(f"not a direction: {text!r}")
        raw = m.group("distance")
        if not _NUMBER_RE.fullmatch(raw):
            raise DirectionParseError(f"distance must be a non-negative number, got {raw!r}")
        return cls(Direction.from_label(m.group("label")), m.group("way"), float(raw))

    def to_dict(self) -> dict:
        return {
            "direction": int(self.direction),
            "way": self.way,
            "distance": self.distance,
            "text": str(self),
        }
