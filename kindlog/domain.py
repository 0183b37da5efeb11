from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from typing import Any, Optional, Union

from kindlog.config import DATE_INPUT_FORMAT


class RecordKind(str, Enum):
    DEED = "deed"    # I did something kind
    HELP = "help"    # someone helped me


class Mood(str, Enum):
    HAPPY = "happy"
    NEUTRAL = "neutral"
    SAD = "sad"
    ANGRY = "angry"


@dataclass(frozen=True)
class Unknown:
    """A Type or Mood value outside the known set, kept as received."""
    raw: Any


KindValue = Union[RecordKind, Unknown]
MoodValue = Union[Mood, Unknown]

# values written by the first version of the form
LEGACY_MOODS = {
    "행복": Mood.HAPPY,
    "보통": Mood.NEUTRAL,
    "우울": Mood.SAD,
    "분노": Mood.ANGRY,
}


def parse_kind(raw: Any) -> KindValue:
    try:
        return RecordKind(raw)
    except (TypeError, ValueError):
        return Unknown(raw)


def parse_mood(raw: Any) -> MoodValue:
    try:
        if raw in LEGACY_MOODS:
            return LEGACY_MOODS[raw]
        return Mood(raw)
    except (TypeError, ValueError):
        # objects and arrays from the sheet are unhashable
        return Unknown(raw)


@dataclass(frozen=True)
class Record:
    type: Any
    date: Any
    content: Any
    reaction: Any
    mood: Any
    timestamp: Any   # server-assigned, used only for ordering

    @classmethod
    def from_payload(cls, item: dict) -> "Record":
        return cls(
            type=item.get("Type"),
            date=item.get("Date"),
            content=item.get("Content"),
            reaction=item.get("Reaction"),
            mood=item.get("Mood"),
            timestamp=item.get("Timestamp"),
        )

    def to_payload(self) -> dict:
        return {
            "Type": self.type,
            "Date": self.date,
            "Content": self.content,
            "Reaction": self.reaction,
            "Mood": self.mood,
            "Timestamp": self.timestamp,
        }

    @property
    def kind(self) -> KindValue:
        return parse_kind(self.type)

    @property
    def mood_value(self) -> MoodValue:
        return parse_mood(self.mood)


@dataclass(frozen=True)
class RecordForm:
    type: str
    date: str
    content: str
    mood: str
    reaction: str = ""

    @classmethod
    def blank(cls, today: Optional[date] = None) -> "RecordForm":
        today = today or date.today()
        return cls(
            type="",
            date=today.strftime(DATE_INPUT_FORMAT),
            content="",
            mood="",
            reaction="",
        )

    def to_payload(self) -> dict:
        return asdict(self)
