from datetime import datetime
from typing import Any, Iterable, NamedTuple, Optional, Tuple

import pandas as pd

from kindlog.config import DATE_DISPLAY_FORMAT, EXPORT_COLUMNS, MISSING_MOOD_LABEL
from kindlog.domain import KindValue, Mood, MoodValue, Record, RecordKind, Unknown
from kindlog.functional import lookup

TYPE_LABELS = {
    RecordKind.DEED: "😊 Did a good deed",
    RecordKind.HELP: "💖 Got some help",
}

MOOD_ICONS = {
    Mood.HAPPY: "😄",
    Mood.NEUTRAL: "😐",
    Mood.SAD: "😔",
    Mood.ANGRY: "😡",
}


class RecordRow(NamedTuple):
    type_label: str
    content: str
    reaction: str
    date: str
    mood_icon: str


def parse_timestamp(value: Any) -> Optional[pd.Timestamp]:
    if not isinstance(value, (str, int, float, datetime)) or value == "":
        return None
    try:
        ts = pd.to_datetime(value, utc=True, errors="coerce")
    except (TypeError, ValueError):
        return None
    if ts is None or pd.isna(ts):
        return None
    return ts


def sort_newest_first(records: Iterable[Record]) -> Tuple[Record, ...]:
    """Order by Timestamp descending.

    Equal timestamps keep payload order; records whose Timestamp does not
    parse go last, also in payload order.
    """
    stamped = [(parse_timestamp(r.timestamp), r) for r in records]
    dated = [(ts, r) for ts, r in stamped if ts is not None]
    dated.sort(key=lambda item: item[0], reverse=True)
    undated = tuple(r for ts, r in stamped if ts is None)
    return tuple(r for _, r in dated) + undated


def _text(value: Any) -> str:
    return "" if value is None else str(value)


def type_label(kind: KindValue) -> str:
    if isinstance(kind, Unknown):
        return _text(kind.raw)
    return lookup(TYPE_LABELS, kind).get_or_else(kind.value)


def mood_icon(mood: MoodValue) -> str:
    if isinstance(mood, Unknown):
        return ""
    return lookup(MOOD_ICONS, mood).get_or_else("")


def format_date(value: Any, fmt: str = DATE_DISPLAY_FORMAT) -> str:
    ts = parse_timestamp(value)
    if ts is None:
        return _text(value)
    moment: datetime = ts.to_pydatetime()
    if isinstance(value, str) and ("T" in value or " " in value.strip()):
        # a serialized instant: show the calendar date where the user is
        moment = moment.astimezone()
    return moment.strftime(fmt)


def to_row(record: Record) -> RecordRow:
    return RecordRow(
        type_label=type_label(record.kind),
        content=_text(record.content),
        reaction=_text(record.reaction) or "-",
        date=format_date(record.date),
        mood_icon=mood_icon(record.mood_value),
    )


def record_rows(records: Iterable[Record]) -> Tuple[RecordRow, ...]:
    return tuple(map(to_row, records))


def rows_frame(rows: Iterable[RecordRow]) -> pd.DataFrame:
    df = pd.DataFrame([r._asdict() for r in rows], columns=list(RecordRow._fields))
    return df.rename(columns={
        "type_label": "Type",
        "content": "Content",
        "reaction": "Reaction",
        "date": "Date",
        "mood_icon": "Mood",
    })


def mood_key(value: Any) -> Any:
    if value is None or value == "":
        return MISSING_MOOD_LABEL
    try:
        hash(value)
    except TypeError:
        return repr(value)
    return value


def mood_counts(records: Iterable[Record]) -> dict:
    """Count records per literal Mood value, in order of first appearance.

    Missing moods share one bucket; unhashable values are keyed by repr.
    """
    counts: dict = {}
    for r in records:
        key = mood_key(r.mood)
        counts[key] = counts.get(key, 0) + 1
    return counts


def chart_input(records: Iterable[Record]) -> Tuple[Tuple[str, ...], Tuple[int, ...]]:
    counts = mood_counts(records)
    labels = tuple(str(m) for m in counts.keys())
    return labels, tuple(counts.values())


def records_frame(records: Iterable[Record]) -> pd.DataFrame:
    return pd.DataFrame([r.to_payload() for r in records], columns=list(EXPORT_COLUMNS))
