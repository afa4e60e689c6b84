from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Mapping, Tuple, Union

DayLike = Union[date, datetime, str]


def to_day(value: DayLike) -> date:
    """Normalize a date, an aware/naive datetime or 'YYYY-MM-DD' into a UTC calendar day."""
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        if len(text) > 10:
            return to_day(datetime.fromisoformat(text.replace("Z", "+00:00")))
        return date.fromisoformat(text)
    except ValueError:
        raise ValueError(f"Invalid date: {value!r}") from None


def _field(season: Any, name: str):
    if isinstance(season, Mapping):
        return season.get(name)
    return getattr(season, name, None)


def resolve_season(day: DayLike, seasons: Iterable[Any], default: str = "low") -> str:
    """
    Return the label of the first season whose inclusive
    [start_date, end_date] range contains ``day``, else ``default``.

    Seasons may be ORM rows or plain mappings. Rows missing either bound
    are skipped. With overlapping seasons the first match wins.
    """
    target = to_day(day)
    for season in seasons:
        start, end = _field(season, "start_date"), _field(season, "end_date")
        if start is None or end is None:
            continue
        if to_day(start) <= target <= to_day(end):
            return _field(season, "label") or default
    return default


def find_season_overlaps(seasons: Iterable[Any]) -> List[Tuple[Any, Any]]:
    """Pairs of neighbouring seasons (sorted by start, end) whose inclusive ranges intersect."""
    items = []
    for season in seasons:
        start, end = _field(season, "start_date"), _field(season, "end_date")
        if start is None or end is None:
            continue
        items.append((to_day(start), to_day(end), season))
    items.sort(key=lambda item: (item[0], item[1]))

    overlaps = []
    for prev, cur in zip(items, items[1:]):
        if not (prev[1] < cur[0] or cur[1] < prev[0]):
            overlaps.append((prev[2], cur[2]))
    return overlaps
