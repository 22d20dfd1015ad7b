from datetime import date, datetime, timedelta
from typing import List, Optional, Union

from dateutil.relativedelta import relativedelta
from dateutil.rrule import DAILY, rrule

from .jalali import as_date, weekday_index
from .models import PracticePattern, WeekWindow, SATURDAY

DEFAULT_PATTERN = PracticePattern()


def start_of_week(day: Union[date, datetime], week_start: int = SATURDAY) -> date:
    """Erster Tag der Woche, die `day` enthält (Uhrzeit wird verworfen)."""
    d = as_date(day)
    return d - timedelta(days=weekday_index(d, week_start))


def week_window(day: Union[date, datetime], pattern: PracticePattern = DEFAULT_PATTERN) -> WeekWindow:
    return WeekWindow(start_of_week(day, pattern.week_start))


def shift_weeks(window: WeekWindow, n: int) -> WeekWindow:
    """Fenster um n Wochen verschieben (negativ = Vergangenheit)."""
    return WeekWindow(window.start + relativedelta(weeks=n))


def occurrences_in_week(window: WeekWindow, pattern: PracticePattern = DEFAULT_PATTERN) -> List[date]:
    """Trainingstage einer Woche, ein Datum pro Offset, aufsteigend."""
    return [window.start + timedelta(days=o) for o in pattern.sorted_offsets]


def occurrences_in_range(start: Union[date, datetime],
                         end: Optional[Union[date, datetime]],
                         pattern: PracticePattern = DEFAULT_PATTERN) -> List[date]:
    """
    Alle Trainingstage von `start` bis `end` (inklusive). Geprüft wird der
    absolute Wochentag, nicht der Abstand zu `start`. Ein offenes Ende ist
    nicht erlaubt.
    """
    if end is None:
        raise ValueError("occurrences_in_range needs a concrete end date")
    start, end = as_date(start), as_date(end)
    if end < start:
        return []
    rule = rrule(
        DAILY,
        dtstart=datetime.combine(start, datetime.min.time()),
        until=datetime.combine(end, datetime.min.time()),
        byweekday=pattern.weekdays,
    )
    return [dt.date() for dt in rule]
