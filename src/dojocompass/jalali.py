"""
Umrechnung zwischen gregorianischem Kalender (Speicherung, Datumsarithmetik)
und Sonnen-Hidschri-Kalender (Anzeige, Eingabe).

Alle Konvertierungen sind total: ungültige Eingaben liefern None statt einer
Exception, weil halb eingetippte Daten im Alltag der Normalfall sind.
`require_gregorian` ist die Variante für Aufrufer, die eine Exception wollen.
"""
import re
from datetime import date, datetime, timedelta
from typing import Optional, Tuple, Union

import jdatetime

from .errors import InvalidDate
from .models import SATURDAY, ShamsiDate

PERSIAN_MONTHS = [
    "فروردین", "اردیبهشت", "خرداد", "تیر", "مرداد", "شهریور",
    "مهر", "آبان", "آذر", "دی", "بهمن", "اسفند",
]
PERSIAN_WEEKDAYS_SHORT = ["ش", "ی", "د", "س", "چ", "پ", "ج"]

_PERSIAN_DIGITS = "۰۱۲۳۴۵۶۷۸۹"
_ARABIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
_TO_ASCII = str.maketrans(_PERSIAN_DIGITS + _ARABIC_DIGITS, "0123456789" * 2)
_TO_PERSIAN = str.maketrans("0123456789", _PERSIAN_DIGITS)

_SEPARATORS = re.compile(r"[-/.]")
_DIGITS = re.compile(r"[0-9]+")

ShamsiInput = Union[ShamsiDate, str, Tuple[int, int, int]]


def to_persian_digits(value) -> str:
    if value is None:
        return ""
    return str(value).translate(_TO_PERSIAN)


def normalize_digits(text: str) -> str:
    """Persische/arabische Ziffern in ASCII-Ziffern umwandeln."""
    return text.translate(_TO_ASCII)


def as_date(value: Union[date, datetime]) -> date:
    # Uhrzeit verwerfen, nur der Kalendertag zählt
    if isinstance(value, datetime):
        return value.date()
    return value


def is_leap_year(year: int) -> bool:
    return jdatetime.date(year, 1, 1).isleap()


def month_length(year: int, month: int) -> int:
    if not 1 <= month <= 12:
        raise InvalidDate((year, month), "month out of range")
    if month <= 6:
        return 31
    if month <= 11:
        return 30
    return 30 if is_leap_year(year) else 29


def split_shamsi(value: ShamsiInput) -> Optional[Tuple[int, int, int]]:
    if isinstance(value, ShamsiDate):
        return value.year, value.month, value.day
    if isinstance(value, str):
        parts = _SEPARATORS.split(normalize_digits(value.strip()))
        if len(parts) != 3 or not all(_DIGITS.fullmatch(p) for p in parts):
            return None
        return int(parts[0]), int(parts[1]), int(parts[2])
    if isinstance(value, (tuple, list)):
        if len(value) != 3:
            return None
        if not all(isinstance(p, int) and not isinstance(p, bool) for p in value):
            return None
        return tuple(value)
    return None


def _valid_parts(value: ShamsiInput) -> Optional[Tuple[int, int, int]]:
    parts = split_shamsi(value)
    if parts is None:
        return None
    year, month, day = parts
    if year < 1 or not 1 <= month <= 12:
        return None
    try:
        if not 1 <= day <= month_length(year, month):
            return None
    except (ValueError, OverflowError):
        return None
    return parts


def is_valid_shamsi(value: ShamsiInput) -> bool:
    return _valid_parts(value) is not None


def to_shamsi(day: Union[date, datetime]) -> ShamsiDate:
    """Gregorianisches Datum -> Sonnen-Hidschri-Datum (total)."""
    j = jdatetime.date.fromgregorian(date=as_date(day))
    return ShamsiDate(j.year, j.month, j.day)


def to_gregorian(value: ShamsiInput) -> Optional[date]:
    """Sonnen-Hidschri-Datum -> gregorianisches Datum, None bei ungültiger Eingabe."""
    parts = _valid_parts(value)
    if parts is None:
        return None
    try:
        return jdatetime.date(*parts).togregorian()
    except (ValueError, OverflowError):
        return None


# Alias passend zur Eingabe-Maske
parse_shamsi = to_gregorian


def require_gregorian(value: ShamsiInput) -> date:
    result = to_gregorian(value)
    if result is None:
        raise InvalidDate(value)
    return result


def format_shamsi(day: Union[date, datetime], persian_digits: bool = False) -> str:
    text = to_shamsi(day).isoformat()
    return to_persian_digits(text) if persian_digits else text


def weekday_index(day: Union[date, datetime], week_start: int = SATURDAY) -> int:
    """Wochentag relativ zum Wochenbeginn (0 = erster Tag der Woche)."""
    return (as_date(day).weekday() - week_start) % 7


def today_shamsi() -> ShamsiDate:
    return to_shamsi(date.today())


def shift_shamsi_days(value: ShamsiInput, amount: int) -> Optional[ShamsiDate]:
    """Um `amount` Tage vor/zurück blättern; ungültige Eingabe bleibt None."""
    g = to_gregorian(value)
    if g is None:
        return None
    return to_shamsi(g + timedelta(days=amount))
