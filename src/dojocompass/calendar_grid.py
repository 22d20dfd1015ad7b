from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .jalali import (
    PERSIAN_MONTHS, split_shamsi, is_valid_shamsi, month_length,
    to_gregorian, today_shamsi, weekday_index,
)
from .models import SATURDAY, ShamsiDate


def build_month_grid(year: int, month: int, week_start: int = SATURDAY) -> List[Optional[int]]:
    """
    Tagesraster eines Sonnen-Hidschri-Monats: führende Leerfelder (None) bis
    zum Wochentag des 1., danach die Tage 1..Monatslänge.
    Ungültige (Jahr, Monat)-Paare ergeben ein leeres Raster.
    """
    if not is_valid_shamsi((year, month, 1)):
        return []
    first = to_gregorian((year, month, 1))
    blanks = weekday_index(first, week_start)
    return [None] * blanks + list(range(1, month_length(year, month) + 1))


def adjacent_month(year: int, month: int, amount: int) -> Tuple[int, int]:
    """Monat vor/zurück blättern, mit Jahreswechsel 12 -> 1 und 1 -> 12."""
    index = year * 12 + (month - 1) + amount
    return index // 12, index % 12 + 1


@dataclass
class MonthView:
    """Zustand eines Datumswählers: angezeigter Monat plus Markierungen."""
    year: int
    month: int
    selected: Optional[ShamsiDate] = None
    today: ShamsiDate = field(default_factory=today_shamsi)

    @classmethod
    def for_selection(cls, selected: Optional[str] = None, today: ShamsiDate = None) -> "MonthView":
        today = today or today_shamsi()
        # Nur Jahr und Monat müssen lesbar sein, der Tag darf noch fehlen/falsch sein
        parts = split_shamsi(selected) if selected else None
        if parts is None:
            return cls(today.year, today.month, None, today)
        year, month, day = parts
        sel = ShamsiDate(year, month, day) if is_valid_shamsi(parts) else None
        return cls(year, month, sel, today)

    @property
    def title(self) -> str:
        if 1 <= self.month <= 12:
            return f"{PERSIAN_MONTHS[self.month - 1]} {self.year}"
        return str(self.year)

    def grid(self) -> List[Optional[int]]:
        return build_month_grid(self.year, self.month)

    def navigate(self, amount: int) -> "MonthView":
        year, month = adjacent_month(self.year, self.month, amount)
        return MonthView(year, month, self.selected, self.today)

    def is_selected(self, day: int) -> bool:
        return self.selected == ShamsiDate(self.year, self.month, day)

    def is_today(self, day: int) -> bool:
        return self.today == ShamsiDate(self.year, self.month, day)

    def pick(self, day: int) -> str:
        """Ausgewählten Tag als Eingabestring zurückgeben."""
        return ShamsiDate(self.year, self.month, day).isoformat()
