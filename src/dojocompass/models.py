from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional, Tuple

from .errors import SyncFailure

# Python-Wochentage: 0=Montag … 6=Sonntag
SATURDAY = 5

PRESENT = "present"
ABSENT = "absent"

# Anzeige-Labels wie im Vereinsbetrieb
STATUS_LABELS = {PRESENT: "حاضر", ABSENT: "غایب"}


@dataclass(frozen=True, order=True)
class ShamsiDate:
    """Ein Datum im Sonnen-Hidschri-Kalender (nur Anzeige und Eingabe)."""
    year: int
    month: int
    day: int

    def isoformat(self, sep: str = "-") -> str:
        return f"{self.year:04d}{sep}{self.month:02d}{sep}{self.day:02d}"

    def __str__(self) -> str:
        return self.isoformat()


@dataclass
class PracticePattern:
    """Wiederkehrendes Trainings-Muster: Tages-Offsets relativ zum Wochenbeginn.

    offsets bildet Offset -> Wirkung ab (z. B. {1: 'practice'}), damit
    alternative Muster ohne Codeänderung konfiguriert werden können.
    """
    offsets: Dict[int, str] = field(
        default_factory=lambda: {1: "practice", 3: "practice", 5: "practice"})
    week_start: int = SATURDAY    # 0=Montag … 6=Sonntag

    def __post_init__(self):
        if not self.offsets:
            raise ValueError("Practice pattern needs at least one offset")
        bad = [o for o in self.offsets if not isinstance(o, int) or not 0 <= o <= 6]
        if bad:
            raise ValueError(f"Invalid week offsets: {bad}")
        if not 0 <= self.week_start <= 6:
            raise ValueError(f"Invalid week start: {self.week_start}")

    @property
    def sorted_offsets(self) -> List[int]:
        return sorted(self.offsets)

    @property
    def weekdays(self) -> List[int]:
        """Absolute Python-Wochentage der Trainingstage."""
        return sorted((self.week_start + o) % 7 for o in self.offsets)


@dataclass(frozen=True)
class WeekWindow:
    """Sieben-Tage-Fenster ab Wochenbeginn; wird nie gespeichert."""
    start: date

    @property
    def end(self) -> date:
        return self.start + timedelta(days=6)

    def __contains__(self, day: date) -> bool:
        return self.start <= day <= self.end


@dataclass(frozen=True)
class AttendanceRow:
    """Anwesenheit eines Mitglieds an einem (gregorianischen) Tag.

    Es gibt nur 'anwesend'-Zeilen; Abwesenheit ist das Fehlen einer Zeile.
    """
    member_id: str
    day: date
    present: bool = True

    @property
    def key(self) -> Tuple[str, date]:
        return (self.member_id, self.day)


@dataclass(frozen=True)
class AttendanceEffect:
    """Beabsichtigte externe Änderung nach einem Umschalten."""
    action: str                   # 'upsert' oder 'delete'
    member_id: str
    day: date


@dataclass
class ToggleResult:
    applied_locally: bool
    effect: Optional[AttendanceEffect] = None
    sync_error: Optional[SyncFailure] = None

    @property
    def ok(self) -> bool:
        return self.applied_locally and self.sync_error is None


@dataclass(frozen=True)
class WeeklySummary:
    present: int
    absent: int


@dataclass(frozen=True)
class ReportEntry:
    day: date
    shamsi: ShamsiDate
    status: str                   # PRESENT oder ABSENT

    @property
    def label(self) -> str:
        return STATUS_LABELS[self.status]


@dataclass
class MemberReport:
    present: int = 0
    absent: int = 0
    total: int = 0
    detail: List[ReportEntry] = field(default_factory=list)
    off_schedule_rows: int = 0    # Zeilen außerhalb des geplanten Zeitraums/Musters

