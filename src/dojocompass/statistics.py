import logging
from collections import OrderedDict
from datetime import date
from typing import Dict, Iterable

from .attendance import AttendanceIndex
from .calendar_logic import DEFAULT_PATTERN, occurrences_in_range, occurrences_in_week
from .errors import InvalidAnchor, InvalidDate
from .jalali import ShamsiInput, require_gregorian, to_shamsi
from .models import (
    ABSENT, PRESENT, AttendanceRow, MemberReport, PracticePattern, ReportEntry,
    WeekWindow, WeeklySummary,
)


def resolve_anchor(anchor: ShamsiInput) -> date:
    """Globales Startdatum (Sonnen-Hidschri) -> gregorianisch; Konfigurationsfehler sind fatal."""
    try:
        return require_gregorian(anchor)
    except InvalidDate as e:
        raise InvalidAnchor(f"Invalid report start date: {anchor!r}") from e


def build_member_report(rows: Iterable[AttendanceRow],
                        anchor: ShamsiInput,
                        pattern: PracticePattern = DEFAULT_PATTERN) -> MemberReport:
    """
    Bericht eines Mitglieds vom Startdatum bis zum letzten erfassten Tag:
      total    : geplante Trainingstage im Zeitraum
      present  : Anzahl Anwesenheits-Zeilen
      absent   : total - present, nie negativ
      detail   : ein Eintrag pro Trainingstag, neueste zuerst
    """
    rows = sorted((r for r in rows if r.present), key=lambda r: r.day)
    if not rows:
        return MemberReport()

    start = resolve_anchor(anchor)
    last = rows[-1].day
    present_days = {r.day for r in rows}

    planned = occurrences_in_range(start, last, pattern)
    detail = [
        ReportEntry(d, to_shamsi(d), PRESENT if d in present_days else ABSENT)
        for d in planned
    ]

    present = len(rows)
    matched = sum(1 for e in detail if e.status == PRESENT)
    off_schedule = present - matched
    if off_schedule:
        logging.warning(
            f"[DojoCompass] {off_schedule} Anwesenheit(en) von {rows[0].member_id} "
            f"liegen außerhalb des Trainingsplans ab {start.isoformat()}")

    detail.sort(key=lambda e: e.day, reverse=True)
    return MemberReport(
        present=present,
        absent=max(0, len(planned) - present),
        total=len(planned),
        detail=detail,
        off_schedule_rows=off_schedule,
    )


def summarize_week(index: AttendanceIndex,
                   member_ids: Iterable[str],
                   window: WeekWindow,
                   pattern: PracticePattern = DEFAULT_PATTERN) -> Dict[str, WeeklySummary]:
    """Wochen-Zusammenfassung für alle Mitglieder der Anwesenheitsliste."""
    days = occurrences_in_week(window, pattern)
    return {m: index.weekly_summary(m, days) for m in member_ids}


def presence_by_month(report: MemberReport) -> Dict[str, Dict[str, int]]:
    """Anwesend/abwesend je Sonnen-Hidschri-Monat (YYYY-MM), chronologisch."""
    months: Dict[str, Dict[str, int]] = OrderedDict()
    for entry in sorted(report.detail, key=lambda e: e.day):
        key = f"{entry.shamsi.year:04d}-{entry.shamsi.month:02d}"
        bucket = months.setdefault(key, {PRESENT: 0, ABSENT: 0})
        bucket[entry.status] += 1
    return months
