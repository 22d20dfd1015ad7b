import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Tuple

from .errors import SyncFailure
from .models import AttendanceEffect, AttendanceRow, ToggleResult, WeeklySummary


class AttendanceIndex:
    """
    Nachschlage-Tabelle (Mitglied, Tag) -> anwesend, aufgebaut aus einem
    Zeilen-Snapshot des Speichers. Unbekannte Schlüssel gelten als abwesend.

    Wird `dates` übergeben, werden nur Zeilen dieser Tage übernommen, damit
    Fenster und Snapshot zusammenpassen.
    """

    def __init__(self, rows: Iterable[AttendanceRow] = (), dates: Optional[Iterable[date]] = None):
        self.dates = sorted(set(dates)) if dates is not None else None
        allowed = set(self.dates) if self.dates is not None else None
        self._present: Dict[Tuple[str, date], bool] = {}
        for row in rows:
            if allowed is not None and row.day not in allowed:
                continue
            self._present[row.key] = bool(row.present)

    @classmethod
    def from_store(cls, store, dates: Iterable[date]) -> "AttendanceIndex":
        """Frischer Snapshot für die gegebenen Tage; Fehler als SyncFailure."""
        dates = list(dates)
        try:
            rows = store.rows_for_dates(dates)
        except Exception as e:
            logging.error(f"[DojoCompass] Laden der Anwesenheit fehlgeschlagen: {e}")
            raise SyncFailure("fetch attendance", e) from e
        return cls(rows, dates)

    def is_present(self, member_id: str, day: date) -> bool:
        return self._present.get((member_id, day), False)

    def rows(self) -> List[AttendanceRow]:
        return sorted(
            (AttendanceRow(m, d, True) for (m, d), p in self._present.items() if p),
            key=lambda r: (r.day, r.member_id),
        )

    def toggle(self, member_id: str, day: date) -> AttendanceEffect:
        """Lokal umschalten (optimistisch) und die nötige Speicheränderung liefern."""
        key = (member_id, day)
        if self.is_present(member_id, day):
            del self._present[key]
            return AttendanceEffect("delete", member_id, day)
        self._present[key] = True
        return AttendanceEffect("upsert", member_id, day)

    def weekly_summary(self, member_id: str, occurrence_dates: Iterable[date]) -> WeeklySummary:
        dates = list(occurrence_dates)
        present = sum(1 for d in dates if self.is_present(member_id, d))
        return WeeklySummary(present=present, absent=len(dates) - present)


def sync_effect(store, effect: AttendanceEffect) -> None:
    if effect.action == "delete":
        store.delete_row(effect.member_id, effect.day)
    else:
        store.upsert_rows([AttendanceRow(effect.member_id, effect.day, True)])


def apply_toggle(index: AttendanceIndex, store, member_id: str, day: date) -> ToggleResult:
    """
    Zweiphasiges Umschalten: erst lokal, dann im Speicher.
    Scheitert der Speicher, enthält das Ergebnis den SyncFailure; der Aufrufer
    verwirft dann den Snapshot und lädt neu (AttendanceIndex.from_store).
    Kein Retry, keine Warteschlange.
    """
    effect = index.toggle(member_id, day)
    try:
        sync_effect(store, effect)
    except Exception as e:
        logging.error(f"[DojoCompass] Speichern fehlgeschlagen ({effect.action} {member_id} {day}): {e}")
        return ToggleResult(applied_locally=True, effect=effect,
                            sync_error=SyncFailure(effect.action, e))
    return ToggleResult(applied_locally=True, effect=effect)
