import logging

from PySide6.QtCore import QObject, Signal

from dojocompass.attendance import apply_toggle
from dojocompass.calendar_logic import DEFAULT_PATTERN
from dojocompass.errors import InvalidAnchor, SyncFailure
from dojocompass.statistics import build_member_report


class ReportRequestGuard:
    """Vergibt Anfrage-IDs; nur die zuletzt vergebene ist aktuell."""

    def __init__(self):
        self._current = 0

    def next_id(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, request_id: int) -> bool:
        return request_id == self._current


class ReportWorker(QObject):
    finished = Signal(int, object)
    error = Signal(int, str)

    def __init__(self, store, member_id, anchor, pattern=DEFAULT_PATTERN, request_id=0):
        super().__init__()
        self.store = store
        self.member_id = member_id
        self.anchor = anchor
        self.pattern = pattern
        self.request_id = request_id
        self._stopped = False

    def stop(self):
        self._stopped = True

    def run(self):
        if self._stopped:
            return
        logging.info(f"[DojoCompass] ReportWorker.run für {self.member_id}")
        try:
            try:
                rows = self.store.rows_for_member(self.member_id)
            except Exception as e:
                raise SyncFailure("fetch report rows", e) from e
            report = build_member_report(rows, self.anchor, self.pattern)
        except InvalidAnchor as e:
            # Konfigurationsfehler: an den Betreiber melden
            logging.error(f"[DojoCompass] {e}")
            if not self._stopped:
                self.error.emit(self.request_id, str(e))
            return
        except SyncFailure as e:
            logging.error(f"[DojoCompass] ReportWorker error: {e}")
            if not self._stopped:
                self.error.emit(self.request_id, str(e))
            return
        if not self._stopped:
            self.finished.emit(self.request_id, report)


class ToggleWorker(QObject):
    finished = Signal(object)

    def __init__(self, index, store, member_id, day):
        super().__init__()
        self.index = index
        self.store = store
        self.member_id = member_id
        self.day = day

    def run(self):
        result = apply_toggle(self.index, self.store, self.member_id, self.day)
        self.finished.emit(result)
