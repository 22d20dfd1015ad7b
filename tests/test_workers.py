import pytest
from datetime import date
from unittest.mock import MagicMock
from PySide6.QtCore import QCoreApplication

from dojocompass.attendance import AttendanceIndex
from dojocompass.errors import SyncFailure
from dojocompass.models import AttendanceRow
from dojocompass.workers import ReportRequestGuard, ReportWorker, ToggleWorker


class DummyStore:
    def __init__(self, rows=None, fail=False):
        self.rows = rows or []
        self.fail = fail

    def rows_for_member(self, member_id):
        if self.fail:
            raise IOError("network down")
        return [r for r in self.rows if r.member_id == member_id]


@pytest.fixture(scope="module")
def qapp():
    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


def run_report(worker):
    results, errors = [], []
    worker.finished.connect(lambda rid, rep: results.append((rid, rep)))
    worker.error.connect(lambda rid, msg: errors.append((rid, msg)))
    worker.run()
    return results, errors


def test_report_worker_success(qapp):
    store = DummyStore([AttendanceRow("m1", date(2025, 10, 23))])
    results, errors = run_report(ReportWorker(store, "m1", "1404-07-27", request_id=7))
    assert not errors
    rid, rep = results[0]
    assert rid == 7
    assert (rep.total, rep.present, rep.absent) == (3, 1, 2)


def test_report_worker_store_failure(qapp):
    results, errors = run_report(ReportWorker(DummyStore(fail=True), "m1", "1404-07-27", request_id=1))
    assert not results
    assert errors and "network down" in errors[0][1]


def test_report_worker_invalid_anchor(qapp):
    store = DummyStore([AttendanceRow("m1", date(2025, 10, 23))])
    results, errors = run_report(ReportWorker(store, "m1", "1404-13-40"))
    assert not results
    assert errors


def test_stopped_worker_emits_nothing(qapp):
    worker = ReportWorker(DummyStore(), "m1", "1404-07-27")
    worker.stop()
    results, errors = run_report(worker)
    assert not results and not errors


def test_stale_results_are_dropped(qapp):
    guard = ReportRequestGuard()
    store = DummyStore([AttendanceRow("m1", date(2025, 10, 23)), AttendanceRow("m2", date(2025, 10, 19))])
    shown = {}

    def on_finished(rid, rep):
        if guard.is_current(rid):
            shown["report"] = rep

    first = ReportWorker(store, "m1", "1404-07-27", request_id=guard.next_id())
    second = ReportWorker(store, "m2", "1404-07-27", request_id=guard.next_id())
    first.finished.connect(on_finished)
    second.finished.connect(on_finished)
    # Auswahl wechselt, bevor die erste Anfrage fertig ist
    second.run()
    first.run()
    assert shown["report"].total == 1


def test_toggle_worker_reports_sync_error(qapp):
    store = MagicMock()
    store.upsert_rows.side_effect = IOError("offline")
    idx = AttendanceIndex()
    results = []
    worker = ToggleWorker(idx, store, "m1", date(2025, 10, 19))
    worker.finished.connect(results.append)
    worker.run()
    assert isinstance(results[0].sync_error, SyncFailure)
    assert results[0].applied_locally
