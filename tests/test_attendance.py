from datetime import date
from unittest.mock import MagicMock
import pytest

from dojocompass.attendance import AttendanceIndex, apply_toggle
from dojocompass.calendar_logic import occurrences_in_week
from dojocompass.errors import SyncFailure
from dojocompass.models import AttendanceRow, WeekWindow

WEEK = WeekWindow(date(2025, 10, 18))
SUN, TUE, THU = occurrences_in_week(WEEK)


def test_lookup_defaults_to_absent():
    idx = AttendanceIndex([AttendanceRow("m1", SUN)])
    assert idx.is_present("m1", SUN)
    assert not idx.is_present("m1", TUE)
    assert not idx.is_present("unknown", SUN)


def test_weekly_summary_two_of_three():
    idx = AttendanceIndex([AttendanceRow("m1", SUN), AttendanceRow("m1", THU),
                           AttendanceRow("m2", TUE)], dates=[SUN, TUE, THU])
    s = idx.weekly_summary("m1", [SUN, TUE, THU])
    assert (s.present, s.absent) == (2, 1)
    s = idx.weekly_summary("nobody", [SUN, TUE, THU])
    assert (s.present, s.absent) == (0, 3)


def test_dates_restrict_snapshot():
    idx = AttendanceIndex([AttendanceRow("m1", date(2025, 10, 12))], dates=[SUN, TUE, THU])
    assert not idx.is_present("m1", date(2025, 10, 12))


def test_toggle_twice_restores_state():
    idx = AttendanceIndex([AttendanceRow("m1", SUN)])
    eff = idx.toggle("m1", SUN)
    assert eff.action == "delete"
    assert not idx.is_present("m1", SUN)
    eff = idx.toggle("m1", SUN)
    assert eff.action == "upsert"
    assert idx.is_present("m1", SUN)
    assert idx.rows() == [AttendanceRow("m1", SUN)]


def test_apply_toggle_syncs_store():
    store = MagicMock()
    idx = AttendanceIndex()
    res = apply_toggle(idx, store, "m1", TUE)
    assert res.ok
    store.upsert_rows.assert_called_once_with([AttendanceRow("m1", TUE, True)])
    res = apply_toggle(idx, store, "m1", TUE)
    assert res.ok
    store.delete_row.assert_called_once_with("m1", TUE)


def test_apply_toggle_failure_reports_sync_error():
    store = MagicMock()
    store.upsert_rows.side_effect = IOError("offline")
    store.rows_for_dates.return_value = []
    idx = AttendanceIndex()
    res = apply_toggle(idx, store, "m1", TUE)
    # lokal schon umgeschaltet, Speicher aber fehlgeschlagen
    assert res.applied_locally
    assert isinstance(res.sync_error, SyncFailure)
    assert not res.ok
    assert idx.is_present("m1", TUE)
    # Rückweg: Snapshot verwerfen und neu laden
    fresh = AttendanceIndex.from_store(store, [SUN, TUE, THU])
    assert not fresh.is_present("m1", TUE)


def test_from_store_wraps_errors():
    store = MagicMock()
    store.rows_for_dates.side_effect = RuntimeError("boom")
    with pytest.raises(SyncFailure) as exc:
        AttendanceIndex.from_store(store, [SUN])
    assert exc.value.operation == "fetch attendance"
