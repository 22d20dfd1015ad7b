import logging
from datetime import date

import pytest

from dojocompass.attendance import AttendanceIndex
from dojocompass.errors import InvalidAnchor
from dojocompass.models import ABSENT, PRESENT, AttendanceRow, ShamsiDate, WeekWindow
from dojocompass.statistics import (
    build_member_report, presence_by_month, resolve_anchor, summarize_week,
)

ANCHOR = "1404-07-27"   # Sonntag 19.10.2025


def rows(*days, member="m1"):
    return [AttendanceRow(member, d) for d in days]


def test_no_rows_gives_empty_report():
    rep = build_member_report([], ANCHOR)
    assert (rep.present, rep.absent, rep.total, rep.detail) == (0, 0, 0, [])


def test_third_occurrence_only():
    # Trainingstage ab Startdatum: So 19., Di 21., Do 23. Oktober
    rep = build_member_report(rows(date(2025, 10, 23)), ANCHOR)
    assert rep.total == 3
    assert rep.present == 1
    assert rep.absent == 2
    assert [e.day for e in rep.detail] == [date(2025, 10, 23), date(2025, 10, 21), date(2025, 10, 19)]
    assert [e.status for e in rep.detail] == [PRESENT, ABSENT, ABSENT]
    assert rep.detail[0].shamsi == ShamsiDate(1404, 8, 1)
    assert rep.detail[0].label == "حاضر"
    assert rep.off_schedule_rows == 0


def test_upper_bound_is_last_record():
    rep = build_member_report(rows(date(2025, 10, 19), date(2025, 11, 2)), ANCHOR)
    # 19.10. bis 02.11.: 7 Trainingstage
    assert rep.total == 7
    assert rep.detail[0].day == date(2025, 11, 2)
    assert rep.present == 2 and rep.absent == 5


def test_rows_before_anchor_never_negative(caplog):
    early = rows(*(date(2025, 10, d) for d in range(1, 8)))
    with caplog.at_level(logging.WARNING):
        rep = build_member_report(early + rows(date(2025, 10, 19)), ANCHOR)
    assert rep.total == 1
    assert rep.present == 8
    assert rep.absent == 0
    assert rep.off_schedule_rows == 7
    assert "außerhalb" in caplog.text


def test_all_rows_before_anchor():
    rep = build_member_report(rows(date(2025, 9, 1)), ANCHOR)
    assert rep.total == 0 and rep.absent == 0 and rep.present == 1
    assert rep.detail == []


def test_unordered_rows_are_sorted():
    rep = build_member_report(rows(date(2025, 10, 23), date(2025, 10, 19), date(2025, 10, 21)), ANCHOR)
    assert rep.total == 3 and rep.absent == 0


@pytest.mark.parametrize("anchor", ["1404-13-01", "garbage", "1404-12-30"])
def test_invalid_anchor_is_fatal(anchor):
    with pytest.raises(InvalidAnchor):
        build_member_report(rows(date(2025, 10, 23)), anchor)
    with pytest.raises(InvalidAnchor):
        resolve_anchor(anchor)


def test_summarize_week():
    idx = AttendanceIndex(rows(date(2025, 10, 19), date(2025, 10, 21)))
    out = summarize_week(idx, ["m1", "m2"], WeekWindow(date(2025, 10, 18)))
    assert (out["m1"].present, out["m1"].absent) == (2, 1)
    assert (out["m2"].present, out["m2"].absent) == (0, 3)


def test_presence_by_month():
    # 21.10.2025 = 29. Mehr, 23.10.2025 = 1. Aban
    rep = build_member_report(rows(date(2025, 10, 21), date(2025, 10, 23)), ANCHOR)
    months = presence_by_month(rep)
    assert list(months) == ["1404-07", "1404-08"]
    assert months["1404-07"] == {PRESENT: 1, ABSENT: 1}
    assert months["1404-08"] == {PRESENT: 1, ABSENT: 0}
