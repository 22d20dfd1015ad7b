# src/dojocompass/main.py

from datetime import date

from .attendance import AttendanceIndex, apply_toggle
from .calendar_grid import MonthView
from .calendar_logic import occurrences_in_week, shift_weeks, week_window
from .config import db_path_from_config, load_config, practice_pattern_from_config
from .data import AttendanceStore
from .errors import InvalidAnchor, SyncFailure
from .jalali import PERSIAN_WEEKDAYS_SHORT, format_shamsi, parse_shamsi
from .statistics import build_member_report


def print_week(window, pattern):
    days = occurrences_in_week(window, pattern)
    print(f"\n📅 Woche {format_shamsi(days[0])} bis {format_shamsi(days[-1])}:")
    for d in days:
        print(" ", format_shamsi(d), f"({d.isoformat()})")
    return days


def print_month(view: MonthView):
    print(f"\n{view.title}")
    print(" ".join(f"{w:>2}" for w in PERSIAN_WEEKDAYS_SHORT))
    cells = ["  " if d is None else f"{d:>2}" for d in view.grid()]
    for i in range(0, len(cells), 7):
        print(" ".join(cells[i:i + 7]))


def print_report(report):
    print(f"\nGeplant: {report.total}  Anwesend: {report.present}  Abwesend: {report.absent}")
    for e in report.detail:
        print(" ", e.shamsi.isoformat(), e.label)


def run_wizard():
    print("🥋 DojoCompass 🥋")
    cfg = load_config()
    pattern = practice_pattern_from_config(cfg)
    store = AttendanceStore(db_path_from_config(cfg))
    window = week_window(date.today(), pattern)
    try:
        while True:
            mode = input("\n[1] Woche  [2] vor  [3] zurück  [4] Anwesenheit umschalten  "
                         "[5] Bericht  [6] Monat  [q] Ende: ").strip().lower()
            if mode == "1":
                print_week(window, pattern)
            elif mode in ("2", "3"):
                window = shift_weeks(window, 1 if mode == "2" else -1)
                print_week(window, pattern)
            elif mode == "4":
                member = input("  Mitglied: ").strip()
                day = parse_shamsi(input("  Datum (YYYY-MM-DD, Shamsi): "))
                if day is None:
                    print("  Ungültiges Datum.")
                    continue
                try:
                    index = AttendanceIndex.from_store(store, [day])
                except SyncFailure as e:
                    print(f"  Fehler: {e}")
                    continue
                result = apply_toggle(index, store, member, day)
                if result.sync_error:
                    print(f"  Fehler beim Speichern: {result.sync_error}. Bitte erneut versuchen.")
                else:
                    state = "anwesend" if index.is_present(member, day) else "abwesend"
                    print(f"  {member} am {format_shamsi(day)}: {state}")
            elif mode == "5":
                member = input("  Mitglied: ").strip()
                try:
                    report = build_member_report(store.rows_for_member(member), cfg['anchor_date'], pattern)
                except InvalidAnchor as e:
                    print(f"  Konfigurationsfehler: {e}")
                    raise
                print_report(report)
            elif mode == "6":
                print_month(MonthView.for_selection(input("  Monat (YYYY-MM-01, Shamsi) [leer=heute]: ").strip()))
            elif mode == "q":
                break
    finally:
        store.close()


if __name__ == "__main__":
    run_wizard()
