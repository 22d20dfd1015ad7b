import os
import sqlite3
from datetime import date
from typing import Iterable, List
from dojocompass.models import AttendanceRow
import logging


class AttendanceStore:
    """SQLite-Ablage der Anwesenheits-Zeilen (nur 'anwesend' wird gespeichert)."""

    def __init__(self, db_path: str = None):
        try:
            self.db_path = db_path or os.path.join(os.path.expanduser("~"), ".dojocompass", "dojocompass.db")
            if self.db_path != ':memory:':
                os.makedirs(os.path.dirname(os.path.abspath(self.db_path)), exist_ok=True)
            self.conn = sqlite3.connect(self.db_path)
            self.conn.row_factory = sqlite3.Row
            self._ensure_tables()
        except Exception as e:
            logging.error(f"Database connection error: {e}")
            raise

    def _ensure_tables(self):
        cur = self.conn.cursor()
        # Höchstens eine Zeile pro (Mitglied, Tag)
        cur.execute("""
        CREATE TABLE IF NOT EXISTS attendance (
          member_id TEXT NOT NULL,
          day TEXT NOT NULL,
          present INTEGER NOT NULL DEFAULT 1,
          PRIMARY KEY (member_id, day)
        )""")
        self.conn.commit()

    @staticmethod
    def _row(row) -> AttendanceRow:
        return AttendanceRow(row['member_id'], date.fromisoformat(row['day']), bool(row['present']))

    def rows_for_member(self, member_id: str) -> List[AttendanceRow]:
        cur = self.conn.cursor()
        cur.execute(
            "SELECT member_id, day, present FROM attendance WHERE member_id=? ORDER BY day",
            (member_id,)
        )
        out = [self._row(r) for r in cur.fetchall()]
        cur.close()
        return out

    def rows_for_dates(self, dates: Iterable[date]) -> List[AttendanceRow]:
        days = [d.isoformat() for d in dates]
        if not days:
            return []
        marks = ','.join('?' for _ in days)
        cur = self.conn.cursor()
        cur.execute(
            f"SELECT member_id, day, present FROM attendance WHERE day IN ({marks}) ORDER BY day, member_id",
            days
        )
        out = [self._row(r) for r in cur.fetchall()]
        cur.close()
        return out

    def upsert_rows(self, rows: Iterable[AttendanceRow]):
        """Anwesenheit eintragen; wiederholte identische Aufrufe ändern nichts."""
        cur = self.conn.cursor()
        cur.executemany(
            "REPLACE INTO attendance (member_id, day, present) VALUES (?,?,1)",
            [(r.member_id, r.day.isoformat()) for r in rows]
        )
        self.conn.commit()

    def delete_row(self, member_id: str, day: date):
        cur = self.conn.cursor()
        cur.execute("DELETE FROM attendance WHERE member_id=? AND day=?", (member_id, day.isoformat()))
        self.conn.commit()

    def delete_member_rows(self, member_id: str):
        """Vor dem Löschen eines Mitglieds alle seine Zeilen entfernen."""
        cur = self.conn.cursor()
        cur.execute("DELETE FROM attendance WHERE member_id=?", (member_id,))
        self.conn.commit()

    def close(self):
        """Schließe die Datenbankverbindung sauber"""
        if self.conn:
            self.conn.close()
            self.conn = None
