import csv
import os
import tempfile
from typing import Dict, List

from reportlab.lib.pagesizes import A4
from reportlab.pdfgen import canvas

from dojocompass.charts import create_attendance_chart
from dojocompass.jalali import to_persian_digits
from dojocompass.models import MemberReport

CSV_FIELDS = ["date_shamsi", "date", "status", "label"]


def report_table(report: MemberReport, persian_digits: bool = False) -> List[Dict[str, str]]:
    """Detail-Zeilen eines Berichts in Anzeigeform (neueste zuerst)."""
    out = []
    for e in report.detail:
        shamsi = e.shamsi.isoformat()
        out.append({
            "date_shamsi": to_persian_digits(shamsi) if persian_digits else shamsi,
            "date": e.day.isoformat(),
            "status": e.status,
            "label": e.label,
        })
    return out


def export_report_csv(report: MemberReport, filename: str) -> str:
    with open(filename, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for row in report_table(report):
            writer.writerow(row)
    return filename


def export_report_pdf(report: MemberReport, filename: str, member_name: str,
                      anchor: str, with_chart: bool = True) -> str:
    """
    PDF-Bericht: Kopf, Zähler, Detailliste (Sonnen-Hidschri-Daten) und
    optional das Tortendiagramm auf einer eigenen Seite.
    """
    c = canvas.Canvas(filename, pagesize=A4)
    w, h = A4
    y = h - 50
    c.setFont('Helvetica-Bold', 14)
    c.drawString(50, y, f"Attendance report: {member_name}")
    y -= 25
    c.setFont('Helvetica', 10)
    c.drawString(50, y, f"Since {anchor}")
    y -= 20
    c.drawString(50, y, f"Scheduled: {report.total}   Present: {report.present}   Absent: {report.absent}")
    y -= 25
    for e in report.detail:
        if y < 60:
            c.showPage()
            c.setFont('Helvetica', 10)
            y = h - 50
        c.drawString(60, y, f"{e.shamsi.isoformat()}  ({e.day.isoformat()})  {e.status}")
        y -= 15

    if with_chart:
        fd, png = tempfile.mkstemp(suffix=".png")
        os.close(fd)
        try:
            create_attendance_chart(report, png, subtitle=member_name)
            c.showPage()
            size = 250
            c.drawImage(png, (w - size) / 2, h - 80 - size, width=size, height=size)
            c.save()
        finally:
            os.remove(png)
    else:
        c.save()
    return filename
