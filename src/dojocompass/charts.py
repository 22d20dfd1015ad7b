# src/dojocompass/charts.py

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from dojocompass.models import MemberReport

COLOR_PRESENT = '#A0FFA0'
COLOR_ABSENT = '#FFADAD'


def create_attendance_chart(report: MemberReport, filename: str, subtitle: str = None) -> str:
    """
    Tortendiagramm Anwesend/Abwesend eines Mitgliederberichts als PNG.
    Ohne geplante Trainingstage wird ein Platzhalter-Bild geschrieben.
    """
    fig, ax = plt.subplots()
    try:
        values = [report.present, report.absent]
        if sum(values) == 0:
            ax.text(0.5, 0.5, "No data", ha="center", va="center", fontsize=14)
            ax.axis("off")
        else:
            ax.pie(values, labels=["Present", "Absent"], autopct="%1.1f%%",
                   colors=[COLOR_PRESENT, COLOR_ABSENT])
            ax.axis("equal")           # Kreis rund zeichnen
        if subtitle:
            fig.text(0.5, 0.02, subtitle, ha="center", va="bottom", fontsize=16, fontweight='bold')
        fig.savefig(filename, bbox_inches="tight")
    finally:
        plt.close(fig)
    return filename
