import io
from typing import Dict, List

from reportlab.lib.pagesizes import A4, landscape
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from reportlab.lib import colors
from reportlab.lib.styles import getSampleStyleSheet

from ftorplanner.domain.Meal import Meal
from ftorplanner.utilities.constants import TOGGLEABLE_MEAL_TYPES, OTHER_MEAL_TYPE


def _cell(meals: List[Meal], meal_type: str) -> str:
    names = [m.meal for m in meals if (m.meal_type or OTHER_MEAL_TYPE) == meal_type]
    return "\n".join(names) or "-"


def generate_pdf_for_week(week: Dict[str, List[Meal]], enabled_types=TOGGLEABLE_MEAL_TYPES):
    """Generate a PDF table: one row per day, one column per enabled meal type (+ other)."""
    buf = io.BytesIO()
    doc = SimpleDocTemplate(
        buf, pagesize=landscape(A4),
        rightMargin=20, leftMargin=20, topMargin=20, bottomMargin=20
    )

    styles = getSampleStyleSheet()
    elements = [
        Paragraph("Weekly Meal Plan", styles["Title"]),
        Spacer(1, 16),
    ]

    columns = list(enabled_types) + [OTHER_MEAL_TYPE]
    data = [["Day"] + [c.capitalize() for c in columns]]
    for day, meals in week.items():
        data.append([day] + [_cell(meals, c) for c in columns])

    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0,0), (-1,0), colors.HexColor("#4CAF50")),
        ("TEXTCOLOR", (0,0), (-1,0), colors.whitesmoke),
        ("ALIGN", (0,0), (-1,-1), "CENTER"),
        ("VALIGN", (0,0), (-1,-1), "MIDDLE"),
        ("FONTNAME", (0,0), (-1,0), "Helvetica-Bold"),
        ("FONTSIZE", (0,0), (-1,0), 12),
        ("BOTTOMPADDING", (0,0), (-1,0), 10),
        ("GRID", (0,0), (-1,-1), 0.5, colors.grey),
    ]))

    elements.append(table)
    doc.build(elements)
    return buf.getvalue()
