"""
Printable material report.

Consumes the material report rows, legend, floor plan and project name and
writes a paginated PDF: the annotated plan first, the material table on the
next page.
"""

import io
import logging
from datetime import date as date_type
from gettext import gettext as _
from typing import BinaryIO, Optional, Union
from xml.sax.saxutils import escape

import cv2
import numpy as np
from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import (
    Image,
    PageBreak,
    Paragraph,
    SimpleDocTemplate,
    Spacer,
    Table,
    TableStyle,
)

from ..core.annotation.errors import ValidationError
from ..core.annotation.tally import MaterialReport

logger = logging.getLogger(__name__)

HEADER_BLUE = colors.HexColor("#2196F3")
TOTAL_ROW_BG = colors.HexColor("#E3F2FD")


def format_date(value: date_type) -> str:
    return value.strftime("%d-%m-%Y")


def _plan_flowable(image: np.ndarray, max_width: float, max_height: float) -> Image:
    ok, encoded = cv2.imencode(".png", cv2.cvtColor(image, cv2.COLOR_RGB2BGR))
    if not ok:
        raise ValidationError(_("Cannot encode floor plan for the report"))
    height, width = image.shape[:2]
    scale = min(max_width / width, max_height / height)
    return Image(io.BytesIO(encoded.tobytes()), width=width * scale, height=height * scale)


def material_table(report: MaterialReport) -> Table:
    header = [_("Room")] + report.header() + [_("Total")]
    rows = [header]
    for row in report.rows:
        rows.append(
            [row.room] + [str(row.counts[code]) for code in report.type_codes] + [str(row.total)]
        )
    rows.append(
        [_("TOTAL")]
        + [str(report.totals[code]) for code in report.type_codes]
        + [str(report.grand_total)]
    )

    table = Table(rows, repeatRows=1)
    table.setStyle(
        TableStyle(
            [
                ("BACKGROUND", (0, 0), (-1, 0), HEADER_BLUE),
                ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                ("FONTNAME", (0, 1), (0, -1), "Helvetica-Bold"),
                ("FONTNAME", (-1, 1), (-1, -1), "Helvetica-Bold"),
                ("BACKGROUND", (0, -1), (-1, -1), TOTAL_ROW_BG),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#DDDDDD")),
                ("ALIGN", (1, 1), (-1, -1), "CENTER"),
                ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                ("TOPPADDING", (0, 0), (-1, -1), 6),
                ("BOTTOMPADDING", (0, 0), (-1, -1), 6),
            ]
        )
    )
    return table


def render_report(
    report: MaterialReport,
    image: Optional[np.ndarray],
    project_name: str,
    output: Union[str, BinaryIO],
    date: Optional[date_type] = None,
):
    """
    Write the PDF report.

    Args:
        report: Material rows built from the tally and legend
        image: Annotated floor plan (RGB), skipped when None
        project_name: Title of the document
        output: File path or binary stream
        date: Report date, today when omitted
    """
    date = date or date_type.today()
    styles = getSampleStyleSheet()
    title_style = styles["Title"]
    title_style.textColor = HEADER_BLUE

    doc = SimpleDocTemplate(
        output,
        pagesize=landscape(A4),
        leftMargin=0.5 * inch,
        rightMargin=0.5 * inch,
        topMargin=0.5 * inch,
        bottomMargin=0.5 * inch,
        title=project_name or _("Project"),
    )

    story = [
        Paragraph(escape(project_name or _("Project")), title_style),
        Paragraph(f"<b>{_('Date')}:</b> {format_date(date)}", styles["Normal"]),
        Spacer(1, 0.2 * inch),
    ]
    if image is not None:
        story.append(Paragraph(_("Floor plan"), styles["Heading2"]))
        story.append(_plan_flowable(image, doc.width, doc.height - 1.5 * inch))
        story.append(PageBreak())

    story.append(Paragraph(_("Material overview"), title_style))
    story.append(material_table(report))

    doc.build(story)
    logger.info(
        f"Rendered report for {project_name!r}: {len(report.rows)} rooms, "
        f"{report.grand_total} items"
    )
