"""
Invoice PDF generation with ReportLab.

One A4 page on a light grey background: an "Invoice" heading followed by the
job, date, price, address, email, phone and additional info lines.
"""

import io
import logging
from typing import Dict
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.platypus import SimpleDocTemplate, Paragraph

from services.job_dates import format_display_date
from services.job_views import display_name, display_value
from validators import sanitize_filename

logger = logging.getLogger(__name__)

PAGE_BACKGROUND = colors.HexColor('#E4E4E4')
PAGE_MARGIN = 20  # points: 10pt section margin + 10pt padding


def _paint_background(canvas, doc):
    canvas.saveState()
    canvas.setFillColor(PAGE_BACKGROUND)
    width, height = doc.pagesize
    canvas.rect(0, 0, width, height, stroke=0, fill=1)
    canvas.restoreState()


def invoice_lines(job: Dict, currency_symbol: str = '$') -> list:
    """(label, value) pairs in the order they are printed."""
    price = job.get('price')
    price_text = f"{currency_symbol}{price}" if price not in (None, '') else 'N/A'
    return [
        ('Job', display_name(job)),
        ('Date', format_display_date(job.get('date'))),
        ('Price', price_text),
        ('Address', display_value(job.get('address'))),
        ('Email', display_value(job.get('email'))),
        ('Phone', display_value(job.get('phone'))),
        ('Additional Info', display_value(job.get('info'))),
    ]


def build_invoice_pdf(job: Dict, currency_symbol: str = '$') -> bytes:
    """
    Render the invoice for a job.

    Args:
        job: Job document
        currency_symbol: Prefix for the price line

    Returns:
        PDF file contents
    """
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        leftMargin=PAGE_MARGIN,
        rightMargin=PAGE_MARGIN,
        topMargin=PAGE_MARGIN,
        bottomMargin=PAGE_MARGIN,
        title=f"Invoice - {display_name(job)}",
    )
    styles = getSampleStyleSheet()

    title_style = ParagraphStyle(
        'InvoiceTitle',
        parent=styles['Normal'],
        fontName='Helvetica',
        fontSize=24,
        leading=28,
        spaceAfter=10,
    )
    text_style = ParagraphStyle(
        'InvoiceText',
        parent=styles['Normal'],
        fontName='Helvetica',
        fontSize=12,
        leading=15,
        spaceAfter=5,
    )

    story = [Paragraph('Invoice', title_style)]
    for label, value in invoice_lines(job, currency_symbol):
        story.append(Paragraph(f"{escape(label)}: {escape(str(value))}", text_style))

    doc.build(story, onFirstPage=_paint_background, onLaterPages=_paint_background)

    pdf_bytes = buffer.getvalue()
    logger.info(f"Generated invoice for job {job.get('id')} ({len(pdf_bytes)} bytes)")
    return pdf_bytes


def invoice_filename(job: Dict) -> str:
    """invoice_<name>.pdf, falling back to the job id when the name is unusable."""
    name = display_name(job)
    if name == 'N/A':
        name = ''
    fallback = sanitize_filename(str(job.get('id') or ''), default='job')
    return f"invoice_{sanitize_filename(name, default=fallback)}.pdf"
