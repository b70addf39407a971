"""ReportLab PDF Generation Service Implementation

Renders order documents using ReportLab.
"""

from io import BytesIO
from xml.sax.saxutils import escape
from typing import List
from decimal import Decimal

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Table,
    TableStyle,
    Paragraph,
    Spacer,
)

from src.app.services.pdf_service import PdfService
from src.domain.document import Document, DocumentType
from src.domain.document_line import DocumentLine

DOCUMENT_TITLES = {
    DocumentType.PURCHASE_ORDER: "PURCHASE ORDER",
    DocumentType.PURCHASE_RECEIVE: "GOODS RECEIVED NOTE",
    DocumentType.SALES_ORDER: "SALES ORDER",
}

COLUMN_WIDTHS = [8 * mm, 58 * mm, 20 * mm, 27 * mm, 16 * mm, 14 * mm, 27 * mm]


def _quantity(value: Decimal) -> str:
    return f"{value:,.6f}".rstrip("0").rstrip(".")


def _percent(value: Decimal) -> str:
    return f"{_quantity(value)}%"


class ReportLabPdfService(PdfService):
    """
    ReportLab implementation of PdfService

    One layout for every document type; only the title and the party label
    differ.
    """

    def render_document(
        self,
        document: Document,
        lines: List[DocumentLine],
        company_name: str,
        company_address: str,
    ) -> bytes:
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=15 * mm,
            leftMargin=15 * mm,
            topMargin=20 * mm,
            bottomMargin=20 * mm,
            title=document.code,
        )

        styles = getSampleStyleSheet()
        elements = []

        title_style = ParagraphStyle(
            "TitleStyle",
            parent=styles["Heading1"],
            fontSize=22,
            spaceAfter=10,
            textColor=colors.HexColor("#2C3E50"),
        )
        document_style = ParagraphStyle(
            "DocumentStyle",
            parent=styles["Heading2"],
            fontSize=14,
            textColor=colors.HexColor("#2980B9"),
            spaceAfter=20,
        )
        header_style = ParagraphStyle(
            "HeaderStyle",
            parent=styles["Normal"],
            fontSize=10,
            textColor=colors.HexColor("#7F8C8D"),
        )
        cell_style = ParagraphStyle(
            "CellStyle",
            parent=styles["Normal"],
            fontSize=9,
        )

        document_type = DocumentType(document.document_type)
        currency = document.currency

        elements.append(Paragraph(escape(company_name), title_style))
        elements.append(Paragraph(escape(company_address), header_style))
        elements.append(Spacer(1, 8 * mm))
        elements.append(Paragraph(DOCUMENT_TITLES[document_type], document_style))

        # Document details
        party_label = "Customer ID:" if document_type is DocumentType.SALES_ORDER else "Supplier ID:"
        details = [
            ["Code:", document.code],
            ["Status:", document.status.upper()],
            [party_label, str(document.party_id)],
            ["Date:", document.document_date.strftime("%Y-%m-%d")],
        ]
        if document.expected_date:
            details.append(["Expected:", document.expected_date.strftime("%Y-%m-%d")])
        if document.warehouse_id is not None:
            details.append(["Warehouse ID:", str(document.warehouse_id)])
        if document.parent_order_id is not None:
            details.append(["Purchase Order ID:", str(document.parent_order_id)])

        details_table = Table(details, colWidths=[40 * mm, 100 * mm])
        details_table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (0, -1), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("TEXTCOLOR", (0, 0), (0, -1), colors.HexColor("#7F8C8D")),
                    ("VALIGN", (0, 0), (-1, -1), "TOP"),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(details_table)
        elements.append(Spacer(1, 8 * mm))

        # Lines
        line_data = [["#", "Product", "Quantity", "Unit Price", "Disc.", "Tax", "Total"]]
        for line in sorted(lines, key=lambda line: line.position):
            product = line.product_name or f"Product #{line.product_id}"
            line_data.append(
                [
                    str(line.position),
                    Paragraph(escape(product), cell_style),
                    _quantity(line.quantity),
                    f"{line.unit_price:,.2f}",
                    _percent(line.discount_percentage),
                    _percent(line.tax_percentage),
                    f"{line.total_amount:,.2f}",
                ]
            )

        line_table = Table(line_data, colWidths=COLUMN_WIDTHS, repeatRows=1)
        line_table.setStyle(
            TableStyle(
                [
                    # Header row
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#2C3E50")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
                    ("FONTSIZE", (0, 0), (-1, 0), 9),
                    ("ALIGN", (0, 0), (-1, 0), "CENTER"),
                    # Data rows
                    ("FONTSIZE", (0, 1), (-1, -1), 9),
                    ("ALIGN", (2, 1), (-1, -1), "RIGHT"),
                    ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
                    # Grid
                    ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#BDC3C7")),
                    ("BOTTOMPADDING", (0, 0), (-1, -1), 5),
                    ("TOPPADDING", (0, 0), (-1, -1), 5),
                    (
                        "ROWBACKGROUNDS",
                        (0, 1),
                        (-1, -1),
                        [colors.white, colors.HexColor("#F8F9F9")],
                    ),
                ]
            )
        )
        elements.append(line_table)
        elements.append(Spacer(1, 5 * mm))

        # Totals
        totals_data = [
            ["Subtotal:", f"{currency} {document.total_amount:,.2f}"],
            ["Discount:", f"-{currency} {document.discount_amount:,.2f}"],
            ["Tax:", f"{currency} {document.tax_amount:,.2f}"],
            ["Total:", f"{currency} {document.final_amount:,.2f}"],
        ]
        totals_table = Table(totals_data, colWidths=[135 * mm, 35 * mm])
        totals_table.setStyle(
            TableStyle(
                [
                    ("ALIGN", (0, 0), (-1, -1), "RIGHT"),
                    ("FONTSIZE", (0, 0), (-1, -1), 10),
                    ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                    ("LINEABOVE", (0, -1), (-1, -1), 1.5, colors.HexColor("#2C3E50")),
                    ("TOPPADDING", (0, 0), (-1, -1), 4),
                ]
            )
        )
        elements.append(totals_table)

        if document.notes:
            elements.append(Spacer(1, 10 * mm))
            elements.append(Paragraph(f"<i>{escape(document.notes)}</i>", header_style))

        doc.build(elements)
        pdf_bytes = buffer.getvalue()
        buffer.close()

        return pdf_bytes
