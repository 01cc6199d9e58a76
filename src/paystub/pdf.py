from __future__ import annotations

from io import BytesIO
from itertools import zip_longest
from typing import Any, Callable, Dict, List
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4, letter
from reportlab.lib.styles import ParagraphStyle, StyleSheet1, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import HRFlowable, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .document import (
    CompanyBlock,
    DeductionsBlock,
    DocumentTree,
    EarningsTable,
    EmployeeBlock,
    Header,
    NetPayLine,
    PayPeriodBlock,
    YTDBlock,
)
from .options import WATERMARK_MARKS, RenderOptions

PAGE_SIZES = {"Letter": letter, "A4": A4}
BRAND_BLUE = colors.HexColor("#2563eb")
NET_GREEN = "#059669"

GRID_STYLE = [
    ("BACKGROUND", (0, 0), (-1, 0), colors.whitesmoke),
    ("GRID", (0, 0), (-1, -1), 0.25, colors.lightgrey),
    ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
    ("FONTSIZE", (0, 0), (-1, -1), 9.5),
    ("LEFTPADDING", (0, 0), (-1, -1), 6),
    ("RIGHTPADDING", (0, 0), (-1, -1), 6),
    ("TOPPADDING", (0, 0), (-1, -1), 4),
    ("BOTTOMPADDING", (0, 0), (-1, -1), 4),
]


def _styles() -> Dict[str, ParagraphStyle]:
    base: StyleSheet1 = getSampleStyleSheet()
    return {
        "title": ParagraphStyle(
            "stub_title", parent=base["Title"], textColor=colors.white, backColor=BRAND_BLUE, borderPadding=12
        ),
        "company": ParagraphStyle("stub_company", parent=base["Heading2"], spaceAfter=2),
        "header": ParagraphStyle("stub_header", parent=base["Heading3"], fontSize=11),
        "body": ParagraphStyle("stub_body", parent=base["Normal"], fontSize=9.5),
        "net": ParagraphStyle("stub_net", parent=base["Heading2"], alignment=TA_RIGHT),
    }


def _p(text: str, style: ParagraphStyle) -> Paragraph:
    return Paragraph(escape(text), style)


def _header(block: Header, styles) -> List[Any]:
    return [_p(block.title, styles["title"]), Spacer(1, 16)]


def _company(block: CompanyBlock, styles) -> List[Any]:
    return [
        _p(block.name, styles["company"]),
        _p(block.address, styles["body"]),
        _p(block.city_state_zip, styles["body"]),
        Spacer(1, 10),
    ]


def _employee(block: EmployeeBlock, styles) -> List[Any]:
    lines = [
        "<b>Employee Information</b>",
        f"Name: {escape(block.name)}",
        f"Address: {escape(block.address)}",
        f"City, State ZIP: {escape(block.city_state_zip)}",
    ]
    if block.ssn:
        lines.append(f"SSN: {escape(block.ssn)}")
    if block.employee_id:
        lines.append(f"Employee ID: {escape(block.employee_id)}")
    return [Paragraph("<br/>".join(lines), styles["body"])]


def _pay_period(block: PayPeriodBlock, styles) -> List[Any]:
    text = "<br/>".join(
        [
            "<b>Pay Period Information</b>",
            f"Pay Period: {escape(block.period)}",
            f"Pay Date: {escape(block.pay_date)}",
        ]
    )
    return [Paragraph(text, styles["body"])]


def _earnings(block: EarningsTable, styles) -> List[Any]:
    rows = [["Description", "Rate", "Hours", "Amount"]]
    rows.extend([row.description, row.rate, row.hours, row.amount] for row in block.rows)
    rows.append(["GROSS PAY:", "", "", block.gross_pay])
    table = Table(rows, colWidths=[2.9 * inch, 1.3 * inch, 1.0 * inch, 1.5 * inch])
    table.setStyle(
        TableStyle(
            GRID_STYLE
            + [
                ("ALIGN", (1, 0), (-1, -1), "RIGHT"),
                ("SPAN", (0, -1), (2, -1)),
                ("FONTNAME", (0, -1), (-1, -1), "Helvetica-Bold"),
                ("LINEABOVE", (0, -1), (-1, -1), 1.5, colors.black),
            ]
        )
    )
    return [_p("EARNINGS", styles["header"]), table, Spacer(1, 12)]


def _deductions(block: DeductionsBlock, styles) -> List[Any]:
    rows = [["TAXES", "", "OTHER DEDUCTIONS", ""]]
    for tax, other in zip_longest(block.taxes, block.other):
        rows.append(
            [
                tax.label if tax else "",
                tax.amount if tax else "",
                other.label if other else "",
                other.amount if other else "",
            ]
        )
    table = Table(rows, colWidths=[2.0 * inch, 1.35 * inch, 2.0 * inch, 1.35 * inch])
    table.setStyle(
        TableStyle(
            GRID_STYLE
            + [
                ("ALIGN", (1, 1), (1, -1), "RIGHT"),
                ("ALIGN", (3, 1), (3, -1), "RIGHT"),
            ]
        )
    )
    return [table, Spacer(1, 12)]


def _net_pay(block: NetPayLine, styles) -> List[Any]:
    return [
        HRFlowable(width="100%", thickness=2, color=colors.black),
        Paragraph(
            f'NET PAY: <font color="{NET_GREEN}">{escape(block.amount)}</font>',
            styles["net"],
        ),
    ]


def _ytd(block: YTDBlock, styles) -> List[Any]:
    rows: List[List[str]] = [["YEAR TO DATE", ""]]
    for items in (block.earnings, block.taxes, block.deductions):
        rows.extend([item.label, item.amount] for item in items)
    table = Table(rows, colWidths=[4.7 * inch, 2.0 * inch])
    table.setStyle(TableStyle(GRID_STYLE + [("ALIGN", (1, 1), (1, -1), "RIGHT")]))
    return [Spacer(1, 12), HRFlowable(width="100%"), Spacer(1, 8), table]


BUILDERS: Dict[str, Callable[..., List[Any]]] = {
    "header": _header,
    "company": _company,
    "net_pay": _net_pay,
    "earnings": _earnings,
    "deductions": _deductions,
    "ytd": _ytd,
}


def build_story(tree: DocumentTree) -> List[Any]:
    styles = _styles()
    story: List[Any] = []
    employee = tree.find("employee")
    pay_period = tree.find("pay_period")
    for block in tree.blocks:
        if block.kind == "employee":
            # employee and pay period sit side by side
            right = _pay_period(pay_period, styles) if pay_period else ""
            story.append(Table([[_employee(block, styles), right]], colWidths=[3.35 * inch, 3.35 * inch]))
            story.append(HRFlowable(width="100%"))
            story.append(Spacer(1, 8))
        elif block.kind == "pay_period" and employee is not None:
            continue
        elif block.kind == "pay_period":
            story.extend(_pay_period(block, styles))
        else:
            story.extend(BUILDERS[block.kind](block, styles))
    return story


def _draw_watermark(canvas, doc) -> None:
    width, height = doc.pagesize
    canvas.saveState()
    canvas.setFillColor(colors.Color(0, 0, 0, alpha=0.1))
    canvas.setFont("Helvetica-Bold", 56)
    canvas.translate(width / 2, height / 2)
    canvas.rotate(45)
    for index, offset in enumerate(range(-360, 361, 180)):
        canvas.drawCentredString(0, offset, WATERMARK_MARKS[index % len(WATERMARK_MARKS)])
    canvas.restoreState()


def _no_decoration(canvas, doc) -> None:
    return None


def write_pdf(story: List[Any], options: RenderOptions) -> bytes:
    margins = options.margins
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=PAGE_SIZES.get(options.page_format, letter),
        leftMargin=margins.left,
        rightMargin=margins.right,
        topMargin=margins.top,
        bottomMargin=margins.bottom,
        title="Payroll Statement",
        invariant=1,
    )
    decorate = _draw_watermark if options.watermark else _no_decoration
    doc.build(story, onFirstPage=decorate, onLaterPages=decorate)
    return buffer.getvalue()


def render_pdf(tree: DocumentTree, options: RenderOptions) -> bytes:
    return write_pdf(build_story(tree), options)
