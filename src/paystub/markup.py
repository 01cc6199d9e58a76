"""Styled HTML serialization of a composed statement.

This is the document a browser previews and the content returned when the
PDF backend cannot run. Output is deterministic for a given tree and options.
"""
from __future__ import annotations

from html import escape
from typing import Callable, Dict, List

from .document import (
    Block,
    CompanyBlock,
    DeductionsBlock,
    DocumentTree,
    EarningsTable,
    EmployeeBlock,
    Header,
    LineItem,
    NetPayLine,
    PayPeriodBlock,
    YTDBlock,
)
from .options import WATERMARK_MARKS, RenderOptions

DOCTYPE = "<!DOCTYPE html>"

STYLE = """
body { font-family: Arial, sans-serif; font-size: 12px; line-height: 1.4; margin: 0; padding: 20px; color: #333; }
.header { background-color: #2563eb; color: white; text-align: center; padding: 20px; margin-bottom: 20px; }
.header h1 { margin: 0; font-size: 24px; font-weight: bold; }
.company-info { margin-bottom: 20px; }
.company-info h2 { font-size: 18px; margin: 0 0 10px 0; font-weight: bold; }
.info-section { display: flex; justify-content: space-between; margin-bottom: 20px; }
.info-block { width: 48%; }
.info-block h3 { font-size: 14px; font-weight: bold; margin: 0 0 10px 0; border-bottom: 1px solid #ddd; padding-bottom: 5px; }
.info-row { margin-bottom: 5px; }
.label { font-weight: bold; display: inline-block; width: 120px; }
.section-header { background-color: #f3f4f6; padding: 10px; font-weight: bold; margin-bottom: 10px; }
.earnings-table { width: 100%; border-collapse: collapse; margin-bottom: 10px; }
.earnings-table th, .earnings-table td { border: 1px solid #ddd; padding: 8px; text-align: left; }
.earnings-table th { background-color: #f9fafb; font-weight: bold; }
.earnings-table .amount { text-align: right; }
.earnings-table .gross { border-top: 2px solid #333; font-weight: bold; }
.deductions-section { display: flex; justify-content: space-between; margin-bottom: 20px; }
.deductions-block { width: 48%; }
.deduction-row, .ytd-row { display: flex; justify-content: space-between; margin-bottom: 5px; padding: 3px 0; }
.net-pay { border-top: 2px solid #333; padding-top: 15px; text-align: right; font-size: 18px; font-weight: bold; }
.net-pay .amount { color: #059669; }
.ytd-section { margin-top: 20px; padding-top: 15px; border-top: 1px solid #ddd; }
.ytd-group { margin-bottom: 10px; }
.watermark { position: fixed; transform: translate(-50%, -50%) rotate(45deg); font-weight: bold; color: rgba(0, 0, 0, 0.1); z-index: -1; pointer-events: none; }
.watermark.primary { top: 50%; left: 50%; font-size: 72px; }
.watermark.secondary { top: 25%; left: 25%; font-size: 48px; }
.watermark.tertiary { top: 75%; left: 75%; font-size: 48px; }
""".strip()

WATERMARK_CLASSES = ("primary", "secondary", "tertiary")


def _e(value: str) -> str:
    return escape(value or "", quote=True)


def _row(css_class: str, item: LineItem) -> str:
    return f'<div class="{css_class}"><span>{_e(item.label)}</span><span>{_e(item.amount)}</span></div>'


def _header(block: Header) -> List[str]:
    return ['<div class="header">', f"<h1>{_e(block.title)}</h1>", "</div>"]


def _company(block: CompanyBlock) -> List[str]:
    return [
        '<div class="company-info">',
        f"<h2>{_e(block.name)}</h2>",
        f"<div>{_e(block.address)}</div>",
        f"<div>{_e(block.city_state_zip)}</div>",
        "</div>",
    ]


def _info_row(label: str, value: str) -> str:
    return f'<div class="info-row"><span class="label">{_e(label)}</span> {_e(value)}</div>'


def _employee(block: EmployeeBlock) -> List[str]:
    lines = [
        '<div class="info-section">',
        '<div class="info-block">',
        "<h3>Employee Information</h3>",
        _info_row("Name:", block.name),
        _info_row("Address:", block.address),
        _info_row("City, State ZIP:", block.city_state_zip),
    ]
    if block.ssn:
        lines.append(_info_row("SSN:", block.ssn))
    if block.employee_id:
        lines.append(_info_row("Employee ID:", block.employee_id))
    lines.append("</div>")
    return lines


def _pay_period(block: PayPeriodBlock) -> List[str]:
    # closes the info-section opened by the employee block
    return [
        '<div class="info-block">',
        "<h3>Pay Period Information</h3>",
        _info_row("Pay Period:", block.period),
        _info_row("Pay Date:", block.pay_date),
        "</div>",
        "</div>",
    ]


def _earnings(block: EarningsTable) -> List[str]:
    lines = [
        '<div class="earnings-section">',
        '<div class="section-header">EARNINGS</div>',
        '<table class="earnings-table">',
        "<thead><tr><th>Description</th>"
        '<th class="amount">Rate</th><th class="amount">Hours</th><th class="amount">Amount</th></tr></thead>',
        "<tbody>",
    ]
    for row in block.rows:
        lines.append(
            f"<tr><td>{_e(row.description)}</td><td class=\"amount\">{_e(row.rate)}</td>"
            f"<td class=\"amount\">{_e(row.hours)}</td><td class=\"amount\">{_e(row.amount)}</td></tr>"
        )
    lines.append(
        f'<tr class="gross"><td colspan="3">GROSS PAY:</td><td class="amount">{_e(block.gross_pay)}</td></tr>'
    )
    lines.extend(["</tbody>", "</table>", "</div>"])
    return lines


def _deductions(block: DeductionsBlock) -> List[str]:
    lines = ['<div class="deductions-section">']
    for title, items in (("TAXES", block.taxes), ("OTHER DEDUCTIONS", block.other)):
        lines.append('<div class="deductions-block">')
        lines.append(f'<div class="section-header">{title}</div>')
        lines.extend(_row("deduction-row", item) for item in items)
        lines.append("</div>")
    lines.append("</div>")
    return lines


def _net_pay(block: NetPayLine) -> List[str]:
    return [f'<div class="net-pay"><div>NET PAY: <span class="amount">{_e(block.amount)}</span></div></div>']


def _ytd(block: YTDBlock) -> List[str]:
    lines = ['<div class="ytd-section">', '<div class="section-header">YEAR TO DATE</div>']
    for title, items in (
        ("Earnings", block.earnings),
        ("Tax Withholdings", block.taxes),
        ("Deductions", block.deductions),
    ):
        if not items:
            continue
        lines.append('<div class="ytd-group">')
        lines.append(f"<h4>{title}</h4>")
        lines.extend(_row("ytd-row", item) for item in items)
        lines.append("</div>")
    lines.append("</div>")
    return lines


SERIALIZERS: Dict[str, Callable[..., List[str]]] = {
    "header": _header,
    "company": _company,
    "employee": _employee,
    "pay_period": _pay_period,
    "earnings": _earnings,
    "deductions": _deductions,
    "net_pay": _net_pay,
    "ytd": _ytd,
}


def _block(block: Block) -> List[str]:
    return SERIALIZERS[block.kind](block)


def watermark_markup(options: RenderOptions) -> List[str]:
    if not options.watermark:
        return []
    return [
        f'<div class="watermark {css_class}">{mark}</div>'
        for css_class, mark in zip(WATERMARK_CLASSES, WATERMARK_MARKS)
    ]


def render_html(tree: DocumentTree, options: RenderOptions) -> str:
    margins = options.margins
    page_rule = (
        f"@page {{ size: {options.page_format}; "
        f"margin: {margins.top:g}pt {margins.right:g}pt {margins.bottom:g}pt {margins.left:g}pt; }}"
    )
    lines = [
        DOCTYPE,
        "<html>",
        "<head>",
        '<meta charset="utf-8">',
        f"<title>{_e(tree.title.title())}</title>",
        "<style>",
        page_rule,
        STYLE,
        "</style>",
        "</head>",
        "<body>",
    ]
    lines.extend(watermark_markup(options))
    for block in tree.blocks:
        lines.extend(_block(block))
    lines.extend(["</body>", "</html>", ""])
    return "\n".join(lines)
