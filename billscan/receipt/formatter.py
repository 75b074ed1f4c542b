"""Format ParsedRecord data for display: text summaries and HTML invoices."""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from html import escape

from billscan.domain.record import LineItem, ParsedRecord

CENT = Decimal("0.01")
FALLBACK_TAX_RATE = Decimal("0.05")
FALLBACK_INVOICE_NO = "INV-0001"
FALLBACK_MERCHANT = "BUSINESS INVOICE"


def format_inr(amount: Decimal) -> str:
    """
    Format an amount with Indian digit grouping and two decimals.

    Examples:
        Decimal("1234567.5") -> "12,34,567.50"
        Decimal("999") -> "999.00"
    """
    quantized = amount.quantize(CENT, rounding=ROUND_HALF_UP)
    sign = "-" if quantized < 0 else ""
    whole, fraction = f"{abs(quantized):.2f}".split(".")

    # Last three digits, then groups of two (lakh/crore)
    head, tail = whole[:-3], whole[-3:]
    groups: list[str] = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    groups.append(tail)
    return f"{sign}{','.join(groups)}.{fraction}"


def _rupees(amount: Decimal) -> str:
    return f"₹{format_inr(amount)}"


def _item_total(item: LineItem) -> Decimal:
    return item.total or item.unit * item.qty


def format_record_summary(record: ParsedRecord) -> str:
    """Render a record as a plain-text block for terminals and logs."""
    totals = record.totals
    lines = [
        f"Merchant: {record.merchant}",
        f"Invoice: {record.invoice_no}    Date: {record.date}",
    ]
    payment = f"Payment: {record.payment_mode}"
    if record.ref:
        payment += f" • Ref: {record.ref}"
    lines.append(payment)
    lines.append(f"Category: {record.category}")
    lines.append(
        f"Detected totals — Subtotal: {_rupees(totals.subtotal)}, "
        f"Tax: {_rupees(totals.tax)}, Grand: {_rupees(totals.grand)}"
    )
    for label, amount in totals.gst.items():
        lines.append(f"  {label}: {_rupees(amount)}")

    lines.append("")
    lines.append(f"Items ({len(record.items)}):")
    for i, item in enumerate(record.items, 1):
        lines.append(f"  {i}. {item.description} x{item.qty} @ {_rupees(item.unit)} = {_rupees(item.total)}")
    return "\n".join(lines)


def format_invoice_html(
    record: ParsedRecord,
    file_name: str = "",
    generated_on: date | None = None,
) -> str:
    """
    Render a record as a standalone HTML invoice fragment.

    Missing figures are filled in for presentation only: subtotal is the sum of
    item totals, tax falls back to 5% of subtotal, grand falls back to
    subtotal + tax. The invoice number and date fall back to placeholders.
    """
    subtotal = sum((_item_total(item) for item in record.items), Decimal("0.00"))
    tax = record.totals.tax or (subtotal * FALLBACK_TAX_RATE).quantize(CENT, rounding=ROUND_HALF_UP)
    grand = record.totals.grand or (subtotal + tax)
    invoice_date = record.date or (generated_on or date.today()).strftime("%d/%m/%Y")

    rows = "".join(
        f"""
    <tr>
      <td class="num">{i}</td>
      <td>{escape(item.description)}</td>
      <td class="qty">{item.qty}</td>
      <td class="amount">{_rupees(item.unit)}</td>
      <td class="amount">{_rupees(_item_total(item))}</td>
    </tr>"""
        for i, item in enumerate(record.items, 1)
    )

    return f"""<div class="invoice">
  <div class="invoice-header">
    <div>
      <div class="merchant">{escape(record.merchant or FALLBACK_MERCHANT)}</div>
      <div class="file-name">{escape(file_name)}</div>
    </div>
    <div class="invoice-meta">
      <div><strong>Invoice:</strong> {escape(record.invoice_no or FALLBACK_INVOICE_NO)}</div>
      <div><strong>Date:</strong> {escape(invoice_date)}</div>
    </div>
  </div>
  <table class="items">
    <thead>
      <tr><th>#</th><th>Description</th><th>Qty</th><th class="amount">Unit</th><th class="amount">Total</th></tr>
    </thead>
    <tbody>{rows}
    </tbody>
  </table>
  <div class="invoice-totals">
    <div class="row"><span>Subtotal</span><span>{_rupees(subtotal)}</span></div>
    <div class="row"><span>Tax</span><span>{_rupees(tax)}</span></div>
    <div class="row grand"><span>Grand Total</span><span>{_rupees(grand)}</span></div>
  </div>
  <div class="footer">Thank you for your business.</div>
</div>
"""
