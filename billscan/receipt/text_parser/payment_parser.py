"""Payment mode, reference, and invoice number extraction."""

import re

PAYMENT_MODE_LABEL = re.compile(r"\b(Payment Mode|Mode of Payment)[:\s]*([A-Za-z0-9]+)", re.IGNORECASE)
PAYMENT_MODE_TOKEN = re.compile(r"\b(UPI|CARD|CASH|NETBANKING|PAYTM)\b", re.IGNORECASE)

REFERENCE_LABEL = re.compile(r"Ref(?:erence)?(?: ID| No|:)?\s*[:\-]?\s*([A-Za-z0-9@-]+)", re.IGNORECASE)
# UPI handles look like "9876543210@okaxis"
UPI_HANDLE = re.compile(r"\b[A-Z0-9]{6,}@[a-zA-Z]+", re.IGNORECASE)

INVOICE_NUMBER_LABEL = re.compile(r"\b(?:Invoice|Inv|Bill|Receipt)[\s:]*([A-Za-z0-9/\-]+)", re.IGNORECASE)


def _first_group(pattern: re.Pattern[str], text: str, group: int = 1) -> str | None:
    match = pattern.search(text)
    return match.group(group) if match else None


def _payment_mode_from_label(text: str) -> str | None:
    return _first_group(PAYMENT_MODE_LABEL, text, group=2)


def _payment_mode_from_token(text: str) -> str | None:
    return _first_group(PAYMENT_MODE_TOKEN, text)


def _reference_from_label(text: str) -> str | None:
    return _first_group(REFERENCE_LABEL, text)


def _reference_from_upi_handle(text: str) -> str | None:
    return _first_group(UPI_HANDLE, text, group=0)


def _invoice_number_from_label(text: str) -> str | None:
    return _first_group(INVOICE_NUMBER_LABEL, text)


PAYMENT_MODE_STRATEGIES = (_payment_mode_from_label, _payment_mode_from_token)
REFERENCE_STRATEGIES = (_reference_from_label, _reference_from_upi_handle)
INVOICE_NUMBER_STRATEGIES = (_invoice_number_from_label,)


def _first_match(strategies, text: str) -> str:
    for strategy in strategies:
        value = strategy(text)
        if value:
            return value
    return ""


def _extract_payment_mode(full_text: str) -> str:
    """Payment mode from an explicit label, else a bare UPI/CARD/CASH/... token."""
    return _first_match(PAYMENT_MODE_STRATEGIES, full_text)


def _extract_reference(full_text: str) -> str:
    """Reference/transaction id from a "Ref" label, else a UPI handle."""
    return _first_match(REFERENCE_STRATEGIES, full_text)


def _extract_invoice_number(full_text: str) -> str:
    """Token right after an Invoice/Inv/Bill/Receipt label, as printed ("Invoice No: 7" gives "No")."""
    return _first_match(INVOICE_NUMBER_STRATEGIES, full_text)
