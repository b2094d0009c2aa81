"""
BizDesk — Report status and dashboard figures.
"""

from typing import Iterable, Optional

RELEASED = "Released"
PENDING = "Pending"

# Invoice statuses that count as released for reporting
RELEASED_STATUSES = frozenset({"Sent", "Paid", "Overdue"})


def derive_report_status(status: Optional[str], report_status: Optional[str] = None) -> str:
    """Persisted report status wins; otherwise derive it from the invoice status."""
    if report_status:
        return report_status
    return RELEASED if status in RELEASED_STATUSES else PENDING


def with_report_status(invoice: dict) -> dict:
    """Copy of ``invoice`` carrying its effective ``reportStatus``."""
    return {
        **invoice,
        "reportStatus": derive_report_status(invoice.get("status"), invoice.get("reportStatus")),
    }


def paid_revenue(invoices: Iterable[dict]) -> float:
    """Sum of ``amount`` over Paid invoices."""
    return sum(float(inv.get("amount") or 0) for inv in invoices if inv.get("status") == "Paid")


def summarize_invoices(invoices: list[dict]) -> dict:
    released = 0
    pending_amount = 0.0
    for inv in invoices:
        if derive_report_status(inv.get("status"), inv.get("reportStatus")) == RELEASED:
            released += 1
        else:
            pending_amount += float(inv.get("amount") or 0)
    return {
        "revenue": paid_revenue(invoices),
        "invoices": len(invoices),
        "released": released,
        "pending": len(invoices) - released,
        "pendingAmount": pending_amount,
    }
