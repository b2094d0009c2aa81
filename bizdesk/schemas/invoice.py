"""
BizDesk — Invoice schemas.
"""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import Field

from bizdesk.schemas import RequestModel, UpdateRequest


class InvoiceStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    PAID = "Paid"
    OVERDUE = "Overdue"


class ReportStatus(str, Enum):
    RELEASED = "Released"
    PENDING = "Pending"


class InvoiceItem(RequestModel):
    id: str = ""
    description: str = ""
    quantity: float = Field(1, ge=0)
    unit_price: float = Field(0, alias="unitPrice", ge=0)
    total: float = Field(0, ge=0)


class InvoiceCreateRequest(RequestModel):
    client_name: str = Field("", alias="clientName", max_length=200)
    company_name: str = Field("", alias="companyName", max_length=200)
    issue_date: Optional[str] = Field(None, alias="issueDate")
    due_date: Optional[str] = Field(None, alias="dueDate")
    amount: float = Field(0, ge=0)
    status: InvoiceStatus = InvoiceStatus.DRAFT
    report_status: Optional[ReportStatus] = Field(None, alias="reportStatus")
    items: list[InvoiceItem] = []


class InvoiceUpdateRequest(UpdateRequest):
    """
    Partial invoice update.

    ``id`` is optional here so a missing id surfaces as the 400 the route
    returns, not a schema error. ``activityDescription`` is an instruction
    to the activity log and is never stored on the invoice. Sending
    ``reportStatus: null`` clears a persisted override so the report status
    is derived from ``status`` again.
    """

    nullable_fields: ClassVar[frozenset[str]] = frozenset({"id", "activity_description", "report_status"})

    id: Optional[str] = None
    activity_description: Optional[str] = Field(None, alias="activityDescription")

    client_name: Optional[str] = Field(None, alias="clientName", max_length=200)
    company_name: Optional[str] = Field(None, alias="companyName", max_length=200)
    issue_date: Optional[str] = Field(None, alias="issueDate")
    due_date: Optional[str] = Field(None, alias="dueDate")
    amount: Optional[float] = Field(None, ge=0)
    status: Optional[InvoiceStatus] = None
    report_status: Optional[ReportStatus] = Field(None, alias="reportStatus")
    items: Optional[list[InvoiceItem]] = None
