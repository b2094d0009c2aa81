"""
BizDesk — Schemas for employees, quotations, payments, expenses, contacts
and rentals.
"""

from enum import Enum
from typing import Optional

from pydantic import Field

from bizdesk.schemas import RequestModel, UpdateRequest


# ── Employees ───────────────────────────────────────────
class EmployeeStatus(str, Enum):
    ACTIVE = "Active"
    ON_LEAVE = "On Leave"
    TERMINATED = "Terminated"


class EmployeeCreateRequest(RequestModel):
    employee_id: str = Field("", alias="employeeId", max_length=40)
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=100)
    last_name: str = Field("", alias="lastName", max_length=100)
    email: str = Field("", max_length=200)
    phone: str = Field("", max_length=30)
    position: str = Field("", max_length=100)
    department: str = Field("", max_length=100)
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    join_date: Optional[str] = Field(None, alias="joinDate")
    salary: float = Field(0, ge=0)


class EmployeeUpdateRequest(UpdateRequest):
    id: Optional[str] = None
    employee_id: Optional[str] = Field(None, alias="employeeId", max_length=40)
    first_name: Optional[str] = Field(None, alias="firstName", max_length=100)
    last_name: Optional[str] = Field(None, alias="lastName", max_length=100)
    email: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=30)
    position: Optional[str] = Field(None, max_length=100)
    department: Optional[str] = Field(None, max_length=100)
    status: Optional[EmployeeStatus] = None
    join_date: Optional[str] = Field(None, alias="joinDate")
    salary: Optional[float] = Field(None, ge=0)


# ── Quotations ──────────────────────────────────────────
class QuotationStatus(str, Enum):
    DRAFT = "Draft"
    SENT = "Sent"
    ACCEPTED = "Accepted"
    REJECTED = "Rejected"


class QuotationCreateRequest(RequestModel):
    client_name: str = Field("", alias="clientName", max_length=200)
    company_name: str = Field("", alias="companyName", max_length=200)
    date: Optional[str] = None
    expiry_date: Optional[str] = Field(None, alias="expiryDate")
    total_amount: float = Field(0, alias="totalAmount", ge=0)
    status: QuotationStatus = QuotationStatus.DRAFT


class QuotationUpdateRequest(UpdateRequest):
    id: Optional[str] = None
    client_name: Optional[str] = Field(None, alias="clientName", max_length=200)
    company_name: Optional[str] = Field(None, alias="companyName", max_length=200)
    date: Optional[str] = None
    expiry_date: Optional[str] = Field(None, alias="expiryDate")
    total_amount: Optional[float] = Field(None, alias="totalAmount", ge=0)
    status: Optional[QuotationStatus] = None


# ── Payments ────────────────────────────────────────────
class PaymentMethod(str, Enum):
    BANK_TRANSFER = "Bank Transfer"
    CREDIT_CARD = "Credit Card"
    CASH = "Cash"
    CHEQUE = "Cheque"


class PaymentStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"
    FAILED = "Failed"


class PaymentCreateRequest(RequestModel):
    invoice_id: Optional[str] = Field(None, alias="invoiceId")
    amount: float = Field(..., ge=0)
    date: Optional[str] = None
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER
    status: PaymentStatus = PaymentStatus.COMPLETED


class PaymentUpdateRequest(UpdateRequest):
    id: Optional[str] = None
    invoice_id: Optional[str] = Field(None, alias="invoiceId")
    amount: Optional[float] = Field(None, ge=0)
    date: Optional[str] = None
    method: Optional[PaymentMethod] = None
    status: Optional[PaymentStatus] = None


# ── Expenses ────────────────────────────────────────────
class ExpenseStatus(str, Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ExpenseCreateRequest(RequestModel):
    description: str = Field(..., min_length=1, max_length=500)
    amount: float = Field(..., ge=0)
    category: str = Field("", max_length=100)  # Office, Travel, Software, ...
    date: Optional[str] = None
    status: ExpenseStatus = ExpenseStatus.PENDING
    receipt_url: Optional[str] = Field(None, alias="receiptUrl", max_length=1000)


# ── Contacts ────────────────────────────────────────────
class ContactType(str, Enum):
    CLIENT = "Client"
    VENDOR = "Vendor"
    PARTNER = "Partner"


class ContactCreateRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field("", max_length=200)
    phone: str = Field("", max_length=30)
    company: str = Field("", max_length=200)
    type: ContactType = ContactType.CLIENT
    address: Optional[str] = Field(None, max_length=500)


# ── Rentals ─────────────────────────────────────────────
class RentalItemStatus(str, Enum):
    AVAILABLE = "Available"
    OUT_OF_STOCK = "Out of Stock"


class RentalItemCreateRequest(RequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    daily_rate: float = Field(0, alias="dailyRate", ge=0)
    quantity: int = Field(1, ge=0)
    description: Optional[str] = Field(None, max_length=1000)
    status: RentalItemStatus = RentalItemStatus.AVAILABLE


class RentalAgreementStatus(str, Enum):
    ACTIVE = "Active"
    RETURNED = "Returned"
    OVERDUE = "Overdue"


class RentalAgreementCreateRequest(RequestModel):
    client_id: str = Field("", alias="clientId")
    client_name: str = Field(..., alias="clientName", min_length=1, max_length=200)
    item_id: str = Field("", alias="itemId")
    item_name: str = Field(..., alias="itemName", min_length=1, max_length=200)
    start_date: str = Field(..., alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    daily_rate: float = Field(0, alias="dailyRate", ge=0)
    total_cost: float = Field(0, alias="totalCost", ge=0)


class RentalAgreementUpdateRequest(UpdateRequest):
    id: Optional[str] = None
    client_id: Optional[str] = Field(None, alias="clientId")
    client_name: Optional[str] = Field(None, alias="clientName", max_length=200)
    item_id: Optional[str] = Field(None, alias="itemId")
    item_name: Optional[str] = Field(None, alias="itemName", max_length=200)
    start_date: Optional[str] = Field(None, alias="startDate")
    end_date: Optional[str] = Field(None, alias="endDate")
    daily_rate: Optional[float] = Field(None, alias="dailyRate", ge=0)
    total_cost: Optional[float] = Field(None, alias="totalCost", ge=0)
    status: Optional[RentalAgreementStatus] = None
