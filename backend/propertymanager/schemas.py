# backend/propertymanager/schemas.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, List

from pydantic import AfterValidator, BaseModel, Field, ConfigDict, model_validator


def to_naive_utc(v: datetime) -> datetime:
    # columns are naive UTC; offset-aware input is converted, naive input is taken as UTC
    if v.tzinfo is not None:
        return v.astimezone(timezone.utc).replace(tzinfo=None)
    return v


UtcDateTime = Annotated[datetime, AfterValidator(to_naive_utc)]


UserRole = Literal["admin", "manager", "user"]
PropertyType = Literal["apartment", "house", "commercial"]
PropertyStatus = Literal["available", "rented", "maintenance"]
ContractStatus = Literal["active", "expired", "terminated"]
InvoiceStatus = Literal["pending", "paid", "overdue"]
MaintenancePriority = Literal["low", "medium", "high", "urgent"]
MaintenanceStatus = Literal["pending", "in_progress", "completed", "cancelled"]
PaymentStatus = Literal["pending", "completed", "failed"]
PaymentMethod = Literal["bank_transfer", "check", "cash", "online"]


class _Timestamps(BaseModel):
    id: int
    created_at: datetime
    updated_at: datetime


# -------------------- Auth / Users --------------------

class LoginIn(BaseModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserCreate(BaseModel):
    username: str = Field(min_length=1, max_length=80)
    email: str = Field(min_length=3, max_length=200)
    password: str = Field(min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: UserRole = "user"
    is_active: bool = True


class UserUpdate(BaseModel):
    username: Optional[str] = Field(default=None, min_length=1, max_length=80)
    email: Optional[str] = Field(default=None, min_length=3, max_length=200)
    password: Optional[str] = Field(default=None, min_length=1)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserOut(_Timestamps):
    username: str
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class UserEnvelope(BaseModel):
    user: UserOut


class MessageOut(BaseModel):
    message: str


# -------------------- Properties --------------------

class PropertyCreate(BaseModel):
    name: str = Field(min_length=1)
    address: str = Field(min_length=1)
    property_type: PropertyType
    bedrooms: int = Field(ge=0)
    bathrooms: float = Field(ge=0)
    monthly_rent: float = Field(ge=0)
    status: PropertyStatus = "available"
    description: Optional[str] = None
    image_url: Optional[str] = None


class PropertyUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = Field(default=None, min_length=1)
    property_type: Optional[PropertyType] = None
    bedrooms: Optional[int] = Field(default=None, ge=0)
    bathrooms: Optional[float] = Field(default=None, ge=0)
    monthly_rent: Optional[float] = Field(default=None, ge=0)
    status: Optional[PropertyStatus] = None
    description: Optional[str] = None
    image_url: Optional[str] = None


class PropertyOut(PropertyCreate, _Timestamps):
    model_config = ConfigDict(from_attributes=True)


# -------------------- Tenants --------------------

class TenantCreate(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: str = Field(min_length=3, max_length=200)
    phone: str = Field(min_length=1)
    address: Optional[str] = None
    date_of_birth: Optional[UtcDateTime] = None
    emergency_contact: Optional[str] = None
    is_active: bool = True


class TenantUpdate(BaseModel):
    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[str] = Field(default=None, min_length=3, max_length=200)
    phone: Optional[str] = Field(default=None, min_length=1)
    address: Optional[str] = None
    date_of_birth: Optional[UtcDateTime] = None
    emergency_contact: Optional[str] = None
    is_active: Optional[bool] = None


class TenantOut(TenantCreate, _Timestamps):
    model_config = ConfigDict(from_attributes=True)


# -------------------- Contracts --------------------

class ContractCreate(BaseModel):
    property_id: int
    tenant_id: int
    start_date: UtcDateTime
    end_date: UtcDateTime
    monthly_rent: float = Field(ge=0)
    security_deposit: Optional[float] = Field(default=None, ge=0)
    status: ContractStatus = "active"
    terms: Optional[str] = None

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end_date < self.start_date:
            raise ValueError("end_date cannot be before start_date")
        return self


class ContractUpdate(BaseModel):
    property_id: Optional[int] = None
    tenant_id: Optional[int] = None
    start_date: Optional[UtcDateTime] = None
    end_date: Optional[UtcDateTime] = None
    monthly_rent: Optional[float] = Field(default=None, ge=0)
    security_deposit: Optional[float] = Field(default=None, ge=0)
    status: Optional[ContractStatus] = None
    terms: Optional[str] = None


class ContractOut(_Timestamps):
    property_id: int
    tenant_id: int
    start_date: datetime
    end_date: datetime
    monthly_rent: float
    security_deposit: Optional[float] = None
    status: str
    terms: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# -------------------- Invoices --------------------

class InvoiceCreate(BaseModel):
    invoice_number: str = Field(min_length=1, max_length=50)
    contract_id: int
    amount: float = Field(gt=0)
    due_date: UtcDateTime
    issue_date: UtcDateTime
    status: InvoiceStatus = "pending"
    description: Optional[str] = None


class InvoiceUpdate(BaseModel):
    invoice_number: Optional[str] = Field(default=None, min_length=1, max_length=50)
    contract_id: Optional[int] = None
    amount: Optional[float] = Field(default=None, gt=0)
    due_date: Optional[UtcDateTime] = None
    issue_date: Optional[UtcDateTime] = None
    status: Optional[InvoiceStatus] = None
    description: Optional[str] = None


class InvoiceOut(_Timestamps):
    invoice_number: str
    contract_id: int
    amount: float
    due_date: datetime
    issue_date: datetime
    status: str
    description: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# -------------------- Maintenance --------------------

class MaintenanceCreate(BaseModel):
    property_id: int
    tenant_id: Optional[int] = None
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    priority: MaintenancePriority = "medium"
    status: MaintenanceStatus = "pending"
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    actual_cost: Optional[float] = Field(default=None, ge=0)
    completed_at: Optional[UtcDateTime] = None


class MaintenanceUpdate(BaseModel):
    property_id: Optional[int] = None
    tenant_id: Optional[int] = None
    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[MaintenancePriority] = None
    status: Optional[MaintenanceStatus] = None
    estimated_cost: Optional[float] = Field(default=None, ge=0)
    actual_cost: Optional[float] = Field(default=None, ge=0)
    completed_at: Optional[UtcDateTime] = None


class MaintenanceOut(_Timestamps):
    property_id: int
    tenant_id: Optional[int] = None
    title: str
    description: str
    priority: str
    status: str
    estimated_cost: Optional[float] = None
    actual_cost: Optional[float] = None
    completed_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


# -------------------- Payments --------------------

class PaymentCreate(BaseModel):
    invoice_id: int
    amount: float = Field(gt=0)
    payment_date: UtcDateTime
    payment_method: PaymentMethod
    status: PaymentStatus = "pending"
    reference: Optional[str] = None
    notes: Optional[str] = None


class PaymentUpdate(BaseModel):
    amount: Optional[float] = Field(default=None, gt=0)
    payment_date: Optional[UtcDateTime] = None
    payment_method: Optional[PaymentMethod] = None
    status: Optional[PaymentStatus] = None
    reference: Optional[str] = None
    notes: Optional[str] = None


class PaymentOut(_Timestamps):
    invoice_id: int
    amount: float
    payment_date: datetime
    payment_method: str
    status: str
    reference: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


# -------------------- Relation expansion --------------------

class ContractWithTenant(ContractOut):
    tenant: TenantOut


class MaintenanceWithTenant(MaintenanceOut):
    tenant: Optional[TenantOut] = None


class PropertyWithRelations(PropertyOut):
    contracts: List[ContractWithTenant] = Field(default_factory=list)
    maintenance_requests: List[MaintenanceWithTenant] = Field(default_factory=list)


class ContractListItem(ContractOut):
    property: PropertyOut
    tenant: TenantOut


class ContractWithRelations(ContractListItem):
    invoices: List[InvoiceOut] = Field(default_factory=list)


class InvoiceListItem(InvoiceOut):
    contract: ContractListItem


class InvoiceWithRelations(InvoiceListItem):
    payments: List[PaymentOut] = Field(default_factory=list)


class MaintenanceWithRelations(MaintenanceOut):
    property: PropertyOut
    tenant: Optional[TenantOut] = None


class PaymentWithRelations(PaymentOut):
    invoice: InvoiceListItem


# -------------------- Dashboard --------------------

class DashboardStatsOut(BaseModel):
    total_properties: int
    active_tenants: int
    active_contracts: int
    pending_maintenance: int
    monthly_revenue: float

    model_config = ConfigDict(from_attributes=True)
