"""
Shared Pydantic schemas used across the application.
Centralized so services and routers import the same request/response shapes.
"""

import datetime as dt
from datetime import date, datetime, time
from typing import Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator

from havens_shared.config.constants import Limits


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["admin", "manager", "waiter", "receptionist", "chef"]
KitchenStatusValue = Literal["pending", "preparing", "ready", "completed"]

PIN_PATTERN = rf"^\d{{{Limits.PIN_LENGTH}}}$"


class SuccessResponse(BaseModel):
    success: bool = True


class CreatedResponse(BaseModel):
    id: int
    success: bool = True


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class PinVerifyRequest(BaseModel):
    """POS order verification."""

    waiterId: int
    pin: str = Field(pattern=PIN_PATTERN)


# =============================================================================
# Staff Schemas
# =============================================================================


class StaffOutput(BaseModel):
    """Staff record as returned to clients. Never carries password or PIN."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    employee_id: str
    first_name: str
    last_name: str
    email: str | None = None
    phone: str | None = None
    role: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class LoginUser(BaseModel):
    email: str
    staff: StaffOutput


class LoginResponse(BaseModel):
    """Login response: session blob plus the bearer token."""

    success: bool = True
    user: LoginUser
    access_token: str
    token_type: str = "Bearer"
    dashboard: str


class StaffCreate(BaseModel):
    employee_id: str = Field(min_length=1, max_length=50)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    role: Role
    pin: str | None = Field(default=None, pattern=PIN_PATTERN)
    # Checked by StaffService so a missing password is a domain ValidationError
    password: str | None = None


class StaffUpdate(BaseModel):
    employee_id: str | None = Field(default=None, min_length=1, max_length=50)
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    role: Role | None = None
    pin: str | None = Field(default=None, pattern=PIN_PATTERN)
    password: str | None = None
    is_active: bool | None = None


# =============================================================================
# Catalog Schemas
# =============================================================================


class CategoryOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None = None
    display_order: int
    is_active: bool


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str | None = None
    display_order: int = 0


class CategoryUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class MenuItemOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    category_name: str | None = None
    name: str
    description: str | None = None
    price: float
    image_url: str | None = None
    preparation_time: int
    is_available: bool


class MenuItemCreate(BaseModel):
    category_id: int
    name: str = Field(min_length=1)
    description: str | None = None
    price: float = Field(default=0, ge=0)
    image_url: str | None = None
    preparation_time: int = Field(default=Limits.DEFAULT_PREPARATION_MINUTES, gt=0)


class MenuItemUpdate(BaseModel):
    category_id: int | None = None
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    price: float | None = Field(default=None, ge=0)
    image_url: str | None = None
    preparation_time: int | None = Field(default=None, gt=0)
    is_available: bool | None = None


class UploadResponse(BaseModel):
    url: str


# =============================================================================
# Table Schemas
# =============================================================================


class TableOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    table_number: str
    room_name: str | None = None
    capacity: int
    qr_code_url: str | None = None
    is_occupied: bool


class TableCreate(BaseModel):
    table_number: str = Field(min_length=1, max_length=20)
    room_name: str | None = None
    capacity: int = Field(ge=Limits.MIN_TABLE_CAPACITY, le=Limits.MAX_TABLE_CAPACITY)
    qr_code_url: str | None = None


class TableStatusUpdate(BaseModel):
    is_occupied: bool


# =============================================================================
# Order and Kitchen Schemas
# =============================================================================


class OrderLineInput(BaseModel):
    menu_item_id: int
    quantity: int = Field(ge=1, le=Limits.MAX_ORDER_QUANTITY)
    # Price shown on the POS; falls back to the menu price when omitted
    price: float | None = Field(default=None, ge=0)
    notes: str | None = None


class OrderCreate(BaseModel):
    waiter_id: int
    table_id: int | None = None
    items: list[OrderLineInput] = Field(min_length=1)
    # Client-computed total; the server recomputes it from the lines
    total_amount: float | None = None


class OrderCreated(BaseModel):
    id: int
    order_number: str
    total_amount: float
    success: bool = True


class KitchenOrderItem(BaseModel):
    id: int
    menu_item_id: int
    menu_item_name: str
    quantity: int
    special_instructions: str | None = None
    preparation_time: int


class KitchenOrder(BaseModel):
    id: int
    order_number: str
    table_number: str | None = None
    status: str
    priority: str
    waiter_name: str
    total_amount: float
    created_at: datetime
    updated_at: datetime
    items: list[KitchenOrderItem]


class KitchenStatusUpdate(BaseModel):
    status: KitchenStatusValue


class RecentOrder(BaseModel):
    id: int
    order_number: str
    table_number: str | None = None
    total_amount: float
    status: str
    created_at: datetime


class WaiterStats(BaseModel):
    todaySales: float
    ordersCount: int
    averageOrderValue: float
    customerRating: float | None = None
    activeOrders: int
    completedOrders: int


class WaiterDashboard(BaseModel):
    stats: WaiterStats
    recentOrders: list[RecentOrder]


# =============================================================================
# Reception Schemas
# =============================================================================


class ReservationCreate(BaseModel):
    guest_name: str = Field(min_length=1)
    guest_phone: str | None = None
    guest_email: EmailStr | None = None
    party_size: int = Field(ge=1)
    reservation_date: date
    reservation_time: time
    table_id: int | None = None
    special_requests: str | None = None


class ReservationOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    guest_name: str
    guest_phone: str | None = None
    guest_email: str | None = None
    party_size: int
    reservation_date: date
    reservation_time: time
    status: str
    table_id: int | None = None
    special_requests: str | None = None
    seated_at: datetime | None = None


class WaitingGuestCreate(BaseModel):
    guest_name: str = Field(min_length=1)
    guest_phone: str | None = None
    party_size: int = Field(ge=1)
    estimated_wait_minutes: int | None = Field(default=None, ge=0)
    notes: str | None = None


class WaitingGuestOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    guest_name: str
    guest_phone: str | None = None
    party_size: int
    arrived_at: datetime
    estimated_wait_minutes: int | None = None
    notes: str | None = None
    status: str
    table_id: int | None = None
    seated_at: datetime | None = None


class CheckinRequest(BaseModel):
    guest_name: str = Field(min_length=1)
    party_size: int = Field(ge=1)
    table_id: int
    reservation_id: int | None = None
    waiting_guest_id: int | None = None
    notes: str | None = None

    @model_validator(mode="after")
    def single_origin(self) -> "CheckinRequest":
        if self.reservation_id is not None and self.waiting_guest_id is not None:
            raise ValueError("Give reservation_id or waiting_guest_id, not both")
        return self


class CheckinOutput(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    reservation_id: int | None = None
    waiting_guest_id: int | None = None
    table_id: int
    staff_id: int | None = None
    guest_name: str
    party_size: int
    notes: str | None = None
    checked_in_at: datetime


class SeatGuestRequest(BaseModel):
    guestId: int
    tableNumber: str = Field(min_length=1)


class ReceptionStats(BaseModel):
    totalTables: int
    occupiedTables: int
    waitingGuests: int
    todayCheckIns: int
    averageWaitTime: int


class ReceptionDashboard(BaseModel):
    stats: ReceptionStats
    waitingGuests: list[WaitingGuestOutput]
    reservations: list[ReservationOutput]


# =============================================================================
# Performance Schemas
# =============================================================================


class StaffPerformanceRow(BaseModel):
    staff_id: int
    employee_id: str
    first_name: str
    last_name: str
    role: str
    date: dt.date
    orders_served: int
    total_sales: float
    tables_served: int
    shift_duration_minutes: int | None = None
    customer_rating_avg: float | None = None
    tips_earned: float
    # None when the shift length is zero or unknown
    sales_per_hour: float | None = None
    orders_per_hour: float | None = None


class TodaySummary(BaseModel):
    active_staff: int
    total_orders_today: int
    total_sales_today: float
    avg_rating_today: float | None = None


class YesterdaySummary(BaseModel):
    total_orders_yesterday: int
    total_sales_yesterday: float


class TopPerformer(BaseModel):
    staff_id: int
    first_name: str
    last_name: str
    role: str
    total_sales: float
    orders_served: int
    customer_rating_avg: float | None = None


class PerformanceSummary(BaseModel):
    today: TodaySummary
    yesterday: YesterdaySummary
    topPerformers: list[TopPerformer]


class TrendPoint(BaseModel):
    date: dt.date
    total_orders: int
    total_sales: float
    avg_rating: float | None = None


class RolePerformance(BaseModel):
    role: str
    staff_count: int
    total_orders: int
    total_sales: float
    avg_rating: float | None = None
    total_tips: float


class InitializeResponse(BaseModel):
    success: bool = True
    created: int
