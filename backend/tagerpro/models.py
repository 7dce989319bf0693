from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel
from sqlalchemy import JSON, DateTime
from sqlmodel import Field, SQLModel


def get_datetime_utc() -> datetime:
    return datetime.now(timezone.utc)


class ProductStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"


class LeadSource(str, Enum):
    LANDING_PAGE = "landing_page"
    WHATSAPP = "whatsapp"
    SOCIAL_MEDIA = "social_media"
    REFERRAL = "referral"


class LeadStatus(str, Enum):
    NEW = "new"
    CONTACTED = "contacted"
    QUALIFIED = "qualified"
    CONVERTED = "converted"
    LOST = "lost"


# Request and response bodies use camelCase keys; snake_case is accepted on input.
WIRE_CONFIG = ConfigDict(alias_generator=to_camel, populate_by_name=True)

# Event tags the backend itself reads or writes. Clients may track others.
PAGE_VIEW_EVENT = "page_view"
LEAD_CREATED_EVENT = "lead_created"


# Products

class ProductBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    name_ar: str | None = Field(default=None, max_length=255)
    description: str | None = Field(default=None)
    description_ar: str | None = Field(default=None)
    price: Decimal = Field(max_digits=10, decimal_places=2)
    original_price: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    offer: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, max_length=255)
    images: list[str] | None = Field(default=None, sa_type=JSON)
    status: ProductStatus = Field(default=ProductStatus.ACTIVE)


class ProductCreate(ProductBase):
    model_config = WIRE_CONFIG


# Properties to receive via API on update, all are optional
class ProductUpdate(SQLModel):
    model_config = WIRE_CONFIG

    name: str | None = Field(default=None, min_length=1, max_length=255)
    name_ar: str | None = Field(default=None, max_length=255)
    description: str | None = None
    description_ar: str | None = None
    price: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    original_price: Decimal | None = Field(default=None, max_digits=10, decimal_places=2)
    offer: str | None = Field(default=None, max_length=255)
    category: str | None = Field(default=None, max_length=255)
    images: list[str] | None = None
    status: ProductStatus | None = None


# Database model, database table inferred from class name
class Product(ProductBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
        index=True,
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


class ProductPublic(ProductBase):
    model_config = WIRE_CONFIG

    id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Leads

class LeadBase(SQLModel):
    name: str = Field(min_length=1, max_length=255)
    phone: str = Field(max_length=50)
    email: str | None = Field(default=None, max_length=255)
    product_id: int | None = Field(default=None, index=True)
    source: LeadSource = Field(default=LeadSource.LANDING_PAGE)
    status: LeadStatus = Field(default=LeadStatus.NEW)
    notes: str | None = Field(default=None)


class LeadCreate(LeadBase):
    model_config = WIRE_CONFIG


class LeadUpdate(SQLModel):
    model_config = WIRE_CONFIG

    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=255)
    product_id: int | None = None
    source: LeadSource | None = None
    status: LeadStatus | None = None
    notes: str | None = None


class Lead(LeadBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
        index=True,
    )
    updated_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


class LeadPublic(LeadBase):
    model_config = WIRE_CONFIG

    id: int
    created_at: datetime | None = None
    updated_at: datetime | None = None


# Analytics

class AnalyticsEventBase(SQLModel):
    event_type: str = Field(min_length=1, max_length=100, index=True)
    product_id: int | None = Field(default=None, index=True)


class AnalyticsEventCreate(AnalyticsEventBase):
    model_config = WIRE_CONFIG


class AnalyticsEvent(AnalyticsEventBase, table=True):
    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime | None = Field(
        default_factory=get_datetime_utc,
        sa_type=DateTime(timezone=True),  # type: ignore
    )


class StatusCount(SQLModel):
    status: str
    count: int


class SourceCount(SQLModel):
    source: str
    count: int


class AnalyticsSummary(SQLModel):
    model_config = WIRE_CONFIG

    total_visits: int
    total_leads: int
    total_products: int
    conversion_rate: float
    recent_leads: list[LeadPublic]
    leads_by_status: list[StatusCount]
    leads_by_source: list[SourceCount]


# Generic acknowledgement
class TrackResult(SQLModel):
    success: bool = True
