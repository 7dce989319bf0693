import math

from sqlmodel import Session, col, func, select

from tagerpro.models import (
    LEAD_CREATED_EVENT,
    PAGE_VIEW_EVENT,
    AnalyticsEvent,
    AnalyticsEventCreate,
    AnalyticsSummary,
    Lead,
    LeadCreate,
    LeadPublic,
    LeadUpdate,
    Product,
    ProductCreate,
    ProductUpdate,
    SourceCount,
    StatusCount,
    get_datetime_utc,
)

RECENT_LEADS_LIMIT = 5


def list_products(*, session: Session) -> list[Product]:
    statement = select(Product).order_by(col(Product.created_at).desc(), col(Product.id).desc())
    return list(session.exec(statement).all())


def get_product(*, session: Session, product_id: int) -> Product | None:
    return session.get(Product, product_id)


def create_product(*, session: Session, product_in: ProductCreate) -> Product:
    db_product = Product.model_validate(product_in)
    session.add(db_product)
    session.commit()
    session.refresh(db_product)
    return db_product


def update_product(*, session: Session, product_id: int, product_in: ProductUpdate) -> Product | None:
    db_product = session.get(Product, product_id)
    if not db_product:
        return None
    product_data = product_in.model_dump(exclude_unset=True)
    db_product.sqlmodel_update(product_data, update={"updated_at": get_datetime_utc()})
    session.add(db_product)
    session.commit()
    session.refresh(db_product)
    return db_product


def delete_product(*, session: Session, product_id: int) -> bool:
    db_product = session.get(Product, product_id)
    if not db_product:
        return False
    session.delete(db_product)
    session.commit()
    return True


def list_leads(*, session: Session) -> list[Lead]:
    statement = select(Lead).order_by(col(Lead.created_at).desc(), col(Lead.id).desc())
    return list(session.exec(statement).all())


def get_lead(*, session: Session, lead_id: int) -> Lead | None:
    return session.get(Lead, lead_id)


def create_lead(*, session: Session, lead_in: LeadCreate) -> Lead:
    db_lead = Lead.model_validate(lead_in)
    db_event = AnalyticsEvent(event_type=LEAD_CREATED_EVENT, product_id=db_lead.product_id)
    # lead and its lead_created event are stored together or not at all
    session.add(db_lead)
    session.add(db_event)
    session.commit()
    session.refresh(db_lead)
    return db_lead


def update_lead(*, session: Session, lead_id: int, lead_in: LeadUpdate) -> Lead | None:
    db_lead = session.get(Lead, lead_id)
    if not db_lead:
        return None
    lead_data = lead_in.model_dump(exclude_unset=True)
    db_lead.sqlmodel_update(lead_data, update={"updated_at": get_datetime_utc()})
    session.add(db_lead)
    session.commit()
    session.refresh(db_lead)
    return db_lead


def delete_lead(*, session: Session, lead_id: int) -> bool:
    db_lead = session.get(Lead, lead_id)
    if not db_lead:
        return False
    session.delete(db_lead)
    session.commit()
    return True


def track_event(*, session: Session, event_in: AnalyticsEventCreate) -> AnalyticsEvent:
    db_event = AnalyticsEvent.model_validate(event_in)
    session.add(db_event)
    session.commit()
    session.refresh(db_event)
    return db_event


def conversion_rate(visits: int, leads: int) -> float:
    """Leads per visit as a percentage, rounded half-up to one decimal place."""
    if visits <= 0:
        return 0.0
    rate = leads / visits * 100
    return math.floor(rate * 10 + 0.5) / 10


def _count(session: Session, statement) -> int:
    return session.exec(statement).one() or 0


def _enum_value(value) -> str:
    return getattr(value, "value", value)


def get_analytics_summary(*, session: Session) -> AnalyticsSummary:
    total_visits = _count(
        session,
        select(func.count()).select_from(AnalyticsEvent).where(AnalyticsEvent.event_type == PAGE_VIEW_EVENT),
    )
    total_leads = _count(session, select(func.count()).select_from(Lead))
    total_products = _count(session, select(func.count()).select_from(Product))

    recent_leads = session.exec(
        select(Lead).order_by(col(Lead.created_at).desc(), col(Lead.id).desc()).limit(RECENT_LEADS_LIMIT)
    ).all()

    by_status = session.exec(select(Lead.status, func.count()).group_by(Lead.status)).all()
    by_source = session.exec(select(Lead.source, func.count()).group_by(Lead.source)).all()

    return AnalyticsSummary(
        total_visits=total_visits,
        total_leads=total_leads,
        total_products=total_products,
        conversion_rate=conversion_rate(total_visits, total_leads),
        recent_leads=[LeadPublic.model_validate(lead) for lead in recent_leads],
        leads_by_status=[StatusCount(status=_enum_value(status), count=count) for status, count in by_status],
        leads_by_source=[SourceCount(source=_enum_value(source), count=count) for source, count in by_source],
    )
