from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlmodel import Session, select

from tagerpro import crud
from tagerpro.models import LEAD_CREATED_EVENT, AnalyticsEvent, Lead, LeadCreate

LEAD = {
    "name": "Huda",
    "phone": "+201001234567",
    "source": "whatsapp",
}


def create_lead(client: TestClient, **overrides) -> dict:
    response = client.post("/api/leads", json={**LEAD, **overrides})
    assert response.status_code == 201
    return response.json()


def test_create_lead_defaults_status_to_new(client: TestClient):
    lead = create_lead(client)

    assert lead["status"] == "new"
    assert lead["source"] == "whatsapp"
    assert lead["email"] is None


def test_create_lead_tracks_lead_created_event(client: TestClient, session: Session):
    lead = create_lead(client, productId=7)

    events = session.exec(select(AnalyticsEvent)).all()

    assert len(events) == 1
    assert events[0].event_type == LEAD_CREATED_EVENT
    assert events[0].product_id == 7
    assert lead["productId"] == 7


def test_status_can_move_in_any_direction(client: TestClient):
    lead = create_lead(client, status="converted")

    response = client.put(f"/api/leads/{lead['id']}", json={"status": "new", "notes": "Called back"})

    assert response.status_code == 200
    assert response.json()["status"] == "new"
    assert response.json()["notes"] == "Called back"
    assert response.json()["phone"] == LEAD["phone"]


def test_list_and_get_leads(client: TestClient):
    first = create_lead(client, name="Omar")
    second = create_lead(client, name="Layla")

    listed = client.get("/api/leads").json()
    fetched = client.get(f"/api/leads/{first['id']}").json()

    assert [lead["id"] for lead in listed] == [second["id"], first["id"]]
    assert fetched["name"] == "Omar"


def test_missing_lead_is_not_found(client: TestClient):
    assert client.get("/api/leads/42").json() == {"error": "Lead not found"}
    assert client.put("/api/leads/42", json={"status": "lost"}).status_code == 404
    assert client.delete("/api/leads/42").status_code == 404


def test_delete_lead(client: TestClient):
    lead = create_lead(client)

    assert client.delete(f"/api/leads/{lead['id']}").status_code == 204
    assert client.get(f"/api/leads/{lead['id']}").status_code == 404


def test_unknown_source_is_rejected(client: TestClient):
    response = client.post("/api/leads", json={**LEAD, "source": "billboard"})

    assert response.status_code == 422


def test_lead_and_lead_created_event_share_one_commit(session: Session):
    with patch.object(session, "commit", wraps=session.commit) as commit:
        lead = crud.create_lead(session=session, lead_in=LeadCreate(name="Huda", phone="0500000000", product_id=3))

    assert commit.call_count == 1
    assert session.exec(select(Lead)).one().id == lead.id
    event = session.exec(select(AnalyticsEvent)).one()
    assert (event.event_type, event.product_id) == (LEAD_CREATED_EVENT, 3)
