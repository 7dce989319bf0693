import httpx
import pytest
from sqlmodel import Session

from tagerpro.api.deps import get_db
from tagerpro.client.api import ApiError, TagerProClient
from tagerpro.main import app


@pytest.fixture(name="app_with_db")
def app_with_db_fixture(engine):
    def get_db_override():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db] = get_db_override
    yield app
    app.dependency_overrides.clear()


def make_client(asgi_app) -> TagerProClient:
    http = httpx.AsyncClient(transport=httpx.ASGITransport(app=asgi_app))
    return TagerProClient("http://backend.test", client=http)


@pytest.mark.asyncio
async def test_product_lifecycle(app_with_db):
    client = make_client(app_with_db)

    created = await client.create_product({"name": "Oud", "price": "120.00"})
    fetched = await client.get_product(created["id"])
    updated = await client.update_product(created["id"], {"status": "inactive"})
    listed = await client.list_products()
    deleted = await client.delete_product(created["id"])

    assert fetched["name"] == "Oud"
    assert updated["status"] == "inactive"
    assert [p["id"] for p in listed] == [created["id"]]
    assert deleted is True
    assert await client.get_product(created["id"]) is None
    assert await client.delete_product(created["id"]) is False
    assert await client.update_product(created["id"], {"status": "active"}) is None


@pytest.mark.asyncio
async def test_lead_creation_shows_up_in_analytics(app_with_db):
    client = make_client(app_with_db)

    await client.track_event("page_view")
    await client.track_event("page_view")
    lead = await client.create_lead({"name": "Huda", "phone": "0500000000", "source": "referral"})
    summary = await client.get_analytics()

    assert (await client.get_lead(lead["id"]))["source"] == "referral"
    assert [item["id"] for item in await client.list_leads()] == [lead["id"]]
    assert summary["totalVisits"] == 2
    assert summary["conversionRate"] == 50.0
    assert summary["recentLeads"][0]["id"] == lead["id"]


@pytest.mark.asyncio
async def test_non_404_errors_raise_api_error(app_with_db):
    client = make_client(app_with_db)

    with pytest.raises(ApiError) as excinfo:
        await client.create_lead({"name": "Huda", "phone": "0500000000", "status": "won"})

    assert excinfo.value.status_code == 422
    assert excinfo.value.message == "Invalid request body"


@pytest.mark.asyncio
async def test_server_error_message_is_surfaced():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Failed to fetch products"})

    client = TagerProClient(
        "http://backend.test", client=httpx.AsyncClient(transport=httpx.MockTransport(handler))
    )

    with pytest.raises(ApiError, match="Failed to fetch products"):
        await client.list_products()
