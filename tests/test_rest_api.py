import pytest
from fastapi.testclient import TestClient

from sales_agent.app.dependencies.store import get_store
from sales_agent.app.main import app
from sales_agent.app.storage.memory import MemoryStore

client = TestClient(app)


class BrokenStore(MemoryStore):
    def list_leads(self, filters=None):
        raise RuntimeError("connection refused")


@pytest.fixture(autouse=True)
def memory_store():
    store = MemoryStore()
    store.initialize()
    app.dependency_overrides[get_store] = lambda: store
    yield store
    app.dependency_overrides.clear()


def create_lead(**overrides) -> str:
    payload = {"name": "Ada Lovelace", "email": "ada@x.com", "company": "Analytical Engines", "source": "Referral"}
    payload.update(overrides)
    response = client.post("/api/leads/create", json=payload)
    assert response.status_code == 200
    return response.json()["lead"]["id"]


def test_create_and_fetch_lead():
    lead_id = create_lead()
    response = client.get("/api/leads/get", params={"leadId": lead_id})
    assert response.status_code == 200
    assert response.json()["lead"]["name"] == "Ada Lovelace"


def test_list_leads_with_query_filters():
    create_lead(priority="high")
    create_lead(name="Bob", email="bob@x.com")

    response = client.get("/api/leads", params={"priority": "high"})
    data = response.json()
    assert data["total"] == 1
    assert data["leads"][0]["priority"] == "high"

    paged = client.get("/api/leads", params={"limit": "1", "page": "2"}).json()
    assert (paged["total"], paged["page"], paged["limit"], len(paged["leads"])) == (2, 2, 1, 1)


def test_query_parameters_override_body():
    create_lead()
    create_lead(name="Bob", email="bob@x.com")
    response = client.post("/api/leads?limit=1", json={"limit": 10})
    assert response.json()["limit"] == 1


def test_update_and_note_via_body():
    lead_id = create_lead()
    updated = client.post("/api/leads/update", json={"leadId": lead_id, "updates": {"status": "qualified"}})
    assert updated.json()["lead"]["status"] == "qualified"

    note = client.post("/api/leads/note", json={"leadId": lead_id, "note": "Called"})
    assert note.json()["totalNotes"] == 1

    pipeline = client.get("/api/pipeline").json()
    assert pipeline["pipeline"]["qualified"]["count"] == 1


def test_follow_up_completed_filter_from_query_string():
    lead_id = create_lead()
    created = client.post(
        "/api/followups/create",
        json={"leadId": lead_id, "type": "call", "scheduledAt": "2030-01-01T09:00:00Z", "description": "Call"},
    ).json()
    assert client.get("/api/followups", params={"completed": "false"}).json()["count"] == 1

    client.post("/api/followups/complete", json={"followUpId": created["followUp"]["id"]})
    assert client.get("/api/followups", params={"completed": "false"}).json()["count"] == 0
    assert client.get("/api/followups/get", params={"followUpId": created["followUp"]["id"]}).json()["followUp"][
        "completed"
    ] is True


def test_templates_compose_and_log():
    templates = client.get("/api/templates").json()["templates"]
    assert [t["id"] for t in templates] == ["template-1", "template-2", "template-3"]

    lead_id = create_lead()
    composed = client.post(
        "/api/emails/compose", json={"templateId": "template-2", "leadId": lead_id, "variables": {"name": "Ada"}}
    ).json()
    assert composed["email"]["body"].startswith("Hi Ada,")

    client.post("/api/emails/log", json={"leadId": lead_id, "subject": "s", "body": "b"})
    history = client.get("/api/emails/history", params={"leadId": lead_id}).json()
    assert history["count"] == 1


def test_meetings_activity_and_dashboard():
    lead_id = create_lead()
    client.post(
        "/api/meetings/create",
        json={"leadId": lead_id, "title": "Demo", "scheduledAt": "2030-01-15T14:00:00Z", "createFollowUp": True},
    )
    assert client.get("/api/meetings").json()["count"] == 1

    activity = client.get("/api/activity", params={"leadId": lead_id}).json()
    assert activity["activity"]["totalMeetings"] == 1
    assert activity["upcomingMeetings"] == [{"title": "Demo", "scheduledAt": "2030-01-15T14:00:00Z"}]

    dashboard = client.get("/api/dashboard").json()
    assert dashboard["stats"]["totalMeetings"] == 1
    assert dashboard["stats"]["pendingFollowUps"] == 1

    report = client.get("/api/reports/sales").json()
    assert report["success"] is True
    assert report["revenue"]["winRate"] == "0"


def test_not_found_is_an_envelope():
    response = client.post("/api/leads/delete", json={"leadId": "missing"})
    assert response.status_code == 200
    assert response.json() == {"success": False, "error": "Lead not found"}


def test_unparsable_body_is_ignored():
    response = client.post("/api/templates", content=b"not json", headers={"Content-Type": "application/json"})
    assert response.status_code == 200
    assert response.json()["success"] is True


def test_unknown_endpoint():
    response = client.get("/api/nope/x")
    assert response.status_code == 404
    assert response.json() == {"error": "API endpoint not found", "path": "nope/x"}


def test_storage_failure_is_500_with_envelope():
    store = BrokenStore()
    store.initialize()
    app.dependency_overrides[get_store] = lambda: store

    response = client.get("/api/leads")
    assert response.status_code == 500
    assert response.json() == {"success": False, "error": "connection refused"}
