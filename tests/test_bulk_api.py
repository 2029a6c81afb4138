"""HTTP adapter tests."""

import json
from fastapi.testclient import TestClient
from candidate_intake.main import app

client = TestClient(app)


def rows_payload():
    return [
        [["Name", "Rahul Sharma"], ["Email", "a@b.com"], ["Phone", "9876543210"]],
        [["Name", "Priya Verma"], ["Email", "a@b.com"], ["Phone", "9123456780"]],
    ]


def test_health():
    assert client.get("/health").json() == {"status": "ok"}
    assert client.get("/").json()["status"] == "running"


def test_validate_bulk():
    response = client.post("/bulk/validate", json={"rows": rows_payload()})
    assert response.status_code == 200
    data = response.json()
    assert data["report"]["total_rows"] == 2
    assert data["report"]["in_file_duplicates"] == 1
    assert len(data["ready"]) + len(data["review"]) + len(data["blocked"]) == 1


def test_validate_bulk_with_storage_snapshot():
    response = client.post("/bulk/validate", json={
        "rows": rows_payload()[:1],
        "existing_phones": ["+91 98765 43210"],
    })
    data = response.json()
    assert data["report"]["storage_duplicates"] == 1
    assert data["blocked"][0]["is_storage_duplicate"] is True


def test_invalid_mapping_is_422():
    response = client.post("/bulk/validate", json={
        "rows": rows_payload(),
        "column_mapping": {"0": "salary"},
    })
    assert response.status_code == 422
    assert response.json()["detail"]["error_code"] == "MAPPING_ERROR"


def test_stream_ends_with_complete_event():
    response = client.post("/bulk/validate/stream", json={"rows": rows_payload()})
    assert response.status_code == 200
    lines = [json.loads(line) for line in response.text.splitlines() if line.strip()]
    assert lines[-1]["type"] == "complete"
    assert lines[-1]["result"]["report"]["in_file_duplicates"] == 1


def test_revalidate():
    response = client.post("/records/revalidate", json={
        "record": {"name": "abc123", "contact": "9876543210", "email": "x@y.com"}
    })
    assert response.status_code == 200
    data = response.json()
    assert data["validation"]["category"] == "blocked"
    assert data["validation"]["errors"][0]["field"] == "name"


def test_header_mapping_suggestion():
    response = client.post("/headers/mapping", json={"headers": ["Name", "Mobile", "Remarks"]})
    data = response.json()
    assert data["mapping"] == {"name": 0, "phone": 1}
    assert data["columns"] == ["name", "phone", None]
    assert "email" in data["unmapped_fields"]


def test_openapi_lists_route_groups():
    schema = client.get("/openapi.json").json()
    assert {tag["name"] for tag in schema["tags"]} == {"bulk", "health"}
    assert "/bulk/validate" in schema["paths"]
