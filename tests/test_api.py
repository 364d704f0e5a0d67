def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_task_1(client):
    response = client.get("/task-1")
    assert response.status_code == 200
    data = response.json()["data"]
    assert data[0] == {"artist_id": 2, "artist_name": "Beta", "total_visit_duration": 5000, "unique_visitor_count": 1}
    assert data[1]["unique_visitor_count"] == 2


def test_task_2(client):
    response = client.get("/task-2")
    assert response.status_code == 200
    data = response.json()["data"]
    assert len(data) == 5
    assert data[0]["artist_name"] == "Alpha"
    assert data[0]["hour_of_day"] == "09"
    assert data[0]["engagement_score"] == 4


def test_store_error_maps_to_500(client, seeded_db):
    seeded_db.execute("DROP TABLE user_events")
    response = client.get("/task-2")
    assert response.status_code == 500
    assert "no such table" in response.json()["error"]


def test_charts(client):
    response = client.get("/charts/task-1")
    assert response.status_code == 200
    assert response.json()["page"] == "task-1"
    assert "encoding" in response.json()["spec"]


def test_unknown_chart_page(client):
    assert client.get("/charts/task-9").status_code == 404


def test_export_csv(client):
    response = client.get("/export/task-1")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    lines = response.text.strip().splitlines()
    assert lines[0] == "artist_id,artist_name,total_visit_duration,unique_visitor_count"
    assert lines[1] == "2,Beta,5000,1"


def test_export_unknown_page_is_empty(client):
    response = client.get("/export/nope")
    assert response.status_code == 200
    assert "Beta" not in response.text


def test_debug(client):
    response = client.get("/debug")
    assert response.status_code == 200
    assert response.json()["row_counts"]["visits"] == 3


def test_missing_database_is_a_500_and_not_created(tmp_path, monkeypatch):
    from fastapi.testclient import TestClient

    from api.main import app
    from core import data

    target = tmp_path / "missing.db"
    monkeypatch.setattr(data, "DATABASE_PATH", target)
    response = TestClient(app, raise_server_exceptions=False).get("/task-1")
    assert response.status_code == 500
    assert response.json()["type"] == "OperationalError"
    assert not target.exists()


def test_export_store_error_maps_to_500(client, seeded_db):
    seeded_db.execute("DROP TABLE visits")
    response = client.get("/export/task-1")
    assert response.status_code == 500
    assert "no such table" in response.json()["error"]
