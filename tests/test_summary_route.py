import pytest
from fastapi.testclient import TestClient

from api.app.main import app
from api.app.routers.summary import get_pipeline
from tests.factories import ORDERS_HEADER, order_row


@pytest.fixture
def client(summary_pipeline):
    app.dependency_overrides[get_pipeline] = lambda: summary_pipeline
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def test_upload_returns_summary(client, upload_dir):
    csv_bytes = (
        ORDERS_HEADER
        + order_row("2023-01-02 19:30", "12.50", item='"Pizza, large"')
        + order_row("2022-11-01 12:00", "7.25")
    ).encode("utf-8")

    r = client.post("/summary", files={"uber": ("orders.csv", csv_bytes, "text/csv")})

    assert r.status_code == 200
    assert r.json() == {"totalSpend": 19.75, "firstOrderTime": "2022-11-01 12:00"}
    assert list(upload_dir.iterdir()) == []


def test_missing_file_field_returns_null(client):
    r = client.post("/summary", data={"note": "no file here"})

    assert r.status_code == 200
    assert r.json() is None


def test_text_value_in_file_field_returns_null(client):
    r = client.post("/summary", data={"uber": "orders.csv"})

    assert r.status_code == 200
    assert r.json() is None


def test_non_csv_upload_returns_null(client):
    r = client.post("/summary", files={"uber": ("orders.json", b"[]", "application/json")})

    assert r.status_code == 200
    assert r.json() is None


def test_header_only_export_reports_zero(client):
    r = client.post("/summary", files={"uber": ("orders.csv", ORDERS_HEADER.encode(), "text/csv")})

    assert r.status_code == 200
    assert r.json() == {"totalSpend": 0.0, "firstOrderTime": None}


def test_multipart_without_boundary_is_rejected_by_framework(client):
    r = client.post(
        "/summary",
        content=b"--x\r\n",
        headers={"content-type": "multipart/form-data"},
    )

    assert r.status_code == 400
