from collections.abc import Generator

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from aquascore.api.health import router as health_router
from aquascore.api.metrics import router as metrics_router
from aquascore.api.observability import router as observability_router
from aquascore.api.profiles import router as profiles_router
from aquascore.api.scan import router as scan_router
from aquascore.core.config import settings
from aquascore.core.request_logging import RequestLoggingMiddleware
from aquascore.services.scan_stats import scan_stats_tracker

LABEL_TEXT = "pH-Wert: 7,5\nCalcium: 80 mg/l\nMagnesium: 25 mg/l"


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    scan_stats_tracker.reset()

    app = FastAPI(title="AquaScore API - Test")
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health_router, prefix=settings.api_prefix)
    app.include_router(scan_router, prefix=settings.api_prefix)
    app.include_router(profiles_router, prefix=settings.api_prefix)
    app.include_router(metrics_router, prefix=settings.api_prefix)
    app.include_router(observability_router, prefix=settings.api_prefix)

    with TestClient(app) as test_client:
        yield test_client

    scan_stats_tracker.reset()


def test_health(client: TestClient) -> None:
    response = client.get(f"{settings.api_prefix}/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
    assert response.headers["X-Request-ID"]


def test_request_id_is_echoed(client: TestClient) -> None:
    response = client.get(f"{settings.api_prefix}/health", headers={"X-Request-ID": "scan-42"})

    assert response.headers["X-Request-ID"] == "scan-42"


def test_ocr_scan_flow(client: TestClient) -> None:
    response = client.post(
        f"{settings.api_prefix}/scan/ocr",
        json={"text": LABEL_TEXT, "profile": "standard", "brand": "Quelle"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["ocr_parsed_values"] == {"ph": 7.5, "calcium": 80.0, "magnesium": 25.0}
    assert body["user_overrides"] is None
    assert body["warnings"] is None
    assert body["low_data"] is True
    assert body["score"] == 60.0
    assert body["metric_scores"] == {"ph": 100.0, "calcium": 100.0, "magnesium": 100.0}
    assert body["product_info"]["product_name"] == "Quelle"
    assert body["derived_metrics"]["data_quality_score"] == pytest.approx(30.0)
    assert set(body["insights"]["profile_fit"]) == {
        "standard",
        "baby",
        "sport",
        "blood_pressure",
        "coffee",
        "kidney",
    }
    assert body["ocr_text_raw"] == LABEL_TEXT


def test_ocr_scan_with_overrides(client: TestClient) -> None:
    response = client.post(
        f"{settings.api_prefix}/scan/ocr",
        json={"text": "Calcium: 80 mg/l Magnesium: 25", "values": {"calcium": 95}},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["ocr_parsed_values"]["calcium"] == 80.0
    assert body["user_overrides"] == {"calcium": 95.0}
    details = {item["metric"]: item for item in body["metric_details"]}
    assert details["calcium"]["raw_value"] == 95.0


def test_ocr_scan_with_values_only_reports_warnings(client: TestClient) -> None:
    response = client.post(f"{settings.api_prefix}/scan/ocr", json={"values": {"ph": 12}})

    assert response.status_code == 200
    body = response.json()
    assert body["ocr_parsed_values"] == {}
    assert len(body["warnings"]) == 1
    assert body["warnings"][0].startswith("ph:")


def test_ocr_scan_rejects_unreadable_label(client: TestClient) -> None:
    response = client.post(f"{settings.api_prefix}/scan/ocr", json={"text": "This is random text"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Es konnten keine Wasserwerte erkannt werden."


@pytest.mark.parametrize(
    "payload",
    [
        {"profile": "standard"},
        {"text": "pH 7"},
        {"text": LABEL_TEXT, "profile": "astronaut"},
        {"values": {"sodium": 1200}},
        {"values": {"ph": -1}},
    ],
)
def test_ocr_scan_validation(client: TestClient, payload: dict[str, object]) -> None:
    response = client.post(f"{settings.api_prefix}/scan/ocr", json=payload)

    assert response.status_code == 422


def test_score_comparison(client: TestClient) -> None:
    response = client.post(
        f"{settings.api_prefix}/scan/score",
        json={
            "values": {"calcium": 200, "magnesium": 100, "sodium": 60, "bicarbonate": 1000},
            "profiles": ["sport", "kidney", "sport"],
        },
    )

    assert response.status_code == 200
    body = response.json()
    assert [item["profile"] for item in body["results"]] == ["sport", "kidney"]
    assert body["results"][0]["score"] == 100.0
    assert body["results"][1]["score"] == 0.0
    assert body["warnings"] is None


def test_score_requires_values(client: TestClient) -> None:
    response = client.post(f"{settings.api_prefix}/scan/score", json={"values": {}})

    assert response.status_code == 422
    assert response.json()["detail"] == "Es müssen Werte übergeben werden."


def test_profiles(client: TestClient) -> None:
    listing = client.get(f"{settings.api_prefix}/profiles")
    baby = client.get(f"{settings.api_prefix}/profiles/baby")
    missing = client.get(f"{settings.api_prefix}/profiles/astronaut")

    assert listing.status_code == 200
    assert listing.json()["count"] == 6
    assert baby.status_code == 200
    assert baby.json()["targets"]["sodium"]["optimal_max"] == 10
    assert baby.json()["targets"]["ph"]["optimal_min"] == 6.5
    assert baby.json()["weights"]["sodium"] == 2.0
    assert missing.status_code == 404


def test_metrics_catalogue(client: TestClient) -> None:
    response = client.get(f"{settings.api_prefix}/metrics")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 16
    assert body["items"][0]["key"] == "ph"
    assert body["items"][0]["plausible_min"] == 4
    assert body["items"][-1]["derived"] is True


def test_scan_stats(client: TestClient) -> None:
    client.post(f"{settings.api_prefix}/scan/ocr", json={"text": LABEL_TEXT, "profile": "baby"})
    client.post(f"{settings.api_prefix}/scan/ocr", json={"text": "This is random text"})

    response = client.get(f"{settings.api_prefix}/observability/scan-stats")

    assert response.status_code == 200
    body = response.json()
    assert body["total_scans"] == 1
    assert body["text_scans"] == 1
    assert body["rejected_scans"] == 1
    assert body["parsed_metric_hits"] == {"calcium": 1, "magnesium": 1, "ph": 1}
    assert body["total_requests"] == 2
    assert body["failed_requests"] == 0
    assert body["profiles"][0]["profile"] == "baby"
