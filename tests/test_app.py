import pytest

import app as app_module
from factories import png_bytes
from services.pdf_generator import ProposalGenerationError

VALID = {
    "clientName": "Jane Investor",
    "clientAddress": "12 Long Street\nCape Town",
    "proposalDate": "2025-01-15",
    "investmentAmount": 150000,
    "targetReturn": 72,
    "timeHorizon": 3,
    "year1Dividend": 1.44,
    "year2Dividend": 1.888,
    "year3Dividend": 2.378,
}


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(app_module, "ASSETS_DIR", str(tmp_path))
    app_module.proposals.clear()
    app_module.app.config["TESTING"] = True
    with app_module.app.test_client() as c:
        yield c
    app_module.proposals.clear()


def _create(client, **overrides):
    return client.post("/api/proposals", json={**VALID, **overrides})


def test_create_and_fetch_proposal(client):
    resp = _create(client)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["clientName"] == "Jane Investor"
    assert body["timeHorizon"] == 3
    assert body["id"]

    assert client.get(f"/api/proposals/{body['id']}").get_json()["investmentAmount"] == 150000
    assert [p["id"] for p in client.get("/api/proposals").get_json()] == [body["id"]]


def test_create_accepts_form_data(client):
    resp = client.post("/api/proposals", data={k: str(v) for k, v in VALID.items()})
    assert resp.status_code == 200
    assert resp.get_json()["year3Dividend"] == pytest.approx(2.378)


@pytest.mark.parametrize("overrides,fragment", [
    ({"investmentAmount": 500}, "at least"),
    ({"timeHorizon": 0}, "Time horizon"),
    ({"timeHorizon": 11}, "Time horizon"),
    ({"targetReturn": 250}, "Target return"),
    ({"year2Dividend": -1}, "Year 2 dividend"),
    ({"clientName": "   "}, "Client name"),
    ({"investmentAmount": "NaN"}, "Investment amount must be a finite number"),
    ({"investmentAmount": "inf"}, "Investment amount must be a finite number"),
    ({"targetReturn": "-inf"}, "Target return must be a finite number"),
    ({"year1Dividend": "nan"}, "Year 1 dividend must be a finite number"),
])
def test_invalid_proposals_are_rejected(client, overrides, fragment):
    resp = _create(client, **overrides)
    assert resp.status_code == 400
    body = resp.get_json()
    assert body["error"] == "Invalid proposal data"
    assert any(fragment in d for d in body["details"])
    assert app_module.proposals == {}


def test_unknown_proposal_is_404(client):
    assert client.get("/api/proposals/nope").status_code == 404
    assert client.post("/api/proposals/nope/pdf").status_code == 404


def test_calculations_endpoint(client):
    resp = client.post("/api/calculations", json=VALID)
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["sharesIssued"] == pytest.approx(18750)
    assert data["targetValue"] == pytest.approx(258000)
    assert data["years"][2]["growth"] == pytest.approx(20.0)


def test_calculations_reject_non_positive_amount(client):
    assert client.post("/api/calculations", json={"investmentAmount": 0}).status_code == 400


@pytest.mark.parametrize("field", ["investmentAmount", "targetReturn", "year3Dividend"])
def test_calculations_reject_non_finite_inputs(client, field):
    resp = client.post("/api/calculations", json={**VALID, field: "NaN"})
    assert resp.status_code == 400
    assert "finite" in resp.get_json()["error"]


def test_calculations_with_wiped_out_target(client):
    resp = client.post("/api/calculations", json={**VALID, "targetReturn": -150})
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["targetValue"] == pytest.approx(-75000)
    assert data["annualizedReturn"] == 0


def test_pdf_download_without_assets(client):
    proposal_id = _create(client).get_json()["id"]

    resp = client.post(f"/api/proposals/{proposal_id}/pdf")

    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert resp.data.startswith(b"%PDF")
    assert int(resp.headers["X-Page-Count"]) >= 4
    assert "proposal-Jane-Investor.pdf" in resp.headers["Content-Disposition"]


def test_pdf_download_with_assets(client, tmp_path):
    (tmp_path / app_module.LOGO_IMAGE_FILE).write_bytes(png_bytes((320, 106)))
    (tmp_path / app_module.COVER_IMAGE_FILE).write_bytes(png_bytes((600, 850), "darkgreen"))
    (tmp_path / app_module.SIGNATURE_IMAGE_FILE).write_bytes(png_bytes((300, 90), "white"))
    proposal_id = _create(client).get_json()["id"]

    resp = client.post(f"/api/proposals/{proposal_id}/pdf")

    assert resp.status_code == 200
    assert resp.data.startswith(b"%PDF")


def test_pdf_generation_failure_is_reported(client, monkeypatch):
    def fail(*args, **kwargs):
        raise ProposalGenerationError("rendering", "font metric exploded")

    monkeypatch.setattr(app_module, "generate_pdf", fail)
    proposal_id = _create(client).get_json()["id"]

    resp = client.post(f"/api/proposals/{proposal_id}/pdf")

    assert resp.status_code == 500
    assert resp.get_json() == {
        "error": "Failed to generate PDF",
        "kind": "rendering",
        "details": "font metric exploded",
    }
