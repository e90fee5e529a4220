"""Flask application for the Private Equity Proposal Generator."""

import io
import math
import os
import re
import uuid
import logging
from datetime import datetime, timezone
from flask import Flask, request, jsonify, send_file

from config import (
    ASSETS_DIR, PORT, DEBUG, SECRET_KEY,
    COVER_IMAGE_FILE, LOGO_IMAGE_FILE, SIGNATURE_IMAGE_FILE,
)
from models.proposal import parse_proposal, validate_proposal, to_dict
from models.projections import compute_projections, to_full_dict
from services.pdf_generator import generate_pdf, ProposalGenerationError

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = SECRET_KEY

# In-memory store
proposals: dict[str, dict] = {}


def _request_data():
    """JSON body if present, else form fields."""
    return request.get_json(silent=True) or request.form


def _load_asset(filename: str) -> bytes | None:
    """Read an optional image asset. Missing files are logged, never fatal."""
    path = os.path.join(ASSETS_DIR, filename)
    try:
        with open(path, "rb") as fh:
            return fh.read()
    except OSError as e:
        logger.warning(f"Could not load asset {path}: {e}")
        return None


def _download_name(client_name: str) -> str:
    slug = re.sub(r"\s+", "-", client_name.strip())
    return f"proposal-{slug}.pdf"


# --- Routes ---

@app.route("/api/proposals", methods=["GET"])
def list_proposals():
    return jsonify(list(proposals.values()))


@app.route("/api/proposals", methods=["POST"])
def create_proposal():
    try:
        record = parse_proposal(_request_data())
    except Exception as e:
        return jsonify({"error": f"Invalid proposal data: {e}"}), 400

    errors = validate_proposal(record)
    if errors:
        return jsonify({"error": "Invalid proposal data", "details": errors}), 400

    proposal_id = uuid.uuid4().hex
    proposals[proposal_id] = {
        "id": proposal_id,
        **to_dict(record),
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }
    logger.info(f"[{proposal_id}] Proposal saved for {record.client_name}")
    return jsonify(proposals[proposal_id])


@app.route("/api/proposals/<proposal_id>", methods=["GET"])
def get_proposal(proposal_id):
    if proposal_id not in proposals:
        return jsonify({"error": "Proposal not found"}), 404
    return jsonify(proposals[proposal_id])


@app.route("/api/calculations", methods=["POST"])
def calculations():
    """Live projection figures for a (possibly partial) form."""
    record = parse_proposal(_request_data())
    if record.investment_amount <= 0 or record.time_horizon <= 0:
        return jsonify({"error": "Investment amount and time horizon must be positive"}), 400
    numbers = (record.investment_amount, record.target_return, *record.dividends)
    if not all(math.isfinite(v) for v in numbers):
        return jsonify({"error": "Projection inputs must be finite numbers"}), 400
    return jsonify(to_full_dict(compute_projections(record)))


@app.route("/api/proposals/<proposal_id>/pdf", methods=["POST"])
def proposal_pdf(proposal_id):
    if proposal_id not in proposals:
        return jsonify({"error": "Proposal not found"}), 404

    record = parse_proposal(proposals[proposal_id])
    logger.info(f"[{proposal_id}] Generating proposal PDF...")
    try:
        document = generate_pdf(
            record,
            cover_image=_load_asset(COVER_IMAGE_FILE),
            logo_image=_load_asset(LOGO_IMAGE_FILE),
            signature_image=_load_asset(SIGNATURE_IMAGE_FILE),
        )
    except ProposalGenerationError as e:
        return jsonify({
            "error": "Failed to generate PDF",
            "kind": e.kind,
            "details": e.message,
        }), 500

    response = send_file(
        io.BytesIO(document.content),
        mimetype="application/pdf",
        as_attachment=True,
        download_name=_download_name(record.client_name),
    )
    response.headers["X-Page-Count"] = str(document.page_count)
    return response


if __name__ == "__main__":
    app.run(host="0.0.0.0", port=PORT, debug=DEBUG, use_reloader=False)
