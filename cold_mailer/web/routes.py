"""
Email routes.

POST /generate            body {"jobUrl": "..."}
POST /generate-from-data  body {"jobData": {...}}
GET  /test                service description and sample payload
"""

from datetime import datetime, timezone

from flask import Blueprint, current_app, g, jsonify, request

from .auth import resolve_identity
from cold_mailer.generators.orchestrator import EmailRequestOrchestrator


ORCHESTRATOR_KEY = "cold_mailer.orchestrator"

SAMPLE_JOB_DATA = {
    "role": "Full Stack Developer",
    "experience": "2-4 years",
    "skills": ["JavaScript", "React", "Node.js", "MongoDB"],
    "description": "We are looking for a full stack developer...",
}

email_bp = Blueprint("email", __name__)


def _orchestrator() -> EmailRequestOrchestrator:
    return current_app.extensions[ORCHESTRATOR_KEY]


def _body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@email_bp.route("/generate", methods=["POST"])
@resolve_identity
def generate_email():
    """Generate an email from a job posting URL."""
    body = _body()
    job_url = body.get("jobUrl") or body.get("joburl")

    result = _orchestrator().generate_from_url(job_url, g.requester_email)
    return jsonify(result.to_dict())


@email_bp.route("/generate-from-data", methods=["POST"])
@resolve_identity
def generate_email_from_data():
    """Generate an email from a job data object, skipping the page fetch."""
    job_data = _body().get("jobData")

    result = _orchestrator().generate_from_data(job_data, g.requester_email)
    return jsonify(result.to_dict())


@email_bp.route("/test", methods=["GET"])
def test_endpoint():
    prefix = request.path.rsplit("/", 1)[0]
    return jsonify({
        "message": "Email service is working!",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "availableEndpoints": {
            f"POST {prefix}/generate": "Generate email from job URL",
            f"POST {prefix}/generate-from-data": "Generate email from job data object (bypass scraping)",
            f"GET {prefix}/test": "Test endpoint",
        },
        "sampleJobData": SAMPLE_JOB_DATA,
    })
