# app.py - Webhook that accepts quiz tasks and solves them in the background

import logging

from flask import Flask, request, jsonify, abort

from quiz_solver import config
from quiz_solver.job import start_job
from quiz_solver.models import QuizTask

app = Flask(__name__)
logging.basicConfig(level=logging.INFO)

REQUIRED_FIELDS = ("email", "secret", "url")


# -------------------------
# Utilities
# -------------------------
def json_object_or_400(req):
    payload = req.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Invalid JSON or missing fields (email, secret, url required)")
    return payload


def task_or_400(payload):
    values = [payload.get(name) for name in REQUIRED_FIELDS]
    if not all(isinstance(v, str) and v for v in values):
        abort(400, description="Invalid JSON or missing fields (email, secret, url required)")
    return QuizTask(*values)


@app.errorhandler(400)
def bad_request(err):
    return jsonify({"error": err.description}), 400


# -------------------------
# Routes
# -------------------------
@app.route("/webhook", methods=["POST"])
def quiz_webhook():
    task = task_or_400(json_object_or_400(request))

    if task.secret != config.APP_SECRET:
        return jsonify({"error": "Invalid secret"}), 403

    logging.info("Accepted quiz task for %s", task.url)
    start_job(task)
    return jsonify({"accepted": True}), 200


@app.route("/healthz", methods=["GET"])
def healthz():
    return jsonify({"ok": True}), 200


if __name__ == "__main__":
    # Local dev server entrypoint. In production use gunicorn or host's recommended runner.
    app.run(host="0.0.0.0", port=config.PORT)
