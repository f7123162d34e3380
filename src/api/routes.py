"""
src/api/routes.py
─────────────────
HTTP surface of the twin engine, mounted on the Dash app's Flask server.

  GET    /events                    Server-Sent Events stream (initialData first)
  POST   /commands/toggleFault      {"fault": key}          → 202
  POST   /commands/restartSystem                            → 202
  POST   /commands/shutdownSystem                           → 202
  GET    /status                    health breakdown and run state
  GET    /logs     (/api/logs)      current log, newest first
  POST   /logs     (/api/logs)      {"severity", "message"} → 201 / 400
  DELETE /logs     (/api/logs)      clear the log           → 200

Commands are fire-and-forget: effects are observed on the event stream.
Cross-origin access is handled by flask-cors (origin from CORS_ORIGIN).
"""
from __future__ import annotations

import logging

from flask import Blueprint, Flask, Response, jsonify, request, stream_with_context
from flask_cors import CORS
from pydantic import ValidationError

from config.settings import settings
from src.data.models import FaultToggle, LogCreate
from src.simulation.engine import TwinEngine

logger = logging.getLogger(__name__)

KEEPALIVE = ": keep-alive\n\n"


def create_blueprint(engine: TwinEngine, keepalive_s: float = settings.SSE_KEEPALIVE_S) -> Blueprint:
    bp = Blueprint("twin_api", __name__)

    # ── Event stream ──────────────────────────────────────────────────────────

    @bp.get("/events")
    def events():
        sub = engine.connect()

        def stream():
            try:
                while True:
                    event = sub.get(timeout=keepalive_s)
                    yield KEEPALIVE if event is None else event.to_sse()
            finally:
                engine.disconnect(sub)

        return Response(
            stream_with_context(stream()),
            mimetype="text/event-stream",
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    # ── Commands ──────────────────────────────────────────────────────────────

    @bp.post("/commands/toggleFault")
    def toggle_fault():
        try:
            body = FaultToggle.model_validate(request.get_json(silent=True) or {})
        except ValidationError:
            return "Missing fault", 400
        engine.toggle_fault(body.fault)
        return "", 202

    @bp.post("/commands/restartSystem")
    def restart_system():
        engine.restart()
        return "", 202

    @bp.post("/commands/shutdownSystem")
    def shutdown_system():
        engine.shutdown()
        return "", 202

    @bp.get("/status")
    def status():
        return jsonify(engine.status())

    # ── Maintenance log ───────────────────────────────────────────────────────

    @bp.get("/logs")
    @bp.get("/api/logs")
    def get_logs():
        return jsonify([entry.model_dump(mode="json") for entry in engine.logs()])

    @bp.post("/logs")
    @bp.post("/api/logs")
    def add_log():
        try:
            body = LogCreate.model_validate(request.get_json(silent=True) or {})
        except ValidationError as exc:
            logger.debug("Rejected log submission: %s", exc.errors())
            return "Missing severity or message", 400
        entry = engine.add_log(body.severity, body.message)
        return jsonify(entry.model_dump(mode="json")), 201

    @bp.delete("/logs")
    @bp.delete("/api/logs")
    def clear_logs():
        engine.clear_logs()
        return jsonify([entry.model_dump(mode="json") for entry in engine.logs()])

    return bp


def register(server: Flask, engine: TwinEngine) -> None:
    """Mount the engine's HTTP API on a Flask server, with CORS for browser clients."""
    CORS(server, origins=settings.CORS_ORIGIN)
    server.register_blueprint(create_blueprint(engine))
