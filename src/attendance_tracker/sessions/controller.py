from __future__ import annotations

import io

from flask import Flask, jsonify, request, send_file

from ..common.auth import current_principal, role_required
from ..core.enums import Role
from ..core.exceptions import InvalidRequest
from ..container import Container
from .service import duration_from_body


def register(app: Flask, container: Container) -> None:
    registry = container.session_registry

    @app.route("/api/sessions", methods=["POST"], endpoint="create_session")
    @role_required(Role.LECTURER, Role.ADMIN)
    def create_session():
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise InvalidRequest("JSON object body required")
        principal = current_principal()

        ticket = registry.create_session(
            body.get("courseCode"),
            body.get("courseName"),
            body.get("lecturer") or principal.name,
            duration_from_body(body),
        )
        return jsonify({"ok": True, **ticket.to_dict()}), 201

    @app.route("/api/sessions", methods=["GET"], endpoint="list_sessions")
    @role_required(Role.LECTURER, Role.ADMIN)
    def list_sessions():
        lecturer = request.args.get("lecturer") or current_principal().name
        active_only = request.args.get("active", "").lower() in {"1", "true", "yes"}

        now = registry.now()
        sessions = registry.list_sessions(lecturer, active_only=active_only, now=now)
        return jsonify({
            "ok": True,
            "sessions": [{**s.to_dict(), "active": s.is_active(now)} for s in sessions],
        })

    @app.route("/api/sessions/<session_code>", methods=["GET"], endpoint="get_session")
    @role_required()
    def get_session(session_code: str):
        session = registry.get_session(session_code)
        return jsonify({"ok": True, "session": session.to_dict(), "active": session.is_active(registry.now())})

    @app.route("/api/sessions/<session_code>/qr.png", methods=["GET"], endpoint="session_qr_image")
    @role_required(Role.LECTURER, Role.ADMIN)
    def session_qr_image(session_code: str):
        png = registry.qr_png(session_code)
        return send_file(io.BytesIO(png), mimetype="image/png")
