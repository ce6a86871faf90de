from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import current_principal, role_required
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, InvalidRequest
from ..container import Container


def register(app: Flask, container: Container) -> None:
    reconciler = container.checkin_reconciler

    @app.route("/api/checkins", methods=["POST"], endpoint="create_checkin")
    @role_required(Role.STUDENT, Role.LECTURER, Role.ADMIN)
    def create_checkin():
        body = request.get_json(silent=True)
        if body is None:
            body = {}
        if not isinstance(body, dict):
            raise InvalidRequest("JSON object body required")
        principal = current_principal()

        student_id = body.get("studentId")
        if principal.role == Role.STUDENT:
            if student_id is None or str(student_id).strip() == "":
                student_id = principal.id
            elif str(student_id).strip() != principal.id:
                raise AuthorizationError("Students may only check in as themselves")

        result = reconciler.check_in(
            student_id,
            body.get("sessionCode"),
            centre=body.get("centre"),
            location=body.get("location"),
            client_timestamp=body.get("timestamp"),
            qr_raw=body.get("qrCode"),
        )
        return jsonify({"ok": True, **result.to_dict()}), 200
