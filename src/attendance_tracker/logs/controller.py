from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.auth import role_required
from ..core.enums import Role
from ..container import Container
from .export import export_filename, render_csv
from .model import LogFilters


def register(app: Flask, container: Container) -> None:
    logs = container.log_query_service

    @app.route("/api/checkins", methods=["GET"], endpoint="list_checkins")
    @role_required(Role.LECTURER, Role.ADMIN)
    def list_checkins():
        result = logs.query_logs(
            LogFilters.from_args(request.args),
            page=request.args.get("page"),
            page_size=request.args.get("pageSize") or request.args.get("limit"),
        )
        return jsonify({"ok": True, **result.to_dict()})

    @app.route("/api/checkins/export", methods=["GET"], endpoint="export_checkins")
    @role_required(Role.LECTURER, Role.ADMIN)
    def export_checkins():
        filters = LogFilters.from_args(request.args)
        body = render_csv(logs.export_rows(filters))
        filename = export_filename(filters, container.clock().date())

        return app.response_class(
            body.encode("utf-8"),
            mimetype="text/csv",
            headers={
                "Content-Disposition": f'attachment; filename="{filename}"',
                "Cache-Control": "no-cache",
            },
        )
