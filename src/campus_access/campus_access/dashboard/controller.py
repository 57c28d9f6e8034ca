from __future__ import annotations

from flask import Flask, g, jsonify, request

from ..attendance.model import AttendanceQuery
from ..common.datetime_utils import parse_iso_date
from ..common.validators import parse_int
from ..core.constants import DEFAULT_PAGE_LIMIT
from ..container import Container
from ..sessions.controller import token_required
from .service import require_teacher


def register(app: Flask, container: Container) -> None:
    @app.route("/api/dashboard/stats", endpoint="dashboard_stats")
    @token_required(container)
    def dashboard_stats():
        stats = container.dashboard_service.stats(g.session_claims)
        return jsonify(stats.to_dict())

    @app.route("/api/dashboard/attendance", endpoint="dashboard_attendance")
    @token_required(container)
    def dashboard_attendance():
        require_teacher(g.session_claims)

        date_s = request.args.get("date")
        query = AttendanceQuery(
            date_equals=parse_iso_date(date_s) if date_s else None,
            limit=parse_int(request.args.get("limit"), "limit", default=DEFAULT_PAGE_LIMIT),
            offset=parse_int(request.args.get("offset"), "offset", default=0),
        )
        return jsonify(container.ledger_service.list_events_ui(query))

    @app.route("/api/dashboard/users", endpoint="dashboard_users")
    @token_required(container)
    def dashboard_users():
        require_teacher(g.session_claims)

        users = [i.to_public_dict() for i in container.identity_service.list_identities()]
        return jsonify({"users": users, "total": len(users)})
