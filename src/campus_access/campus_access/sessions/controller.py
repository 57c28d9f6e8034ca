from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import Flask, g, jsonify, request

from ..container import Container


def bearer_token() -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def token_required(container: Container):
    """Verify the bearer token and expose its claims as `g.session_claims`."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token()
            g.session_claims = container.session_service.verify(token)
            g.session_token = token
            return view(*args, **kwargs)

        return wrapper

    return decorator


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = request.get_json(silent=True) or {}
        session, identity = container.session_service.login(data.get("email"), data.get("fingerprintData"))

        return jsonify(
            {
                "message": "Login successful",
                "token": session.token,
                "expiresAt": session.expires_at.isoformat(),
                "user": {
                    "id": identity.identity_id,
                    "fullName": identity.full_name,
                    "email": identity.email,
                    "role": identity.role.value,
                    "staffId": identity.staff_id,
                    "designation": getattr(identity.details, "designation", None),
                },
            }
        )

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    @token_required(container)
    def logout():
        container.session_service.revoke(g.session_token)
        return jsonify({"message": "Logged out"})
