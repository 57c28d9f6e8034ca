from __future__ import annotations

from flask import Flask, jsonify, request

from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/register", methods=["POST"], endpoint="register_identity")
    def register_identity():
        data = request.get_json(silent=True) or {}
        identity = container.identity_service.register(
            full_name=data.get("fullName"),
            email=data.get("email"),
            role=data.get("role"),
            rfid_tag=data.get("rfidUID") or data.get("rfidCardUID"),
            fingerprint_token=data.get("fingerprintData"),
            matric_number=data.get("matricNumber"),
            faculty=data.get("faculty"),
            department=data.get("department"),
            staff_id=data.get("staffId"),
            designation=data.get("designation"),
        )

        return (
            jsonify(
                {
                    "message": "Registration successful",
                    "user": {
                        "id": identity.identity_id,
                        "fullName": identity.full_name,
                        "email": identity.email,
                        "role": identity.role.value,
                    },
                }
            ),
            201,
        )
