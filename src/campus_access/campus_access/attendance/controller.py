from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def _device_error(e: Exception):
    """ESP32 readers expect every reply in the {success, ...} envelope."""
    if isinstance(e, DomainError):
        return jsonify({"success": False, "error": str(e)}), e.status_code
    logger.exception("ESP32 request failed")
    return jsonify({"success": False, "error": "Internal server error"}), 500


def register(app: Flask, container: Container) -> None:
    @app.route("/api/verify-attendance", methods=["POST"], endpoint="verify_attendance")
    def verify_attendance():
        data = request.get_json(silent=True) or {}
        result = container.verification_service.verify_dual_factor(
            rfid_tag=data.get("rfidCardUID"),
            fingerprint_token=data.get("fingerprintData"),
            action=data.get("action"),
            location=data.get("location"),
            timestamp=data.get("timestamp"),
        )
        return jsonify(result.to_dict())

    @app.route("/api/verify-rfid", methods=["POST"], endpoint="verify_rfid")
    def verify_rfid():
        data = request.get_json(silent=True) or {}
        try:
            identity = container.verification_service.lookup_rfid(data.get("rfid_uid"))
        except Exception as e:
            return _device_error(e)

        return jsonify(
            {
                "success": True,
                "student_name": identity.full_name,
                "user_id": identity.identity_id,
                "matricNumber": identity.badge_number,
                "role": identity.role.value,
                "fingerprint_data": identity.fingerprint_token,
            }
        )

    @app.route("/api/log-attendance", methods=["POST"], endpoint="log_attendance")
    def log_attendance():
        data = request.get_json(silent=True) or {}
        device_id = data.get("device_id")
        logger.info("ESP32 attendance log: %s (%s) from %s", data.get("student_name"), data.get("rfid_uid"), device_id)
        try:
            result = container.verification_service.verify_single_factor(
                rfid_tag=data.get("rfid_uid"),
                device_id=device_id,
                timestamp=data.get("timestamp"),
            )
        except Exception as e:
            return _device_error(e)

        return jsonify(
            {
                "success": True,
                "message": "Attendance logged successfully",
                "timestamp": result.event.timestamp.isoformat(),
                "user_id": result.identity.identity_id,
                "student_name": result.identity.full_name,
            }
        )

    @app.route("/api/device/register", methods=["POST"], endpoint="register_device")
    def register_device():
        data = request.get_json(silent=True) or {}
        device_id = data.get("device_id") or "ESP32_001"
        logger.info("ESP32 device registration: %s at %s", device_id, data.get("location"))
        return jsonify(
            {
                "success": True,
                "device_id": device_id,
                "registered": True,
                "server_time": now_local().isoformat(),
                "message": "Device registered successfully",
            }
        )
