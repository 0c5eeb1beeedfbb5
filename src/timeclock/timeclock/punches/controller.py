from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.web import error_response, internal_error_response
from ..container import Container
from ..core.exceptions import DomainError

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    @app.route("/api/kiosk/validate", methods=["POST"], endpoint="kiosk_validate")
    def kiosk_validate():
        data = _payload()
        try:
            device = container.device_service.resolve(data.get("device_secret", ""), data.get("unit"))
            employee = container.identity_service.validate(
                data.get("cpf", ""),
                data.get("pin", ""),
                device_id=device.device_id,
            )
            return jsonify(
                {
                    "success": True,
                    "employee": {
                        "id": employee.employee_id,
                        "name": employee.full_name,
                        "photo_ref": employee.photo_ref,
                    },
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Kiosk validation failed")
            return internal_error_response()

    @app.route("/api/kiosk/punch", methods=["POST"], endpoint="kiosk_punch")
    def kiosk_punch():
        data = _payload()
        try:
            device = container.device_service.resolve(data.get("device_secret", ""), data.get("unit"))
            employee = container.identity_service.validate(
                data.get("cpf", ""),
                data.get("pin", ""),
                device_id=device.device_id,
            )
            result = container.punch_intake_service.intake(
                employee.employee_id,
                data.get("device_secret", ""),
                data.get("unit"),
                data.get("selfie_image", ""),
            )
            return jsonify(
                {
                    "success": True,
                    "punch_type": result.punch_type.value,
                    "punched_at": result.occurred_at.isoformat(),
                    "employee_name": result.employee_name,
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Kiosk punch failed")
            return internal_error_response()
