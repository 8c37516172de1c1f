from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..core.exceptions import StorageError, UpstreamError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/monthly-settings", methods=["GET"], endpoint="get_monthly_settings")
    def get_monthly_settings():
        try:
            setting = container.monthly_settings_service.get(
                month=request.args.get("month"),
                year=request.args.get("year"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except (UpstreamError, StorageError) as e:
            logger.warning("Monthly settings read failed: %s", e)
            return jsonify({"success": False, "message": "Monthly settings are unavailable"}), 502
        return jsonify(setting.to_dict()), 200

    @app.route("/api/monthly-settings", methods=["POST"], endpoint="update_monthly_settings")
    def update_monthly_settings():
        data = request.get_json(silent=True) or {}
        try:
            setting = container.monthly_settings_service.update(
                month=data.get("month"),
                year=data.get("year"),
                total_days=data.get("totalDays"),
            )
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except (UpstreamError, StorageError) as e:
            logger.error("Monthly settings update failed: %s", e)
            return jsonify({"success": False, "message": "Monthly settings could not be saved"}), 502
        return jsonify({"success": True, **setting.to_dict()}), 200
