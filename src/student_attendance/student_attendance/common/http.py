from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict

from flask import Flask, jsonify, request

from ..app_logger import get_logger
from ..core.constants import MONEY_QUANT
from ..core.exceptions import NotFoundError, StoreError, ValidationError

logger = get_logger(__name__)


def ok(payload: Dict[str, Any] | None = None, status: int = 200):
    body = {"success": True}
    body.update(payload or {})
    return jsonify(body), status


def fail(message: str, status: int):
    return jsonify({"success": False, "message": message}), status


def money(value: Decimal) -> str:
    return str(Decimal(value).quantize(MONEY_QUANT))


def json_body() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):
        return fail(str(e), 400)

    @app.errorhandler(NotFoundError)
    def _not_found(e: NotFoundError):
        return fail(str(e), 404)

    @app.errorhandler(StoreError)
    def _store_error(e: StoreError):
        # Already logged where the driver error was converted
        if bool(app.config.get("DEBUG", False)):
            return fail(str(e), 503)
        return fail("The database is unavailable. Please try again.", 503)
