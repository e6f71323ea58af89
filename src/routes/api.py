"""API routes for tank table conversions."""

from functools import wraps

from flask import Blueprint, current_app, jsonify, request, session
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import generate_csrf

from logging_config import get_conversion_logger, get_logger
from security import ConversionForm, SecurityConfig
from services.calibration_store import CalibrationStore, EmptyTableError, UnknownTankError
from services.conversion_service import (
    ConversionRequest, ConversionService, Direction, FailureKind,
)
from services.history import ConversionHistory
from services.range_metadata import bounds, fill_percent
from services.tank_catalog import TankCatalog

api_bp = Blueprint("api", __name__)

# Deferred init pattern for Flask factory apps
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[SecurityConfig.RATE_LIMIT_PER_HOUR],
)

FAILURE_STATUS = {
    FailureKind.INVALID_INPUT: 400,
    FailureKind.OUT_OF_RANGE: 422,
    FailureKind.NO_DATA: 404,
}

HISTORY_SESSION_KEY = "history"


def init_api(app):
    """Initialize API rate limiting (call after registering blueprint)."""
    limiter.init_app(app)


def get_calibration_store() -> CalibrationStore:
    """Get or load the calibration store for this app."""
    if not hasattr(current_app, "_calibration_store"):
        current_app._calibration_store = CalibrationStore.from_json(
            current_app.config["CALIBRATION_TABLES_PATH"]
        )
    return current_app._calibration_store


def get_tank_catalog() -> TankCatalog:
    """Get or create tank catalog instance."""
    if not hasattr(current_app, "_tank_catalog"):
        current_app._tank_catalog = TankCatalog(get_calibration_store())
    return current_app._tank_catalog


def get_conversion_service() -> ConversionService:
    """Get or create conversion service instance."""
    if not hasattr(current_app, "_conversion_service"):
        current_app._conversion_service = ConversionService(get_calibration_store())
    return current_app._conversion_service


def get_history() -> ConversionHistory:
    return ConversionHistory(
        session.get(HISTORY_SESSION_KEY),
        limit=current_app.config.get("HISTORY_LIMIT", 5),
    )


def require_json_object(f):
    """Decorator to ensure request has a JSON object body."""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not request.is_json:
            return jsonify({"error": "Content-Type must be application/json"}), 400
        if not isinstance(request.get_json(silent=True), dict):
            return jsonify({"error": "JSON object body required"}), 400
        return f(*args, **kwargs)
    return decorated_function


# --- Tanks ---


@api_bp.route("/tanks", methods=["GET"])
def get_tanks():
    """Get known tank ids and grouped selector options."""
    catalog = get_tank_catalog()
    return jsonify({
        "tank_ids": catalog.list_tank_ids(),
        "options": [option.to_dict() for option in catalog.grouped_display_options()],
    })


@api_bp.route("/tanks/<tank_id>", methods=["GET"])
def get_tank(tank_id: str):
    """Get a tank's full-tank volume and maximum reading."""
    try:
        tank_bounds = bounds(get_calibration_store(), tank_id)
    except UnknownTankError as e:
        return jsonify({"error": str(e)}), 404
    except EmptyTableError as e:
        get_logger().error(str(e))
        return jsonify({"error": str(e)}), 409

    return jsonify({
        "tank_id": tank_id,
        "label": get_tank_catalog().label_for(tank_id),
        **tank_bounds,
    })


# --- Conversions ---


def _convert(tank_id: str, direction: Direction):
    conversion_logger = get_conversion_logger()

    form = ConversionForm()
    if not form.validate():
        messages = [msg for errors in form.errors.values() for msg in errors]
        conversion_logger.rejected(
            tank_id, direction.value, form.value.data, FailureKind.INVALID_INPUT.value
        )
        return jsonify({
            "error": messages[0] if messages else "Validation failed",
            "reason": FailureKind.INVALID_INPUT.value,
            "details": form.errors,
        }), 400

    conversion = ConversionRequest(tank_id=tank_id, direction=direction, value=form.parsed_value)
    result = get_conversion_service().convert(conversion)

    if not result.ok:
        conversion_logger.rejected(tank_id, direction.value, conversion.value, result.reason.value)
        return jsonify({
            "error": result.message,
            "reason": result.reason.value,
        }), FAILURE_STATUS[result.reason]

    label = get_tank_catalog().label_for(tank_id)
    history = get_history()
    history.record(conversion, result, tank_label=label)
    session[HISTORY_SESSION_KEY] = history.to_list()

    payload = result.to_dict()
    payload.update({
        "tank_id": tank_id,
        "tank_label": label,
        "input": conversion.value,
        "fill_percent": fill_percent(get_calibration_store(), tank_id, result.implied_volume),
    })
    conversion_logger.converted(tank_id, direction.value, conversion.value, payload)
    return jsonify(payload)


@api_bp.route("/tanks/<tank_id>/reading-to-volume", methods=["POST"])
@limiter.limit(SecurityConfig.RATE_LIMIT_PER_MINUTE)
@require_json_object
def reading_to_volume(tank_id: str):
    """Convert a dipstick reading (mm) to liters."""
    return _convert(tank_id, Direction.READING_TO_VOLUME)


@api_bp.route("/tanks/<tank_id>/volume-to-reading", methods=["POST"])
@limiter.limit(SecurityConfig.RATE_LIMIT_PER_MINUTE)
@require_json_object
def volume_to_reading(tank_id: str):
    """Convert liters to a dipstick reading (mm)."""
    return _convert(tank_id, Direction.VOLUME_TO_READING)


# --- History ---


@api_bp.route("/history", methods=["GET"])
def get_conversion_history():
    """Get recent conversions for this session, newest first."""
    return jsonify(get_history().to_list())


@api_bp.route("/history", methods=["DELETE"])
def clear_conversion_history():
    """Clear this session's conversion history."""
    session.pop(HISTORY_SESSION_KEY, None)
    return jsonify({"cleared": True})


@api_bp.route("/csrf-token", methods=["GET"])
def get_csrf_token():
    """Get a CSRF token for the X-CSRFToken header."""
    return jsonify({"csrf_token": generate_csrf()})
