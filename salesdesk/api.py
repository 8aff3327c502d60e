"""HTTP routes for users and sales."""

from __future__ import annotations

import json
from collections import Counter
from typing import Any, Dict, Iterable

from flask import Flask, jsonify, request

from salesdesk.sales import (
    InvalidStatusError,
    InvalidTransitionError,
    Sale,
    SaleNotFoundError,
    SaleNotPendingError,
    SaleService,
    SaleStatus,
)
from salesdesk.users import User, UserNotFoundError, UserService


class _BindError(ValueError):
    """The request body could not be read into the expected fields."""


def _read_object() -> Dict[str, Any]:
    raw = request.get_data(cache=True)
    if not raw.strip():
        raise _BindError("EOF")
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise _BindError(str(exc)) from None
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise _BindError("request body must be a JSON object")
    return data


def _string_field(data: Dict[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _BindError(f"field {key!r} must be a string")
    return value


def _number_field(data: Dict[str, Any], key: str) -> float:
    value = data.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _BindError(f"field {key!r} must be a number")
    return float(value)


def _error(exc: BaseException, status: int):
    return jsonify({"error": str(exc)}), status


def summarize_sales(sales: Iterable[Sale]) -> Dict[str, Any]:
    """Count sales per status and add up their amounts."""
    sales = list(sales)
    counts = Counter(sale.status for sale in sales)
    return {
        "quantity": len(sales),
        "aproved": counts[SaleStatus.APPROVED],
        "rejected": counts[SaleStatus.REJECTED],
        "pending": counts[SaleStatus.PENDING],
        "total_amount": sum(sale.amount for sale in sales),
    }


def create_app(user_service: UserService, sale_service: SaleService) -> Flask:
    """Build the web application serving the user and sale routes."""
    app = Flask(__name__)

    @app.errorhandler(_BindError)
    def _bad_request(exc: _BindError):
        return _error(exc, 400)

    @app.post("/users")
    def create_user():
        data = _read_object()
        user = User(
            name=_string_field(data, "name"),
            address=_string_field(data, "address"),
            nickname=_string_field(data, "nickname"),
        )
        try:
            user_service.create(user)
        except Exception as exc:  # reported to the caller as a server error
            return _error(exc, 500)
        return jsonify(user.to_dict()), 201

    @app.get("/users/<user_id>")
    def read_user(user_id: str):
        try:
            user = user_service.get(user_id)
        except UserNotFoundError as exc:
            return _error(exc, 404)
        return jsonify(user.to_dict()), 200

    @app.delete("/users/<user_id>")
    def delete_user(user_id: str):
        try:
            user_service.delete(user_id)
        except UserNotFoundError as exc:
            return _error(exc, 404)
        except Exception as exc:  # reported to the caller as a server error
            return _error(exc, 500)
        return "", 204

    @app.post("/sales")
    def create_sale():
        data = _read_object()
        user_id = _string_field(data, "user_id")
        amount = _number_field(data, "amount")
        try:
            sale = sale_service.create(user_id, amount)
        except Exception as exc:  # reported to the caller as a server error
            return _error(exc, 500)
        return jsonify(sale.to_dict()), 201

    @app.patch("/sales/<sale_id>")
    def update_sale(sale_id: str):
        data = _read_object()
        status = _string_field(data, "status")
        try:
            sale_service.update(sale_id, status)
        except SaleNotFoundError as exc:
            return _error(exc, 404)
        except (SaleNotPendingError, InvalidTransitionError) as exc:
            return _error(exc, 409)
        except InvalidStatusError as exc:
            return _error(exc, 400)
        except Exception as exc:  # reported to the caller as a server error
            return _error(exc, 500)
        return jsonify({"message": "Sale updated"}), 200

    @app.get("/sales")
    def sales_by_user_status():
        user_id = request.args.get("user_id", "")
        status = request.args.get("status", "")
        try:
            sales = sale_service.get_by_user_status(user_id, status)
        except InvalidStatusError as exc:
            return _error(exc, 404)
        except Exception as exc:  # reported to the caller as a server error
            return _error(exc, 500)
        return (
            jsonify(
                {
                    "metadata": summarize_sales(sales),
                    "results": [sale.to_dict() for sale in sales],
                }
            ),
            200,
        )

    @app.get("/ping")
    def ping():
        return jsonify({"message": "pong"}), 200

    return app