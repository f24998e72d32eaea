"""
Shared helpers of the v1 API: response envelope, day parameters, money fields
"""
from datetime import date
from decimal import Decimal
from typing import Any

from fastapi import HTTPException, status

from app.utils.money import to_money
from app.utils.validation import parse_day


def envelope(message: str, data: Any = None) -> dict:
    """{"success": true, "message": ..., "data": ...} - the shape every endpoint returns"""
    body: dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = data
    return body


def money(value: Decimal) -> str:
    """Money goes over the wire as a 2-decimal string ("25.00")"""
    return str(to_money(value))


def parse_day_param(value: str) -> date:
    """YYYY-MM-DD path/query parameter, 400 when malformed"""
    try:
        return parse_day(value)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
