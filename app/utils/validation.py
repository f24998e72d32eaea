"""
Validation utilities
"""
import re
from datetime import date
from decimal import Decimal, InvalidOperation

_DAY_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# amount columns are NUMERIC(20, 2)
MAX_INTEGER_DIGITS = 18


def normalize_decimal_input(value: str) -> str:
    """
    Normalize an amount typed by a user: comma decimal separator becomes a dot

    Example:
        >>> normalize_decimal_input("100,50")
        "100.50"
        >>> normalize_decimal_input("100.50")
        "100.50"
    """
    return value.strip().replace(",", ".")


def validate_decimal_amount(value: str, max_decimal_places: int = 2) -> tuple[bool, str | None]:
    """
    Validate a money amount

    Args:
        value: amount as string
        max_decimal_places: maximum digits after the separator (default 2)

    Returns:
        (is_valid, error_message)

    Example:
        >>> validate_decimal_amount("100.50")
        (True, None)
        >>> validate_decimal_amount("100.505")
        (False, "Máximo 2 decimales")
        >>> validate_decimal_amount("1" * 19)
        (False, "El monto es demasiado grande")
    """
    normalized = normalize_decimal_input(value)

    try:
        decimal_value = Decimal(normalized)
    except (InvalidOperation, ValueError):
        return False, "El monto debe ser un número válido"

    if not decimal_value.is_finite():
        return False, "El monto debe ser un número válido"

    pattern = rf"^-?\d+(\.\d{{1,{max_decimal_places}}})?$"
    if not re.match(pattern, normalized):
        return False, f"Máximo {max_decimal_places} decimales"

    if len(normalized.lstrip("-").split(".")[0].lstrip("0")) > MAX_INTEGER_DIGITS:
        return False, "El monto es demasiado grande"

    return True, None


def validate_and_normalize_amount(value, max_decimal_places: int = 2) -> Decimal:
    """
    Validate an amount and return it as Decimal (raise on error)

    Accepts str, int, float or Decimal; numbers are validated through their
    string form so "10.005" and 10.005 are rejected alike.

    Raises:
        ValueError: if validation fails
    """
    if isinstance(value, bool):
        raise ValueError("El monto debe ser un número válido")
    raw = value if isinstance(value, str) else str(value)
    is_valid, error = validate_decimal_amount(raw, max_decimal_places)
    if not is_valid:
        raise ValueError(error)

    return Decimal(normalize_decimal_input(raw))


def parse_day(value) -> date:
    """
    Parse a calendar day in YYYY-MM-DD form

    Raises:
        ValueError: malformed string or impossible date (2024-02-30)
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DAY_PATTERN.match(value):
        raise ValueError("La fecha debe tener formato YYYY-MM-DD")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError("La fecha no es válida")
