import math
from decimal import Decimal, InvalidOperation

from flask import request

from errors import ValidationFailure

# largest value a SQLite INTEGER column can bind
MAX_INTEGER = 2 ** 63 - 1


def request_data() -> dict:
    """JSON body of the request, falling back to form fields."""
    payload = request.get_json(silent=True)
    if isinstance(payload, dict):
        return payload
    return request.form.to_dict()


def parse_number(value, field: str, *, integer: bool = False, minimum=0, default=None):
    """
    Parse a non-negative number from JSON or form input.
    Accepts "63,5" as well as "63.5". Missing values give ``default``; if there
    is no default the field is required.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        if default is None:
            raise ValidationFailure(f"{field} is required")
        return default
    if isinstance(value, bool):
        raise ValidationFailure(f"{field} must be a number")
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise ValidationFailure(f"{field} must be a number") from None
    if not number.is_finite():
        raise ValidationFailure(f"{field} must be a number")
    if integer:
        if number != number.to_integral_value():
            raise ValidationFailure(f"{field} must be an integer")
        if abs(number) > MAX_INTEGER:
            raise ValidationFailure(f"{field} is out of range")
        result = int(number)
    else:
        result = float(number)
        if not math.isfinite(result):
            raise ValidationFailure(f"{field} is out of range")
    if minimum is not None and result < minimum:
        raise ValidationFailure(f"{field} must be >= {minimum}")
    return result


def parse_text(value, field: str, *, min_length: int = 1, required: bool = True):
    if value is None or not str(value).strip():
        if required:
            raise ValidationFailure(f"{field} is required")
        return None
    text = str(value).strip()
    if len(text) < min_length:
        raise ValidationFailure(f"{field} must be at least {min_length} characters")
    return text


def parse_flag(value) -> bool:
    return str(value).strip().lower() in {"1", "true", "yes", "on"}
