import math
from typing import Optional, Union

from app.services.errors import ValidationError

Number = Union[int, float]


def is_blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value, field: str) -> float:
    """Convierte texto o número a float finito; NaN/inf o texto no numérico -> ValidationError"""
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}")
    if not math.isfinite(number):
        raise ValidationError(f"Invalid {field}")
    return number


def parse_optional_number(value, field: str) -> Optional[float]:
    if is_blank(value):
        return None
    return parse_number(value, field)


# Enteros BSON: 8 bytes con signo
INT64_MAX = 2 ** 63 - 1


def as_stored_number(number: float) -> Number:
    """Mongo guarda 5 y no 5.0 cuando el valor es entero; fuera de int64 queda como float"""
    if isinstance(number, int):
        return number if abs(number) <= INT64_MAX else float(number)
    if number.is_integer() and abs(number) <= INT64_MAX:
        return int(number)
    return number
