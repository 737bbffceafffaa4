from decimal import ROUND_HALF_UP, Decimal


def round_half_up(value: float | int | None, digits: int = 1) -> float:
    if value is None:
        return 0.0
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(repr(float(value))).quantize(quantum, rounding=ROUND_HALF_UP))


def seconds_to_hours(seconds: float | int | None) -> float:
    return round_half_up((seconds or 0) / 3600)


def format_number(value: float | int) -> str:
    """Render 16.0 as "16" and 16.5 as "16.5"."""
    as_float = float(value)
    if as_float.is_integer():
        return str(int(as_float))
    return str(as_float)
