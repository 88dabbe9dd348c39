from decimal import Decimal, InvalidOperation


def to_decimal(v: object) -> Decimal:
    """Convert a JSON amount to Decimal

    Meant for pydantic field_validator(mode="before"). Floats go through str
    so 0.1 stays 0.1. Booleans, NaN and infinities are rejected.
    """
    if isinstance(v, bool):
        raise ValueError("Amount must be a number")
    if isinstance(v, Decimal):
        result = v
    else:
        try:
            result = Decimal(str(v))
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount: {v}") from e
    if not result.is_finite():
        raise ValueError(f"Invalid amount: {v}")
    return result
