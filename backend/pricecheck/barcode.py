"""EAN-13 barcode checks (structural only, the check digit is not verified)."""
from .errors import ValidationError

EAN13_LENGTH = 13


def validate_ean13(value) -> str:
    """Return ``value`` if it looks like an EAN-13 barcode, raise ValidationError otherwise."""
    if not isinstance(value, str):
        raise ValidationError("barcode must be a string", reason="invalid_character", barcode=value)
    if len(value) != EAN13_LENGTH:
        raise ValidationError(
            f"barcode must be {EAN13_LENGTH} digits, got {len(value)} characters",
            reason="invalid_length",
            barcode=value,
        )
    # str.isdigit() accepts unicode digits like '²', only ASCII 0-9 are valid here
    if not all('0' <= c <= '9' for c in value):
        raise ValidationError("barcode must contain only digits", reason="invalid_character", barcode=value)
    return value

