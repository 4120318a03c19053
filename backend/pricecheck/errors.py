"""
Error taxonomy shared by the identity, ledger, proximity and ingestion layers.

Every error carries a ``kind`` so the HTTP layer (and callers) can branch on
it without isinstance chains. ``ConstraintRace`` never leaves the identity
resolver; the others are mapped to responses in ``main``.
"""


class PriceCheckError(Exception):
    kind = "error"

    def __init__(self, message: str = "", **details):
        super().__init__(message)
        self.message = message
        self.details = details


class ValidationError(PriceCheckError):
    """Malformed input (bad barcode, missing field). Client error, no retry."""
    kind = "validation"


class NotFoundError(PriceCheckError):
    """A referenced store or product does not exist."""
    kind = "not_found"


class ConstraintRace(PriceCheckError):
    """A unique constraint fired during create-if-absent; resolve the existing row instead."""
    kind = "constraint_race"


class StorageUnavailable(PriceCheckError):
    """The database could not be reached or a query failed for another reason."""
    kind = "storage_unavailable"
