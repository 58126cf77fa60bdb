"""Typed failures raised by harmonization and dehydration."""

from __future__ import annotations

from typing import Optional


class HealthKitError(Exception):
    """Base error for every conversion failure."""

    def __init__(self, message: str, field: Optional[str] = None) -> None:
        self.message = message
        self.field = field
        super().__init__(message)

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.__class__.__name__,
                "message": self.message,
                "field": self.field,
            }
        }


class InvalidValue(HealthKitError):
    """A required field is missing, not convertible or not parseable."""


class InvalidType(HealthKitError):
    """An identifier, enumerant code or unit does not resolve."""


class InvalidIdentifier(HealthKitError):
    """A kind lookup key is not part of the closed kind set."""


class InvalidUnit(InvalidValue, InvalidType):
    """A unit string that names no supported unit.

    Decoding treats it as a bad value, identifier resolution as a bad type;
    callers may catch either.
    """
