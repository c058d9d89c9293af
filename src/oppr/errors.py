"""
Exception hierarchy for the OPPR engine.

Calculators only raise for configuration/registry problems and for
invariant violations in their inputs. Degenerate-but-valid inputs (empty
fields, unrated players, zero games) produce zero values instead.
"""


class OpprError(Exception):
    """Base class for every error raised by the engine."""


class ConfigurationError(OpprError):
    """Raised when constant overrides don't match the configuration shape."""


class RatingSystemError(OpprError):
    """Base class for rating system registry failures."""


class DuplicateRatingSystemError(RatingSystemError, ValueError):
    """Raised when a rating system id is registered twice."""

    def __init__(self, system_id: str):
        self.system_id = system_id
        super().__init__(f"Rating system '{system_id}' is already registered")


class RatingSystemNotFoundError(RatingSystemError, KeyError):
    """Raised when looking up an id that was never registered."""

    def __init__(self, system_id: str, available: list[str]):
        self.system_id = system_id
        self.available = list(available)
        listed = ", ".join(self.available) if self.available else "none"
        super().__init__(
            f"Rating system '{system_id}' not found. Available systems: {listed}"
        )

    def __str__(self) -> str:
        # KeyError would otherwise wrap the message in quotes
        return self.args[0]


class InvariantViolation(OpprError):
    """Raised when input data breaks a structural guarantee (e.g. duplicate positions)."""


class OpprValidationError(OpprError, ValueError):
    """Raised by the input validators in oppr.scoring.validators."""
