"""Exceptions raised by the addressing core."""


class DoorCodeError(Exception):
    """Base class for addressing errors."""


class InvalidCoordinateError(DoorCodeError, ValueError):
    """Latitude/longitude missing, not finite, or outside the valid range."""

    def __init__(self, latitude, longitude, reason: str):
        self.latitude = latitude
        self.longitude = longitude
        self.reason = reason
        super().__init__(f"Invalid coordinate ({latitude}, {longitude}): {reason}")


class StoreUnavailableError(DoorCodeError):
    """A registry or address store read failed or timed out."""


class SequenceExhaustedError(DoorCodeError):
    """No sequence numbers are left in a (state, LGA, area) scope."""

    def __init__(self, scope_key: str, value: int):
        self.scope_key = scope_key
        self.value = value
        super().__init__(f"Sequence exhausted for scope {scope_key} (next value {value})")


class AddressCodeRequiredError(DoorCodeError):
    """A code is mandatory in this context but none could be generated."""

    def __init__(self, not_resolvable=None):
        # not_resolvable is the LocationNotResolvable returned by the locator
        self.not_resolvable = not_resolvable
        reason = not_resolvable.reason if not_resolvable is not None else "unknown"
        super().__init__(
            f"Could not generate address code for the provided coordinates ({reason})"
        )
