"""
Exceptions raised by the tire lifecycle core.

Each error is recoverable at the caller: the CLI and HTTP layers catch them
and turn them into messages or status codes. Nothing in the core retries.
"""


class TireLifeError(Exception):
    """Base class for all tirelife errors."""


class NoInspectionData(TireLifeError):
    """Wear state requested for a tire with an empty inspection history."""

    def __init__(self, tire_id: str):
        self.tire_id = tire_id
        super().__init__(f"Tire {tire_id!r} has no inspections recorded")


class InvalidInitialDepth(TireLifeError, ValueError):
    """Initial tread depth is not positive."""

    def __init__(self, value: float):
        self.value = value
        super().__init__(f"Initial depth must be > 0 mm, got {value}")


class UnknownTire(TireLifeError, LookupError):
    """Move command references a tire that is not in the roster."""

    def __init__(self, tire_id: str):
        self.tire_id = tire_id
        super().__init__(f"Tire {tire_id!r} is not part of this roster")
