from enum import Enum


class CurrentType(Enum):
    """Enumeration for canonical charging current types."""

    AC_SINGLE_PHASE = "AC (Single-Phase)"
    AC_THREE_PHASE = "AC (Three-Phase)"
    DC = "DC"
