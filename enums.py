"""Type-safe enumerations for ipcheck.

All categorical values use enum types for type safety and consistency.
"""

from enum import Enum


class AnonymizationCategory(str, Enum):
    """Anonymizing connection categories.

    Declared in precedence order, most severe first. Only the highest
    category with a raised flag becomes the label of a classification.
    """

    TOR = "Tor Network"
    VPN = "VPN"
    PROXY = "Proxy"
    RELAY = "Relay"
    NONE = "None Detected"


class MeasurementPhase(str, Enum):
    """Bandwidth estimator phases, in execution order."""

    LATENCY = "Measuring ping..."
    DOWNLOAD = "Testing download speed..."
    UPLOAD = "Testing upload speed..."


class DataMarker(str, Enum):
    """Data status markers.

    UNAVAILABLE: No provider supplied the value (or every provider failed)
    """

    UNAVAILABLE = "Unavailable"
