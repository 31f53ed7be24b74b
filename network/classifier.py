"""Anonymizing connection classification.

Pure decision logic, no I/O.
"""

from typing import Callable

from enums import AnonymizationCategory
from models import ClassificationResult, SecuritySignalBundle

# Type alias for a category predicate
SignalPredicate = Callable[[SecuritySignalBundle], bool]

# Rules in precedence order, most severe first. The label is taken from
# the first rule that matches; every matching rule counts as triggered.
# The connection-layer proxy flag labels as Proxy so that a connection
# flagged anonymized never carries the NONE label.
CATEGORY_RULES: list[tuple[AnonymizationCategory, SignalPredicate]] = [
    (AnonymizationCategory.TOR, lambda s: s.is_tor),
    (AnonymizationCategory.VPN, lambda s: s.is_vpn),
    (AnonymizationCategory.PROXY, lambda s: s.is_proxy or s.connection_proxy),
    (AnonymizationCategory.RELAY, lambda s: s.is_relay),
]


def classify(signals: SecuritySignalBundle | None) -> ClassificationResult:
    """Derive the anonymization verdict for one address.

    Rules:
        - Anonymized if ANY of proxy, vpn, tor, relay or connection
          proxy is raised (false positives preferred)
        - Label: Tor > VPN > Proxy > Relay > None
        - Hosting and organization pass through unchanged

    Args:
        signals: Signal bundle (None is treated as no signals)

    Returns:
        ClassificationResult with category NONE iff not anonymized.
    """
    if signals is None:
        signals = SecuritySignalBundle()

    triggered = [category for category, predicate in CATEGORY_RULES if predicate(signals)]

    is_anonymized = (
        signals.is_proxy
        or signals.is_vpn
        or signals.is_tor
        or signals.is_relay
        or signals.connection_proxy
    )

    return ClassificationResult(
        is_anonymized=bool(is_anonymized),
        category=triggered[0] if triggered else AnonymizationCategory.NONE,
        is_hosting=signals.is_hosting,
        organization=signals.organization,
        triggered=frozenset(triggered),
    )
