"""Plain-text report output.

Prints a refresh cycle as labelled lines. Uses rule-based pattern for
color selection, like the anonymity verdict line.
"""

import sys
from typing import Callable, TextIO

import config
from config import Color
from enums import AnonymizationCategory
from models import UNAVAILABLE, AddressRecord, ClassificationResult, CycleResult, ThroughputSample


def format_output(result: CycleResult, file: TextIO | None = None) -> None:
    """Print the cycle report to specified file or stdout.

    Args:
        result: Cycle to report
        file: Optional file handle (default: sys.stdout)
    """
    if file is None:
        file = sys.stdout

    print("=" * 60, file=file)
    print("Connection Identity", file=file)
    print("=" * 60, file=file)
    for label, value in _address_rows(result.address):
        print(_row(label, value), file=file)

    print("\nAnonymity Check", file=file)
    print("-" * 60, file=file)
    if result.classification is None:
        print(_row("Status", "Not available"), file=file)
    else:
        _print_classification(result.classification, file)

    print("\nSpeed Test", file=file)
    print("-" * 60, file=file)
    if result.throughput is None:
        print(_row("Status", "Not available"), file=file)
    else:
        for label, value in _throughput_rows(result.throughput):
            print(_row(label, value), file=file)

    print("=" * 60, file=file)


def _row(label: str, value: str) -> str:
    return f"{label + ':':<{config.REPORT_LABEL_WIDTH}}{value}"


def _address_rows(address: AddressRecord) -> list[tuple[str, str]]:
    if address.latitude is not None and address.longitude is not None:
        coordinates = f"{address.latitude:.4f}, {address.longitude:.4f}"
    else:
        coordinates = UNAVAILABLE

    return [
        ("IPv4", address.ipv4),
        ("IPv6", address.ipv6),
        ("Country", address.country),
        ("Region", address.region),
        ("City", address.city),
        ("ISP", address.isp),
        ("Coordinates", coordinates),
        ("Last updated", address.resolved_at.isoformat(timespec="seconds")),
    ]


def _throughput_rows(sample: ThroughputSample) -> list[tuple[str, str]]:
    return [
        ("Download", f"{sample.download_mbps:.2f} Mbps" if sample.download_ok else "Failed"),
        ("Upload", f"{sample.upload_mbps:.2f} Mbps" if sample.upload_ok else "Failed"),
        ("Ping", f"{sample.ping_ms} ms" if sample.ping_ok else "Failed"),
    ]


def _print_classification(result: ClassificationResult, file: TextIO) -> None:
    color = _get_verdict_color(result)
    verdict = "Anonymizing connection detected" if result.is_anonymized else "Direct connection"

    print(_row("Verdict", f"{color}{verdict}{Color.RESET}"), file=file)
    print(_row("Type", result.category.value), file=file)
    if len(result.triggered) > 1:
        # Declaration order of the enum is precedence order
        others = [c.value for c in AnonymizationCategory if c in result.triggered]
        print(_row("Signals", ", ".join(others)), file=file)
    print(_row("Hosting", "Yes" if result.is_hosting else "No"), file=file)
    print(_row("Organization", result.organization), file=file)


# Type alias for color selection predicate
ColorPredicate = Callable[[ClassificationResult], bool]


def _get_verdict_color(result: ClassificationResult) -> str:
    """Determine verdict color based on priority rules.

    Priority (first match wins):
        1. Tor or VPN -> GREEN (traffic is tunnelled)
        2. Proxy or relay -> CYAN
        3. Hosting provider, not anonymized -> YELLOW
        4. Direct connection -> RED

    Args:
        result: Classification to color

    Returns:
        ANSI color code.
    """
    rules: list[tuple[ColorPredicate, str]] = [
        (
            lambda r: r.category in (AnonymizationCategory.TOR, AnonymizationCategory.VPN),
            Color.GREEN,
        ),
        (
            lambda r: r.category in (AnonymizationCategory.PROXY, AnonymizationCategory.RELAY),
            Color.CYAN,
        ),
        (
            lambda r: r.is_hosting,
            Color.YELLOW,
        ),
    ]

    for predicate, color in rules:
        if predicate(result):
            return color

    return Color.RED
