"""Network measurement and classification modules for ipcheck.

Provides the probe gateway, identity resolution, security signal
lookup, anonymization classification, and bandwidth estimation.
"""

from .bandwidth import (
    ProgressChannel,
    compute_mbps,
    measure_download,
    measure_latency,
    measure_throughput,
    measure_upload,
)
from .classifier import classify
from .gateway import ProbeGateway
from .resolver import build_address_record, fetch_location, resolve_identity
from .security import extract_signals, fetch_security_signals

__all__ = [
    # Gateway
    "ProbeGateway",
    # Identity
    "resolve_identity",
    "fetch_location",
    "build_address_record",
    # Security
    "fetch_security_signals",
    "extract_signals",
    "classify",
    # Bandwidth
    "ProgressChannel",
    "measure_throughput",
    "measure_latency",
    "measure_download",
    "measure_upload",
    "compute_mbps",
]
