"""Orchestrator for one refresh cycle.

Coordinates identity resolution, anonymization classification and
bandwidth estimation. Owns ordering and failure isolation only.
"""

from logging_config import get_logger
from models import AddressRecord, ClassificationResult, CycleResult, ThroughputSample
from network import (
    ProbeGateway,
    ProgressChannel,
    classify,
    fetch_security_signals,
    measure_throughput,
    resolve_identity,
)
from utils import sanitize_for_log

logger = get_logger(__name__)


def run_cycle(
    gateway: ProbeGateway | None = None,
    *,
    check_anonymity: bool = True,
    measure_bandwidth: bool = True,
    progress: ProgressChannel | None = None,
) -> CycleResult:
    """Run one complete refresh cycle.

    Process:
        1. Resolve addresses and location
        2. Classify the IPv4 address (only if one was resolved)
        3. Measure bandwidth (independent of steps 1-2)

    A failure in step 2 or 3 leaves that result None; the address
    record is always returned.

    Args:
        gateway: Probe gateway (default: new gateway, closed afterwards)
        check_anonymity: Run the VPN/proxy check
        measure_bandwidth: Run the speed test
        progress: Optional channel for bandwidth phase notifications

    Returns:
        CycleResult with fresh instances only.
    """
    owns_gateway = gateway is None
    if gateway is None:
        gateway = ProbeGateway()

    try:
        # Step 1: Identity
        logger.info("Resolving public identity...")
        address, failure = resolve_identity(gateway)

        # Step 2: Classification
        classification = None
        if check_anonymity:
            classification = classify_address(gateway, address)

        # Step 3: Bandwidth
        throughput = None
        if measure_bandwidth:
            throughput = estimate_bandwidth(gateway, progress)

        return CycleResult(
            address=address,
            classification=classification,
            throughput=throughput,
            failure=failure,
        )
    finally:
        if owns_gateway:
            gateway.close()


def classify_address(
    gateway: ProbeGateway,
    address: AddressRecord,
) -> ClassificationResult | None:
    """Classify the resolved IPv4 address.

    Args:
        gateway: Probe gateway
        address: Resolved record

    Returns:
        ClassificationResult, or None if skipped or not available.
    """
    if not address.has_ipv4:
        logger.info("No IPv4 address, skipping anonymity check")
        return None

    try:
        signals = fetch_security_signals(gateway, address.ipv4)
    except (OSError, ValueError, RuntimeError) as e:
        logger.warning("Anonymity check failed: %s", sanitize_for_log(e))
        return None

    if signals is None:
        return None

    result = classify(signals)
    logger.info(
        "Anonymity check: %s (%s)",
        "detected" if result.is_anonymized else "not detected",
        result.category.value,
    )
    return result


def estimate_bandwidth(
    gateway: ProbeGateway,
    progress: ProgressChannel | None = None,
) -> ThroughputSample | None:
    """Run the bandwidth estimator.

    Args:
        gateway: Probe gateway
        progress: Optional channel for phase notifications

    Returns:
        ThroughputSample, or None if the estimator failed outright.
    """
    logger.info("Running speed test...")
    try:
        return measure_throughput(gateway, progress)
    except (OSError, ValueError, RuntimeError) as e:
        logger.warning("Speed test failed: %s", sanitize_for_log(e))
        return None
