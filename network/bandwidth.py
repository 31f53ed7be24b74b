"""Latency and throughput estimation.

Three sequential phases against fixed remote targets:
    1. Latency: HEAD round trip to a 204 endpoint
    2. Download: streamed body, capped at DOWNLOAD_CEILING_SECONDS
    3. Upload: 1 MiB of random bytes POSTed to an echo endpoint

Each phase resolves to a value or MEASUREMENT_FAILED (-1) on its own, so
a failed phase never aborts the later ones.

Caveat: upload duration covers the full request/response round trip,
not pure transfer time, so upload figures read low on high-latency links.

Units: Mbps uses binary prefixes, bytes * 8 / seconds / 1024 / 1024.
"""

import secrets
import time
from typing import Callable

import requests

import config
from enums import MeasurementPhase
from logging_config import get_logger
from models import ThroughputSample
from network.gateway import ProbeGateway
from utils import sanitize_for_log

logger = get_logger(__name__)

Clock = Callable[[], float]
ProgressObserver = Callable[[MeasurementPhase], None]


class ProgressChannel:
    """Publishes phase notifications to subscribed observers.

    Purely observational: an observer that raises is logged and
    skipped, the measurement carries on.
    """

    def __init__(self) -> None:
        self._observers: list[ProgressObserver] = []

    def subscribe(self, observer: ProgressObserver) -> None:
        """Register observer for phase notifications."""
        self._observers.append(observer)

    def unsubscribe(self, observer: ProgressObserver) -> None:
        """Remove observer (no-op if not registered)."""
        if observer in self._observers:
            self._observers.remove(observer)

    def publish(self, phase: MeasurementPhase) -> None:
        """Notify every observer of the phase about to start."""
        for observer in list(self._observers):
            try:
                observer(phase)
            except (OSError, ValueError, RuntimeError, TypeError):
                logger.warning("Progress observer failed on %s", phase.name, exc_info=True)


def measure_throughput(
    gateway: ProbeGateway,
    progress: ProgressChannel | None = None,
    clock: Clock = time.perf_counter,
) -> ThroughputSample:
    """Run latency, download and upload phases in sequence.

    Args:
        gateway: Probe gateway for HTTP access
        progress: Optional channel notified before each phase
        clock: Monotonic clock in seconds (injectable for tests)

    Returns:
        ThroughputSample assembled after all phases resolved.
    """
    _notify(progress, MeasurementPhase.LATENCY)
    ping_ms = _run_phase("Latency", lambda: measure_latency(gateway, clock))

    _notify(progress, MeasurementPhase.DOWNLOAD)
    download_mbps = _run_phase("Download", lambda: measure_download(gateway, clock))

    _notify(progress, MeasurementPhase.UPLOAD)
    upload_mbps = _run_phase("Upload", lambda: measure_upload(gateway, clock))

    logger.info(
        "Throughput: ping %s ms, download %s Mbps, upload %s Mbps",
        ping_ms,
        download_mbps,
        upload_mbps,
    )

    return ThroughputSample(
        download_mbps=download_mbps,
        upload_mbps=upload_mbps,
        ping_ms=ping_ms,
    )


def measure_latency(gateway: ProbeGateway, clock: Clock = time.perf_counter) -> int:
    """Measure HEAD round trip to the latency probe.

    Returns:
        Round trip in whole milliseconds, or -1 on failure.
    """
    started = clock()
    ok = gateway.head(config.LATENCY_PROBE_URL)
    finished = clock()

    if not ok:
        logger.warning("Ping test failed")
        return config.MEASUREMENT_FAILED

    return round(max(finished - started, 0.0) * 1000)


def measure_download(
    gateway: ProbeGateway,
    clock: Clock = time.perf_counter,
    ceiling: float = config.DOWNLOAD_CEILING_SECONDS,
) -> float:
    """Measure download throughput from the streamed probe payload.

    The ceiling is measured from request start and checked after every
    read, which returns as soon as any bytes arrive. Once exceeded, the
    response is closed (remaining transfer canceled) and the elapsed
    time at that moment is used. A stream that breaks mid-transfer is
    scored on the bytes received so far.

    Args:
        gateway: Probe gateway for HTTP access
        clock: Monotonic clock in seconds
        ceiling: Maximum seconds to read

    Returns:
        Mbps rounded to 2 decimals, or -1 if nothing was received.
    """
    started = clock()
    response = gateway.open_stream(config.DOWNLOAD_PROBE_URL, read_timeout=ceiling)
    if response is None:
        logger.warning("Download speed test failed")
        return float(config.MEASUREMENT_FAILED)

    received = 0
    try:
        for chunk in gateway.iter_available(response, config.DOWNLOAD_CHUNK_BYTES):
            received += len(chunk)
            elapsed = clock() - started
            if elapsed > ceiling:
                logger.debug("Download ceiling reached after %.2fs, canceling", elapsed)
                break
        else:
            elapsed = clock() - started
    except requests.RequestException as e:
        elapsed = clock() - started
        logger.debug("Download stream interrupted: %s", sanitize_for_log(e))
    finally:
        response.close()

    if received == 0:
        logger.warning("Download speed test received no data")

    return compute_mbps(received, elapsed)


def measure_upload(
    gateway: ProbeGateway,
    clock: Clock = time.perf_counter,
    payload_bytes: int = config.UPLOAD_PAYLOAD_BYTES,
) -> float:
    """Measure upload throughput by posting random bytes.

    Timing spans the full round trip including the echo response.

    Args:
        gateway: Probe gateway for HTTP access
        clock: Monotonic clock in seconds
        payload_bytes: Size of the random body

    Returns:
        Mbps rounded to 2 decimals, or -1 on failure.
    """
    payload = secrets.token_bytes(payload_bytes)

    started = clock()
    ok = gateway.post(config.UPLOAD_PROBE_URL, payload, timeout=config.UPLOAD_TIMEOUT_SECONDS)
    finished = clock()

    if not ok:
        logger.warning("Upload speed test failed")
        return float(config.MEASUREMENT_FAILED)

    return compute_mbps(len(payload), finished - started)


def compute_mbps(byte_count: int, seconds: float) -> float:
    """Convert a byte count over a duration to Mbps (binary prefix).

    Examples:
        compute_mbps(10_000_000, 2.0) → 38.15

    Args:
        byte_count: Bytes transferred
        seconds: Elapsed wall clock

    Returns:
        Mbps rounded to 2 decimals, or -1 for no data or no elapsed time.
    """
    if byte_count <= 0 or seconds <= 0:
        return float(config.MEASUREMENT_FAILED)

    return round(byte_count * 8 / seconds / config.BITS_PER_MEGABIT, 2)


def _notify(progress: ProgressChannel | None, phase: MeasurementPhase) -> None:
    if progress is not None:
        progress.publish(phase)


def _run_phase(label: str, phase: Callable[[], int | float]) -> int | float:
    try:
        return phase()
    except (OSError, ValueError, RuntimeError) as e:
        logger.warning("%s phase failed: %s", label, sanitize_for_log(e))
        return config.MEASUREMENT_FAILED
