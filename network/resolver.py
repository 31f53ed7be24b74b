"""Public address and geolocation resolution.

Queries ipify for the IPv4 and IPv6 address and ipwho.is for location,
falling back to ipapi.co once if ipwho.is is unusable.
"""

from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Any, Callable

import config
from logging_config import get_logger
from models import UNAVAILABLE, AddressRecord, FailureNotice
from network.gateway import ProbeGateway
from utils import (
    first_present,
    is_valid_ipv4,
    is_valid_ipv6,
    parse_coordinate,
    sanitize_for_log,
)

logger = get_logger(__name__)

TEXT_FIELDS = ("country", "region", "city", "isp")
COORDINATE_FIELDS = ("latitude", "longitude")


def resolve_identity(gateway: ProbeGateway) -> tuple[AddressRecord, FailureNotice | None]:
    """Resolve public addresses and location.

    IPv4, IPv6 and the geolocation chain run concurrently and fail
    independently. Never raises.

    Args:
        gateway: Probe gateway for HTTP access

    Returns:
        Tuple of (record, failure notice). The notice is only set when
        neither address nor location could be resolved.
    """
    with ThreadPoolExecutor(max_workers=config.RESOLVER_WORKERS) as executor:
        ipv4_future = executor.submit(lookup_ipv4, gateway)
        ipv6_future = executor.submit(lookup_ipv6, gateway)
        location_future = executor.submit(fetch_location, gateway)

        ipv4 = _collect(ipv4_future, UNAVAILABLE, "IPv4 lookup")
        ipv6 = _collect(ipv6_future, UNAVAILABLE, "IPv6 lookup")
        location = _collect(location_future, None, "Geolocation")

    record = build_address_record(ipv4, ipv6, location)

    if not record.has_ipv4 and not record.has_ipv6 and not record.has_location:
        logger.error("Identity resolution failed: no address or location available")
        return record, FailureNotice(
            message="Failed to fetch IP information",
            detail="All address and geolocation providers failed",
        )

    return record, None


def lookup_ipv4(gateway: ProbeGateway) -> str:
    """Query public IPv4 address.

    Returns:
        IPv4 address or "Unavailable".
    """
    return _lookup_address(gateway, config.IPV4_LOOKUP_URL, is_valid_ipv4)


def lookup_ipv6(gateway: ProbeGateway) -> str:
    """Query public IPv6 address.

    The v6 service answers with an IPv4 address when the client has no
    IPv6 route; that answer is treated as unavailable.

    Returns:
        IPv6 address or "Unavailable".
    """
    return _lookup_address(gateway, config.IPV6_LOOKUP_URL, is_valid_ipv6)


def _lookup_address(
    gateway: ProbeGateway,
    url: str,
    validator: Callable[[object], bool],
) -> str:
    data = _get_json(gateway, url)
    if data is None:
        return UNAVAILABLE

    address = data.get("ip")
    if not validator(address):
        logger.debug("Rejected address from %s: %s", url, sanitize_for_log(address))
        return UNAVAILABLE

    return address


def fetch_location(gateway: ProbeGateway) -> dict[str, Any] | None:
    """Query geolocation, primary provider first.

    Exactly one fallback request is made when the primary is unusable.

    Args:
        gateway: Probe gateway for HTTP access

    Returns:
        Provider payload, or None if both providers failed.
    """
    data = _get_json(gateway, config.GEO_PRIMARY_URL)
    if is_usable_payload(data):
        return data

    logger.warning("Primary geolocation provider failed, trying fallback")
    data = _get_json(gateway, config.GEO_FALLBACK_URL)
    if is_usable_payload(data):
        return data

    logger.warning("Fallback geolocation provider failed")
    return None


def is_usable_payload(data: dict[str, Any] | None) -> bool:
    """Check provider payload for in-band failure markers.

    ipwho.is reports errors as {"success": false, ...} and ipapi.co as
    {"error": true, ...}, both with HTTP 200.

    Args:
        data: Decoded payload or None

    Returns:
        True if payload can be used.
    """
    if data is None:
        return False
    if data.get("success") is False:
        logger.debug("Provider reported failure: %s", sanitize_for_log(data.get("message")))
        return False
    if data.get("error") is True:
        logger.debug("Provider reported error: %s", sanitize_for_log(data.get("reason")))
        return False
    return True


def build_address_record(
    ipv4: str,
    ipv6: str,
    location: dict[str, Any] | None,
    resolved_at: datetime | None = None,
) -> AddressRecord:
    """Merge address lookups and a provider payload into one record.

    Each field is taken from the first present candidate key in
    config.LOCATION_FIELD_CANDIDATES.

    Args:
        ipv4: IPv4 address or "Unavailable"
        ipv6: IPv6 address or "Unavailable"
        location: Geolocation payload or None
        resolved_at: Completion time (default: now, UTC)

    Returns:
        New AddressRecord.
    """
    payload = location or {}
    candidates = config.LOCATION_FIELD_CANDIDATES

    text = {name: _text_value(first_present(payload, candidates[name])) for name in TEXT_FIELDS}
    coords = {
        name: parse_coordinate(first_present(payload, candidates[name]))
        for name in COORDINATE_FIELDS
    }

    return AddressRecord(
        ipv4=ipv4,
        ipv6=ipv6,
        country=text["country"],
        region=text["region"],
        city=text["city"],
        isp=text["isp"],
        latitude=coords["latitude"],
        longitude=coords["longitude"],
        resolved_at=resolved_at or datetime.now(timezone.utc),
    )


def _text_value(value: Any) -> str:
    # Objects, arrays and booleans are not usable as display text
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        return UNAVAILABLE
    return str(value)


def _collect(future: Future, default: Any, label: str) -> Any:
    try:
        return future.result()
    except (OSError, ValueError, RuntimeError) as e:
        logger.warning("%s failed: %s", label, sanitize_for_log(e))
        return default


def _get_json(gateway: ProbeGateway, url: str) -> dict[str, Any] | None:
    # An injected transport may raise instead of returning None
    try:
        return gateway.get_json(url)
    except (OSError, ValueError, RuntimeError) as e:
        logger.debug("Request to %s raised: %s", url, sanitize_for_log(e))
        return None
