"""Security signal lookup.

Fetches ipwho.is data for one address and maps its security and
connection objects into a SecuritySignalBundle.
"""

from typing import Any

import config
from logging_config import get_logger
from models import UNAVAILABLE, SecuritySignalBundle
from network.gateway import ProbeGateway
from utils import first_present, is_valid_ip, lookup_path, parse_flag, sanitize_for_log

logger = get_logger(__name__)

FLAG_FIELDS = ("is_proxy", "is_vpn", "is_tor", "is_relay", "connection_proxy", "is_hosting")


def fetch_security_signals(gateway: ProbeGateway, ip: str) -> SecuritySignalBundle | None:
    """Query anonymization indicators for an address.

    Args:
        gateway: Probe gateway for HTTP access
        ip: Address to look up

    Returns:
        Signal bundle, or None if the address is invalid or the
        provider failed.
    """
    if not is_valid_ip(ip):
        logger.debug("Skipping security lookup for invalid address: %s", sanitize_for_log(ip))
        return None

    logger.debug("Querying security signals for %s", ip)
    data = gateway.get_json(config.SECURITY_LOOKUP_URL.format(ip=ip))
    if data is None:
        logger.warning("Security signal lookup failed for %s", ip)
        return None

    if data.get("success") is False:
        logger.warning(
            "Security provider rejected %s: %s",
            ip,
            sanitize_for_log(data.get("message", "no reason given")),
        )
        return None

    return extract_signals(data)


def extract_signals(data: dict[str, Any]) -> SecuritySignalBundle:
    """Map a provider payload to a signal bundle.

    Missing objects or keys leave the flag False. A flag is raised when
    any of its spellings holds a literal JSON true.

    Args:
        data: ipwho.is payload

    Returns:
        SecuritySignalBundle (never None).
    """
    candidates = config.SECURITY_SIGNAL_CANDIDATES
    flags = {
        name: any(parse_flag(lookup_path(data, path)) for path in candidates[name])
        for name in FLAG_FIELDS
    }

    organization = first_present(data, candidates["organization"])
    if not isinstance(organization, str) or not organization:
        organization = UNAVAILABLE

    return SecuritySignalBundle(organization=organization, **flags)
