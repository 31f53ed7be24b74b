"""Address validation utilities.

Provider answers are untrusted: an "ip" field is only accepted when it
parses as an address of the expected family.
"""

import ipaddress


def is_valid_ipv4(address: object) -> bool:
    """Validate IPv4 address.

    Args:
        address: Candidate value (any type, non-strings are rejected)

    Returns:
        True if valid IPv4 address, False otherwise.
    """
    if not address or not isinstance(address, str):
        return False
    try:
        ipaddress.IPv4Address(address)
        return True
    except ValueError:
        return False


def is_valid_ipv6(address: object) -> bool:
    """Validate IPv6 address.

    Strips zone identifier (e.g., %eth0) before validation.

    Args:
        address: Candidate value (any type, non-strings are rejected)

    Returns:
        True if valid IPv6 address, False otherwise.
    """
    if not address or not isinstance(address, str):
        return False

    # Strip zone identifier (fe80::1%eth0 → fe80::1)
    address = address.split("%")[0]

    try:
        ipaddress.IPv6Address(address)
        return True
    except ValueError:
        return False


def is_valid_ip(address: object) -> bool:
    """Validate IPv4 or IPv6 address.

    Args:
        address: Candidate value

    Returns:
        True if valid IPv4 or IPv6 address, False otherwise.
    """
    return is_valid_ipv4(address) or is_valid_ipv6(address)
