"""Utilities package for ipcheck.

Provides payload field lookup, input validation, and log sanitizing.
"""

from .fields import first_present, lookup_path, parse_coordinate, parse_flag
from .sanitize import sanitize_for_log
from .validators import is_valid_ip, is_valid_ipv4, is_valid_ipv6

__all__ = [
    # Fields
    "lookup_path",
    "first_present",
    "parse_coordinate",
    "parse_flag",
    # Sanitize
    "sanitize_for_log",
    # Validators
    "is_valid_ipv4",
    "is_valid_ipv6",
    "is_valid_ip",
]
