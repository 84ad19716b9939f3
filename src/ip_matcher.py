"""Longest-prefix matching of IPv4 addresses against a RangeSet."""

from __future__ import annotations

from typing import List, Optional

from range_transforms.common import CidrRecord, RangeSet, parse_ipv4_address
from region_names import pretty_region_name


def find_matches(range_set: RangeSet, address: str) -> List[CidrRecord]:
    """Return every record containing ``address``, in input order."""
    value = parse_ipv4_address(address)
    if value is None:
        return []
    return [record for record in range_set if record.contains(value)]


def best_match(range_set: RangeSet, address: str) -> Optional[CidrRecord]:
    """Return the most specific record containing ``address``.

    Ties on prefix length go to the record that appears first in the registry.
    """
    value = parse_ipv4_address(address)
    if value is None:
        return None

    best: Optional[CidrRecord] = None
    for record in range_set:
        if record.contains(value) and (best is None or record.prefix_length > best.prefix_length):
            best = record
    return best


def resolve(range_set: RangeSet, address: str) -> Optional[str]:
    """Resolve ``address`` to a region display name, or None when nothing matches."""
    record = best_match(range_set, address)
    if record is None or not record.region:
        return None
    return pretty_region_name(record.region)
