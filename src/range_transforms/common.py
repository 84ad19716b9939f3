from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

MAX_PREFIX_LENGTH = 32
_FULL_MASK = 0xFFFFFFFF


def prefix_mask(prefix_length: int) -> int:
    """Return the 32-bit netmask with ``prefix_length`` leading one bits."""
    if prefix_length < 0 or prefix_length > MAX_PREFIX_LENGTH:
        raise ValueError(f"Prefix length out of range: {prefix_length}")
    if prefix_length == 0:
        return 0
    return (_FULL_MASK << (MAX_PREFIX_LENGTH - prefix_length)) & _FULL_MASK


def parse_ipv4_address(text: object) -> Optional[int]:
    """Parse a dotted-quad IPv4 address into its big-endian integer value."""
    if not isinstance(text, str):
        return None
    try:
        return int(ipaddress.IPv4Address(text))
    except ValueError:
        return None


def format_ipv4(value: int) -> str:
    return str(ipaddress.IPv4Address(value & _FULL_MASK))


def parse_ipv4_cidr(text: object) -> Optional[Tuple[int, int, int]]:
    """Parse ``a.b.c.d/n`` into ``(network, mask, prefix_length)``.

    Host bits are cleared from the network. Returns None for anything that is
    not an IPv4 CIDR with a prefix length between 0 and 32.
    """
    if not isinstance(text, str):
        return None

    parts = text.split("/")
    if len(parts) != 2:
        return None

    address = parse_ipv4_address(parts[0])
    if address is None:
        return None

    prefix_str = parts[1]
    if not prefix_str.isascii() or not prefix_str.isdigit():
        return None
    prefix_length = int(prefix_str)
    if prefix_length > MAX_PREFIX_LENGTH:
        return None

    mask = prefix_mask(prefix_length)
    return address & mask, mask, prefix_length


@dataclass(frozen=True)
class CidrRecord:
    """One published address range with its owning region."""

    network: int
    mask: int
    prefix_length: int
    region: Optional[str] = None
    service: Optional[str] = None
    network_border_group: Optional[str] = None

    @classmethod
    def from_prefix(
        cls,
        ip_prefix: str,
        region: Optional[str] = None,
        service: Optional[str] = None,
        network_border_group: Optional[str] = None,
    ) -> Optional["CidrRecord"]:
        parsed = parse_ipv4_cidr(ip_prefix)
        if parsed is None:
            return None
        network, mask, prefix_length = parsed
        return cls(network, mask, prefix_length, region, service, network_border_group)

    def contains(self, address: int) -> bool:
        return (address & self.mask) == self.network

    @property
    def cidr(self) -> str:
        return f"{format_ipv4(self.network)}/{self.prefix_length}"


@dataclass(frozen=True)
class RangeSet:
    """Immutable snapshot of every CIDR record loaded from one registry document."""

    records: Tuple[CidrRecord, ...] = ()
    sync_token: Optional[str] = None
    create_date: Optional[str] = None

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CidrRecord]:
        return iter(self.records)

    def __bool__(self) -> bool:
        return bool(self.records)


EMPTY_RANGE_SET = RangeSet()
