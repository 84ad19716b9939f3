"""HTTP source handling for the AWS ip-ranges.json registry."""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from range_transforms.aws import transform
from range_transforms.common import RangeSet

IP_RANGES_URL = "https://ip-ranges.amazonaws.com/ip-ranges.json"
DEFAULT_TIMEOUT = 10


@dataclass(frozen=True)
class FetchResult:
    """Outcome of one registry fetch: either a RangeSet or an error message."""

    range_set: Optional[RangeSet] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.range_set is not None


def fetch_ip_ranges(
    session: Any,
    url: str = IP_RANGES_URL,
    *,
    service_filter: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> FetchResult:
    """Fetch and parse the registry. Never raises for network or data errors."""
    try:
        r = session.get(url, timeout=timeout)
        r.raise_for_status()
        data = r.json()
    except Exception as e:
        logging.error("Failed to fetch %s: %s", url, str(e))
        return FetchResult(error=f"Failed to fetch {url}: {e}")

    try:
        range_set = transform(data, service_filter)
    except Exception as e:
        logging.error("Failed to parse %s: %s", url, str(e))
        return FetchResult(error=f"Failed to parse {url}: {e}")

    logging.info("Loaded %d IPv4 ranges from %s (createDate: %s)", len(range_set), url, range_set.create_date)
    return FetchResult(range_set=range_set)
