import argparse
import enum
import logging
import sys
import threading
import time
from typing import List, Optional

import requests

from ip_matcher import best_match
from range_sources.http import DEFAULT_TIMEOUT, IP_RANGES_URL, fetch_ip_ranges
from range_transforms.common import EMPTY_RANGE_SET, CidrRecord, RangeSet, parse_ipv4_address
from region_names import get_group_name, pretty_region_name

DEFAULT_USER_AGENT = "aws-region-lookup"
DEFAULT_TTL = 3600


class RefreshPolicy(enum.Enum):
    PER_QUERY = "per-query"
    ONCE_AT_STARTUP = "once"
    PERIODIC_TTL = "ttl"


class RefreshState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    FETCHING = "fetching"
    READY = "ready"


class AwsIpRanges:
    """Resolve IPv4 addresses to AWS regions using the published ip-ranges.json.

    The current RangeSet is replaced wholesale by each successful refresh. A
    failed refresh keeps whatever was loaded before. Refreshes are serialized:
    callers that waited on an in-flight refresh reuse its result instead of
    fetching again.
    """

    def __init__(
        self,
        url: str = IP_RANGES_URL,
        service_filter: Optional[str] = None,
        refresh_policy: RefreshPolicy = RefreshPolicy.PER_QUERY,
        ttl: float = DEFAULT_TTL,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        session: Optional[requests.Session] = None,
    ) -> None:
        if ttl <= 0:
            raise ValueError(f"ttl must be positive, got {ttl}")
        if timeout <= 0:
            raise ValueError(f"timeout must be positive, got {timeout}")

        self.url = url
        self.service_filter = service_filter
        self.refresh_policy = refresh_policy
        self.ttl = ttl
        self.timeout = timeout

        self._owns_session = session is None
        if session is None:
            session = requests.Session()
            session.headers["User-Agent"] = user_agent
        self.session = session

        self._range_set: RangeSet = EMPTY_RANGE_SET
        self._state = RefreshState.UNINITIALIZED
        self._fetch_lock = threading.Lock()
        # Completed refresh attempts, successful or not.
        self._attempts = 0
        self._last_attempt: Optional[float] = None
        self.last_error: Optional[str] = None

    @property
    def range_set(self) -> RangeSet:
        return self._range_set

    @property
    def state(self) -> RefreshState:
        return self._state

    def start(self) -> "AwsIpRanges":
        """Load the registry once if nothing has been attempted yet."""
        if self._attempts == 0:
            self.refresh()
        return self

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "AwsIpRanges":
        return self.start()

    def __exit__(self, *exc_info) -> None:
        self.close()

    def refresh(self) -> bool:
        """Fetch the registry and swap in the new RangeSet.

        Returns True when the RangeSet currently in effect came from a
        successful fetch by this call or by a refresh that finished while
        this call was waiting.
        """
        seen = self._attempts
        with self._fetch_lock:
            if self._attempts != seen:
                return self.last_error is None

            self._state = RefreshState.FETCHING
            try:
                result = fetch_ip_ranges(self.session, self.url, service_filter=self.service_filter, timeout=self.timeout)
            finally:
                self._state = RefreshState.READY

            if result.range_set is not None:
                self._range_set = result.range_set
            else:
                logging.warning("Keeping %d previously loaded ranges after failed refresh", len(self._range_set))

            self.last_error = result.error
            self._last_attempt = time.monotonic()
            self._attempts += 1
            return result.ok

    def _needs_refresh(self) -> bool:
        if self.refresh_policy is RefreshPolicy.PER_QUERY:
            return True
        if self.refresh_policy is RefreshPolicy.ONCE_AT_STARTUP:
            return self._attempts == 0
        return self._last_attempt is None or time.monotonic() - self._last_attempt >= self.ttl

    def lookup(self, ip: str) -> Optional[CidrRecord]:
        """Return the most specific record containing ``ip``."""
        if parse_ipv4_address(ip) is None:
            logging.debug("Not a valid IPv4 address: %r", ip)
            return None

        if self._needs_refresh():
            self.refresh()

        return best_match(self._range_set, ip)

    def resolve_region(self, ip: str) -> Optional[str]:
        """Return the display name of the region owning ``ip``, if any."""
        record = self.lookup(ip)
        if record is None or not record.region:
            return None
        return pretty_region_name(record.region)


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return number


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Resolve IPv4 addresses to AWS regions")
    parser.add_argument("ips", nargs="+", metavar="IP", help="IPv4 address(es) to resolve")
    parser.add_argument("--service", default=None, help="Only use ranges of this service (e.g., EC2)")
    parser.add_argument("--url", default=IP_RANGES_URL, help="Registry URL (default: %(default)s)")
    parser.add_argument("--timeout", type=_positive_float, default=DEFAULT_TIMEOUT, help="HTTP timeout in seconds (default: %(default)s)")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header sent with the request")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    ranges = AwsIpRanges(
        url=args.url,
        service_filter=args.service,
        refresh_policy=RefreshPolicy.ONCE_AT_STARTUP,
        timeout=args.timeout,
        user_agent=args.user_agent,
    )
    with ranges:
        if ranges.last_error is not None:
            sys.exit(1)

        for ip in args.ips:
            region = ranges.resolve_region(ip)
            if region is None:
                print(f"{ip}\t-")
            else:
                print(f"{ip}\t{region}\t{get_group_name(region)}")


if __name__ == "__main__":
    main()
