import logging
from typing import Any, List, Optional

from range_transforms.common import CidrRecord, RangeSet


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def transform(data: Any, service_filter: Optional[str] = None) -> RangeSet:
    """Transform the AWS ip-ranges.json document into a RangeSet.

    Raises ValueError when the document does not carry a ``prefixes`` list.
    Individual entries that cannot be parsed are skipped.
    """
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")

    prefixes = data.get("prefixes")
    if not isinstance(prefixes, list):
        raise ValueError("Document has no 'prefixes' list")

    wanted = service_filter.upper() if service_filter else None
    records: List[CidrRecord] = []
    skipped = 0

    for prefix in prefixes:
        if not isinstance(prefix, dict):
            skipped += 1
            continue

        service = _optional_str(prefix.get("service"))
        if wanted is not None and (service or "").upper() != wanted:
            continue

        ip = prefix.get("ip_prefix")
        record = CidrRecord.from_prefix(
            ip,
            region=_optional_str(prefix.get("region")),
            service=service,
            network_border_group=_optional_str(prefix.get("network_border_group")),
        )
        if record is None:
            logging.debug("Skipping unparseable prefix: %r", ip)
            skipped += 1
            continue
        records.append(record)

    if skipped:
        logging.debug("Skipped %d malformed prefix entries", skipped)

    return RangeSet(
        records=tuple(records),
        sync_token=_optional_str(data.get("syncToken")),
        create_date=_optional_str(data.get("createDate")),
    )
