import json
import threading
from pathlib import Path
from typing import Any, Callable, List, Optional

import pytest
import requests

from range_transforms.common import CidrRecord, RangeSet


SAMPLES_DIR = Path(__file__).resolve().parent.parent / "samples"


class FakeResponse:
    """Minimal stand-in for requests.Response for tests.

    Supports .text, .json() and .raise_for_status().
    """

    def __init__(self, *, text: Optional[str] = None, json_data: Any = None, status_code: int = 200) -> None:
        self._text = text
        self._json = json_data
        self.status_code = status_code
        self.headers = {}

    @property
    def text(self) -> str:
        if self._text is not None:
            return self._text
        return json.dumps(self._json)

    def json(self) -> Any:
        if self._text is not None:
            return json.loads(self._text)
        return self._json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    """Records GET calls and answers them from a queue of responses or exceptions.

    The last queued item is reused once the queue runs dry. When ``gate`` is
    set, every call waits for it before answering.
    """

    def __init__(self, *responses: Any, gate: Optional[threading.Event] = None) -> None:
        self._responses = list(responses)
        self.gate = gate
        self.entered = threading.Event()
        self.calls: List[dict] = []
        self.headers: dict = {}
        self.closed = False
        self._lock = threading.Lock()

    def get(self, url: str, **kwargs: Any) -> Any:
        with self._lock:
            self.calls.append({"url": url, **kwargs})
            item = self._responses.pop(0) if len(self._responses) > 1 else self._responses[0]
        self.entered.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if isinstance(item, BaseException):
            raise item
        return item

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def sample_document() -> dict:
    return json.loads((SAMPLES_DIR / "aws_ip_ranges.json").read_text(encoding="utf-8"))


@pytest.fixture
def sample_response(sample_document: dict) -> FakeResponse:
    return FakeResponse(json_data=sample_document)


@pytest.fixture
def make_range_set() -> Callable[..., RangeSet]:
    """Build a RangeSet from ``(cidr, region)`` pairs."""

    def _make(*entries) -> RangeSet:
        records = []
        for cidr, region in entries:
            record = CidrRecord.from_prefix(cidr, region=region)
            assert record is not None, cidr
            records.append(record)
        return RangeSet(records=tuple(records))

    return _make
