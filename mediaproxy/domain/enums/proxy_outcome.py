from __future__ import annotations
from enum import StrEnum

class ProxyOutcome(StrEnum):
    skipped = "skipped"
    succeeded = "succeeded"
    failed = "failed"
