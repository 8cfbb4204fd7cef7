from __future__ import annotations
from typing import Protocol
from mediaproxy.domain.dataclasses.plan import TranscodePlan

class CommandRunnerPort(Protocol):
    # raises TranscodeExecutionFailed on launch failure or non-zero exit
    def run(self, plan: TranscodePlan) -> None: ...
