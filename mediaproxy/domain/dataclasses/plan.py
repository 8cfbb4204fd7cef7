from __future__ import annotations

import shlex
from dataclasses import dataclass
from typing import Iterator, List, Tuple


@dataclass(frozen=True)
class TranscodePlan:
    """
    One external transcode invocation: program name, flags and positional
    paths, in order. Built once, only ever executed.
    """
    tokens: Tuple[str, ...]

    def __post_init__(self):
        if not self.tokens:
            raise ValueError("a transcode plan needs at least a program name")

    @property
    def program(self) -> str:
        return self.tokens[0]

    @property
    def output_path(self) -> str:
        return self.tokens[-1]

    def as_command(self) -> List[str]:
        return list(self.tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens)

    def __str__(self) -> str:
        return shlex.join(self.tokens)
