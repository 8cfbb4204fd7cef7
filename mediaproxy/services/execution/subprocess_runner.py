from __future__ import annotations

import subprocess
from typing import IO, Optional

from mediaproxy.common.logging import get_logger
from mediaproxy.domain.dataclasses.plan import TranscodePlan
from mediaproxy.domain.errors import TranscodeExecutionFailed
from mediaproxy.domain.ports.runner import CommandRunnerPort

logger = get_logger(__name__)


class SubprocessRunner(CommandRunnerPort):
    """
    Runs a TranscodePlan and blocks until it exits. Standard streams go to
    the caller's console unless overridden; nothing is parsed back.
    """

    def __init__(self, stdout: Optional[IO] = None, stderr: Optional[IO] = None) -> None:
        self.stdout = stdout
        self.stderr = stderr

    def run(self, plan: TranscodePlan) -> None:
        logger.info("Executing %s command: %s", plan.program, plan)
        try:
            proc = subprocess.run(
                plan.as_command(),
                stdout=self.stdout,
                stderr=self.stderr,
                check=False,
            )
        except OSError as e:
            raise TranscodeExecutionFailed(
                f"failed to execute {plan.program}", path=plan.output_path, detail=str(e)
            ) from e

        if proc.returncode != 0:
            raise TranscodeExecutionFailed(
                f"{plan.program} returned non-zero exit code {proc.returncode}",
                path=plan.output_path,
                returncode=proc.returncode,
            )
