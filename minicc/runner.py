#!/usr/bin/env python3.14
# SPDX-License-Identifier: Apache-2.0

"""
Execution harness – builds generated C with an external compiler, runs the
result and captures its standard output.
"""

import logging
import subprocess
import tempfile
from enum import Enum
from pathlib import Path
from typing import List, Optional, Protocol

log = logging.getLogger(__name__)


class ExecutionStage(Enum):
    COMPILE = "compilation"
    RUN = "run"


class ExternalToolFailure(Exception):
    """The C compiler or the generated program failed."""

    def __init__(self, stage: ExecutionStage, detail: str = ""):
        self.stage = stage
        self.detail = detail
        message = f"error: {stage.value} failed"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class CompilerRunner(Protocol):
    def run(self, c_source: str) -> str:
        """Compile and run ``c_source``, returning its captured stdout."""
        ...


class CCompilerRunner:
    """Runs a system C compiler (cc, gcc, clang) and then the built program."""

    def __init__(self, cc: str = "cc", timeout: Optional[float] = None):
        self.cc = cc
        self.timeout = timeout

    def _call(self, cmd: List[str], stage: ExecutionStage) -> subprocess.CompletedProcess:
        log.info(f"Running: {' '.join(cmd)}")
        try:
            return subprocess.run(
                cmd, capture_output=True, text=True, timeout=self.timeout
            )
        except OSError as e:
            raise ExternalToolFailure(stage, str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise ExternalToolFailure(stage, f"timed out after {e.timeout}s") from e

    def run(self, c_source: str) -> str:
        with tempfile.TemporaryDirectory(prefix="minicc-") as tmp:
            c_path = Path(tmp) / "program.c"
            exe_path = Path(tmp) / "program"
            c_path.write_text(c_source, encoding="utf-8")

            proc = self._call(
                [self.cc, str(c_path), "-o", str(exe_path)], ExecutionStage.COMPILE
            )
            if proc.returncode != 0:
                raise ExternalToolFailure(ExecutionStage.COMPILE, proc.stderr.strip())

            proc = self._call([str(exe_path)], ExecutionStage.RUN)
            if proc.returncode != 0:
                raise ExternalToolFailure(
                    ExecutionStage.RUN, f"exit code {proc.returncode}"
                )
            return proc.stdout
