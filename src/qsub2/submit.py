# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT

import os
import shutil
import subprocess
import sys
import tempfile
from typing import TextIO

from .config import Config
from .error import SubmitError
from .error import WriteError
from .jobspec import JobSpec
from .logging import get_logger
from .util import set_executable

logger = get_logger(__name__)


class QsubSubmitter:
    """Hand rendered scripts to the PBS ``qsub`` command"""

    def __init__(self, config: Config | None = None) -> None:
        self.config = config or Config()

    @property
    def executable(self) -> str:
        return self.config.get("submit:exec") or "qsub"

    @property
    def default_options(self) -> list[str]:
        return self.config.get("submit:default_options") or []

    def prepare_command_line(self, script: str) -> list[str]:
        qsub = shutil.which(self.executable)
        if qsub is None:
            raise SubmitError(self.executable, 127)
        return [qsub, *self.default_options, script]

    def submit(self, script: str) -> str:
        """Submit the script file ``script`` and return qsub's output, the job id"""
        args = self.prepare_command_line(script)
        logger.debug(f"Submitting job: {' '.join(args)}")
        try:
            p = subprocess.run(args, capture_output=True, encoding="utf-8")
        except OSError as e:
            raise SubmitError(self.executable, 127, e.strerror or str(e)) from None
        if p.returncode != 0:
            raise SubmitError(self.executable, p.returncode, p.stderr.strip())
        jobid = p.stdout.strip()
        logger.debug(f"Submitted batch with jobid={jobid}")
        return jobid


def write_script(script: str, path: str) -> str:
    """Write ``script`` to ``path`` and make it executable"""
    try:
        if dirname := os.path.dirname(path):
            os.makedirs(dirname, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(script)
        set_executable(path)
    except OSError as e:
        raise WriteError(path, e.strerror or str(e)) from None
    logger.debug(f"Wrote submission script to {path}")
    return path


def dispatch(
    script: str,
    spec: JobSpec,
    submitter: QsubSubmitter | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Write ``script`` to ``spec.outfile_path`` or, when no outfile is requested, submit it.

    The job id reported by qsub is printed to ``stdout``.  Returns the exit status of the
    invocation: 0 on success.

    Raises:
        WriteError: the script could not be written
        SubmitError: qsub is missing or rejected the job
    """
    if spec.outfile_path is not None:
        write_script(script, spec.outfile_path)
        return 0
    submitter = submitter or QsubSubmitter()
    stdout = stdout or sys.stdout
    try:
        fd, path = tempfile.mkstemp(prefix="qsub2-", suffix=".sh")
    except OSError as e:
        raise WriteError(tempfile.gettempdir(), e.strerror or str(e)) from None
    os.close(fd)
    try:
        write_script(script, path)
        jobid = submitter.submit(path)
    finally:
        # qsub spools its own copy of the script
        os.remove(path)
    if jobid:
        stdout.write(f"{jobid}\n")
    return 0
