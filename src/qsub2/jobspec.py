# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT
from dataclasses import dataclass
from dataclasses import replace

import psutil

from .config import Config


@dataclass(frozen=True)
class JobSpec:
    """
    Fully resolved description of a single PBS job submission.

    ``ncpus`` and ``mem`` are optional: when None the corresponding resource clause is omitted
    from the selection line and the scheduler's own default applies.
    """

    # ---- identity ----
    name: str

    # ---- execution ----
    command: str
    files: tuple[str, ...] = ()

    # ---- resources ----
    ncpus: int | None = None
    mem: str | None = None
    queue: str = "batch"
    walltime: str = "30:00:00:00"

    # ---- IO ----
    template_path: str | None = None
    outfile_path: str | None = None

    def with_updates(self, **kwargs) -> "JobSpec":
        return replace(self, **kwargs)


@dataclass(frozen=True)
class Defaults:
    """Values used for every job field not given on the command line"""

    name: str = "job"
    ncpus: int | None = None
    mem: str | None = "5gb"
    queue: str = "batch"
    walltime: str = "30:00:00:00"
    template_path: str | None = None
    # logical CPU count of the submitting host, the value of ncpus "auto"
    host_ncpus: int | None = None

    @classmethod
    def from_config(cls, config: Config) -> "Defaults":
        host_ncpus = host_cpu_count()
        ncpus = config.get("job:ncpus")
        if ncpus == "auto":
            ncpus = host_ncpus
        return cls(
            name=config.get("job:name"),
            ncpus=ncpus,
            mem=config.get("job:mem"),
            queue=config.get("job:queue"),
            walltime=config.get("job:walltime"),
            template_path=config.get("job:template"),
            host_ncpus=host_ncpus,
        )


def host_cpu_count() -> int:
    """Number of logical processors on this machine"""
    return psutil.cpu_count(logical=True) or 1
