# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT
"""
Submission script templates.

A template is plain text containing any of the placeholders

* ``{name}``: job name
* ``{ncpus}``: ``:ncpus=N`` resource clause, or nothing when no CPU count was requested
* ``{mem}``: ``:mem=M`` resource clause, or nothing when no memory was requested
* ``{queue}``: destination queue
* ``{walltime}``: walltime limit
* ``{command}``: the job's command line

Any other text, including brace expressions that are not placeholders, is copied unchanged.
"""
import importlib.resources
import os
import re

from .error import RenderError
from .error import TemplateNotFound
from .jobspec import JobSpec
from .logging import get_logger

logger = get_logger(__name__)

placeholder_re = re.compile(r"\{(name|ncpus|mem|queue|walltime|command)\}")


def default_template() -> str:
    return importlib.resources.files("qsub2").joinpath("templates/default.sh.in").read_text()


def load_template(path: str | None = None) -> str:
    """Return the text of the template at ``path``, or of the built-in template"""
    if path is None:
        logger.debug("Using the built-in submission template")
        return default_template()
    if not os.path.isfile(path):
        raise TemplateNotFound(path)
    logger.debug(f"Reading submission template from {path}")
    try:
        with open(path, encoding="utf-8") as fh:
            return fh.read()
    except UnicodeDecodeError as e:
        raise RenderError(f"template {path!r} is not valid UTF-8 text: {e}") from None
    except OSError as e:
        raise TemplateNotFound(path, e.strerror) from None


def format_fields(spec: JobSpec) -> dict[str, str]:
    """Placeholder values for ``spec``, formatted for a PBS script"""
    return {
        "name": spec.name,
        "ncpus": "" if spec.ncpus is None else f":ncpus={spec.ncpus}",
        "mem": "" if spec.mem is None else f":mem={spec.mem}",
        "queue": spec.queue,
        "walltime": spec.walltime,
        "command": spec.command,
    }


def render(template: str, spec: JobSpec) -> str:
    """Substitute the fields of ``spec`` into ``template``.

    Substitution is a single pass, so placeholder text inside a substituted value is not
    expanded again.

    Raises:
        RenderError: ``template`` never references ``{command}``
    """
    if "{command}" not in template:
        raise RenderError("template does not contain the {command} placeholder")
    fields = format_fields(spec)
    return placeholder_re.sub(lambda m: fields[m.group(1)], template)
