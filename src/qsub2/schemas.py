# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT

import shlex
import typing

from schema import And
from schema import Optional
from schema import Or
from schema import Schema
from schema import Use

from .util import boolean


def flag_splitter(arg: list[str] | str) -> list[str]:
    if isinstance(arg, str):
        return shlex.split(arg)
    elif not isinstance(arg, list) or not all(isinstance(_, str) for _ in arg):
        raise ValueError("expected list[str]")
    return arg


def ncpus_type(arg: typing.Any) -> int | str | None:
    """Accepts a positive integer, the string ``auto``, or None"""
    if arg is None or arg == "auto":
        return arg
    if isinstance(arg, bool) or (isinstance(arg, float) and not arg.is_integer()):
        raise ValueError(f"expected a positive integer or 'auto', got {arg!r}")
    n = int(arg)
    if n < 1:
        raise ValueError(f"expected a positive integer or 'auto', got {arg!r}")
    return n


def optional_str(arg: typing.Any) -> str | None:
    if arg is None or arg == "":
        return None
    return str(arg)


config_schema = Schema({Optional("debug"): Use(boolean)})
job_schema = Schema(
    {
        Optional("name"): And(str, len),
        Optional("ncpus"): Use(ncpus_type),
        Optional("mem"): Or(None, And(str, len)),
        Optional("queue"): And(str, len),
        # Unquoted values like 30:00:00:00 are read by YAML as base 60 integers
        Optional("walltime"): And(str, len, error="walltime must be a quoted string"),
        Optional("template"): Or(None, str),
    }
)
submit_schema = Schema(
    {
        Optional("exec"): And(str, len),
        Optional("default_options"): Use(flag_splitter),
    }
)


class EnvarSchema(Schema):
    def validate(self, data, is_root_eval=True):
        data = super().validate(data, is_root_eval=False)
        if is_root_eval:
            final = {}
            for key, value in data.items():
                name = key[6:].lower()
                if name.startswith(("job_", "submit_")):
                    section, _, field = name.partition("_")
                    final.setdefault(section, {})[field] = value
                else:
                    final.setdefault("config", {})[name] = value
            return final
        return data


environment_variable_schema = EnvarSchema(
    {
        Optional("QSUB2_DEBUG"): Use(boolean),
        Optional("QSUB2_JOB_NAME"): And(str, len),
        Optional("QSUB2_JOB_NCPUS"): Use(ncpus_type),
        Optional("QSUB2_JOB_MEM"): Use(optional_str),
        Optional("QSUB2_JOB_QUEUE"): And(str, len),
        Optional("QSUB2_JOB_WALLTIME"): And(str, len),
        Optional("QSUB2_JOB_TEMPLATE"): Use(optional_str),
        Optional("QSUB2_SUBMIT_EXEC"): And(str, len),
        Optional("QSUB2_SUBMIT_DEFAULT_OPTIONS"): Use(flag_splitter),
    },
    ignore_extra_keys=True,
)
