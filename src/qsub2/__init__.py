# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT

import os

from .config import Config
from .error import ConfigError
from .error import InvalidValue
from .error import MissingValue
from .error import Qsub2Error
from .error import RenderError
from .error import SubmitError
from .error import TemplateNotFound
from .error import UnknownOption
from .error import WriteError
from .jobspec import Defaults
from .jobspec import JobSpec
from .logging import get_logger
from .options import resolve
from .submit import QsubSubmitter
from .submit import dispatch
from .template import load_template
from .template import render
from .version import __version__

__all__ = [
    "Config",
    "ConfigError",
    "Defaults",
    "InvalidValue",
    "JobSpec",
    "MissingValue",
    "Qsub2Error",
    "QsubSubmitter",
    "RenderError",
    "SubmitError",
    "TemplateNotFound",
    "UnknownOption",
    "WriteError",
    "__version__",
    "dispatch",
    "get_logger",
    "load_template",
    "render",
    "resolve",
]


def _initial_logging_setup(*, _ini_setup=[False]):
    from . import logging

    if _ini_setup[0]:
        return
    logging.configure_logging()
    if levelname := os.getenv("QSUB2_LOG_LEVEL"):
        logging.set_logging_level(levelname)
    if os.getenv("QSUB2_DEBUG", "no").lower() in ("yes", "true", "1", "on"):
        logging.set_logging_level("DEBUG")
    _ini_setup[0] = True


_initial_logging_setup()
