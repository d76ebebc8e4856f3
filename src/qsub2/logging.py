# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT
import logging as builtin_logging
import sys


def get_logger(name: str):
    parts = name.split(".")
    if parts[0] != "qsub2":
        parts.insert(0, "qsub2")
    return builtin_logging.getLogger(".".join(parts))


loglevelmap: dict[str, int] = {
    "CRITICAL": builtin_logging.CRITICAL,
    "ERROR": builtin_logging.ERROR,
    "WARN": builtin_logging.WARNING,
    "WARNING": builtin_logging.WARNING,
    "INFO": builtin_logging.INFO,
    "DEBUG": builtin_logging.DEBUG,
}


def set_logging_level(levelname: str) -> None:
    logger = builtin_logging.getLogger("qsub2")
    level = loglevelmap[levelname.upper()]
    for h in logger.handlers:
        h.setLevel(level)
    logger.setLevel(level)


def configure_logging(levelname: str = "WARNING"):
    logger = builtin_logging.getLogger("qsub2")
    if not logger.handlers:
        sh = builtin_logging.StreamHandler(sys.stderr)
        sh.setFormatter(builtin_logging.Formatter("==> %(message)s"))
        logger.addHandler(sh)
    logger.propagate = False
    set_logging_level(levelname)
