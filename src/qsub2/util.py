# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT

import os
import stat
from typing import Any


def set_executable(path: str) -> None:
    """Set executable bits on ``path``"""
    mode = os.stat(path).st_mode
    if mode & stat.S_IRUSR:
        mode |= stat.S_IXUSR
    if mode & stat.S_IRGRP:
        mode |= stat.S_IXGRP
    if mode & stat.S_IROTH:
        mode |= stat.S_IXOTH
    os.chmod(path, mode)


def merge(dest: Any, source: Any) -> Any:
    """Merge ``source`` into a copy of ``dest``.  Dictionaries are merged recursively, any other
    value in ``source`` replaces the value in ``dest``"""
    if isinstance(dest, dict) and isinstance(source, dict):
        merged = dict(dest)
        for key, value in source.items():
            merged[key] = merge(merged[key], value) if key in merged else value
        return merged
    return source


def boolean(arg: Any) -> bool:
    if isinstance(arg, str):
        return arg.lower() not in ("0", "off", "false", "no", "")
    return bool(arg)
