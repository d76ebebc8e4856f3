# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT
import os
import sys
from collections.abc import ValuesView
from typing import IO
from typing import Any

import schema
import yaml

from .error import ConfigError
from .logging import get_logger
from .logging import set_logging_level
from .schemas import config_schema
from .schemas import environment_variable_schema
from .schemas import job_schema
from .schemas import submit_schema
from .util import merge

logger = get_logger(__name__)

section_schemas: dict[str, schema.Schema] = {
    "config": config_schema,
    "job": job_schema,
    "submit": submit_schema,
}


class ConfigScope:
    def __init__(self, name: str, file: str | None, data: dict[str, Any]) -> None:
        self.name = name
        self.file = file
        self.data: dict[str, Any] = {}
        for section, section_data in data.items():
            if section not in section_schemas:
                raise ConfigError(f"{self.where}: unknown configuration section {section!r}")
            try:
                self.data[section] = section_schemas[section].validate(section_data or {})
            except schema.SchemaError as e:
                raise ConfigError(f"{self.where}: invalid {section!r} section: {e}") from None

    @property
    def where(self) -> str:
        return self.file or f"<{self.name}>"

    def __repr__(self):
        file = self.file or "<none>"
        return f"ConfigScope({self.name}: {file})"

    def __iter__(self):
        return iter(self.data)

    def get_section(self, section: str) -> Any:
        return self.data.get(section)


class Config:
    """Merged view of the configuration scopes.  Scopes pushed later take precedence"""

    def __init__(self) -> None:
        defaults = {
            "config": {
                "debug": False,
            },
            "job": {
                "name": "job",
                "ncpus": "auto",
                "mem": "5gb",
                "queue": "batch",
                "walltime": "30:00:00:00",
                "template": None,
            },
            "submit": {
                "exec": "qsub",
                "default_options": [],
            },
        }
        self.scopes: dict[str, ConfigScope] = {}
        self.push_scope(ConfigScope("defaults", None, defaults))
        for scope in ("site", "global", "local"):
            self.push_scope(read_config_scope(scope))
        if cscope := read_env_config():
            self.push_scope(cscope)
        if self.get("config:debug"):
            set_logging_level("debug")

    def push_scope(self, scope: ConfigScope) -> None:
        logger.debug(f"Pushing configuration scope {scope!r}")
        self.scopes[scope.name] = scope

    def get_config(self, section: str, scope: str | None = None) -> Any:
        scopes: ValuesView[ConfigScope] | list[ConfigScope]
        if scope is None:
            scopes = self.scopes.values()
        elif scope in self.scopes:
            scopes = [self.scopes[scope]]
        else:
            raise ValueError(f"Invalid scope {scope!r}")
        merged_section: dict[str, Any] = {}
        for config_scope in scopes:
            data = config_scope.get_section(section)
            if not data or not isinstance(data, dict):
                continue
            merged_section = merge(merged_section, data)
        return merged_section

    def get(self, path: str, default: Any = None, scope: str | None = None) -> Any:
        parts = process_config_path(path)
        section = parts.pop(0)
        value = self.get_config(section, scope=scope)
        while parts:
            key = parts.pop(0)
            # cannot use value.get(key, default) in case there is another part
            # and default is not a dict
            if not isinstance(value, dict) or key not in value:
                return default
            value = value[key]
        return value

    def dump(self, stream: IO[Any], scope: str | None = None, **kwargs: Any) -> None:
        data: dict[str, Any] = {}
        for section in self.scopes["defaults"]:
            section_data = self.get_config(section, scope=scope)
            if not section_data and scope is not None:
                continue
            data[section] = section_data
        yaml.dump({"qsub2": data}, stream, **kwargs)


def read_config_scope(scope: str) -> ConfigScope:
    data: dict[str, Any] = {}
    file = get_scope_filename(scope)
    if fd := read_config_file(file):
        if not isinstance(fd, dict) or "qsub2" not in fd:
            raise ConfigError(f"{file}: missing top-level key 'qsub2'")
        data.update(fd["qsub2"] or {})
    return ConfigScope(scope, file, data)


def get_scope_filename(scope: str) -> str:
    if scope == "site":
        if var := os.getenv("QSUB2_SITE_CONFIG"):
            return var
        return os.path.join(sys.prefix, "etc/qsub2/config.yaml")
    elif scope == "global":
        if var := os.getenv("QSUB2_GLOBAL_CONFIG"):
            return var
        elif var := os.getenv("XDG_CONFIG_HOME"):
            file = os.path.join(var, "qsub2/config.yaml")
            if os.path.exists(file):
                return file
        return os.path.expanduser("~/.config/qsub2.yaml")
    elif scope == "local":
        return os.path.abspath("./qsub2.yaml")
    raise ValueError(f"Could not determine filename for scope {scope!r}")


def read_env_config() -> ConfigScope | None:
    variables = {key: var for key, var in os.environ.items() if key.startswith("QSUB2_")}
    if not variables:
        return None
    try:
        data = environment_variable_schema.validate(variables)
    except schema.SchemaError as e:
        raise ConfigError(f"invalid environment configuration: {e}") from None
    if not data:
        return None
    return ConfigScope("environment", None, data)


def read_config_file(file: str) -> Any:
    """Load configuration settings from ``file``"""
    if not os.path.exists(file):
        return None
    try:
        with open(file) as fh:
            return yaml.safe_load(fh)
    except yaml.YAMLError as e:
        raise ConfigError(f"{file}: unable to parse configuration: {e}") from None


def process_config_path(path: str) -> list[str]:
    if path.startswith(":"):
        raise ValueError(f"Illegal leading ':' in path {path}")
    return [part for part in path.split(":") if part]
