# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT


class Qsub2Error(Exception):
    exit_code: int = 1


class ConfigError(Qsub2Error):
    exit_code = 2


class UnknownOption(ConfigError):
    def __init__(self, token: str) -> None:
        super().__init__(f"unrecognized option {token!r}")
        self.token = token


class MissingValue(ConfigError):
    def __init__(self, option: str) -> None:
        if option.startswith("-"):
            super().__init__(f"option {option} requires a value")
        else:
            super().__init__(f"missing required argument: {option}")
        self.option = option


class InvalidValue(ConfigError):
    def __init__(self, option: str, value: str, reason: str) -> None:
        super().__init__(f"invalid value for {option}: {value!r} ({reason})")
        self.option = option
        self.value = value


class TemplateNotFound(Qsub2Error):
    exit_code = 3

    def __init__(self, path: str, reason: str | None = None) -> None:
        message = f"template {path!r} not found"
        if reason:
            message += f": {reason}"
        super().__init__(message)
        self.path = path


class RenderError(Qsub2Error):
    exit_code = 4


class WriteError(Qsub2Error):
    exit_code = 5

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"unable to write script to {path!r}: {reason}")
        self.path = path


class SubmitError(Qsub2Error):
    """The submission command was not found or exited with a non-zero status.  ``exit_code`` is
    the command's own exit status, or 1 when it was killed by a signal"""

    def __init__(self, command: str, returncode: int, stderr: str = "") -> None:
        if returncode == 127 and not stderr:
            message = f"{command} not found on PATH"
        else:
            message = f"{command} failed with exit code {returncode}"
        super().__init__(message)
        self.command = command
        self.exit_code = returncode if returncode > 0 else 1
        self.stderr = stderr
