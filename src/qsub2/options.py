# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT
"""
Merge command line options with defaults into a :class:`~qsub2.jobspec.JobSpec`.

The first positional argument is the job's command and every positional argument after it is an
input file.  A command with arguments of its own must therefore be quoted::

    qsub2 -n hello -@ 4 'my-program --input data.txt' data.txt

Use ``--`` to end option processing when the command or a file begins with ``-``.
"""
import argparse
from collections.abc import Sequence

from .error import ConfigError
from .error import InvalidValue
from .error import MissingValue
from .error import UnknownOption
from .jobspec import Defaults
from .jobspec import JobSpec
from .logging import get_logger
from .version import __version__

logger = get_logger(__name__)


class _Missing:
    def __repr__(self):
        return "<missing>"


MISSING = _Missing()

# (dest, long flag) of every option that sets a job field
job_options: list[tuple[str, str]] = [
    ("name", "--name"),
    ("ncpus", "--ncpus"),
    ("mem", "--mem"),
    ("queue", "--queue"),
    ("walltime", "--walltime"),
    ("template", "--template"),
    ("outfile", "--outfile"),
]


class ArgumentParser(argparse.ArgumentParser):
    def error(self, message):
        raise ConfigError(message)


class HelpFormatter(argparse.RawDescriptionHelpFormatter):
    def _format_args(self, action, default_metavar):
        # value options are parsed with nargs="?" but their value is required
        if action.option_strings and action.nargs == argparse.OPTIONAL:
            return "%s" % self._metavar_formatter(action, default_metavar)(1)
        return super()._format_args(action, default_metavar)


def make_parser(defaults: Defaults | None = None) -> ArgumentParser:
    defaults = defaults or Defaults()
    parser = ArgumentParser(
        prog="qsub2",
        description="Easily submit PBS jobs with a script template.",
        usage="%(prog)s [options] command [file ...]",
        formatter_class=HelpFormatter,
        epilog=__doc__,
        allow_abbrev=False,
    )
    # Value options take nargs="?" so that a flag given without a value is reported as missing
    # instead of swallowing the next option
    value_option = dict(nargs="?", const=MISSING, default=None)
    parser.add_argument(
        "-n", "--name", metavar="name", help=f"Job name [default: {defaults.name}]", **value_option
    )
    parser.add_argument(
        "-@",
        "--ncpus",
        metavar="ncpus",
        help="CPU number, or auto for the logical cpu count "
        f"[default: {defaults.ncpus or 'scheduler default'}]",
        **value_option,
    )
    parser.add_argument(
        "-m",
        "--mem",
        metavar="mem",
        help=f"Memory [default: {defaults.mem or 'scheduler default'}]",
        **value_option,
    )
    parser.add_argument(
        "-q", "--queue", metavar="queue", help=f"Queue [default: {defaults.queue}]", **value_option
    )
    parser.add_argument(
        "--walltime",
        metavar="walltime",
        help=f"Walltime [default: {defaults.walltime}]",
        **value_option,
    )
    parser.add_argument(
        "--template",
        metavar="path",
        help="Script template [default: built-in PBS template]",
        **value_option,
    )
    parser.add_argument(
        "--outfile",
        metavar="path",
        help="Write the script to this file instead of submitting it",
        **value_option,
    )
    parser.add_argument(
        "--dryrun",
        action="store_true",
        default=False,
        help="Print the script and the submission command but do not submit",
    )
    parser.add_argument(
        "--info", action="store_true", default=False, help="Show configuration help and exit."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("command", nargs="?", default=None, help="Command to submit")
    parser.add_argument("files", nargs="*", default=None, metavar="file", help="Input files")
    return parser


def parse_args(argv: Sequence[str], defaults: Defaults | None = None) -> argparse.Namespace:
    """Parse ``argv`` and split the positional arguments into ``command`` and ``files``.

    Raises:
        UnknownOption: an argument looks like an option but is not one
        ConfigError: any other parse failure
    """
    parser = make_parser(defaults)
    args, extras = parser.parse_known_args(list(argv))
    positionals: list[str] = [] if args.command is None else [args.command]
    positionals.extend(args.files or [])
    # argparse leaves positionals that follow an option in extras
    end_of_options = False
    for token in extras:
        if end_of_options:
            positionals.append(token)
        elif token == "--":
            end_of_options = True
        elif token.startswith("-") and token != "-":
            raise UnknownOption(token)
        else:
            positionals.append(token)
    args.command = positionals[0] if positionals else None
    args.files = positionals[1:]
    return args


def resolve(argv: Sequence[str], defaults: Defaults | None = None) -> JobSpec:
    """Resolve the command line ``argv`` into a job specification.  Fields not given on the
    command line take their value from ``defaults``"""
    return resolve_namespace(parse_args(argv, defaults), defaults)


def resolve_namespace(args: argparse.Namespace, defaults: Defaults | None = None) -> JobSpec:
    defaults = defaults or Defaults()
    for dest, flag in job_options:
        value = getattr(args, dest)
        if value is MISSING or value == "":
            raise MissingValue(flag)
    if args.command is None or not args.command.strip():
        raise MissingValue("command")

    if args.ncpus is None:
        ncpus = defaults.ncpus
    elif args.ncpus == "auto":
        if defaults.host_ncpus is None:
            raise InvalidValue("--ncpus", args.ncpus, "host CPU count is unknown")
        ncpus = defaults.host_ncpus
    else:
        ncpus = positive_int("--ncpus", args.ncpus)
    spec = JobSpec(
        name=defaults.name if args.name is None else args.name,
        command=args.command,
        files=tuple(args.files),
        ncpus=ncpus,
        mem=defaults.mem if args.mem is None else args.mem,
        queue=defaults.queue if args.queue is None else args.queue,
        walltime=defaults.walltime if args.walltime is None else args.walltime,
        template_path=defaults.template_path if args.template is None else args.template,
        outfile_path=args.outfile,
    )
    logger.debug(f"Resolved {spec}")
    return spec


def positive_int(option: str, arg: str) -> int:
    try:
        n = int(arg)
    except ValueError:
        raise InvalidValue(option, arg, "expected a positive integer or 'auto'") from None
    if n < 1:
        raise InvalidValue(option, arg, "expected a positive integer or 'auto'")
    return n
