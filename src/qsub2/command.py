# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT
"""
Overview
--------

`qsub2` fills a PBS submission script template with a job's name, resources and command, then
submits it with `qsub` or, with `--outfile`, writes it to a file.

Configuration
-------------

Defaults can be changed by providing a yaml configuration file.  The default configuration is:

.. code-block:: yaml

   qsub2:
     config:
       debug: false
     job:
       name: job
       ncpus: auto  # integer, "auto" for the number of logical cpus on this machine, or null
       mem: 5gb  # null omits the memory clause
       queue: batch
       walltime: "30:00:00:00"  # must be quoted
       template: null  # path to a custom template
     submit:
       exec: qsub  # the submission command
       default_options: []  # options passed to the submission command before the script

Configurations are read from:

1. Site configuration [1]: sys.prefix/etc/qsub2/config.yaml
2. Global configuration [2]: ~/.config/qsub2.yaml
3. Local configuration: ./qsub2.yaml

[1] The site configuration will be read from the QSUB2_SITE_CONFIG environment variable, if set
[2] The global configuration will be read from the QSUB2_GLOBAL_CONFIG environment variable, if set

Configuration settings can also be modified through the following environment variables:

* QSUB2_DEBUG
* QSUB2_JOB_NAME
* QSUB2_JOB_NCPUS
* QSUB2_JOB_MEM
* QSUB2_JOB_QUEUE
* QSUB2_JOB_WALLTIME
* QSUB2_JOB_TEMPLATE
* QSUB2_SUBMIT_EXEC
* QSUB2_SUBMIT_DEFAULT_OPTIONS

Options given on the command line take precedence over all configuration settings.

"""

import os
import shlex
import sys

from . import submit
from . import template
from .config import Config
from .error import ConfigError
from .error import Qsub2Error
from .error import SubmitError
from .jobspec import Defaults
from .jobspec import JobSpec
from .logging import get_logger
from .options import parse_args
from .options import resolve_namespace

logger = get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        return execute(argv)
    except SubmitError as e:
        logger.error(f"error: {e}")
        for line in e.stderr.splitlines():
            logger.error(f"    {line}")
        return e.exit_code
    except Qsub2Error as e:
        logger.error(f"error: {e}")
        return e.exit_code


def execute(argv: list[str]) -> int:
    # --help and --version must work even when the configuration is invalid
    config: Config | None = None
    error: ConfigError | None = None
    try:
        config = Config()
    except ConfigError as e:
        error = e
    defaults = Defaults() if config is None else Defaults.from_config(config)
    args = parse_args(argv, defaults)
    if error is not None:
        raise error
    assert config is not None
    if args.info:
        print(__doc__)
        config.dump(sys.stdout, default_flow_style=False)
        return 0
    spec = resolve_namespace(args, defaults)
    check_input_files(spec)
    script = template.render(template.load_template(spec.template_path), spec)
    submitter = submit.QsubSubmitter(config)
    if args.dryrun:
        sys.stdout.write(script)
        if spec.outfile_path is None:
            cmd = [submitter.executable, *submitter.default_options, "<script>"]
            print(shlex.join(cmd))
        return 0
    return submit.dispatch(script, spec, submitter)


def check_input_files(spec: JobSpec) -> None:
    for file in spec.files:
        if not os.path.exists(file):
            logger.warning(f"input file {file} does not exist")
