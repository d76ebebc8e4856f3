# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT

import os

import pytest

import qsub2
from qsub2.jobspec import JobSpec
from qsub2.template import default_template
from qsub2.template import load_template
from qsub2.template import render


def hello_job(**kwargs) -> JobSpec:
    spec = JobSpec(name="job", command='echo "Hello, world!"', queue="batch")
    return spec.with_updates(**kwargs)


def test_default_template(fixtures_dir):
    text = render(load_template(None), hello_job())
    with open(os.path.join(fixtures_dir, "expected_default_script.sh")) as fh:
        assert text == fh.read()
    lines = text.splitlines()
    assert lines.count("#PBS -l select=1") == 1
    assert "#PBS -N job" in lines
    assert "#PBS -q batch" in lines
    assert "#PBS -l walltime=30:00:00:00" in lines
    assert ":mem=" not in text
    assert lines[-3:] == ["cd $PBS_O_WORKDIR", "", 'echo "Hello, world!"']


def test_default_template_placeholders():
    text = default_template()
    for placeholder in ("{name}", "{ncpus}", "{mem}", "{queue}", "{walltime}", "{command}"):
        assert placeholder in text
    assert load_template() == text


def test_ncpus_clause():
    base = render(load_template(), hello_job()).splitlines()
    text = render(load_template(), hello_job(ncpus=4)).splitlines()
    assert "#PBS -l select=1:ncpus=4" in text
    changed = [(a, b) for a, b in zip(base, text) if a != b]
    assert changed == [("#PBS -l select=1", "#PBS -l select=1:ncpus=4")]


def test_mem_clause():
    text = render(load_template(), hello_job(ncpus=2, mem="5gb"))
    assert "#PBS -l select=1:ncpus=2:mem=5gb\n" in text
    text = render(load_template(), hello_job(mem="5gb"))
    assert "#PBS -l select=1:mem=5gb\n" in text


def test_render_is_deterministic():
    spec = hello_job(name="my-job", ncpus=8, mem="1gb", queue="long", walltime="01:00:00")
    template = load_template()
    assert render(template, spec) == render(template, spec)


def test_unknown_placeholders_pass_through():
    template = "#!/bin/sh\n#PBS -N {name}\necho {unknown} ${HOME} {Name} { name }\n{command}\n"
    text = render(template, hello_job(name="spam"))
    assert text == (
        '#!/bin/sh\n#PBS -N spam\necho {unknown} ${HOME} {Name} { name }\necho "Hello, world!"\n'
    )


def test_values_are_not_expanded_again():
    text = render("{name}: {command}", hello_job(name="{command}", command="echo {name}"))
    assert text == "{command}: echo {name}"


def test_repeated_placeholders():
    text = render("{name} {name}\n{command}", hello_job(name="a"))
    assert text.startswith("a a\n")


def test_template_without_command():
    with pytest.raises(qsub2.RenderError):
        render("#!/bin/sh\n#PBS -N {name}\n", hello_job())


def test_load_custom_template(tmpdir):
    path = os.path.join(tmpdir.strpath, "custom.sh")
    with open(path, "w") as fh:
        fh.write("#!/bin/sh\n#PBS -l select=2{ncpus}\n{command}\n")
    text = render(load_template(path), hello_job(ncpus=16))
    assert text == '#!/bin/sh\n#PBS -l select=2:ncpus=16\necho "Hello, world!"\n'


def test_template_not_found(tmpdir):
    with pytest.raises(qsub2.TemplateNotFound) as e:
        load_template("missing.sh")
    assert e.value.path == "missing.sh"
    assert "missing.sh" in str(e.value)
    assert e.value.exit_code == 3
    with pytest.raises(qsub2.TemplateNotFound):
        load_template(tmpdir.strpath)


def test_template_not_text(tmpdir):
    path = os.path.join(tmpdir.strpath, "binary.sh")
    with open(path, "wb") as fh:
        fh.write(b"\xff\xfe{command}\n")
    with pytest.raises(qsub2.RenderError):
        load_template(path)
