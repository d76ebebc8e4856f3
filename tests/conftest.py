# Copyright NTESS. See COPYRIGHT file for details.
#
# SPDX-License-Identifier: MIT

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def add_mock_path():
    save_env = os.environ.copy()
    mock = os.path.join(os.path.dirname(__file__), "mock")
    assert os.path.exists(mock), mock
    os.environ["PATH"] = f"{mock}:{os.environ['PATH']}"
    yield
    os.environ.clear()
    os.environ.update(save_env)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep site, global, and local configuration files and QSUB2_ variables out of tests"""
    for key in list(os.environ):
        if key.startswith(("QSUB2_", "MOCK_QSUB_")):
            monkeypatch.delenv(key)
    monkeypatch.setenv("QSUB2_SITE_CONFIG", str(tmp_path / "site.yaml"))
    monkeypatch.setenv("QSUB2_GLOBAL_CONFIG", str(tmp_path / "global.yaml"))
    workdir = tmp_path / "work"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    yield workdir


@pytest.fixture
def fixtures_dir():
    return os.path.join(os.path.dirname(__file__), "fixtures")
