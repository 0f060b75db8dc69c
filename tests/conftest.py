"""Pytest fixtures for service-template tests."""

import io

import pytest

from service_template import config as config_module


class FakeCommand:
    """Command double that records how it was run."""

    def __init__(self, synopsis="test command", help_text="This is a test command", result=0):
        self.synopsis_text = synopsis
        self.help_text = help_text
        self.result = result
        self.calls: list[list[str]] = []

    def help(self) -> str:
        return self.help_text

    def synopsis(self) -> str:
        return self.synopsis_text

    def run(self, args: list[str]) -> int:
        self.calls.append(list(args))
        return self.result


class CountingFactory:
    """Factory that builds a FakeCommand and counts invocations."""

    def __init__(self, command=None, error=None):
        self.command = command or FakeCommand()
        self.error = error
        self.calls = 0

    def __call__(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.command


@pytest.fixture
def out():
    """In-memory help writer."""
    return io.StringIO()


@pytest.fixture
def fake_command():
    return FakeCommand


@pytest.fixture
def counting_factory():
    return CountingFactory


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Run with no user config, an empty project directory and no env overrides."""
    monkeypatch.setattr(config_module, "USER_CONFIG_PATH", tmp_path / "user" / "config.toml")
    project = tmp_path / "project"
    project.mkdir()
    (project / ".git").mkdir()
    monkeypatch.chdir(project)
    for var in config_module.ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    return project
