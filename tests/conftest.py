"""
Shared pytest fixtures for Rigger tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import logging as _logging
import os as _os
import pathlib as _pathlib
import typing as _typing
import unittest.mock as _mock

import click.testing as _click_testing
import pytest as _pytest

import rigger.config as config

# =============================================================================
# Environment Isolation
# =============================================================================

# Environment variables that change Rigger behavior
ENV_KEYS_TO_CLEAR = [
    "RIGGER_ENV_FILE",
    "RIGGER_LOG_LEVEL",
    "RIGGER_STRICT_UNDEFINED",
    "RIGGER_OUTPUT_FORMAT",
    "RIGGER_TEMPLATE_EXTENSION",
    "RIGGER_COLOR",
    "NO_COLOR",
]


@_pytest.fixture
def clean_env() -> dict[str, str]:
    """
    Return environment dict with Rigger-related keys removed.

    Use with mock.patch.dict to isolate tests from the actual environment.
    """
    return {k: v for k, v in _os.environ.items() if k not in ENV_KEYS_TO_CLEAR}


@_pytest.fixture
def isolated_env(clean_env: dict[str, str]):
    """
    Context manager that isolates tests from environment variables.

    Usage:
        def test_something(isolated_env):
            with isolated_env:
                settings = config.Settings.construct_without_dotenv()
    """
    return _mock.patch.dict(_os.environ, clean_env, clear=True)


@_pytest.fixture(autouse=True)
def restore_rigger_logger() -> _typing.Iterator[None]:
    """Undo the handler and propagation changes the CLI makes to the package logger."""
    logger = _logging.getLogger("rigger")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    yield
    logger.handlers, level, logger.propagate = saved
    logger.setLevel(level)


@_pytest.fixture
def clean_settings(isolated_env) -> config.Settings:
    """Settings with defaults only, isolated from environment and .env file."""
    with isolated_env:
        return config.Settings.construct_without_dotenv()


# =============================================================================
# Values Fixtures
# =============================================================================


@_pytest.fixture
def values_dir(tmp_path: _pathlib.Path) -> _pathlib.Path:
    """
    A directory with a base values file and an environment overlay.

    base.yaml defines an image built from templates; prod.yaml overrides
    the tag and adds a replica count.
    """
    (tmp_path / "base.yaml").write_text(
        "registry: registry.example.com\n"
        "image:\n"
        "  name: web\n"
        "  tag: latest\n"
        '  ref: "{{ registry }}/{{ image.name }}:{{ image.tag }}"\n'
        "ports:\n"
        "  - 80\n"
    )
    (tmp_path / "prod.yaml").write_text(
        "image:\n"
        "  tag: '1.2.3'\n"
        "replicas: 3\n"
        "ports:\n"
        "  - 443\n"
    )
    return tmp_path


@_pytest.fixture
def cli_runner() -> _click_testing.CliRunner:
    """Click test runner."""
    return _click_testing.CliRunner()
