"""Unit tests for environment loader behavior.

These tests exercise reading from a ``.env`` file via python-dotenv and
ensure idempotent behavior when files are missing.
"""

import os
from pathlib import Path

import pytest

from dialog_lifecycle.utils import env_loader


def test_load_project_env_dotenv(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """The loader should hand the project .env file to python-dotenv.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture for patching modules.
        tmp_path (pathlib.Path): Temporary directory for the test.
    """
    env_file = tmp_path / ".env"
    env_file.write_text("MODAL_CLOSE_DELAY_SEC=0.5\n")
    calls: list[dict[str, object]] = []

    def fake_load_dotenv(*_args: object, **kwargs: object) -> None:
        calls.append(kwargs)
        monkeypatch.setenv("MODAL_CLOSE_DELAY_SEC", "0.5")

    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)
    monkeypatch.setattr(env_loader, "LOAD_DOTENV", fake_load_dotenv)
    env_loader.load_project_env.cache_clear()
    env_loader.load_project_env()

    assert calls == [{"dotenv_path": env_file, "override": False}]
    assert os.getenv("MODAL_CLOSE_DELAY_SEC") == "0.5"


def test_load_project_env_real_dotenv(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Values already in the environment must not be overridden.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture for patching modules.
        tmp_path (pathlib.Path): Temporary directory for the test.
    """
    env_file = tmp_path / ".env"
    env_file.write_text("DIALOG_LOG_LEVEL=DEBUG\nMODAL_ESC_KEY_CODE=99\n")
    monkeypatch.setenv("DIALOG_LOG_LEVEL", "WARNING")
    # Registered first so the loaded value is dropped again on teardown
    monkeypatch.setenv("MODAL_ESC_KEY_CODE", "")
    monkeypatch.delenv("MODAL_ESC_KEY_CODE")
    monkeypatch.setattr(env_loader, "_ENV_FILE", env_file)

    env_loader.load_project_env.cache_clear()
    env_loader.load_project_env()

    assert os.getenv("DIALOG_LOG_LEVEL") == "WARNING"
    assert os.getenv("MODAL_ESC_KEY_CODE") == "99"


def test_load_project_env_no_file(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Missing env files should not crash the loader.

    Args:
        monkeypatch (pytest.MonkeyPatch): Fixture for patching modules.
        tmp_path (pathlib.Path): Temporary directory for the test.
    """
    calls: list[object] = []
    missing = tmp_path / "missing.env"
    monkeypatch.setattr(env_loader, "_ENV_FILE", missing)
    monkeypatch.setattr(env_loader, "LOAD_DOTENV", lambda **kwargs: calls.append(kwargs))

    env_loader.load_project_env.cache_clear()
    env_loader.load_project_env()

    assert calls == []
