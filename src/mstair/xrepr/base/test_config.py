# File: src/mstair/xrepr/base/test_config.py
"""
Tests for environment-driven representation limits and context flags.
"""

from __future__ import annotations

import dataclasses
import io
import logging
import os
import threading
from collections.abc import Iterator
from pathlib import Path

import pytest

from mstair.xrepr.base import config as cfg
from mstair.xrepr.base import fs_helpers
from mstair.xrepr.base.config import ReprLimits, in_desktop_mode, in_test_mode, load_repr_limits
from mstair.xrepr.base.fs_helpers import fs_load_dotenv
from mstair.xrepr.base.types import int_from_string


_LIMIT_VARS = (cfg.ENV_MAXIMUM_LENGTH, cfg.ENV_MAXIMUM_DEPTH, cfg.ENV_MAXIMUM_ELEMENTS)


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear XREPR_* vars and context overrides; do not read .env during tests."""
    monkeypatch.setattr(cfg, "fs_load_dotenv", lambda *a, **k: False)
    for name in _LIMIT_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    yield
    in_test_mode(unset_override=True)
    in_desktop_mode(unset_override=True)


# ---------- Representation limits ----------


@pytest.mark.unit
class TestLoadReprLimits:
    def test_defaults(self, clean_env: None) -> None:
        assert load_repr_limits() == ReprLimits(50, 3, 3)

    def test_values_from_environment(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None
    ) -> None:
        monkeypatch.setenv(cfg.ENV_MAXIMUM_LENGTH, "80")
        monkeypatch.setenv(cfg.ENV_MAXIMUM_DEPTH, " 5 ")
        monkeypatch.setenv(cfg.ENV_MAXIMUM_ELEMENTS, "0")
        assert load_repr_limits() == ReprLimits(80, 5, 0)

    def test_empty_value_uses_default(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None
    ) -> None:
        monkeypatch.setenv(cfg.ENV_MAXIMUM_DEPTH, "")
        assert load_repr_limits().maximum_depth == cfg.DEFAULT_MAXIMUM_DEPTH

    @pytest.mark.parametrize("raw", ["many", "2.5", "-1"])
    def test_bad_value_warns_and_uses_default(
        self,
        monkeypatch: pytest.MonkeyPatch,
        caplog: pytest.LogCaptureFixture,
        clean_env: None,
        raw: str,
    ) -> None:
        monkeypatch.setenv(cfg.ENV_MAXIMUM_ELEMENTS, raw)
        with caplog.at_level(logging.WARNING, logger=cfg.__name__):
            limits = load_repr_limits()
        assert limits.maximum_elements == cfg.DEFAULT_MAXIMUM_ELEMENTS
        assert cfg.ENV_MAXIMUM_ELEMENTS in caplog.text

    def test_limits_are_frozen(self) -> None:
        limits = ReprLimits()
        with pytest.raises(dataclasses.FrozenInstanceError):
            limits.maximum_depth = 1  # type: ignore[misc]

    def test_replace(self) -> None:
        assert ReprLimits().replace(maximum_depth=1) == ReprLimits(50, 1, 3)


@pytest.mark.unit
class TestIntFromString:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [(None, 9), ("", 9), ("  ", 9), ("12", 12), (" -3 ", -3)],
    )
    def test_conversion(self, raw: str | None, expected: int) -> None:
        assert int_from_string(raw, 9) == expected

    def test_rejects_non_integer(self) -> None:
        with pytest.raises(ValueError):
            int_from_string("x1")


# ---------- .env loading ----------


@pytest.mark.unit
class TestDotenv:
    def test_stream_sets_missing_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XREPR_DOTENV_PROBE", "before")
        monkeypatch.delenv("XREPR_DOTENV_PROBE")
        assert fs_load_dotenv(stream=io.StringIO("XREPR_DOTENV_PROBE=7\n"))
        assert os.environ["XREPR_DOTENV_PROBE"] == "7"

    def test_existing_variable_wins(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XREPR_DOTENV_PROBE", "kept")
        fs_load_dotenv(stream=io.StringIO("XREPR_DOTENV_PROBE=7\n"))
        assert os.environ["XREPR_DOTENV_PROBE"] == "kept"

    def test_override_replaces_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("XREPR_DOTENV_PROBE", "old")
        fs_load_dotenv(stream=io.StringIO("XREPR_DOTENV_PROBE=new\n"), override=True)
        assert os.environ["XREPR_DOTENV_PROBE"] == "new"

    def test_file_is_read_once(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        env_file = tmp_path / ".env"
        env_file.write_text("XREPR_DOTENV_FILE_PROBE=1\n", encoding="utf-8")
        monkeypatch.setenv("XREPR_DOTENV_FILE_PROBE", "placeholder")
        monkeypatch.delenv("XREPR_DOTENV_FILE_PROBE")

        assert fs_load_dotenv(dotenv_path=env_file)
        assert os.environ["XREPR_DOTENV_FILE_PROBE"] == "1"
        assert not fs_load_dotenv(dotenv_path=env_file)
        assert fs_load_dotenv(dotenv_path=env_file, reload=True)

    def test_missing_dotenv_is_not_an_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(fs_helpers, "fs_find_dotenv", lambda: "")
        assert fs_load_dotenv() is False


# ---------- Context flags ----------


@pytest.mark.unit
class TestContextFlags:
    def test_pytest_is_test_mode(self, clean_env: None) -> None:
        assert in_test_mode()

    def test_test_mode_override(self, clean_env: None) -> None:
        assert in_test_mode(override=False) is False
        assert in_test_mode() is False
        assert in_test_mode(unset_override=True) is True

    def test_desktop_mode_off_in_tests(self, clean_env: None) -> None:
        assert in_desktop_mode() is False

    def test_desktop_mode_override(self, clean_env: None) -> None:
        assert in_desktop_mode(override=True) is True
        assert in_desktop_mode() is True

    def test_no_color_disables_desktop_mode(
        self, monkeypatch: pytest.MonkeyPatch, clean_env: None
    ) -> None:
        in_test_mode(override=False)
        monkeypatch.setenv("NO_COLOR", "1")
        assert in_desktop_mode() is False

    def test_overrides_are_per_thread(self, clean_env: None) -> None:
        in_desktop_mode(override=True)
        seen: list[bool] = []
        worker = threading.Thread(target=lambda: seen.append(in_desktop_mode()))
        worker.start()
        worker.join()
        assert seen == [False]


# End of file: src/mstair/xrepr/base/test_config.py
