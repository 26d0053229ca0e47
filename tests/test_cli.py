from __future__ import annotations

import argparse
import logging

import pytest

from scm_salary import cli
from scm_salary.core.config import ConfigurationError
from scm_salary.core.log.context import ContextFilter
from scm_salary.services.downloader import RunSummary


@pytest.fixture()
def quiet_cli(monkeypatch):
    monkeypatch.setattr(cli, "init_logging", lambda **kwargs: None)
    monkeypatch.setattr(cli, "shutdown_logging", lambda: None)
    monkeypatch.setattr(cli.Settings, "from_env", classmethod(lambda cls, dotenv_path=None: cls()))
    return monkeypatch


def test_parse_args_defaults() -> None:
    args = cli.parse_args([])

    assert args.year == 2024
    assert args.occupation_set == "core"
    assert args.force_refresh is False


def test_parse_args_positional_values() -> None:
    args = cli.parse_args(["2023", "both", "yes"])

    assert args.year == 2023
    assert args.occupation_set == "both"
    assert args.force_refresh is True


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("true", True), ("T", True), ("1", True), ("false", False), ("No", False), ("0", False)],
)
def test_parse_bool(raw: str, expected: bool) -> None:
    assert cli.parse_bool(raw) is expected


def test_parse_bool_rejects_other_text() -> None:
    with pytest.raises(argparse.ArgumentTypeError):
        cli.parse_bool("maybe")


def test_invalid_occupation_set_exits() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["2024", "everything"])


def test_main_passes_arguments_through(quiet_cli) -> None:
    calls = []

    def fake_download(year, occupation_set, force_refresh, settings):
        calls.append((year, occupation_set, force_refresh))
        return RunSummary(year=year, occupation_set=occupation_set, total=3, successful=3)

    quiet_cli.setattr(cli, "download_scm_data", fake_download)

    assert cli.main(["2022", "extended", "true"]) == 0
    assert calls == [(2022, "extended", True)]


def test_main_returns_zero_for_skipped_run(quiet_cli) -> None:
    quiet_cli.setattr(
        cli,
        "download_scm_data",
        lambda *args, **kwargs: RunSummary(year=2024, occupation_set="core", skipped=True, existing_count=14),
    )

    assert cli.main([]) == 0


def test_main_returns_one_when_errors_recorded(quiet_cli) -> None:
    quiet_cli.setattr(
        cli,
        "download_scm_data",
        lambda *args, **kwargs: RunSummary(
            year=2024, occupation_set="core", total=14, successful=13, errors=1
        ),
    )

    assert cli.main([]) == 1


def test_main_returns_two_on_configuration_error(quiet_cli) -> None:
    def fail(*args, **kwargs):
        raise ConfigurationError("BLS API key not found. Please set BLS_KEY environment variable.")

    quiet_cli.setattr(cli, "download_scm_data", fail)

    assert cli.main([]) == 2


def _context_of_new_record() -> str:
    record = logging.LogRecord("scm_salary.cli", logging.INFO, __file__, 1, "msg", None, None)
    ContextFilter().filter(record)
    return record.context


def test_job_context_is_bound_only_during_the_run(quiet_cli) -> None:
    seen = []

    def fake_download(*args, **kwargs):
        seen.append(_context_of_new_record())
        return RunSummary(year=2024, occupation_set="core")

    quiet_cli.setattr(cli, "download_scm_data", fake_download)

    cli.main([])

    assert seen == ["job=download "]
    assert _context_of_new_record() == ""


def test_non_numeric_setting_returns_two(monkeypatch) -> None:
    monkeypatch.setattr(cli, "init_logging", lambda **kwargs: None)
    monkeypatch.setattr(cli, "shutdown_logging", lambda: None)
    monkeypatch.setattr("scm_salary.core.config._load_env", lambda dotenv_path=None: None)
    monkeypatch.setenv("BLS_TIMEOUT", "thirty")

    assert cli.main([]) == 2
