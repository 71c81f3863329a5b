import logging
import signal
import threading
from unittest.mock import patch

import pytest

from render_localized_html import cli
from render_localized_html.cli import setup_logging


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("render_localized_html.cli.setup_logging") as mock_setup_logging:
        yield mock_setup_logging


def test_main_renders_workspace(workspace):
    assert cli.main(["-w", str(workspace), "-i", "site"]) == 0
    output = workspace / "localized"
    assert (output / "index.html").exists()
    assert "こんにちは" in (output / "ja-JP" / "index.html").read_text(encoding="utf-8")


def test_main_accepts_directory_alias_and_output(workspace):
    assert cli.main(["-w", str(workspace), "-d", "site", "-o", "dist"]) == 0
    assert (workspace / "dist" / "ja-JP" / "index.html").exists()


def test_main_restricts_locales(workspace):
    assert cli.main(["-w", str(workspace), "-i", "site", "--locale", "en-US"]) == 0
    assert not (workspace / "localized" / "ja-JP").exists()


def test_main_without_default_subdirectory(workspace):
    assert cli.main(["-w", str(workspace), "-i", "site", "--no-default-subdirectory"]) == 0
    assert not (workspace / "localized" / "en-US").exists()


def test_main_keep_output(workspace):
    (workspace / "localized").mkdir()
    (workspace / "localized" / "robots.txt").write_text("", encoding="utf-8")

    assert cli.main(["-w", str(workspace), "-i", "site", "--keep-output"]) == 0
    assert (workspace / "localized" / "robots.txt").exists()


def test_main_verbose_flag(workspace, no_logging_setup):
    cli.main(["-w", str(workspace), "-i", "site", "-v", "--log-file", "run.log"])
    no_logging_setup.assert_called_once_with(True, "run.log")


@pytest.mark.parametrize(
    "workspace_dir, args",
    [
        ("missing", ["-i", "site"]),
        (".", ["-i", "nowhere"]),
        (".", ["-i", "site", "-t", "missing.json"]),
        (".", ["-i", "."]),
    ],
)
def test_main_missing_inputs_return_error(workspace, workspace_dir, args, caplog):
    assert cli.main(["-w", str(workspace / workspace_dir)] + args) == 1
    assert "not found" in caplog.text
    assert not (workspace / "localized").exists()


def test_main_unknown_default_culture_returns_error(workspace, caplog):
    (workspace / "translation.json").write_text(
        '{"defaultCulture": "xx-YY", "ids": {}}', encoding="utf-8")
    assert cli.main(["-w", str(workspace), "-i", "site"]) == 1
    assert "default culture not found" in caplog.text


def test_main_unknown_locale_flag(workspace):
    assert cli.main(["-w", str(workspace), "-i", "site", "--locale", "xx-YY"]) == 1


def test_main_requires_workspace():
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])
    assert excinfo.value.code == 2


def test_install_cancel_handler_sets_event():
    cancel = threading.Event()
    previous = cli.install_cancel_handler(cancel)
    try:
        handler = signal.getsignal(signal.SIGINT)
        handler(signal.SIGINT, None)
    finally:
        signal.signal(signal.SIGINT, previous)
    assert cancel.is_set()


@patch("render_localized_html.cli.logging.basicConfig")
@patch("render_localized_html.cli.logging.FileHandler")
def test_setup_logging_adds_file_handler(mock_file_handler, mock_basic_config):
    setup_logging(verbose=True, log_file="run.log")

    mock_file_handler.assert_called_once_with("run.log", encoding="utf-8")
    kwargs = mock_basic_config.call_args.kwargs
    assert kwargs["level"] == logging.DEBUG
    assert mock_file_handler.return_value in kwargs["handlers"]


@patch("render_localized_html.cli.logging.basicConfig")
def test_setup_logging_defaults_to_info(mock_basic_config):
    setup_logging()

    kwargs = mock_basic_config.call_args.kwargs
    assert kwargs["level"] == logging.INFO
    assert len(kwargs["handlers"]) == 1


def test_main_with_repeated_locale_flags(workspace):
    args = ["-w", str(workspace), "-i", "site",
            "--locale", "en-US", "--locale", "en-us", "--locale", "ja-JP"]
    assert cli.main(args) == 0
    assert (workspace / "localized" / "ja-JP" / "index.html").exists()


def test_install_cancel_handler_off_main_thread():
    results = []
    thread = threading.Thread(
        target=lambda: results.append(cli.install_cancel_handler(threading.Event())))
    thread.start()
    thread.join()
    assert results == [None]


def test_main_off_main_thread(workspace):
    results = []
    thread = threading.Thread(
        target=lambda: results.append(cli.main(["-w", str(workspace), "-i", "site"])))
    thread.start()
    thread.join()
    assert results == [0]
