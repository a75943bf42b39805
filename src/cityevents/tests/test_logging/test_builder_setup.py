import logging

from cityevents.core.logging.builder import make_dict_config, setup_logging
from cityevents.core.logging.formatters import ColorFormatter
from cityevents.tests.test_fixtures.data import make_log_settings


def test_stdout_mode_has_console_handlers_only():
    cfg = make_dict_config(make_log_settings(LOG_TO_STDOUT=True))

    assert set(cfg["handlers"]) == {"console", "error_console"}
    assert cfg["handlers"]["console"]["formatter"] == "json"
    assert cfg["loggers"][""]["handlers"] == ["console", "error_console"]


def test_file_mode_when_log_dir_set(tmp_path):
    settings = make_log_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path)
    cfg = make_dict_config(settings)

    assert set(cfg["handlers"]) == {"console", "file", "error_file"}
    assert cfg["handlers"]["file"]["filename"] == str(tmp_path / "app.log")
    assert cfg["handlers"]["error_file"]["filename"] == str(tmp_path / "errors.log")
    # error file stays json even in text mode
    text_cfg = make_dict_config(make_log_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path, LOG_FORMAT="text"))
    assert text_cfg["handlers"]["error_file"]["formatter"] == "json"
    assert text_cfg["formatters"]["standard"]["()"] is ColorFormatter


def test_no_log_dir_falls_back_to_console():
    cfg = make_dict_config(make_log_settings(LOG_TO_STDOUT=False, LOG_DIR=None))

    assert "file" not in cfg["handlers"]
    assert "error_console" in cfg["handlers"]


def test_every_handler_has_filters(tmp_path):
    cfg = make_dict_config(make_log_settings(LOG_TO_STDOUT=False, LOG_DIR=tmp_path))

    for handler in cfg["handlers"].values():
        assert handler["filters"] == ["request_id", "redact"]


def test_sql_logging_toggle():
    quiet = make_dict_config(make_log_settings())
    loud = make_dict_config(make_log_settings(ENABLE_SQL_LOGGING=True))

    assert quiet["loggers"]["sqlalchemy.engine"]["level"] == "WARNING"
    assert loud["loggers"]["sqlalchemy.engine"]["level"] == "DEBUG"


def test_setup_logging_creates_log_dir(tmp_path, restore_logging):
    log_dir = tmp_path / "logs"
    assert not log_dir.exists()

    setup_logging(make_log_settings(LOG_TO_STDOUT=False, LOG_DIR=log_dir))

    assert log_dir.exists()
    root = logging.getLogger()
    assert root.handlers
    assert root.level == logging.INFO
