# File: tests/test_logger.py
import logging

from meta_scout.logger import LOGGER_NAME, configure


def test_configure_writes_to_file(tmp_path):
    log_file = tmp_path / "meta_scout.log"
    lg = configure(level="DEBUG", log_file=log_file, log_format="%(levelname)s %(message)s")
    lg.debug("crawl started")
    for handler in lg.handlers:
        handler.flush()

    assert lg is logging.getLogger(LOGGER_NAME)
    assert lg.propagate is False
    assert "DEBUG crawl started" in log_file.read_text(encoding="utf-8")


def test_configure_replaces_handlers(tmp_path):
    configure(level="INFO", log_file=tmp_path / "a.log")
    lg = configure(level="WARNING")
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING

    lg = configure(level="INFO", replace_handlers=False)
    assert len(lg.handlers) == 2


def test_console_output_goes_to_stderr(capsys):
    lg = configure(level="INFO", log_format="%(message)s")
    lg.info("crawl finished")
    captured = capsys.readouterr()
    assert "crawl finished" in captured.err
    assert captured.out == ""
