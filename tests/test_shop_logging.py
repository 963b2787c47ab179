import logging

from shop_logging import SEPARATOR, log_message, setup_logging


def _flush(*loggers):
    for log in loggers:
        for handler in log.handlers:
            handler.flush()


def test_setup_creates_info_and_results_logs(tmp_path):
    info_logger, results_logger = setup_logging(str(tmp_path / "logs"))

    log_message("[Scenario] sort-name-asc: PASSED")
    log_message("Remove button still exists", "error")
    log_message("details only for the info log", "debug")
    _flush(info_logger, results_logger)

    info_log = next((tmp_path / "logs").glob("info_log_*.log")).read_text()
    results_log = next((tmp_path / "logs").glob("results_log_*.log")).read_text()

    assert "INFO - Shop test logging initialized" in info_log
    assert "ERROR - Remove button still exists" in info_log
    assert "DEBUG - details only for the info log" in info_log
    assert "sort-name-asc: PASSED" in results_log
    assert SEPARATOR in results_log
    assert "details only for the info log" not in results_log


def test_setup_again_replaces_handlers(tmp_path):
    setup_logging(str(tmp_path / "first"))
    info_logger, results_logger = setup_logging(str(tmp_path / "second"))
    assert len(info_logger.handlers) == 1
    assert len(results_logger.handlers) == 1
    assert "second" in info_logger.handlers[0].baseFilename


def test_setup_without_folder_has_no_file_handlers():
    info_logger, results_logger = setup_logging(None)
    assert info_logger.handlers == []
    assert results_logger.level == logging.INFO
