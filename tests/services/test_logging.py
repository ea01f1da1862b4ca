# tests/services/test_logging.py
from projectshelf.services.logging import setup_logging


def sink_targets(add):
    return [str(call.args[0]) for call in add.call_args_list]

def test_quiet_run_logs_to_stderr_only(mocker):
    mock_logger = mocker.patch("projectshelf.services.logging.logger")
    setup_logging(level="WARNING")
    mock_logger.remove.assert_called_once()
    assert mock_logger.add.call_count == 1
    assert mock_logger.add.call_args.kwargs["level"] == "WARNING"

def test_verbose_run_adds_daily_file(mocker, isolated_home):
    mock_logger = mocker.patch("projectshelf.services.logging.logger")
    setup_logging(verbose=True)
    assert mock_logger.add.call_count == 2
    assert mock_logger.add.call_args_list[0].kwargs["level"] == "DEBUG"
    log_target = sink_targets(mock_logger.add)[1]
    assert log_target.endswith("projectshelf_{time:YYYY-MM-DD}.log")
    assert mock_logger.add.call_args_list[1].kwargs["rotation"] == "1 day"

def test_file_sink_can_be_forced_without_verbose(mocker):
    mock_logger = mocker.patch("projectshelf.services.logging.logger")
    setup_logging(log_to_file=True)
    assert mock_logger.add.call_count == 2

def test_unwritable_log_dir_disables_file_sink(mocker):
    mock_logger = mocker.patch("projectshelf.services.logging.logger")
    mocker.patch("projectshelf.services.logging.get_user_log_dir", side_effect=OSError("read-only"))
    setup_logging(verbose=True)
    assert mock_logger.add.call_count == 1
    mock_logger.warning.assert_called_once()
