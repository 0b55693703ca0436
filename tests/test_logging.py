import json
import logging

import pytest

from patterncraft import logging_config


@pytest.fixture
def log_dir(tmp_path, isolated_logging):
    return tmp_path / "logs"


def _flush():
    for handler in logging.getLogger().handlers:
        handler.flush()


def test_session_id_generation():
    session_id = logging_config.generate_session_id()
    assert session_id.startswith("sess_")
    assert len(session_id) > 20


def test_session_id_is_thread_local_value():
    logging_config.set_session_id("sess_test")
    assert logging_config.get_session_id() == "sess_test"


def test_setup_creates_directory_and_log_files(log_dir):
    logging_config.setup_logging(log_dir=log_dir)
    logging.getLogger("patterncraft.test").error("Something broke")
    _flush()

    assert "Something broke" in (log_dir / "patterncraft.log").read_text(encoding="utf-8")
    assert "Something broke" in (log_dir / "patterncraft-error.log").read_text(encoding="utf-8")


def test_default_log_dir_from_module(tmp_path, monkeypatch, isolated_logging):
    monkeypatch.setattr(logging_config, "LOG_DIR", tmp_path)
    logging_config.setup_logging()
    logging.getLogger("patterncraft.test").info("Test message")
    assert (tmp_path / "patterncraft.log").exists()


def test_repeated_setup_does_not_duplicate_handlers(log_dir):
    logging_config.setup_logging(log_dir=log_dir)
    count = len(logging.getLogger().handlers)
    logging_config.setup_logging(log_dir=log_dir)
    assert len(logging.getLogger().handlers) == count


def test_session_id_stamped_on_app_log(log_dir):
    logging_config.setup_logging(log_dir=log_dir)
    logging_config.set_session_id("sess_stamp")
    logging.getLogger("patterncraft.test").info("stamped")
    _flush()
    assert "sess_stamp" in (log_dir / "patterncraft.log").read_text(encoding="utf-8")


def test_json_format(log_dir):
    logging_config.setup_logging(json_format=True, log_dir=log_dir)
    logging_config.set_session_id("sess_json")
    logging.getLogger("patterncraft.test").warning("structured")
    _flush()

    lines = (log_dir / "patterncraft.log").read_text(encoding="utf-8").splitlines()
    records = [json.loads(line) for line in lines]
    record = next(r for r in records if r["message"] == "structured")
    assert record["level"] == "WARNING"
    assert record["logger"] == "patterncraft.test"
    assert record["session_id"] == "sess_json"


def test_audit_log_goes_to_audit_file_only(log_dir):
    logging_config.setup_logging(log_dir=log_dir)
    logging_config.audit_log("Demo completed", demo="decorator", effects=3)
    for handler in logging.getLogger(logging_config.AUDIT_LOGGER).handlers:
        handler.flush()
    _flush()

    audit = (log_dir / "patterncraft-audit.log").read_text(encoding="utf-8")
    assert "Demo completed | demo=decorator | effects=3" in audit
    assert "Demo completed" not in (log_dir / "patterncraft.log").read_text(encoding="utf-8")


def test_colored_formatter_leaves_record_untouched():
    formatter = logging_config.ColoredFormatter("%(levelname)s %(message)s")
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "careful", None, None)

    output = formatter.format(record)

    assert output.startswith("\033[33mWARNING")
    assert record.levelname == "WARNING"
