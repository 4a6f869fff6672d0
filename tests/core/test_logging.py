import logging

from app.utils.logging import log_error, logger, setup_file_logging


def test_file_logging_attaches_once(tmp_path):
    before = list(logger.handlers)
    try:
        first = setup_file_logging(str(tmp_path / "logs"))
        second = setup_file_logging(str(tmp_path / "logs"))
        assert first == second
        assert first.name.startswith("lasu_cms_")
        added = [h for h in logger.handlers if h not in before]
        assert len(added) == 1

        logger.setLevel(logging.INFO)
        log_error(ValueError("boom"), context="Bootstrap failed")
        added[0].flush()
        assert "Bootstrap failed: boom" in first.read_text(encoding="utf-8")
    finally:
        for handler in logger.handlers[:]:
            if handler not in before:
                logger.removeHandler(handler)
                handler.close()
