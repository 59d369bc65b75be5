import logging

import feedsmith.utils.files
from feedsmith.utils.logging import setup_local_logging


def test_setup_local_logging(monkeypatch, tmp_path):
    monkeypatch.setattr(feedsmith.utils.files, 'get_project_root', lambda: tmp_path)
    root_logger = logging.getLogger()
    original_level = root_logger.level
    before = list(root_logger.handlers)

    try:
        log_file = setup_local_logging('INFO')
        logging.getLogger('feedsmith.test').info('hello from the test')
        for handler in root_logger.handlers:
            handler.flush()

        assert log_file.parent == tmp_path / '.feedsmith' / 'logs'
        assert log_file.name.startswith('run_')
        assert 'hello from the test' in log_file.read_text()
        assert root_logger.level == logging.INFO
    finally:
        for handler in root_logger.handlers[:]:
            if handler not in before:
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(original_level)


def test_setup_local_logging_reuses_run_log(monkeypatch, tmp_path):
    monkeypatch.setattr(feedsmith.utils.files, 'get_project_root', lambda: tmp_path)
    root_logger = logging.getLogger()
    original_level = root_logger.level
    before = list(root_logger.handlers)

    try:
        first = setup_local_logging('INFO')
        second = setup_local_logging('WARNING')

        added = [handler for handler in root_logger.handlers if handler not in before]
        assert first == second
        assert len(added) == 1
        assert added[0].level == logging.WARNING
        assert len(list((tmp_path / '.feedsmith' / 'logs').iterdir())) == 1
    finally:
        for handler in root_logger.handlers[:]:
            if handler not in before:
                root_logger.removeHandler(handler)
                handler.close()
        root_logger.setLevel(original_level)
