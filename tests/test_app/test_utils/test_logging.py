import logging

from salary_tracker.log import setup_logging, LOG_FORMAT


def test_setup_logging_does_not_stack_handlers():
    level = logging.getLogger().level
    try:
        root = setup_logging('DEBUG')
        handlers = list(root.handlers)
        setup_logging('WARNING')
        assert root.handlers == handlers
        assert root.level == logging.WARNING
        assert all(handler.formatter._fmt == LOG_FORMAT for handler in root.handlers)
    finally:
        logging.getLogger().setLevel(level)
