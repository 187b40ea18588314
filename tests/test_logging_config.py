"""
Validate the logging configuration helper.
"""

import logging

import chcc.logging_config as logging_config


def _reset_root_logging():
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(logging.NOTSET)


def test_configure_logging_sets_requested_level():
    _reset_root_logging()
    logging_config.configure_logging("DEBUG")
    assert logging.getLogger().getEffectiveLevel() == logging.DEBUG


def test_configure_logging_invalid_level_defaults_to_warning():
    _reset_root_logging()
    logging_config.configure_logging("NOTALEVEL")
    assert logging.getLogger().getEffectiveLevel() == logging.WARNING


def test_configure_logging_replaces_handlers():
    _reset_root_logging()
    logging_config.configure_logging("INFO")
    logging_config.configure_logging("ERROR")
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert root.getEffectiveLevel() == logging.ERROR
