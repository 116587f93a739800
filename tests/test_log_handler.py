"""Tests for the Qt log bridge."""
import logging

import pytest

pytest.importorskip("PySide6")

from dayz_dev_manager.ui.log_handler import QtLogHandler  # noqa: E402


def test_records_are_emitted_as_formatted_text():
    handler = QtLogHandler(logging.INFO)
    received = []
    handler.message.connect(received.append)
    logger = logging.getLogger("dayz_dev_manager.tests.bridge")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        logger.debug("hidden")
        logger.info("Packing %s ...", "@MyMod")
    finally:
        logger.removeHandler(handler)

    assert len(received) == 1
    assert received[0].endswith("] Packing @MyMod ...")
