"""
Qt Log Bridge
Forwards log records from any thread to a widget on the GUI thread.
"""

import logging

from PySide6.QtCore import QObject, Signal


class _LogEmitter(QObject):
    message = Signal(str)


class QtLogHandler(logging.Handler):
    """
    Logging handler that emits each formatted record as a Qt signal.

    Signals cross threads as queued connections, so records logged by the
    build worker land on the GUI thread in order.

    Usage:
        handler = QtLogHandler()
        handler.message.connect(log_view.appendPlainText)
        logging.getLogger().addHandler(handler)
    """

    def __init__(self, level: int = logging.NOTSET):
        super().__init__(level)
        self._emitter = _LogEmitter()
        self.setFormatter(logging.Formatter("[%(asctime)s] %(message)s", "%H:%M:%S"))

    @property
    def message(self):
        return self._emitter.message

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self._emitter.message.emit(self.format(record))
        except RuntimeError:
            # Emitter already deleted during shutdown
            pass
