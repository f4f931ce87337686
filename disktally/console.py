"""
Asynchronous log sink.

Any thread may log; one listener thread writes the records out in the order
they were enqueued. The sink is scoped: leaving the `with` block drains every
pending record, stops the listener and detaches the handler.
"""
from __future__ import annotations
import logging
import queue
import threading
from logging.handlers import QueueHandler, QueueListener
from typing import Callable, Optional

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "disktally"

def make_rich_handler(level: int = logging.INFO) -> logging.Handler:
    handler = RichHandler(console=Console(stderr=True), show_path=False,
                          markup=False, rich_tracebacks=True)
    handler.setLevel(level)
    return handler

class _CountingQueueHandler(QueueHandler):
    def __init__(self, q: queue.Queue, on_enqueue: Callable[[], None]):
        super().__init__(q)
        self._on_enqueue = on_enqueue

    def enqueue(self, record: logging.LogRecord) -> None:
        self._on_enqueue()
        super().enqueue(record)

class _CountingListener(QueueListener):
    def __init__(self, q: queue.Queue, handler: logging.Handler, on_handled: Callable[[], None]):
        super().__init__(q, handler, respect_handler_level=True)
        self._on_handled = on_handled

    def handle(self, record: logging.LogRecord) -> None:
        try:
            super().handle(record)
        finally:
            self._on_handled()

class ConsoleSink:
    def __init__(self, handler: Optional[logging.Handler] = None,
                 level: int = logging.INFO,
                 logger_name: str = LOGGER_NAME):
        self._queue: "queue.Queue[logging.LogRecord]" = queue.Queue()
        self._handler = handler or make_rich_handler(level)
        self._level = level
        self._logger = logging.getLogger(logger_name)
        # records enqueued but not yet written by the listener
        self._pending = 0
        self._cond = threading.Condition()
        self._queue_handler = _CountingQueueHandler(self._queue, self._enqueued)
        self._listener = _CountingListener(self._queue, self._handler, self._handled)
        self._prev_level = self._logger.level
        self._running = False

    def _enqueued(self) -> None:
        with self._cond:
            self._pending += 1

    def _handled(self) -> None:
        with self._cond:
            self._pending -= 1
            if self._pending == 0:
                self._cond.notify_all()

    def log(self, msg: str, level: int = logging.INFO) -> None:
        self._logger.log(level, msg)

    def drained(self) -> bool:
        with self._cond:
            return self._pending == 0

    def drain(self) -> None:
        if not self._running:
            return
        with self._cond:
            self._cond.wait_for(lambda: self._pending == 0)

    def start(self) -> "ConsoleSink":
        if self._running:
            return self
        self._logger.addHandler(self._queue_handler)
        self._logger.setLevel(self._level)
        self._listener.start()
        self._running = True
        return self

    def stop(self) -> None:
        if not self._running:
            return
        self._logger.removeHandler(self._queue_handler)
        self._logger.setLevel(self._prev_level)
        # stop() enqueues a sentinel and joins the listener thread after it
        # has handled everything queued before it
        self._listener.stop()
        self._handler.flush()
        self._running = False

    def __enter__(self) -> "ConsoleSink":
        return self.start()

    def __exit__(self, *exc):
        self.stop()
