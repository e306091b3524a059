"""Tests for the log queue plumbing used by the console."""

import logging
from queue import Queue

from bbox_annotator.gui.utils.logging_utils import (
    QueueLogHandler, attach_queue_handler, detach_queue_handler, drain_log_queue
)


class TestQueueLogging:
    def test_attach_when_logged_then_message_queued(self):
        log_queue = Queue()
        handler = attach_queue_handler(log_queue, "bbox_annotator.test_logging")
        try:
            logging.getLogger("bbox_annotator.test_logging.child").warning("careful %s", "now")
        finally:
            detach_queue_handler(handler, "bbox_annotator.test_logging")

        assert log_queue.get_nowait() == ("careful now", "WARNING")

    def test_emit_when_debug_then_reported_as_info(self):
        log_queue = Queue()
        handler = QueueLogHandler(log_queue, level=logging.DEBUG)
        record = logging.LogRecord("x", logging.DEBUG, __file__, 1, "detail", None, None)
        handler.emit(record)
        assert log_queue.get_nowait() == ("detail", "INFO")

    def test_detach_when_removed_then_nothing_queued(self):
        log_queue = Queue()
        handler = attach_queue_handler(log_queue, "bbox_annotator.test_detach")
        detach_queue_handler(handler, "bbox_annotator.test_detach")
        logging.getLogger("bbox_annotator.test_detach").error("lost")
        assert log_queue.empty()

    def test_drain_when_mixed_items_then_forwarded_in_order(self):
        log_queue = Queue()
        log_queue.put(("first", "INFO"))
        log_queue.put("bare string")
        seen = []

        count = drain_log_queue(log_queue, lambda level, msg: seen.append((level, msg)))

        assert count == 2
        assert seen == [("INFO", "first"), ("INFO", "bare string")]
        assert log_queue.empty()
