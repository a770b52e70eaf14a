#!/usr/bin/env python3
"""
⌨️ Pride Month Animator - Input Watcher
=======================================
Copyright (c) 2025 Pride Month Animator Authors

Background thread that blocks on line input and raises the shared
cancellation flag the first time a line arrives.

- End of input is not a stop request; the watcher keeps reading
- Read errors, including reads from a closed stream, are logged and retried
- The flag is set at most once and never cleared
"""

import sys
import time
import logging
import threading
from typing import IO, Optional

logger = logging.getLogger('pride.input')


class InputWatcher(threading.Thread):
    """
    Daemon thread that sets a threading.Event on the first input line.

    The animation loop only polls the event; it never joins this thread,
    which is left running until the process exits.
    """

    def __init__(self, flag: threading.Event, stream: Optional[IO[str]] = None,
                 eof_retry_delay: float = 0.05):
        """
        Initialize input watcher.

        Args:
            flag: Cancellation flag shared with the animation driver
            stream: Line-oriented input (defaults to sys.stdin)
            eof_retry_delay: Seconds to wait before reading again after end of input
        """
        super().__init__(name='pride-input-watcher', daemon=True)
        self.flag = flag
        self.stream = stream if stream is not None else sys.stdin
        self.eof_retry_delay = eof_retry_delay
        self.read_errors = 0

    def run(self):
        while True:
            try:
                line = self.stream.readline()
            except (OSError, ValueError) as e:
                self.read_errors += 1
                logger.error(f"failed to read line from standard input: {e}")
                time.sleep(self.eof_retry_delay)
                continue

            if not line:
                # End of input, keep waiting
                time.sleep(self.eof_retry_delay)
                continue

            logger.debug("Input line received, requesting stop")
            self.flag.set()
            return


def watch_input(flag: threading.Event, stream: Optional[IO[str]] = None,
                eof_retry_delay: float = 0.05) -> InputWatcher:
    """Start an InputWatcher and return it"""
    watcher = InputWatcher(flag, stream, eof_retry_delay)
    watcher.start()
    logger.info("Input watcher started")
    return watcher
