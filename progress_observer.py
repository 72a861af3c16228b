#!/usr/bin/env python

"""
progress_observer.py: Time-gated ticker for long-running searches.

An Observer answers True from tick() at most once per interval, so a busy loop
can poll it on every step and only print a status line now and then.
"""

import time


class Observer:
    """
    Rate limiter for progress output.

    Attributes:
        interval (float): Minimum number of seconds between two True ticks
    """

    def __init__(self, interval=1.0, clock=time.monotonic):
        self.interval = interval
        self._clock = clock
        self._last = clock()

    def tick(self):
        now = self._clock()
        if now - self._last >= self.interval:
            self._last = now
            return True
        return False
