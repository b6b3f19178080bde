#!/usr/bin/env python3
"""
Rising-edge detection for discrete inputs.

One RisingEdge instance watches one boolean signal (a key, a button) and is
clocked once per frame. It reports True only on the frame where the signal
goes from False to True, so a held key fires exactly once, with no auto-repeat.
"""


class RisingEdge:
    """Fires on the False -> True transition of a clocked boolean."""

    def __init__(self):
        self.previous = False

    def clock(self, current: bool) -> bool:
        fired = bool(current) and not self.previous
        self.previous = bool(current)
        return fired
