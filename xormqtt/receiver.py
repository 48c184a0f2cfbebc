"""Reassembly, decryption and replay detection of incoming messages."""

import time

from .xorcipher import DEFAULT_KEY, xor_encrypt

MAX_MSG_LEN = 128

_START = time.monotonic()


def ms_since_start():
    """Milliseconds elapsed since the package was loaded."""
    return int((time.monotonic() - _START) * 1000)


class MessageAssembler:
    """Collects payload fragments and yields the decrypted message.

    At most ``max_len - 1`` bytes of one message are kept; the rest is
    dropped.
    """

    def __init__(self, key=DEFAULT_KEY, max_len=MAX_MSG_LEN):
        if max_len < 1:
            raise ValueError("max_len must be at least 1")
        self.key = key
        self.max_len = max_len
        self._buffer = bytearray()

    def feed(self, data, last):
        """Add a fragment; return the decrypted message once ``last`` is set."""
        room = max(self.max_len - 1 - len(self._buffer), 0)
        self._buffer += data[:room]
        if not last:
            return None
        message = xor_encrypt(self._buffer, self.key)
        self._buffer.clear()
        return message


class ReplayDetector:
    """Flags a message whose timestamp equals the previous one."""

    def __init__(self):
        self.last_timestamp_ms = -1

    def check(self, timestamp_ms):
        """Record ``timestamp_ms``; return True if it repeats the last one."""
        replay = timestamp_ms == self.last_timestamp_ms
        self.last_timestamp_ms = timestamp_ms
        return replay