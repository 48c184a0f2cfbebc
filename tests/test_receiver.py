import pytest

from xormqtt.receiver import (
    MAX_MSG_LEN,
    MessageAssembler,
    ReplayDetector,
    ms_since_start,
)
from xormqtt.xorcipher import DEFAULT_KEY, xor_encrypt


def test_single_fragment_is_decrypted():
    assembler = MessageAssembler()
    assert assembler.feed(xor_encrypt(b"26.5", DEFAULT_KEY), last=True) == b"26.5"


def test_fragments_are_joined():
    assembler = MessageAssembler()
    cipher = xor_encrypt(b"escola/sala1", DEFAULT_KEY)
    assert assembler.feed(cipher[:4], last=False) is None
    assert assembler.feed(cipher[4:9], last=False) is None
    assert assembler.feed(cipher[9:], last=True) == b"escola/sala1"


def test_buffer_resets_after_last_fragment():
    assembler = MessageAssembler()
    assembler.feed(xor_encrypt(b"first", DEFAULT_KEY), last=True)
    assert assembler.feed(xor_encrypt(b"jao", DEFAULT_KEY), last=True) == b"jao"


def test_long_message_is_truncated():
    assembler = MessageAssembler()
    cipher = xor_encrypt(b"x" * 300, DEFAULT_KEY)
    assert assembler.feed(cipher[:200], last=False) is None
    message = assembler.feed(cipher[200:], last=True)
    assert message == b"x" * (MAX_MSG_LEN - 1)


def test_custom_key_and_length():
    assembler = MessageAssembler(key=7, max_len=4)
    assert assembler.feed(xor_encrypt(b"abcdef", 7), last=True) == b"abc"


def test_invalid_max_len():
    with pytest.raises(ValueError):
        MessageAssembler(max_len=0)


def test_replay_detector_flags_repeated_timestamp():
    detector = ReplayDetector()
    assert detector.check(5) is False
    assert detector.check(5) is True
    assert detector.check(6) is False
    assert detector.last_timestamp_ms == 6


def test_ms_since_start_is_monotonic():
    first = ms_since_start()
    second = ms_since_start()
    assert 0 <= first <= second