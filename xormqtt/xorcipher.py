"""Single-byte XOR obfuscation used for message payloads."""

DEFAULT_KEY = 42


def xor_encrypt(data, key):
    """Return ``data`` with every byte XORed with ``key``.

    Applying the function twice with the same key gives back the input.
    """
    if not 0 <= key <= 0xFF:
        raise ValueError(f"key must fit in one byte, got {key}")
    return bytes(byte ^ key for byte in data)