"""MQTT publisher and subscriber with XOR-encoded payloads and replay detection."""

__version__ = "0.1.0"