# xormqtt

A small MQTT publisher and subscriber pair. The publisher sends a payload to
a topic at a fixed interval. The subscriber XOR-decodes each message with a
single-byte key and warns when a message arrives with the same millisecond
timestamp as the previous one, which it treats as a replay.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Command-line use

Two commands are installed:

```
xormqtt-publisher --help
xormqtt-subscriber --help
```

Both commands first print the host's network details (IP address, netmask
and gateway) and then connect to the broker. They share these options:

- `--client-id` (default `bitdog`)
- `--broker`: IPv4 address of the broker (default `192.168.15.146`); anything
  that is not an IPv4 address makes the command print `Erro no IP` and exit
  with status 1
- `--port` (default 1883)
- `--user` (default `aluno`) and `--password` (default: the word `password`)
- `--topic` (default `escola/sala1/temperatura`)
- `--key`: XOR key, 0 to 255 (default 42)
- `--count`: stop after this many messages (default: run until interrupted)

### xormqtt-publisher

Publishes `--message` (default `jao`) to the topic with QoS 0 and no retain
flag, once every `--interval` seconds (default 1), after waiting
`--connect-wait` seconds (default 3) for the connection. The message is sent
as plain text unless `--encrypt` is given, in which case it is XORed with
`--key` first. A timestamped line is printed for every publish and for every
confirmation from the client library.

### xormqtt-subscriber

Subscribes to the topic once connected. Each incoming message is cut to at
most 127 bytes and XOR-decoded with `--key`. The command prints `[OK] Nova
mensagem recebida.` with the current timestamp, or `[ERRO] Replay
detectado!` when that timestamp equals the one of the previous message, and
then `Mensagem recebida no tópico:` followed by the decoded text.

Timestamps are milliseconds since the package was loaded.

## Library use

```python
from xormqtt.xorcipher import xor_encrypt

encoded = xor_encrypt(b"26.5", 42)
assert xor_encrypt(encoded, 42) == b"26.5"
```

`xor_encrypt(data, key)` raises `ValueError` for a key outside 0 to 255.
XOR with the same key both encodes and decodes; it hides a payload from a
casual look but gives no real confidentiality.

- `xormqtt.receiver.MessageAssembler(key=42, max_len=128)` collects payload
  fragments with `feed(data, last)`. It keeps at most `max_len - 1` bytes per
  message and returns the decoded bytes when `last` is true, `None`
  otherwise.
- `xormqtt.receiver.ReplayDetector().check(timestamp_ms)` records the
  timestamp and returns `True` if it equals the previous one.
- `xormqtt.receiver.ms_since_start()` gives the milliseconds elapsed since
  the package was loaded.
- `xormqtt.client.BrokerClient(client_id, broker_ip, user=None,
  password=None, port=1883)` wraps a paho-mqtt connection with `connect()`,
  `publish(topic, data)`, `subscribe(topic, on_message)` and `close()`, and
  can be used as a context manager. `publish` raises
  `xormqtt.client.PublishError` when the message cannot be queued.
  `on_message` is called as `on_message(topic, payload)`; subscriptions made
  before connecting are sent once the broker accepts the connection.
- `xormqtt.client.network_info()` returns a `NetworkInfo` with the
  interface name, IP, netmask and gateway of the default interface, or
  `None` if it is down. `print_network_info()` prints them. The gateway is
  read from `/proc/net/route`; where that file is missing, the first active
  non-loopback IPv4 interface is reported without a gateway.

## What it does not do

The package does not join or manage a Wi-Fi network; it uses whatever
network the host already has. Messages are sent with QoS 0 only, and the
XOR encoding is not encryption.