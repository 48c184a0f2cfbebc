"""Command that subscribes to a topic and prints decrypted messages."""

import argparse
import queue

from .client import BROKER_PORT, BrokerClient, print_network_info
from .receiver import MessageAssembler, ReplayDetector, ms_since_start
from .xorcipher import DEFAULT_KEY

DEFAULT_PASSWORD = "password"


def _byte(value):
    number = int(value)
    if not 0 <= number <= 0xFF:
        raise argparse.ArgumentTypeError("key must be between 0 and 255")
    return number


def _positive(value):
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return number


def _parse_args(argv):
    parser = argparse.ArgumentParser(prog="xormqtt-subscriber",
                                     description="Print decrypted messages from an MQTT topic.")
    parser.add_argument("--client-id", default="bitdog")
    parser.add_argument("--broker", default="192.168.15.146")
    parser.add_argument("--port", type=int, default=BROKER_PORT)
    parser.add_argument("--user", default="aluno")
    parser.add_argument("--password", default=DEFAULT_PASSWORD)
    parser.add_argument("--topic", default="escola/sala1/temperatura")
    parser.add_argument("--key", type=_byte, default=DEFAULT_KEY)
    parser.add_argument("--count", type=_positive, default=None,
                        help="stop after this many messages (default: forever)")
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    print_network_info()
    try:
        broker = BrokerClient(args.client_id, args.broker, args.user, args.password,
                              port=args.port)
    except ValueError:
        print("Erro no IP")
        return 1

    inbox = queue.Queue()
    assembler = MessageAssembler(key=args.key)
    detector = ReplayDetector()

    def on_message(topic, payload):
        message = assembler.feed(payload, last=True)
        now = ms_since_start()
        if detector.check(now):
            print(f"[ERRO] Replay detectado! Timestamp: {now} ms")
        else:
            print(f"[OK] Nova mensagem recebida. Timestamp: {now} ms")
        inbox.put(message)

    broker.subscribe(args.topic, on_message)
    with broker:
        try:
            broker.connect()
        except OSError as exc:
            print(f"Falha ao conectar ao broker: {exc}")
            return 1
        received = 0
        try:
            while args.count is None or received < args.count:
                try:
                    message = inbox.get(timeout=1.0)
                except queue.Empty:
                    continue
                print(f"Mensagem recebida no tópico: {message.decode(errors='replace')}")
                received += 1
        except KeyboardInterrupt:
            pass
    return 0