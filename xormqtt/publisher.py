"""Command that publishes a payload to a topic once per interval."""

import argparse
import itertools
import time

from .client import BROKER_PORT, BrokerClient, PublishError, print_network_info
from .receiver import ms_since_start
from .xorcipher import DEFAULT_KEY, xor_encrypt

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
    parser = argparse.ArgumentParser(prog="xormqtt-publisher",
                                     description="Publish a message to an MQTT topic.")
    parser.add_argument("--client-id", default="bitdog")
    parser.add_argument("--broker", default="192.168.15.146")
    parser.add_argument("--port", type=int, default=BROKER_PORT)
    parser.add_argument("--user", default="aluno")
    parser.add_argument("--password", default=DEFAULT_PASSWORD)
    parser.add_argument("--topic", default="escola/sala1/temperatura")
    parser.add_argument("--message", default="jao")
    parser.add_argument("--encrypt", action="store_true",
                        help="XOR the message with --key before sending")
    parser.add_argument("--key", type=_byte, default=DEFAULT_KEY)
    parser.add_argument("--interval", type=float, default=1.0)
    parser.add_argument("--connect-wait", type=float, default=3.0)
    parser.add_argument("--count", type=_positive, default=None,
                        help="number of publications (default: forever)")
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
    payload = args.message.encode()
    if args.encrypt:
        payload = xor_encrypt(payload, args.key)
    rounds = itertools.count() if args.count is None else range(args.count)
    with broker:
        try:
            broker.connect()
        except OSError as exc:
            print(f"Falha ao conectar ao broker: {exc}")
            return 1
        time.sleep(args.connect_wait)
        try:
            for _ in rounds:
                try:
                    broker.publish(args.topic, payload)
                except PublishError as exc:
                    print(f"[{ms_since_start()} ms] mqtt_publish falhou ao ser enviada: {exc.code}")
                else:
                    print(f"[{ms_since_start()} ms] mqtt_publish enviada para o tópico: {args.topic}")
                time.sleep(args.interval)
        except KeyboardInterrupt:
            pass
    return 0