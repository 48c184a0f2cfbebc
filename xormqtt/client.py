"""MQTT broker client and local network information."""

import ipaddress
import socket
import struct
from dataclasses import dataclass
from pathlib import Path

import paho.mqtt.client as mqtt
import psutil

from .receiver import ms_since_start

BROKER_PORT = 1883
MAX_IN_FLIGHT = 5

_ROUTE_TABLE = Path("/proc/net/route")


class PublishError(Exception):
    """Raised when a message cannot be queued for publishing."""

    def __init__(self, code):
        super().__init__(f"publish failed with code {code}")
        self.code = code


def _is_failure(reason_code):
    return getattr(reason_code, "is_failure", reason_code != 0)


def _code_value(reason_code):
    return getattr(reason_code, "value", reason_code)


class BrokerClient:
    """A QoS 0 MQTT client bound to one broker."""

    def __init__(self, client_id, broker_ip, user=None, password=None, *,
                 port=BROKER_PORT, mqtt_client=None):
        try:
            ipaddress.IPv4Address(broker_ip)
        except ValueError as exc:
            raise ValueError(f"invalid broker address: {broker_ip!r}") from exc
        self.client_id = client_id
        self.broker_ip = broker_ip
        self.port = port
        self._handlers = {}
        self._connected = False
        if mqtt_client is None:
            mqtt_client = mqtt.Client(mqtt.CallbackAPIVersion.VERSION2, client_id=client_id)
        self._mqtt = mqtt_client
        if user is not None:
            self._mqtt.username_pw_set(user, password)
        self._mqtt.max_inflight_messages_set(MAX_IN_FLIGHT)
        self._mqtt.on_connect = self._on_connect
        self._mqtt.on_disconnect = self._on_disconnect
        self._mqtt.on_publish = self._on_publish
        self._mqtt.on_message = self._on_message

    @property
    def connected(self):
        return self._connected

    def connect(self):
        """Open the connection and start the network loop in the background."""
        self._mqtt.connect(self.broker_ip, self.port)
        self._mqtt.loop_start()

    def publish(self, topic, data):
        """Queue ``data`` on ``topic`` with QoS 0, not retained."""
        info = self._mqtt.publish(topic, bytes(data), qos=0, retain=False)
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            raise PublishError(info.rc)
        return info

    def subscribe(self, topic, on_message):
        """Call ``on_message(topic, payload)`` for messages matching ``topic``.

        The subscription is sent now if connected, otherwise on connection.
        """
        self._handlers[topic] = on_message
        if self._connected:
            return self._send_subscribe(topic)
        return True

    def close(self):
        """Stop the network loop and disconnect."""
        self._mqtt.loop_stop()
        self._mqtt.disconnect()
        self._connected = False

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _send_subscribe(self, topic):
        rc, _mid = self._mqtt.subscribe(topic, qos=0)
        if rc != mqtt.MQTT_ERR_SUCCESS:
            print(f"Erro ao inscrever no tópico: {rc}")
            return False
        print("Inscrição no tópico realizada com sucesso!")
        return True

    def _on_connect(self, client, userdata, flags, reason_code, properties=None):
        if _is_failure(reason_code):
            self._connected = False
            print(f"Falha ao conectar ao broker, código: {_code_value(reason_code)}")
            return
        self._connected = True
        print("Conectado ao broker MQTT com sucesso!")
        for topic in list(self._handlers):
            self._send_subscribe(topic)

    def _on_disconnect(self, client, userdata, flags, reason_code, properties=None):
        self._connected = False

    def _on_publish(self, client, userdata, mid, reason_code=0, properties=None):
        now = ms_since_start()
        if _is_failure(reason_code):
            print(f"[{now} ms] Erro ao publicar via MQTT: {_code_value(reason_code)}")
        else:
            print(f"[{now} ms] Publicação MQTT enviada com sucesso!")

    def _on_message(self, client, userdata, message):
        payload = bytes(message.payload)
        print(f"Mensagem publicada no tópico: {message.topic} ({len(payload)} bytes)")
        for pattern, handler in list(self._handlers.items()):
            if mqtt.topic_matches_sub(pattern, message.topic):
                handler(message.topic, payload)


@dataclass(frozen=True)
class NetworkInfo:
    interface: str
    ip: str
    netmask: str
    gateway: str | None


def _default_route():
    try:
        lines = _ROUTE_TABLE.read_text().splitlines()
    except OSError:
        return None, None
    for line in lines[1:]:
        fields = line.split()
        if len(fields) >= 3 and fields[1] == "00000000":
            gateway = socket.inet_ntoa(struct.pack("<I", int(fields[2], 16)))
            return fields[0], gateway
    return None, None


def network_info():
    """Address, mask and gateway of the default interface, or None if it is down."""
    stats = psutil.net_if_stats()
    addresses = psutil.net_if_addrs()
    default_iface, gateway = _default_route()
    names = [default_iface] if default_iface else list(addresses)
    for name in names:
        state = stats.get(name)
        if state is None or not state.isup:
            continue
        for addr in addresses.get(name, ()):
            if addr.family != socket.AF_INET:
                continue
            if default_iface is None and ipaddress.ip_address(addr.address).is_loopback:
                continue
            return NetworkInfo(
                interface=name,
                ip=addr.address,
                netmask=addr.netmask,
                gateway=gateway if name == default_iface else None,
            )
    return None


def print_network_info():
    """Print the default interface's address, mask and gateway."""
    info = network_info()
    if info is None:
        print("Interface de rede não está ativa!")
        return
    print(f"IP: {info.ip}")
    print(f"Máscara: {info.netmask}")
    print(f"Gateway: {info.gateway or '-'}")