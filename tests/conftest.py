import socket

import pytest

from knockr.transport import SocketTransport, split_address


class FakeLog:
    def __init__(self):
        self.records = []

    def _add(self, level, msg):
        self.records.append((level, msg))

    def error(self, msg, *args, **kwargs):
        self._add("ERROR", msg)

    def warning(self, msg, *args, **kwargs):
        self._add("WARNING", msg)

    def info(self, msg, *args, **kwargs):
        self._add("INFO", msg)

    def debug(self, msg, *args, **kwargs):
        self._add("DEBUG", msg)

    def messages(self, level):
        return [m for l, m in self.records if l == level]


class FakeTransport:
    """Records every call in a shared trace; errors maps port -> exception."""

    def __init__(self, trace=None, errors=None, unresolvable=()):
        self.trace = trace if trace is not None else []
        self.errors = errors or {}
        self.unresolvable = set(unresolvable)
        self.lookups = []

    def _attempt(self, kind, address, extra):
        self.trace.append((kind, address, extra))
        _, port = split_address(address)
        if port in self.errors:
            raise self.errors[port]

    def connect_stream(self, address, timeout):
        self._attempt("tcp", address, timeout)

    def send_datagram(self, address, payload, timeout):
        self._attempt("udp", address, payload)
        return len(payload)

    def parse_literal(self, host):
        return SocketTransport().parse_literal(host)

    def lookup(self, host):
        self.lookups.append(host)
        self.trace.append(("lookup", host, None))
        if host in self.unresolvable:
            raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")
        return ["192.0.2.10"]


class FakeEvent:
    """Stands in for threading.Event; wait() never blocks."""

    def __init__(self, trace=None, cancel_on_wait=None):
        self.trace = trace if trace is not None else []
        self.cancel_on_wait = cancel_on_wait
        self.waits = []
        self._set = False

    def wait(self, timeout=None):
        self.waits.append(timeout)
        self.trace.append(("wait", None, timeout))
        if self.cancel_on_wait is not None and len(self.waits) >= self.cancel_on_wait:
            self._set = True
        return self._set

    def is_set(self):
        return self._set

    def set(self):
        self._set = True


@pytest.fixture
def fake_log():
    return FakeLog()


@pytest.fixture
def trace():
    return []


def free_port(kind=socket.SOCK_STREAM):
    with socket.socket(socket.AF_INET, kind) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]
