import ipaddress
import socket
import time


def dial_address(host, port):
    # host is already bracketed if it is an ipv6 literal
    return f"{host}:{port}"


def split_address(address):
    host, _, port = address.rpartition(':')
    if host.startswith('[') and host.endswith(']'):
        host = host[1:-1]
    return host, int(port)


class SocketTransport:
    """
    The networking the knocker relies on: bounded tcp connect, bounded udp
    send, literal address parsing and hostname lookup. Errors are raised as
    OSError (socket.timeout for an expired timeout).
    """

    def connect_stream(self, address, timeout):
        # one deadline for the whole dial, however many addresses the
        # host resolves to
        host, port = split_address(address)
        deadline = time.monotonic() + timeout
        err = None
        for family, type_, proto, _, sockaddr in socket.getaddrinfo(host, port, 0, socket.SOCK_STREAM):
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                raise socket.timeout("timed out")
            with socket.socket(family, type_, proto) as sock:
                sock.settimeout(remaining)
                try:
                    sock.connect(sockaddr)
                    return
                except OSError as e:
                    err = e
        if err is None:
            raise OSError(f"no addresses for {host}")
        raise err


    def send_datagram(self, address, payload, timeout):
        host, port = split_address(address)
        family, type_, proto, _, sockaddr = socket.getaddrinfo(host, port, 0, socket.SOCK_DGRAM)[0]
        with socket.socket(family, type_, proto) as sock:
            sock.settimeout(timeout)
            sock.connect(sockaddr)
            return sock.send(payload)


    def parse_literal(self, host):
        try:
            return ipaddress.ip_address(host)
        except ValueError:
            return None


    def lookup(self, host):
        return [ai[4][0] for ai in socket.getaddrinfo(host, None, 0, socket.SOCK_STREAM)]
