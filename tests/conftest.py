import socket

import pytest


def _bound_socket():
    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind(("127.0.0.1", 0))
    return sock


@pytest.fixture
def listeners():
    """
    Factory for local TCP listeners. The kernel completes the handshake
    from the listen backlog, so nothing needs to accept().
    """
    socks = []

    def make(count):
        ports = []
        for _ in range(count):
            sock = _bound_socket()
            sock.listen(16)
            socks.append(sock)
            ports.append(sock.getsockname()[1])
        return ports

    yield make
    for sock in socks:
        sock.close()


@pytest.fixture
def closed_ports():
    """Factory for ports that were free a moment ago and refuse connections."""
    def make(count):
        socks = [_bound_socket() for _ in range(count)]
        ports = [s.getsockname()[1] for s in socks]
        for sock in socks:
            sock.close()
        return ports

    return make
