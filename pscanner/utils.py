import re
from typing import List, Set

from .errors import InvalidPort, InvalidRange, PortOutOfRange

MIN_PORT = 1
MAX_PORT = 65535

# Plain ASCII decimal, optionally signed
_DECIMAL = re.compile(r"[+-]?[0-9]+")
# Largest value a token may hold before it is treated as malformed rather than out of range
_MAX_TOKEN_VALUE = 2 ** 63 - 1


def _to_int(raw: str, token: str) -> int:
    raw = raw.strip()
    if not _DECIMAL.fullmatch(raw):
        raise InvalidPort(f"invalid port: {raw!r}", token)
    value = int(raw)
    if abs(value) > _MAX_TOKEN_VALUE:
        raise InvalidPort(f"invalid port: {raw!r}", token)
    return value


def parse_ports(port_input: str) -> List[int]:
    """
    Parses a comma-separated list of ports and inclusive ranges into a
    sorted list of distinct integers.
    Example: "443,80,20-22,21" -> [20, 21, 22, 80, 443]

    Blank tokens are skipped, so "" or " , " resolves to an empty list.
    Raises InvalidPort, PortOutOfRange or InvalidRange on the first bad token.
    """
    ports: Set[int] = set()

    for token in port_input.split(','):
        token = token.strip()
        if not token:
            continue

        if '-' in token:
            # Split on the first dash only: "-10" and "10-" leave an empty side
            low, high = token.split('-', 1)
            start = _to_int(low, token)
            end = _to_int(high, token)
            if start < MIN_PORT or end < MIN_PORT or start > MAX_PORT or end > MAX_PORT or start > end:
                raise InvalidRange(f"invalid range bounds: {token}", token)
            ports.update(range(start, end + 1))
        else:
            port = _to_int(token, token)
            if not MIN_PORT <= port <= MAX_PORT:
                raise PortOutOfRange(f"port out of range: {port}", token)
            ports.add(port)

    return sorted(ports)
