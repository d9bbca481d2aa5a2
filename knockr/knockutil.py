import math
import re

Version = '1.0.0'

PORT_MIN = 1
PORT_MAX = 65535

# longest accepted delay or timeout, well inside what socket and lock
# timeouts can hold on any platform
MAX_DURATION = 1000000 * 3600.0

# Go-style duration units, in seconds
DURATION_UNITS = { 'ns': 1e-9,
                   'us': 1e-6,
                   'µs': 1e-6,
                   'ms': 1e-3,
                   's': 1.0,
                   'm': 60.0,
                   'h': 3600.0 }

_duration_part = re.compile(r'(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)')


class KnockError(Exception):
    pass


class ConfigError(KnockError, ValueError):
    pass


class ResolveError(KnockError):
    pass


def check_port(port):
    if isinstance(port, bool) or not isinstance(port, (int, str)):
        raise ConfigError(f"port {port!r} is not an integer")
    if isinstance(port, str):
        # ascii decimal only, int() would also take "\uff11" and friends
        digits = port.strip()
        if not (digits.isascii() and digits.isdigit()):
            raise ConfigError(f"port {port!r} is not an integer")
        port = int(digits)
    if not (PORT_MIN <= port <= PORT_MAX):
        raise ConfigError(f"port {port}; allowable ports are {PORT_MIN} - {PORT_MAX}")
    return port


def parse_ports(specs):
    """
    Parses one or more comma-separated port lists, e.g. ["1234,8923", "1233"].
    Order is kept and duplicates are allowed, the sequence is the knock.
    """
    if isinstance(specs, str):
        specs = [specs]

    ports = []
    for spec in specs:
        for part in str(spec).split(','):
            part = part.strip()
            if not part:
                raise ConfigError(f"empty port in {spec!r}")
            ports.append(check_port(part))

    if not ports:
        raise ConfigError("no ports to knock")
    return ports


def parse_duration(value):
    """
    Converts a duration to seconds. Accepts numbers (seconds) or strings
    such as "100ms", "1.5s" or "1h30m". A bare number string is seconds.
    Anything longer than MAX_DURATION either way is rejected.
    """
    seconds = _parse_seconds(value)
    if abs(seconds) > MAX_DURATION:
        raise ConfigError(f"duration {value!r} is too long; maximum is {MAX_DURATION / 3600:.0f}h")
    return seconds


def _parse_seconds(value):
    if isinstance(value, bool):
        raise ConfigError(f"invalid duration {value!r}")
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise ConfigError(f"invalid duration {value!r}")
        return float(value)

    s = str(value).strip()
    if not s:
        raise ConfigError("empty duration")

    try:
        seconds = float(s)
    except ValueError:
        pass
    else:
        if not math.isfinite(seconds):
            raise ConfigError(f"invalid duration {value!r}")
        return seconds

    sign = 1.0
    if s[0] in '+-':
        sign = -1.0 if s[0] == '-' else 1.0
        s = s[1:]

    total, pos = 0.0, 0
    while pos < len(s):
        m = _duration_part.match(s, pos)
        if m is None:
            raise ConfigError(f"invalid duration {value!r}")
        total += float(m.group(1)) * DURATION_UNITS[m.group(2)]
        pos = m.end()

    if pos == 0:
        raise ConfigError(f"invalid duration {value!r}")
    return sign * total


def format_duration(seconds):
    if seconds < 1:
        return f"{seconds * 1000:g}ms"
    return f"{seconds:g}s"
