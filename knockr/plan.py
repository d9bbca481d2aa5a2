from collections import namedtuple

from knockr.knockutil import MAX_DURATION, ConfigError, check_port

# knock outcome status values
OPEN = "open"
TIMEOUT = "timeout"
ERROR = "error"      # refused or any other connect/send failure
SENT = "sent"        # udp: accepted by the local stack, delivery unknown

TRANSPORTS = ("tcp", "udp")

DEFAULT_DELAY = 0.1
DEFAULT_TIMEOUT = 1.0


# plan: { target: <hostname or literal address, no port>,
#         ports: (port, ...) in knock order, duplicates allowed,
#         transport: "tcp" | "udp",
#         delay: <seconds between knocks>, timeout: <seconds per knock>,
#         report: <log each outcome> }
KnockPlan = namedtuple('KnockPlan', 'target ports transport delay timeout report')

KnockOutcome = namedtuple('KnockOutcome', 'port address status detail',
                          defaults=(None,))


def make_plan(target, ports, transport="tcp", delay=DEFAULT_DELAY,
              timeout=DEFAULT_TIMEOUT, report=True):
    """
    Validates everything a run needs and returns an immutable KnockPlan.
    Raises ConfigError before any network activity.
    """
    target = (target or "").strip()
    if not target:
        raise ConfigError("no target host")

    ports = tuple(check_port(p) for p in ports)
    if not ports:
        raise ConfigError("no ports to knock")

    transport = str(transport).lower()
    if transport not in TRANSPORTS:
        raise ConfigError(f"unsupported network '{transport}'; use one of {', '.join(TRANSPORTS)}")

    if delay < 0:
        raise ConfigError(f"delay must not be negative, got {delay}")
    if timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {timeout}")
    for name, seconds in (("delay", delay), ("timeout", timeout)):
        if not seconds <= MAX_DURATION:
            raise ConfigError(f"{name} of {seconds}s is too long; maximum is {MAX_DURATION:.0f}s")

    return KnockPlan(target=target, ports=ports, transport=transport,
                     delay=float(delay), timeout=float(timeout), report=bool(report))
