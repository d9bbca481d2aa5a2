import time

from knockr.knockutil import ResolveError


def resolve_target(target, transport, logger):
    """
    Returns the host part used for every knock address. Literal addresses are
    normalised, ipv6 gets brackets. A hostname is looked up once up front so
    the first knock's timeout isn't spent on DNS; failure is fatal.
    """
    ip = transport.parse_literal(target)
    if ip is not None:
        if ip.version == 6 and ip.ipv4_mapped is not None:
            return str(ip.ipv4_mapped)
        if ip.version == 6:
            return f"[{ip}]"
        return str(ip)

    start = time.monotonic()
    try:
        addrs = transport.lookup(target)
    except (OSError, UnicodeError) as e:
        raise ResolveError(f"lookup {target}: {e}") from e
    if not addrs:
        raise ResolveError(f"lookup {target}: no addresses")

    logger.debug(f"Resolved {target} to {', '.join(sorted(set(addrs)))} "
                 f"in {time.monotonic() - start:.3f}s")
    return target
