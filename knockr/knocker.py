import socket
import threading
import time

from knockr import plan as kplan
from knockr import resolver
from knockr.transport import SocketTransport, dial_address

# fixed udp payload so the knock is recognisable on the wire
UDP_MARKER = b"\xde\xca\xfb\xad"


class Knocker:
    def __init__(self, logger, transport=None, cancel_event=None):
        self.logger = logger
        self.transport = transport if transport is not None else SocketTransport()
        self.cancel_event = cancel_event if cancel_event is not None else threading.Event()


    def cancel(self):
        self.cancel_event.set()


    def knock(self, host, port, transport_name, timeout):
        address = dial_address(host, port)

        if transport_name == "udp":
            # no handshake with a connectionless protocol, only the local
            # send can fail
            try:
                self.transport.send_datagram(address, UDP_MARKER, timeout)
            except OSError as e:
                return kplan.KnockOutcome(port, address, kplan.ERROR, e.strerror or str(e))
            return kplan.KnockOutcome(port, address, kplan.SENT)

        try:
            self.transport.connect_stream(address, timeout)
        except socket.timeout:
            return kplan.KnockOutcome(port, address, kplan.TIMEOUT)
        except OSError as e:
            return kplan.KnockOutcome(port, address, kplan.ERROR, e.strerror or str(e))
        return kplan.KnockOutcome(port, address, kplan.OPEN)


    def knock_sequence(self, plan, host):
        # Yields one outcome per port, in plan order. The delay runs before
        # every knock but the first, so none trails the last one.
        for i, port in enumerate(plan.ports):
            if i > 0 and self.cancel_event.wait(plan.delay):
                self.logger.warning(f"Knock sequence cancelled before port {port}, "
                                    f"{len(plan.ports) - i} knock(s) not sent")
                return
            if self.cancel_event.is_set():
                return

            start = time.monotonic()
            outcome = self.knock(host, port, plan.transport, plan.timeout)
            self.logger.debug(f"Knock {i+1}/{len(plan.ports)} on {outcome.address} "
                              f"took {time.monotonic() - start:.3f}s")
            yield outcome


    def report(self, host, outcome):
        line = f"{host} {outcome.port:5d} {outcome.status}"
        if outcome.detail:
            line += f": {outcome.detail}"
        self.logger.info(line)


    def run(self, plan):
        """
        Resolves the target once and knocks every port of the plan.
        Returns the number of knocks attempted. Only a failed lookup
        (ResolveError) propagates; knock results are never errors.
        """
        host = resolver.resolve_target(plan.target, self.transport, self.logger)

        count = 0
        for outcome in self.knock_sequence(plan, host):
            count += 1
            if plan.report:
                self.report(host, outcome)
        return count
