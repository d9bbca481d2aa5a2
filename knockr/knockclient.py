#!/usr/bin/env python3

import argparse
import signal
import sys

from knockr import config
from knockr import knocker
from knockr import knockutil
from knockr import log
from knockr import plan


EXAMPLES = """
Examples:

  # knock on three ports using tcp and other defaults
  knockr my.host.name 1234,8923,1233
  # using udp protocol with a 50ms delay between, knock on three ports
  knockr -n udp -d 50ms 123.123.123.10 8327,183,420
"""


def build_parser():
    argp = argparse.ArgumentParser(prog='knockr',
                                   description='Knock on a sequence of ports.',
                                   epilog=EXAMPLES,
                                   formatter_class=argparse.RawDescriptionHelpFormatter)
    argp.add_argument('-d', '--delay',
                      required=False,
                      default=None,
                      help="Delay between knocks, e.g. 100ms, 1.5s. Default is 100ms.")
    argp.add_argument('-t', '--timeout',
                      required=False,
                      default=None,
                      help="Timeout for each knock, e.g. 500ms, 2s. Default is 1s.")
    argp.add_argument('-n', '--network',
                      required=False,
                      default=None,
                      choices=list(plan.TRANSPORTS),
                      help="Network protocol. Default is tcp.")
    argp.add_argument('-s', '--silent',
                      action='store_true',
                      help="Silence all but error output.")
    argp.add_argument('--config-file',
                      required=False,
                      default=None,
                      help="Optional TOML file with [knock] and [logging] sections. " + \
                           "Command line options take precedence.")
    argp.add_argument('--log-level',
                      required=False,
                      default=None,
                      help="debug, info, warning, error or critical. Default is info.")
    argp.add_argument('--syslog',
                      action='store_true',
                      help="Log to syslog instead of stderr.")
    argp.add_argument('-V', '--version',
                      action='version',
                      version=f"%(prog)s {knockutil.Version}")
    argp.add_argument('host',
                      help="Hostname or IP address to knock on.")
    argp.add_argument('ports',
                      nargs='+',
                      help="Ports to knock in order, comma separated. May be " + \
                           "given as several arguments, e.g. 1234,8923 1233")
    return argp


def load_plan(args, cfg):
    delay = knockutil.parse_duration(args.delay) if args.delay is not None else cfg.knock.delay
    timeout = knockutil.parse_duration(args.timeout) if args.timeout is not None else cfg.knock.timeout
    network = args.network if args.network is not None else cfg.knock.network
    silent = args.silent or cfg.knock.silent

    return plan.make_plan(args.host, knockutil.parse_ports(args.ports),
                          transport=network, delay=delay, timeout=timeout,
                          report=not silent)


def main(argv=None):

    tmp_logger = log.Log("info", False)

    argp = build_parser()
    args = argp.parse_args(argv)

    try:
        cfg = config.Config(args.config_file, tmp_logger)
        kplan = load_plan(args, cfg)
    except knockutil.ConfigError as e:
        tmp_logger.error(f"knockr-{knockutil.Version} error: {e}")
        argp.print_usage(sys.stderr)
        return 1

    # initialize logger
    logger = log.Log(args.log_level or cfg.logging.log_level,
                     args.syslog or cfg.logging.syslog)
    tmp_logger = None
    if not kplan.report:
        logger.set_level("error")

    logger.debug(f"Knocking {kplan.target} {kplan.transport} ports={list(kplan.ports)} " + \
                 f"delay={knockutil.format_duration(kplan.delay)} " + \
                 f"timeout={knockutil.format_duration(kplan.timeout)}")

    k = knocker.Knocker(logger)
    # SIGTERM behaves like Ctrl-C; the handler must not touch locks the
    # interrupted main thread may hold
    prev_handler = signal.signal(signal.SIGTERM, signal.default_int_handler)

    try:
        k.run(kplan)
    except knockutil.ResolveError as e:
        logger.error(f"knockr-{knockutil.Version} error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return 130
    finally:
        signal.signal(signal.SIGTERM, prev_handler)

    return 0


if __name__ == '__main__':
    sys.exit(main())
