#!/usr/bin/env python3
# main.py
"""Default carrier setup on a spectrum element (VISA resource or 'FAKE')."""
import argparse
import os
import signal
import sys
from typing import List, Optional

from core.config import CarrierConfig
from core.constants import DEFAULT_BACKENDS, PREFERRED_RESOURCE
from core.controller import Mode
from core.element import Element
from core.errors import ElementError, HostSignal, ScriptAbortError, ScriptForceAbortError, ScriptTimeoutError
from core.exit_codes import ExitCode
from core.host import Engine
from core.logging import configure_logging, get_logger
from core.script import INDEX_REFERENCE_PARAM, MODE_PARAM, run
from drivers.discovery import scan_resources


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description=__doc__)
    p.add_argument("--resource", default=os.getenv("CARRIERS_RESOURCE", PREFERRED_RESOURCE),
                   help="VISA resource of the spectrum element, or FAKE for the simulator")
    p.add_argument("--mode", default=os.getenv("CARRIERS_MODE", ""),
                   help="One of: " + ", ".join(m.value for m in Mode))
    p.add_argument("--index-reference", dest="index_reference",
                   default=os.getenv("CARRIERS_INDEX_REFERENCE", ""),
                   help="Carrier row key for FrequencyShiftUp/FrequencyShiftDown")
    p.add_argument("--timeout", type=float, default=None, help="Abort the run after this many seconds")
    p.add_argument("--log-level", dest="log_level", default=None, help="DEBUG, INFO, WARNING, ERROR")
    p.add_argument("--log-json", dest="log_json", default=None, help="Also write JSON-lines logs to this file")
    p.add_argument("--list-resources", dest="list_resources", action="store_true",
                   help="Print the VISA resources found and exit")
    args = p.parse_args(argv)
    if not args.list_resources and not args.resource:
        p.error("--resource is required (or set CARRIERS_RESOURCE)")
    if args.timeout is not None and args.timeout <= 0:
        p.error("--timeout must be positive")
    return args


def _raise_force_abort(signum, _frame):
    raise ScriptForceAbortError(f"signal {signum}")


def _raise_timeout(_signum, _frame):
    raise ScriptTimeoutError("run timeout")


def _install_signal_handlers(timeout: Optional[float]) -> dict:
    previous = {signal.SIGTERM: signal.signal(signal.SIGTERM, _raise_force_abort)}
    if timeout and hasattr(signal, "SIGALRM"):
        previous[signal.SIGALRM] = signal.signal(signal.SIGALRM, _raise_timeout)
        signal.setitimer(signal.ITIMER_REAL, timeout)
    return previous


def _restore_signal_handlers(previous: dict):
    if hasattr(signal, "SIGALRM") and signal.SIGALRM in previous:
        signal.setitimer(signal.ITIMER_REAL, 0)
    for signum, handler in previous.items():
        signal.signal(signum, handler)


def main(argv: Optional[List[str]] = None, element: Optional[Element] = None) -> int:
    try:
        args = parse_args(argv)
    except SystemExit as e:
        return ExitCode.INVALID_ARGS if e.code else ExitCode.SUCCESS

    configure_logging(level=args.log_level, json_file=args.log_json)
    log = get_logger(__name__)

    if args.list_resources:
        for addr, backend in scan_resources(DEFAULT_BACKENDS):
            print(f"{addr}\t{backend}")
        return ExitCode.SUCCESS

    element = element or Element(DEFAULT_BACKENDS)
    try:
        element.connect(args.resource)
    except ElementError as e:
        log.error("cannot open %s: %s", args.resource, e, extra={"resource": args.resource})
        return ExitCode.ELEMENT_UNAVAILABLE
    log.info("connected to %s (%s)", element.idn() or args.resource, element.backend_in_use,
             extra={"resource": args.resource})

    engine = Engine({MODE_PARAM: args.mode, INDEX_REFERENCE_PARAM: args.index_reference})
    rc = ExitCode.SUCCESS
    previous = _install_signal_handlers(args.timeout)
    try:
        run(engine, element, CarrierConfig.from_env())
    except ScriptAbortError as e:
        if e.success and e.message:
            log.info(e.message)
        rc = e.code
    except ScriptForceAbortError as e:
        log.error("forced abort: %s", e.message)
        rc = ExitCode.FORCE_ABORT
    except ScriptTimeoutError as e:
        log.error("%s after %ss", e.message, args.timeout)
        rc = ExitCode.TIMEOUT
    except HostSignal as e:
        log.error("%s: %s", type(e).__name__, e.message)
        rc = ExitCode.GENERAL_ERROR
    except KeyboardInterrupt:
        log.warning("interrupted")
        rc = ExitCode.INTERRUPTED
    finally:
        _restore_signal_handlers(previous)
        element.close()
    log.info("done: %s (%d)", ExitCode.message(rc), rc, extra={"mode": args.mode})
    return rc


def main_cli():
    sys.exit(main())


if __name__ == "__main__":
    main_cli()
