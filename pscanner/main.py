import argparse
import asyncio
import logging
import sys

from rich.logging import RichHandler

from .config import DEFAULT_PORTS, DEFAULT_TIMEOUT_MS, DEFAULT_WORKERS, MAX_WORKERS, load_config
from .errors import ConfigError, PortSpecError, ScanError
from .scanner import PortScanner
from .ui import ScannerUI
from .utils import parse_ports

EXIT_OK = 0
EXIT_USAGE = 2
EXIT_INTERRUPTED = 130

EPILOG = """\
Example:
  pscanner --host example.com --ports 80,443,8000-8100 --workers 200 --timeout 300
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pscanner",
        description="pscanner - Fast TCP port scanner",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument("--host", help="Target host (domain name or IP) [required]")
    parser.add_argument("-p", "--ports", default=DEFAULT_PORTS,
                        help=f"Ports to scan, single ports and ranges, e.g. \"80,443,21-25\" (default: {DEFAULT_PORTS})")
    parser.add_argument("-w", "--workers", type=int, default=DEFAULT_WORKERS,
                        help=f"Number of concurrent workers, 1-{MAX_WORKERS} (default: {DEFAULT_WORKERS})")
    parser.add_argument("-t", "--timeout", type=int, default=DEFAULT_TIMEOUT_MS,
                        help=f"Dial timeout in milliseconds, 0 for no deadline (default: {DEFAULT_TIMEOUT_MS})")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scan progress at debug level")
    parser.add_argument("--no-progress", action="store_true", help="Do not draw the progress bar")
    return parser


def setup_logging(verbose: bool, ui: ScannerUI):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=ui.err_console, show_path=False)],
        force=True
    )


def _validate_args(args):
    # Checked before the port spec so a missing host is reported first
    if not args.host or not args.host.strip():
        raise ConfigError("--host is required")
    if args.workers <= 0:
        raise ConfigError("--workers must be > 0")
    if args.workers > MAX_WORKERS:
        raise ConfigError(f"--workers too large (max {MAX_WORKERS})")
    if args.timeout < 0:
        raise ConfigError("--timeout must be >= 0")


async def _run_scan(scanner: PortScanner, ui: ScannerUI, show_progress: bool):
    if not show_progress:
        return await scanner.run()

    with ui.create_progress() as progress:
        task_id = progress.add_task(
            f"[cyan]Scanning {len(scanner.config.ports)} ports...",
            total=len(scanner.config.ports)
        )
        scanner.on_dialed = lambda port, is_open: progress.advance(task_id)
        return await scanner.run()


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    ui = ScannerUI()
    setup_logging(args.verbose, ui)

    try:
        # 1. Fail fast on bad input, before any network activity
        _validate_args(args)

        ports = parse_ports(args.ports)
        if not ports:
            ui.show_notice("no ports to scan")
            return EXIT_OK

        config = load_config(
            host=args.host,
            ports=ports,
            workers=args.workers,
            timeout_ms=args.timeout
        )
    except PortSpecError as e:
        ui.show_error(f"parsing ports: {e}")
        return EXIT_USAGE
    except ScanError as e:
        ui.show_error(str(e))
        if not args.host:
            parser.print_usage(sys.stderr)
        return EXIT_USAGE

    # 2. Scan
    scanner = PortScanner(config)
    ui.display_start(config.host, len(config.ports), config.effective_workers)
    try:
        report = asyncio.run(_run_scan(scanner, ui, show_progress=not args.no_progress))
    except KeyboardInterrupt:
        ui.show_notice("Scan interrupted by user.")
        return EXIT_INTERRUPTED

    # 3. Report
    ui.display_results(report)
    return EXIT_OK


def run():
    sys.exit(main())


if __name__ == "__main__":
    run()
