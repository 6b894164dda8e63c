import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional

from .config import ScanConfig, load_config

logger = logging.getLogger(__name__)

# Marks a closed queue. Each queue has exactly one closer.
_CLOSED = None

Dialer = Callable[[str, int, Optional[float]], Awaitable[bool]]


@dataclass
class ScanReport:
    """Outcome of a single scan run"""
    host: str
    ports_scanned: int
    workers_used: int
    timeout_ms: int
    open_ports: List[int] = field(default_factory=list)
    duration: float = 0.0
    dial_attempts: int = 0


async def dial_port(host: str, port: int, timeout: Optional[float]) -> bool:
    """
    Attempts a TCP connect to host:port within `timeout` seconds
    (None waits as long as the OS allows).
    Returns True if the handshake completed. Refused, unreachable,
    unresolvable and timed-out dials all return False.
    """
    try:
        reader, writer = await asyncio.wait_for(
            asyncio.open_connection(host, port),
            timeout=timeout
        )
    except (asyncio.TimeoutError, OSError):
        return False

    # Connection establishment is the whole probe; no data is exchanged
    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        pass
    return True


async def collect(results: asyncio.Queue) -> List[int]:
    """
    Drains `results` until the close marker arrives and returns the
    collected ports in ascending order.
    """
    found = []
    while True:
        port = await results.get()
        if port is _CLOSED:
            break
        found.append(port)
    found.sort()
    return found


class PortScanner:
    """
    Bounded worker-pool TCP connect scanner.

    One distributor feeds ports into a job queue sized to the worker count,
    N dialers drain it, and a coordinator closes the result queue once every
    dialer has exited so the aggregator knows collection is complete.
    """

    def __init__(self, config: ScanConfig, dial: Dialer = dial_port,
                 on_dialed: Optional[Callable[[int, bool], None]] = None):
        self.config = config
        self.dial = dial
        self.on_dialed = on_dialed
        self.dial_attempts = 0
        self._stopping = asyncio.Event()

    @property
    def workers_used(self) -> int:
        return self.config.effective_workers

    def stop(self):
        """
        Asks a running scan to wind down: no further ports are handed out
        and dialers skip what is still queued. run() returns the ports
        found so far.
        """
        self._stopping.set()

    async def _distribute(self, jobs: asyncio.Queue, worker_count: int):
        for port in self.config.ports:
            if self._stopping.is_set():
                break
            await jobs.put(port)

        # One close marker per dialer
        for _ in range(worker_count):
            await jobs.put(_CLOSED)

    async def _dialer(self, jobs: asyncio.Queue, results: asyncio.Queue):
        host = self.config.host
        timeout = self.config.timeout
        while True:
            port = await jobs.get()
            if port is _CLOSED:
                break
            if self._stopping.is_set():
                continue

            self.dial_attempts += 1
            is_open = await self.dial(host, port, timeout)
            if self.on_dialed:
                self.on_dialed(port, is_open)
            if is_open:
                logger.debug("%s:%d open", host, port)
                await results.put(port)

    async def _coordinate(self, dialers: List[asyncio.Task], results: asyncio.Queue):
        try:
            await asyncio.gather(*dialers)
        finally:
            await results.put(_CLOSED)

    async def run(self) -> ScanReport:
        """
        Orchestrates the scan and returns a ScanReport with the open ports
        sorted ascending. Every port is dialed exactly once.
        """
        # Each run starts fresh, including after a previous stop()
        self.dial_attempts = 0
        self._stopping.clear()

        cfg = self.config
        worker_count = cfg.effective_workers
        logger.debug(
            "Scanning %s: %d ports, %d workers, timeout %dms",
            cfg.host, len(cfg.ports), worker_count, cfg.timeout_ms
        )
        start_time = time.monotonic()

        jobs = asyncio.Queue(maxsize=worker_count)
        # Size 1 keeps each dialer waiting on the aggregator before moving on
        results = asyncio.Queue(maxsize=1)

        dialers = [asyncio.create_task(self._dialer(jobs, results)) for _ in range(worker_count)]
        distributor = asyncio.create_task(self._distribute(jobs, worker_count))
        coordinator = asyncio.create_task(self._coordinate(dialers, results))

        try:
            open_ports = await collect(results)
            await asyncio.gather(distributor, coordinator)
        finally:
            for task in (distributor, coordinator, *dialers):
                if not task.done():
                    task.cancel()

        duration = time.monotonic() - start_time
        logger.debug(
            "Scan of %s finished in %.2fs: %d dials, %d open",
            cfg.host, duration, self.dial_attempts, len(open_ports)
        )
        return ScanReport(
            host=cfg.host,
            ports_scanned=len(cfg.ports),
            workers_used=worker_count,
            timeout_ms=cfg.timeout_ms,
            open_ports=open_ports,
            duration=duration,
            dial_attempts=self.dial_attempts
        )


def scan(host: str, ports: List[int], workers: int, timeout_ms: int) -> List[int]:
    """
    Synchronous entry point: validates the parameters and returns the open
    ports among `ports` on `host`, ascending.
    """
    config = load_config(host=host, ports=ports, workers=workers, timeout_ms=timeout_ms)
    report = asyncio.run(PortScanner(config).run())
    return report.open_ports
