"""Polling engine for mongomon."""

import logging
import threading
import time
from collections.abc import Callable, Sequence

from mongomon.errors import TransportError
from mongomon.metrics import MetricFunction
from mongomon.models import PollState, Snapshot

logger = logging.getLogger(__name__)

Fetch = Callable[[], Snapshot]
Sink = Callable[[str], None]


def run_cycle(
    state: PollState,
    fetch: Fetch,
    functions: Sequence[MetricFunction],
    sink: Sink,
) -> PollState:
    """
    Run one poll: fetch, compute, emit, and return the next state.

    The first successful fetch only primes the state. Later fetches emit one
    line per metric function, in order, through a single ``sink`` call. A
    transport failure is reported and leaves ``state`` as it was; any other
    error propagates and the caller keeps its current state.
    """
    try:
        snapshot = fetch()
    except TransportError as exc:
        logger.error("Error while sending a request: %s", exc)
        return state

    if not state.is_primed:
        logger.debug("First snapshot stored, metrics start on the next poll")
        return state.advance(snapshot)

    report = "".join(fn(snapshot, state.previous) for fn in functions)
    sink(report)
    return state.advance(snapshot)


class StatusMonitor:
    """
    Scheduler that runs ``run_cycle`` at a fixed interval.

    Ticks are aligned to multiples of the poll rate from start. Only one cycle
    runs at a time: if a cycle overruns, the ticks it covered are skipped.
    Errors escaping a cycle are logged and polling continues.
    """

    def __init__(
        self,
        fetch: Fetch,
        functions: Sequence[MetricFunction],
        sink: Sink,
        poll_rate: float = 5.0,
    ) -> None:
        """
        Initialize the StatusMonitor.

        Args:
            fetch: Returns a fresh snapshot, raising TransportError on failure.
            functions: Compiled metric catalog.
            sink: Receives each poll's report text.
            poll_rate: Seconds between polls. Default 5.0s.
        """
        self._fetch = fetch
        self._functions = tuple(functions)
        self._sink = sink
        self._poll_rate = max(0.1, poll_rate)
        self._state = PollState()
        self._stop_event = threading.Event()
        self._cycle_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def poll_rate(self) -> float:
        """Get the current poll rate."""
        return self._poll_rate

    @poll_rate.setter
    def poll_rate(self, value: float) -> None:
        """Set the poll rate."""
        self._poll_rate = max(0.1, value)  # Minimum 0.1 seconds

    @property
    def state(self) -> PollState:
        """The state after the last completed cycle."""
        return self._state

    @property
    def is_running(self) -> bool:
        """Check if the monitor thread is running."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start polling in a daemon thread."""
        if self.is_running:
            return

        self._stop_event.clear()
        self._thread = threading.Thread(
            target=self._poll_loop,
            daemon=True,
            name="StatusMonitor",
        )
        self._thread.start()

    def run(self) -> None:
        """Poll in the calling thread until ``stop`` is called."""
        if self.is_running:
            raise RuntimeError("StatusMonitor is already polling in its own thread")

        self._stop_event.clear()
        self._poll_loop()

    def stop(self, timeout: float | None = 5.0) -> None:
        """
        Stop polling.

        Args:
            timeout: How long to wait for the thread to stop (seconds).
        """
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def tick(self) -> None:
        """
        Run one cycle, keeping the current state if it fails.

        A tick that arrives while another cycle is still running is skipped.
        """
        if not self._cycle_lock.acquire(blocking=False):
            logger.debug("Previous cycle still running, skipping tick")
            return
        try:
            self._state = run_cycle(self._state, self._fetch, self._functions, self._sink)
        except Exception as exc:
            logger.error("Poll cycle failed: %s: %s", type(exc).__name__, exc)
            logger.debug("Poll cycle traceback", exc_info=True)
        finally:
            self._cycle_lock.release()

    def _poll_loop(self) -> None:
        """Main polling loop."""
        next_tick = time.monotonic() + self._poll_rate
        while not self._stop_event.wait(timeout=max(0.0, next_tick - time.monotonic())):
            self.tick()

            next_tick += self._poll_rate
            now = time.monotonic()
            if next_tick <= now:
                skipped = int((now - next_tick) // self._poll_rate) + 1
                logger.debug("Cycle overran the poll interval, skipping %d tick(s)", skipped)
                next_tick += skipped * self._poll_rate
