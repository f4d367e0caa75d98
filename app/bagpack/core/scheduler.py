"""Manual and periodic refresh of the inventory.

The RefreshScheduler owns the single "current" CollectionSummary. At
most one aggregation runs at a time: a refresh requested while another
is in flight joins it and receives the same summary.
"""

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future
from datetime import timedelta

from bagpack.core.aggregator import InventoryAggregator
from bagpack.models.snapshot import CollectionSummary

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = timedelta(hours=24)

RefreshCallback = Callable[[CollectionSummary], None]


class RefreshScheduler:
    """Runs the aggregator on demand and on a recurring timer.

    States: idle or running, plus an independent armed timer that
    survives across runs until ``stop()``.

    Example:
        >>> scheduler = RefreshScheduler(InventoryAggregator())
        >>> summary = scheduler.refresh_now()
        >>> scheduler.schedule()   # every 24h from now
        >>> scheduler.stop()
    """

    def __init__(
        self,
        aggregator: InventoryAggregator,
        *,
        interval: timedelta = DEFAULT_INTERVAL,
        on_refresh: RefreshCallback | None = None,
    ) -> None:
        """Initialize the scheduler.

        Args:
            aggregator: Aggregator invoked for each refresh.
            interval: Period of the recurring timer.
            on_refresh: Called with every newly stored summary.
        """
        if interval <= timedelta(0):
            msg = f"Refresh interval must be positive, got {interval}"
            raise ValueError(msg)

        self._aggregator = aggregator
        self._interval = interval
        self._on_refresh = on_refresh
        self._lock = threading.Lock()
        self._current: CollectionSummary | None = None
        self._inflight: Future[CollectionSummary] | None = None
        self._timer_stop: threading.Event | None = None

    @property
    def interval(self) -> timedelta:
        """Period of the recurring timer."""
        return self._interval

    @property
    def current(self) -> CollectionSummary | None:
        """Most recently completed summary, or None before the first run."""
        return self._current

    @property
    def is_running(self) -> bool:
        """Check if an aggregation is in flight."""
        with self._lock:
            return self._inflight is not None

    @property
    def is_armed(self) -> bool:
        """Check if the recurring timer is active."""
        with self._lock:
            return self._timer_stop is not None

    def refresh_now(self) -> CollectionSummary:
        """Run an aggregation, or join the one already in flight.

        The new summary replaces ``current`` before any caller returns.

        Returns:
            The summary produced by the (possibly shared) run.

        Raises:
            AggregationFailure: If the aggregator could not produce a summary.
                ``current`` is left unchanged.
        """
        with self._lock:
            inflight = self._inflight
            if inflight is None:
                future: Future[CollectionSummary] = Future()
                future.set_running_or_notify_cancel()
                self._inflight = future

        if inflight is not None:
            logger.debug("Refresh already running, joining it")
            return inflight.result()

        try:
            summary = self._aggregator.collect()
        except BaseException as e:
            with self._lock:
                self._inflight = None
            future.set_exception(e)
            raise

        with self._lock:
            self._current = summary
            self._inflight = None
        future.set_result(summary)

        if self._on_refresh is not None:
            try:
                self._on_refresh(summary)
            except Exception:
                logger.exception("Refresh callback failed")

        return summary

    def schedule(self) -> None:
        """Arm the recurring timer, starting the interval now.

        Calling this while armed restarts the interval; only one timer
        is ever active.
        """
        stop = threading.Event()
        with self._lock:
            if self._timer_stop is not None:
                self._timer_stop.set()
            self._timer_stop = stop

        thread = threading.Thread(
            target=self._timer_loop,
            args=(stop,),
            name="bagpack-refresh-timer",
            daemon=True,
        )
        thread.start()
        logger.debug("Refresh timer armed (every %s)", self._interval)

    def stop(self) -> None:
        """Disarm the timer. A refresh already in flight still completes."""
        with self._lock:
            if self._timer_stop is not None:
                self._timer_stop.set()
            self._timer_stop = None

    def shutdown(self) -> None:
        """Disarm the timer and discard the current summary."""
        self.stop()
        with self._lock:
            self._current = None

    def _timer_loop(self, stop: threading.Event) -> None:
        """Call ``refresh_now()`` every interval until ``stop`` is set."""
        seconds = self._interval.total_seconds()
        while not stop.wait(seconds):
            try:
                self.refresh_now()
            except Exception:
                logger.exception("Scheduled refresh failed")
