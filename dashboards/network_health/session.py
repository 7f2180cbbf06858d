import asyncio
import logging
import threading
import time

from config import (
    DEFAULT_NETWORK, DEFAULT_REFRESH_TIME, DEFAULT_TIMEFRAME,
    FETCH_TIMEOUT, LOGGER_NAME, SESSION_IDLE_CHECK_INTERVAL, SESSION_IDLE_TIMEOUT
)
from dashboards.network_health.data_generator import SampleGenerator
from dashboards.network_health.models import validate_network, validate_timeframe
from dashboards.network_health.refresh_controller import RefreshController

# Set up logging
logger = logging.getLogger(LOGGER_NAME)


class DashboardSession:
    def __init__(self, generator=None, network=DEFAULT_NETWORK, timeframe=DEFAULT_TIMEFRAME,
                 refresh_interval=DEFAULT_REFRESH_TIME, fetch_timeout=FETCH_TIMEOUT,
                 call_timeout=5.0, idle_timeout=SESSION_IDLE_TIMEOUT,
                 idle_check_interval=SESSION_IDLE_CHECK_INTERVAL):
        """
        Run a RefreshController on its own event loop thread.

        Streamlit scripts are synchronous and re-run on every interaction, so the
        controller lives on a background thread for the lifetime of the session
        and the script talks to it through this object.

        The page calls touch() on every poll. Once no touch has arrived for
        idle_timeout seconds (the browser tab went away) the session closes itself.

        Args:
            generator: Sample source, defaults to SampleGenerator()
            network: Initially selected network id
            timeframe: Initially selected timeframe id
            refresh_interval: Seconds between scheduled refreshes
            fetch_timeout: Seconds before a pending fetch turns into an error
            call_timeout: Seconds to wait for the loop thread to answer a call
            idle_timeout: Seconds without touch() before closing (None never closes)
            idle_check_interval: Seconds between idle checks
        """
        self.controller = RefreshController(
            generator or SampleGenerator(),
            network=network,
            timeframe=timeframe,
            refresh_interval=refresh_interval,
            fetch_timeout=fetch_timeout,
        )
        self.call_timeout = call_timeout
        self.idle_timeout = idle_timeout
        self.idle_check_interval = idle_check_interval
        self.last_seen = time.monotonic()
        self._loop = None
        self._thread = None
        self._watchdog = None

    @property
    def is_open(self):
        return (
            self._thread is not None
            and self._thread.is_alive()
            and self.controller.active
        )

    @property
    def state(self):
        return self.controller.state

    @property
    def network(self):
        return self.controller.network

    @property
    def timeframe(self):
        return self.controller.timeframe

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def touch(self):
        """Record that the page is still polling this session"""
        self.last_seen = time.monotonic()

    def open(self):
        """Start the loop thread and the controller"""
        if self._thread is not None:
            return self

        self.touch()
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._run_loop, name="network-health-refresh")
        self._thread.daemon = True
        self._thread.start()

        try:
            self._call(self._start())
        except Exception:
            logger.error("Dashboard session failed to start")
            self._stop_thread()
            raise

        logger.info("Dashboard session started")
        return self

    def close(self):
        """Stop the controller, then the loop thread"""
        if self._thread is None:
            return

        try:
            if self._thread.is_alive():
                self._call(self._shutdown())
        finally:
            self._stop_thread()
            logger.info("Dashboard session closed")

    def select(self, network=None, timeframe=None):
        if network is not None:
            validate_network(network)
        if timeframe is not None:
            validate_timeframe(timeframe)
        return self._call(self._invoke(self.controller.select, network, timeframe))

    def retry(self):
        return self._call(self._invoke(self.controller.retry))

    async def _start(self):
        await self.controller.__aenter__()
        if self.idle_timeout is not None:
            self._watchdog = asyncio.get_running_loop().create_task(self._watch_idle())

    async def _shutdown(self):
        if self._watchdog is not None:
            self._watchdog.cancel()
            await asyncio.gather(self._watchdog, return_exceptions=True)
            self._watchdog = None
        await self.controller.close()

    async def _watch_idle(self):
        while True:
            await asyncio.sleep(self.idle_check_interval)
            idle = time.monotonic() - self.last_seen
            if idle > self.idle_timeout:
                logger.info(f"Dashboard session idle for {idle:.0f}s, closing")
                self._watchdog = None
                await self.controller.close()
                asyncio.get_running_loop().stop()
                return

    def _run_loop(self):
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_forever()
        finally:
            self._loop.close()

    def _stop_thread(self):
        if self._thread.is_alive() and not self._loop.is_closed():
            try:
                self._loop.call_soon_threadsafe(self._loop.stop)
            except RuntimeError:
                # The idle watchdog closed the loop in between
                logger.debug("Event loop already closed")
            self._thread.join(timeout=1.0)
        self._thread = None
        self._loop = None

    @staticmethod
    async def _invoke(method, *args):
        # Controller methods need the running loop, so call them from inside it
        return method(*args)

    def _call(self, coro):
        if self._loop is None or self._loop.is_closed() or not self._thread.is_alive():
            coro.close()
            raise RuntimeError("Dashboard session is not open")
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result(self.call_timeout)
