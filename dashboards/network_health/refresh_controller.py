import asyncio
import logging

from config import (
    DEFAULT_NETWORK, DEFAULT_REFRESH_TIME, DEFAULT_TIMEFRAME,
    FETCH_TIMEOUT, LOGGER_NAME
)
from dashboards.network_health.data_generator import GenerationError
from dashboards.network_health.models import validate_network, validate_timeframe
from dashboards.network_health.state import Error, Loading, Ready

# Set up logging
logger = logging.getLogger(LOGGER_NAME)


class RefreshController:
    def __init__(self, generator, network=DEFAULT_NETWORK, timeframe=DEFAULT_TIMEFRAME,
                 refresh_interval=DEFAULT_REFRESH_TIME, fetch_timeout=FETCH_TIMEOUT):
        """
        Drive the fetch lifecycle for the dashboard.

        Use as an async context manager: entering issues the first fetch and
        starts the refresh timer, leaving cancels both.

        Args:
            generator: Object with an async generate(network, timeframe) method
            network: Initially selected network id
            timeframe: Initially selected timeframe id
            refresh_interval: Seconds between scheduled refreshes (None disables them)
            fetch_timeout: Seconds before a pending fetch turns into an error (None waits forever)
        """
        self.generator = generator
        self.refresh_interval = refresh_interval
        self.fetch_timeout = fetch_timeout
        self._network = validate_network(network)
        self._timeframe = validate_timeframe(timeframe)
        self._request_id = 0
        self._state = Loading(self._request_id, self._network, self._timeframe)
        self._active = False
        self._timer = None
        self._fetches = set()
        self._subscribers = []

    @property
    def state(self):
        return self._state

    @property
    def network(self):
        return self._network

    @property
    def timeframe(self):
        return self._timeframe

    @property
    def request_id(self):
        return self._request_id

    @property
    def active(self):
        return self._active

    async def __aenter__(self):
        if not self._active:
            self._active = True
            self.start()
            self._schedule_timer()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        """Cancel the refresh timer and any fetch still in flight"""
        if not self._active:
            return
        self._active = False
        # Bump the id so nothing still in flight matches it
        self._request_id += 1

        tasks = list(self._fetches)
        if self._timer is not None:
            tasks.append(self._timer)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

        self._timer = None
        self._fetches.clear()
        logger.info("Refresh controller stopped")

    def subscribe(self, callback):
        """Call callback with every new state; returns a function that unsubscribes"""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def start(self, network=None, timeframe=None):
        """Enter the loading state and fetch data for the given (or current) selection"""
        self._require_active()
        network = validate_network(self._network if network is None else network)
        timeframe = validate_timeframe(self._timeframe if timeframe is None else timeframe)

        self._network, self._timeframe = network, timeframe
        self._request_id += 1
        request_id = self._request_id
        self._set_state(Loading(request_id, network, timeframe))
        logger.info(f"Fetching {network} data for {timeframe} (request {request_id})")

        task = asyncio.get_running_loop().create_task(self._fetch(request_id, network, timeframe))
        self._fetches.add(task)
        task.add_done_callback(self._fetches.discard)
        return request_id

    def select(self, network=None, timeframe=None):
        """Switch to a new selection, restarting the fetch and the refresh timer

        Returns the new request id, or None when the selection is unchanged.
        """
        self._require_active()
        network = validate_network(self._network if network is None else network)
        timeframe = validate_timeframe(self._timeframe if timeframe is None else timeframe)

        if (network, timeframe) == (self._network, self._timeframe):
            return None

        request_id = self.start(network, timeframe)
        self._schedule_timer()
        return request_id

    def retry(self):
        """Re-run the failed fetch; only does something in the error state"""
        self._require_active()
        state = self._state
        if not isinstance(state, Error):
            logger.warning(f"Ignoring retry while in {type(state).__name__} state")
            return False

        logger.info(f"Retrying {state.network} ({state.timeframe}) after error: {state.message}")
        self.start(state.network, state.timeframe)
        return True

    async def _fetch(self, request_id, network, timeframe):
        try:
            pending = self.generator.generate(network, timeframe)
            if self.fetch_timeout is not None:
                sequence = await asyncio.wait_for(pending, self.fetch_timeout)
            else:
                sequence = await pending
        except asyncio.TimeoutError:
            outcome = Error(request_id, network, timeframe,
                            f"Request timed out after {self.fetch_timeout}s")
        except GenerationError as e:
            outcome = Error(request_id, network, timeframe, str(e) or "An unknown error occurred")
        except Exception as e:
            logger.error(f"Unexpected error fetching {network} data: {str(e)}")
            outcome = Error(request_id, network, timeframe, str(e) or "An unknown error occurred")
        else:
            outcome = Ready(request_id, network, timeframe, sequence)

        if request_id != self._request_id:
            logger.debug(f"Discarding stale result for request {request_id} (current is {self._request_id})")
            return

        if isinstance(outcome, Ready):
            logger.info(f"Loaded {len(outcome.sequence)} samples for {network} ({timeframe})")
        else:
            logger.warning(f"Fetch failed for {network} ({timeframe}): {outcome.message}")
        self._set_state(outcome)

    def _schedule_timer(self):
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self.refresh_interval:
            self._timer = asyncio.get_running_loop().create_task(self._run_timer())

    async def _run_timer(self):
        while True:
            await asyncio.sleep(self.refresh_interval)
            logger.info(f"Scheduled refresh for {self._network} ({self._timeframe})")
            self.start()

    def _set_state(self, state):
        self._state = state
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception as e:
                logger.error(f"Error in state subscriber: {str(e)}")

    def _require_active(self):
        if not self._active:
            raise RuntimeError("Refresh controller is not running")
