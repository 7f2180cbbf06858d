import threading
import time

import pytest

from dashboards.network_health.data_generator import SampleGenerator
from dashboards.network_health.models import InvalidSelectionError
from dashboards.network_health.refresh_controller import RefreshController
from dashboards.network_health.session import DashboardSession
from dashboards.network_health.state import Error, Ready
from tests.conftest import wait_until


@pytest.fixture
def session():
    generator = SampleGenerator(failure_probability=0, latency=0, rng=7)
    session = DashboardSession(generator=generator, refresh_interval=None)
    yield session.open()
    session.close()


def test_initial_fetch(session):
    assert session.is_open
    assert wait_until(lambda: isinstance(session.state, Ready))
    assert session.state.network == "bitcoin"
    assert len(session.state.sequence) == 24


def test_select_switches_data(session):
    assert wait_until(lambda: isinstance(session.state, Ready))

    request_id = session.select("ethereum", "7d")
    assert request_id == 2
    assert session.network == "ethereum"
    assert session.timeframe == "7d"

    assert wait_until(lambda: isinstance(session.state, Ready) and session.state.request_id == 2)
    assert len(session.state.sequence) == 7
    assert session.state.sequence.network == "ethereum"

    # Same selection again does nothing
    assert session.select("ethereum", "7d") is None


def test_invalid_selection_raised_in_caller(session):
    with pytest.raises(InvalidSelectionError):
        session.select(network="dogecoin")
    assert session.network == "bitcoin"


def test_retry_only_after_error(session):
    assert wait_until(lambda: isinstance(session.state, Ready))
    assert session.retry() is False


def test_retry_after_error():
    generator = SampleGenerator(failure_probability=1, latency=0)

    with DashboardSession(generator=generator, network="solana", timeframe="1h", refresh_interval=None) as session:
        assert wait_until(lambda: isinstance(session.state, Error))
        assert session.state.message == "Network error: Failed to fetch data"

        assert session.retry() is True
        assert wait_until(lambda: isinstance(session.state, Error) and session.state.request_id == 2)
        assert (session.state.network, session.state.timeframe) == ("solana", "1h")


def test_close_releases_thread():
    session = DashboardSession(generator=SampleGenerator(failure_probability=0, latency=0), refresh_interval=None)
    session.open()
    thread = session._thread

    session.close()

    assert not session.is_open
    assert not thread.is_alive()
    assert not session.controller.active
    with pytest.raises(RuntimeError):
        session.select("ethereum")

    # Closing twice is harmless
    session.close()


def test_idle_session_closes_itself():
    session = DashboardSession(
        generator=SampleGenerator(failure_probability=0, latency=0),
        refresh_interval=0.05,
        idle_timeout=0.1,
        idle_check_interval=0.02,
    )
    session.open()
    thread = session._thread

    # Nobody touches the session, as when the browser tab is closed
    assert wait_until(lambda: not session.is_open)
    assert wait_until(lambda: not thread.is_alive())
    assert not session.controller.active

    request_id = session.controller.request_id
    time.sleep(0.15)
    assert session.controller.request_id == request_id

    with pytest.raises(RuntimeError):
        session.retry()
    session.close()
    assert session._thread is None


def test_touched_session_stays_open():
    session = DashboardSession(
        generator=SampleGenerator(failure_probability=0, latency=0),
        refresh_interval=None,
        idle_timeout=0.1,
        idle_check_interval=0.02,
    )
    with session:
        deadline = time.monotonic() + 0.3
        while time.monotonic() < deadline:
            session.touch()
            time.sleep(0.02)
        assert session.is_open

    assert not session.is_open


def test_failed_open_releases_thread(monkeypatch):
    async def broken_enter(self):
        raise RuntimeError("controller failed to start")

    monkeypatch.setattr(RefreshController, "__aenter__", broken_enter)
    session = DashboardSession(generator=SampleGenerator(failure_probability=0, latency=0), refresh_interval=None)

    with pytest.raises(RuntimeError, match="controller failed to start"):
        session.open()

    assert not session.is_open
    assert session._thread is None
    assert wait_until(lambda: not any(
        t.name == "network-health-refresh" and t.is_alive() for t in threading.enumerate()
    ))
