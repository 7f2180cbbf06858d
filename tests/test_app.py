from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from config import METRIC_CARDS
from dashboards.network_health.data_generator import SampleGenerator
from dashboards.network_health.session import DashboardSession
from dashboards.network_health.state import Error, Loading, Ready
from tests.conftest import wait_until

APP_PATH = str(Path(__file__).resolve().parent.parent / "app.py")


@pytest.fixture
def open_session():
    """Open a session with a generator that never waits, closed after the test"""
    sessions = []

    def _open(failure_probability=0, latency=0):
        generator = SampleGenerator(failure_probability=failure_probability, latency=latency, rng=21)
        session = DashboardSession(generator=generator, refresh_interval=None).open()
        sessions.append(session)
        return session

    yield _open
    for session in sessions:
        session.close()


def run_app(session):
    at = AppTest.from_file(APP_PATH, default_timeout=30)
    at.session_state["health_session"] = session
    return at.run()


def test_ready_view_shows_cards_and_charts(open_session):
    session = open_session()
    assert wait_until(lambda: isinstance(session.state, Ready))

    at = run_app(session)

    assert not at.exception
    assert len(at.error) == 0
    assert [metric.label for metric in at.metric] == list(METRIC_CARDS.values())
    assert len(at.get("plotly_chart")) == 4


def test_loading_view_shows_no_data(open_session):
    session = open_session(latency=30)
    assert isinstance(session.state, Loading)

    at = run_app(session)

    assert not at.exception
    assert len(at.error) == 0
    assert len(at.metric) == 0
    assert len(at.get("plotly_chart")) == 0


def test_error_view_and_retry(open_session):
    session = open_session(failure_probability=1)
    assert wait_until(lambda: isinstance(session.state, Error))
    assert session.controller.request_id == 1

    at = run_app(session)

    assert not at.exception
    assert len(at.error) == 1
    assert "Network error: Failed to fetch data" in at.error[0].value
    assert len(at.metric) == 0
    assert len(at.get("plotly_chart")) == 0

    retry = at.button(key="retry_1")
    assert retry.label == "Retry"
    retry.click().run()

    # The same fetch ran again under a new request id
    assert session.controller.request_id == 2
    assert wait_until(lambda: isinstance(session.state, Error) and session.state.request_id == 2)
    assert (session.state.network, session.state.timeframe) == ("bitcoin", "24h")
