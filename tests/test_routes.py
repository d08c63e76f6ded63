import pytest
from fastapi.testclient import TestClient

from fin_dashboard.calendars.adapter import CalendarSourceAdapter
from fin_dashboard.calendars.constants import GoogleCalendarSettings
from fin_dashboard.calendars.dto import CalendarConfig, FeedUrlSource, RemoteApiSource
from fin_dashboard.calendars.google_client import GoogleCalendarClient
from fin_dashboard.calendars.service import CalendarService
from fin_dashboard.chat.constants import CHAT_SETTINGS
from fin_dashboard.chat.dto import ChatRelaySettings
from fin_dashboard.chat.relay import ChatRelay
from fin_dashboard.config import Settings
from fin_dashboard.main import create_app
from fin_dashboard.ui.chat_session import GENERIC_ERROR_MESSAGE, ChatStatus

from conftest import NEW_YORK, FailingFetcher, FakeChatModel, StubFetcher

REMOTE = RemoteApiSource(id="personal", name="Personal", color="#4285F4", calendar_id="me@example.com")
FEED = FeedUrlSource(id="bills", name="Bills", color="#0B8043", url="https://example.com/bills.ics")


def _settings(**overrides):
    values = {"OPENAI_API_KEY": "test-openai", "GOOGLE_API_KEY": "test-google"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def _client(fetchers=None, sources=None, chat_model=None):
    config = CalendarConfig(time_zone=NEW_YORK, calendars=sources if sources is not None else [REMOTE, FEED])
    adapter = CalendarSourceAdapter(
        fetchers if fetchers is not None else [StubFetcher("remote-api"), StubFetcher("feed-url")],
        NEW_YORK,
    )
    relay = ChatRelay(ChatRelaySettings(api_key="test"), model=chat_model or FakeChatModel(content="ok"))
    app = create_app(
        settings=_settings(),
        calendar_service=CalendarService(adapter, config),
        chat_relay=relay,
    )
    return TestClient(app)


def test_calendar_events_payload():
    response = _client().get("/api/calendar")

    assert response.status_code == 200
    events = response.json()["events"]
    assert {event["calendarId"] for event in events} == {"personal", "bills"}
    event = events[0]
    assert set(event) >= {"id", "summary", "start", "end", "calendarId", "calendarName", "calendarColor", "timeZone"}
    assert "dateTime" in event["start"]
    assert "date" not in event["start"]


def test_calendar_events_skip_failing_source():
    client = _client(fetchers=[StubFetcher("remote-api"), FailingFetcher("feed-url")])

    response = client.get("/api/calendar")

    assert response.status_code == 200
    assert [event["calendarId"] for event in response.json()["events"]] == ["personal"]


def test_calendar_aggregate_failure_returns_error():
    client = _client(fetchers=[GoogleCalendarClient(GoogleCalendarSettings(api_key=""))], sources=[REMOTE])

    response = client.get("/api/calendar")

    assert response.status_code == 500
    assert response.json() == {"error": "Failed to fetch calendar events"}


def test_chat_reply():
    model = FakeChatModel(content="Track your top 3 categories.")

    response = _client(chat_model=model).post("/api/chat", json={"message": "What's my budget?"})

    assert response.status_code == 200
    assert response.json() == {"response": "Track your top 3 categories."}


@pytest.mark.parametrize("body", [{"message": "   "}, {"message": ""}, {}])
def test_chat_rejects_empty_message(body):
    model = FakeChatModel(content="unused")

    response = _client(chat_model=model).post("/api/chat", json=body)

    assert response.status_code == 400
    assert response.json() == {"error": "No message provided"}
    assert model.calls == []


@pytest.mark.parametrize("kwargs", [
    {"content": b"not json", "headers": {"Content-Type": "application/json"}},
    {"json": {"message": 42}},
    {"json": ["hello"]},
])
def test_chat_rejects_malformed_body(kwargs):
    model = FakeChatModel(content="unused")

    response = _client(chat_model=model).post("/api/chat", **kwargs)

    assert response.status_code == 400
    assert response.json() == {"error": "No message provided"}
    assert model.calls == []


def test_chat_upstream_failure():
    model = FakeChatModel(error=RuntimeError("upstream exploded"))

    response = _client(chat_model=model).post("/api/chat", json={"message": "Hi"})

    assert response.status_code == 502
    assert response.json() == {"error": CHAT_SETTINGS.UPSTREAM_FAILURE_FALLBACK, "retryable": True}


def test_chat_status_and_method_not_allowed():
    client = _client()

    assert client.get("/api/chat").json() == {"status": "ok"}
    response = client.delete("/api/chat")
    assert response.status_code == 405
    assert response.json() == {"error": "Method not allowed"}


def test_dashboard_page_renders_loading_shell():
    response = _client().get("/")

    assert response.status_code == 200
    assert "WEEKLY FINANCIAL CHECK-IN" in response.text
    assert "Loading events..." in response.text
    assert "SAVINGS UPDATE" in response.text
    assert "Placeholder Fund" in response.text


def test_dashboard_page_hands_chat_states_to_widget():
    response = _client().get("/")

    assert f'data-idle-status="{ChatStatus.IDLE.value}"' in response.text
    assert f'data-awaiting-status="{ChatStatus.AWAITING_REPLY.value}"' in response.text
    assert f'data-error-message="{GENERIC_ERROR_MESSAGE}"' in response.text


def test_calendar_panel_partial_lists_events():
    response = _client().get("/dashboard/calendar")

    assert response.status_code == 200
    assert "Personal event" in response.text
    assert "Bills event" in response.text
    assert "No events" in response.text


def test_calendar_panel_partial_empty_week():
    response = _client(sources=[]).get("/dashboard/calendar")

    assert "No events this week" in response.text


def test_calendar_panel_partial_error():
    client = _client(fetchers=[GoogleCalendarClient(GoogleCalendarSettings(api_key=""))], sources=[REMOTE])

    response = client.get("/dashboard/calendar")

    assert response.status_code == 200
    assert "Failed to fetch calendar events" in response.text


def test_health_endpoints():
    client = _client()

    assert client.get("/health/").json() == {"status": "ok"}
    config = client.get("/health/config").json()
    assert config["status"] == "ok"
    assert config["components"] == {"openai": "configured", "google_calendar": "configured"}
    assert config["enabled_calendar_sources"] == 2
