"""Shared fixtures: demo-backed services, fake timers and a fake clock."""

import json

import httpx
import pytest

from finops_ui.data.demo_records import demo_records
from finops_ui.models.resources import get_resource
from finops_ui.services.api import ApiClient
from finops_ui.services.demo_service import DemoResourceService, active_profiles
from finops_ui.store.actions import CollectionActions
from finops_ui.store.store import Store


class ManualTimer:
    """``threading.Timer`` stand-in that only fires when told to."""

    def __init__(self, interval, function, args=None, kwargs=None):
        self.interval = interval
        self.function = function
        self.args = args or ()
        self.kwargs = kwargs or {}
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self):
        self.started = True

    def cancel(self):
        self.cancelled = True

    def fire(self):
        self.function(*self.args, **self.kwargs)


class TimerFactory:
    def __init__(self):
        self.timers: list[ManualTimer] = []

    def __call__(self, interval, function, args=None, kwargs=None):
        timer = ManualTimer(interval, function, args, kwargs)
        self.timers.append(timer)
        return timer

    def live(self) -> list[ManualTimer]:
        return [t for t in self.timers if t.started and not t.cancelled]


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def timers():
    return TimerFactory()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def demo_service():
    """Build a demo service over a fresh copy of a resource's records."""

    def build(resource: str) -> DemoResourceService:
        predicate = active_profiles if resource == "profiler_dashboard" else None
        return DemoResourceService(get_resource(resource), demo_records(resource), predicate=predicate)

    return build


@pytest.fixture
def store():
    return Store()


@pytest.fixture
def make_actions(store, demo_service):
    def build(resource: str, service=None, **kwargs) -> CollectionActions:
        return CollectionActions(store, resource, service or demo_service(resource), **kwargs)

    return build


class Recorder:
    """MockTransport handler that records requests and replays queued responses."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responses: list = []

    def queue(self, response) -> None:
        self.responses.append(response)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        response = self.responses.pop(0) if self.responses else httpx.Response(200, json={"success": True, "data": {}})
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def api(recorder):
    client = httpx.Client(base_url="http://api.test", transport=httpx.MockTransport(recorder))
    yield ApiClient(client)
    client.close()
