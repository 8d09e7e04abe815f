import pytest

from finops_ui.errors import ApiError
from finops_ui.store.slice import Action, Kind, Phase
from finops_ui.views.list_view import ERROR, SUCCESS, ListView, Toast


@pytest.fixture
def make_view(make_actions, timers, clock):
    def build(resource: str, service=None, **kwargs) -> ListView:
        return ListView(make_actions(resource, service, **kwargs), timer_factory=timers, clock=clock)

    return build


def test_toggle_sort_cycles_asc_desc_asc(make_view):
    view = make_view("clients")
    view.load()

    orders = []
    for _ in range(3):
        view.toggle_sort("name")
        orders.append(view.state.sort_config.sort_order)

    assert orders == ["asc", "desc", "asc"]


def test_unsortable_column_is_ignored(make_view, demo_service):
    service = demo_service("clients")
    view = make_view("clients", service)
    view.load()
    calls = len(service.calls)

    assert view.toggle_sort("address") is False
    assert len(service.calls) == calls


def test_debounced_search_fires_once_for_last_input(make_view, demo_service, timers):
    service = demo_service("clients")
    view = make_view("clients", service)

    view.on_search_input("abc")
    view.on_search_input("abcd")

    assert view.search_input == "abcd"
    assert [c for c in service.calls if c[0] == "list_page"] == []
    live = timers.live()
    assert len(live) == 1

    live[0].fire()

    searches = [c[1]["search"] for c in service.calls if c[0] == "list_page"]
    assert searches == ["abcd"]


def test_blank_search_returns_to_unfiltered_list(make_view):
    view = make_view("clients")
    view.submit_search("meera")
    assert view.state.total_count == 1

    view.submit_search("   ")

    assert view.state.search_query == ""
    assert view.state.total_count == 12


def test_sentinel_loads_only_when_idle_with_more(make_view, demo_service):
    service = demo_service("transactions")
    view = make_view("transactions", service)
    view.load()

    assert view.on_sentinel_visible() is True
    assert len(view.state.records) == 40
    assert view.on_sentinel_visible() is True
    assert len(view.state.records) == 45
    calls = len(service.calls)

    assert view.on_sentinel_visible() is False
    assert len(service.calls) == calls


def test_sentinel_failure_becomes_toast(make_view, demo_service):
    service = demo_service("transactions")
    view = make_view("transactions", service)
    view.load()

    def broken(params):
        raise ApiError("Gateway timeout", status_code=504)

    service.list_page = broken
    view.on_sentinel_visible()

    assert view.drain_toasts() == [Toast(ERROR, "Gateway timeout")]
    assert len(view.state.records) == 20


def test_save_marks_row_saved_then_clears(make_view, clock):
    view = make_view("banks")
    view.load()
    target = view.state.records[0]["id"]

    assert view.save(target, {"name": "Renamed"}) is True

    row = next(r for r in view.rows() if r.id == target)
    assert row.status == "saved"
    assert row.record["name"] == "Renamed"
    assert view.drain_toasts() == [Toast(SUCCESS, "Bank updated successfully")]

    clock.advance(1.0)
    assert view.tick() is False
    assert next(r for r in view.rows() if r.id == target).status is None


def test_failed_save_does_not_mark_row(make_view, demo_service):
    service = demo_service("banks")
    view = make_view("banks", service)
    view.load()
    target = view.state.records[0]["id"]

    def broken(payload):
        raise ApiError("Name already exists", status_code=409)

    service.update = broken

    assert view.save(target, {"name": "HDFC"}) is False
    assert view.tracker.status(target) is None
    assert view.drain_toasts() == [Toast(ERROR, "Name already exists")]


def test_delete_shows_ghost_fades_then_toasts(make_view, clock):
    view = make_view("banks")
    view.load()
    ids = [r["id"] for r in view.state.records]
    target = ids[2]

    view.delete(target)

    assert view.state.record(target) is None
    rows = view.rows()
    assert [r.id for r in rows] == ids
    ghost = rows[2]
    assert ghost.ghost and ghost.status == "deleted" and not ghost.removing
    assert view.drain_toasts() == []

    clock.advance(1.0)
    view.tick()
    assert view.rows()[2].removing
    assert view.drain_toasts() == []

    clock.advance(0.4)
    assert view.tick() is False
    assert [r.id for r in view.rows()] == [i for i in ids if i != target]
    assert view.drain_toasts() == [Toast(SUCCESS, "Bank deleted")]


def test_busy_row_refuses_second_mutation(make_view):
    view = make_view("banks")
    view.load()
    target = view.state.records[0]["id"]

    view.actions.store.dispatch("banks", Action(Kind.DELETE, Phase.PENDING, record_id=target))

    assert view.rows()[0].busy
    assert view.save(target, {"name": "x"}) is False
    assert view.delete(target) is False


def test_create_toasts_success(make_view):
    view = make_view("profiler_transactions")
    view.load()

    assert view.create({"transaction_type": "deposit", "profile_id": 1, "amount": 10.0}) is True

    assert view.drain_toasts() == [Toast(SUCCESS, "Transaction created successfully")]


def test_snapshot_reflects_state(make_view):
    view = make_view("transactions")
    view.load()

    snapshot = view.snapshot()

    assert len(snapshot.rows) == 20
    assert snapshot.total_count == 45
    assert snapshot.has_more
    assert not snapshot.loading
    assert snapshot.sort.sort_by == "create_date"
    assert snapshot.error is None


def test_close_cancels_pending_search(make_view, demo_service, timers):
    service = demo_service("clients")
    view = make_view("clients", service)
    view.on_search_input("ro")

    view.close()

    assert timers.timers[0].cancelled


def test_create_reports_success_when_refetch_fails(make_view, demo_service):
    service = demo_service("clients")
    view = make_view("clients", service)
    view.toggle_sort("name")
    shown = len(view.state.records)

    def broken(params):
        raise ApiError("Network down")

    service.list_page = broken

    assert view.create({"name": "Zoya Khan"}) is True
    assert view.drain_toasts() == [
        Toast(SUCCESS, "Client created successfully"),
        Toast(ERROR, "Network down"),
    ]
    assert len(view.state.records) == shown


def test_retry_clears_error_and_reloads(make_view, demo_service):
    service = demo_service("clients")

    def broken(params):
        raise ApiError("Network down")

    service.list_page = broken
    view = make_view("clients", service)
    assert view.load() is False
    assert view.state.error == "Network down"
    view.drain_toasts()

    del service.list_page

    assert view.retry() is True
    assert view.state.error is None
    assert view.state.total_count == 12


def test_reset_drops_search_and_pending_input(make_view, timers):
    view = make_view("clients")
    view.submit_search("meera")
    view.on_search_input("meer")

    assert view.reset() is True

    assert timers.live() == []
    assert view.search_input == ""
    assert view.state.search_query == ""
    assert view.state.total_count == 12
