import pytest

from finops_ui.errors import ActionRejected, ApiError, NoMorePagesError
from finops_ui.models.common import SortConfig
from finops_ui.models.requests import ProfilerDepositRequest


class FailingService:
    """Wraps a service and fails chosen operations."""

    def __init__(self, inner, fail=(), error=None):
        self.inner = inner
        self.spec = inner.spec
        self.fail = set(fail)
        self.error = error or ApiError("Service unavailable", status_code=503)

    def __getattr__(self, name):
        attr = getattr(self.inner, name)
        if name in self.fail:
            def failing(*args, **kwargs):
                raise self.error

            return failing
        return attr


def test_fetch_loads_first_page(make_actions):
    actions = make_actions("transactions")

    envelope = actions.fetch()

    state = actions.state
    assert len(state.records) == 20
    assert state.total_count == 45
    assert state.pagination.total_pages == 3
    assert state.has_more
    assert envelope.sort_applied == SortConfig("create_date", "desc")


def test_load_more_appends_exactly_the_next_page(make_actions, demo_service):
    service = demo_service("transactions")
    actions = make_actions("transactions", service)
    actions.fetch()
    first_page = [r["id"] for r in actions.state.records]

    actions.load_more()

    state = actions.state
    assert [r["id"] for r in state.records[:20]] == first_page
    assert len(state.records) == 40
    assert len({r["id"] for r in state.records}) == 40
    assert service.calls[-1][1]["page"] == 2


def test_load_more_on_last_page_sends_no_request(make_actions, demo_service):
    service = demo_service("banks")
    actions = make_actions("banks", service)
    actions.fetch()
    calls = len(service.calls)

    with pytest.raises(NoMorePagesError):
        actions.load_more()
    assert len(service.calls) == calls


def test_load_more_keeps_search_sort_and_filters(make_actions, demo_service):
    service = demo_service("transactions")
    actions = make_actions("transactions", service, page_size=5)
    actions.apply_filters({"transaction_type": 1})
    actions.sort("transaction_amount", "asc")

    actions.load_more()

    params = service.calls[-1][1]
    assert params["transaction_type"] == 1
    assert params["sort_by"] == "transaction_amount"
    assert params["sort_order"] == "asc"
    assert params["page"] == 2
    assert all(r["transaction_type"] == 1 for r in actions.state.records)


def test_search_echo_and_clear(make_actions):
    actions = make_actions("clients")

    actions.search("meera")
    assert actions.state.search_query == "meera"
    assert [r["name"] for r in actions.state.records] == ["Meera Iyer"]

    actions.set_search("")
    actions.fetch()
    assert actions.state.search_query == ""
    assert actions.state.total_count == 12


def test_sort_applies_server_order(make_actions):
    actions = make_actions("clients")

    actions.sort("name", "asc")

    names = [r["name"] for r in actions.state.records]
    assert names == sorted(names, key=str.lower)
    assert actions.state.sort_config == SortConfig("name", "asc")


def test_clearing_filters_drops_them(make_actions):
    actions = make_actions("transactions")
    actions.apply_filters({"transaction_type": 0})
    assert actions.state.filters == {"transaction_type": 0}

    actions.apply_filters({})

    assert actions.state.filters == {}
    assert actions.state.total_count == 45


def test_failed_fetch_rejects_with_server_message(make_actions, demo_service):
    actions = make_actions("cards", FailingService(demo_service("cards"), fail={"list_page"}))

    with pytest.raises(ActionRejected, match="Service unavailable"):
        actions.fetch()
    assert actions.state.error == "Service unavailable"
    assert actions.state.records == ()


def test_unexpected_error_uses_generic_message(make_actions, demo_service):
    service = FailingService(demo_service("cards"), fail={"list_page"}, error=RuntimeError("kaboom"))
    actions = make_actions("cards", service)

    with pytest.raises(ActionRejected, match="Failed to fetch cards"):
        actions.fetch()


def test_failed_load_more_keeps_loaded_records(make_actions, demo_service):
    inner = demo_service("transactions")
    service = FailingService(inner)
    actions = make_actions("transactions", service)
    actions.fetch()

    service.fail.add("list_page")
    with pytest.raises(ActionRejected):
        actions.load_more()

    assert len(actions.state.records) == 20
    assert not actions.state.loading_more


def test_unsuccessful_envelope_is_rejected(make_actions, demo_service):
    class Unsuccessful(FailingService):
        def list_page(self, params):
            return {"success": False, "message": "Invalid sort column"}

    actions = make_actions("banks", Unsuccessful(demo_service("banks")))

    with pytest.raises(ActionRejected, match="Invalid sort column"):
        actions.fetch()


def test_create_prepends_when_newest_first(make_actions, demo_service):
    service = demo_service("profiler_transactions")
    actions = make_actions("profiler_transactions", service)
    actions.fetch()
    total = actions.state.total_count
    calls = len(service.calls)

    record = actions.create(ProfilerDepositRequest(profile_id=3, amount=1500))

    assert actions.state.records[0]["id"] == record["id"]
    assert actions.state.total_count == total + 1
    assert len(service.calls) == calls + 1


def test_create_refetches_when_searching(make_actions, demo_service):
    service = demo_service("clients")
    actions = make_actions("clients", service)
    actions.search("a")

    actions.create({"name": "Zoya Khan", "email": "zoya@example.com"})

    assert service.calls[-1][0] == "list_page"
    assert service.calls[-1][1]["search"] == "a"


def test_create_keeps_record_when_refetch_fails(make_actions, demo_service):
    inner = demo_service("clients")
    service = FailingService(inner, error=ApiError("Network down"))
    actions = make_actions("clients", service)
    actions.sort("name", "asc")
    shown = actions.state.records
    service.fail.add("list_page")

    record = actions.create({"name": "Zoya Khan"})

    assert record["name"] == "Zoya Khan"
    assert inner.records[-1]["name"] == "Zoya Khan"
    assert actions.state.records == shown
    assert actions.state.error == "Network down"
    assert not actions.state.creating


def test_edit_then_delete(make_actions):
    actions = make_actions("banks")
    actions.fetch()
    target = actions.state.records[1]["id"]
    total = actions.state.total_count

    actions.edit(target, {"name": "Renamed Bank"})
    assert actions.state.record(target)["name"] == "Renamed Bank"

    actions.delete(target)
    assert actions.state.record(target) is None
    assert actions.state.total_count == total - 1


def test_delete_missing_record_is_rejected(make_actions):
    actions = make_actions("banks")
    actions.fetch()

    with pytest.raises(ActionRejected, match="Bank not found"):
        actions.delete(999)
    assert not actions.state.deleting


def test_mark_done_patches_status(make_actions):
    actions = make_actions("profiler_profiles")
    actions.fetch()
    target = next(r["id"] for r in actions.state.records if r["status"] == "active")

    actions.mark_done(target)

    assert actions.state.record(target)["status"] == "done"
