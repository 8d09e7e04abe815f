from finops_ui.models.common import SortConfig
from finops_ui.store.slice import Action, Kind, initial_state
from finops_ui.store.store import Store


def test_listeners_get_previous_and_current_state():
    store = Store()
    store.register("banks", initial_state(SortConfig("name")))
    seen = []
    unsubscribe = store.subscribe(lambda name, prev, cur: seen.append((name, prev.search_query, cur.search_query)))

    store.dispatch("banks", Action(Kind.SET_SEARCH, payload="hd"))
    unsubscribe()
    store.dispatch("banks", Action(Kind.SET_SEARCH, payload="hdfc"))

    assert seen == [("banks", "", "hd")]


def test_failing_listener_does_not_break_dispatch():
    store = Store()
    store.register("banks", initial_state(SortConfig("name")))
    calls = []

    def broken(name, prev, cur):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(lambda name, prev, cur: calls.append(name))

    state = store.dispatch("banks", Action(Kind.SET_SEARCH, payload="x"))

    assert state.search_query == "x"
    assert calls == ["banks"]


def test_register_keeps_existing_slice():
    store = Store()
    store.register("cards", initial_state(SortConfig("name")))
    store.dispatch("cards", Action(Kind.SET_SEARCH, payload="visa"))

    store.register("cards", initial_state(SortConfig("name")))

    assert store.get_state("cards").search_query == "visa"


def test_tokens_increase():
    store = Store()
    assert store.next_token() < store.next_token()
