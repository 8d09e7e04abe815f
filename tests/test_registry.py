from finops_ui.views import registry
from finops_ui.views.registry import Session, SessionRegistry


def test_session_reuses_views_and_shares_one_store():
    session = Session(kind="demo")

    clients = session.view("clients")
    assert session.view("clients") is clients

    banks = session.view("banks")
    assert banks.actions.store is clients.actions.store
    session.close()


def test_slice_name_separates_views_of_one_resource():
    session = Session(kind="demo")

    all_rows = session.view("profiler_transactions")
    scoped = session.view("profiler_transactions", "profile-3", filters={"profile_id": 3})

    assert scoped is not all_rows
    assert scoped.state.filters == {"profile_id": 3}
    session.close()


def test_sessions_are_keyed_by_token():
    first = registry.session("token-a")

    assert registry.session("token-a") is first
    assert registry.session("token-b") is not first

    registry.drop_session("token-a")
    registry.drop_session("token-b")
    assert registry.session("token-a") is not first
    registry.drop_session("token-a")


def test_idle_sessions_are_dropped_on_next_lookup(clock):
    sessions = SessionRegistry(idle_seconds=60, clock=clock)
    idle = sessions.session("token-a")
    idle.view("clients")
    clock.advance(30)
    active = sessions.session("token-b")

    clock.advance(45)
    assert sessions.session("token-b") is active

    assert len(sessions) == 1
    assert idle._views == {}
    assert sessions.session("token-a") is not idle


def test_lookup_keeps_a_session_alive(clock):
    sessions = SessionRegistry(idle_seconds=60, clock=clock)
    first = sessions.session("token-a")

    for _ in range(3):
        clock.advance(50)
        assert sessions.session("token-a") is first


def test_drop_forgets_the_session(clock):
    sessions = SessionRegistry(clock=clock)
    current = sessions.session("token-a")

    sessions.drop("token-a")

    assert len(sessions) == 0
    assert sessions.session("token-a") is not current
