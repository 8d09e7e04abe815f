"""
Client-side state for list screens.

- ``slice``: CollectionState and its pure reducer
- ``store``: the shared container with dispatch and pub/sub
- ``actions``: request orchestration per collection
"""

from finops_ui.store.actions import CollectionActions
from finops_ui.store.slice import Action, CollectionState, Kind, Phase, Status, reduce
from finops_ui.store.store import Store

__all__ = [
    "Action",
    "CollectionActions",
    "CollectionState",
    "Kind",
    "Phase",
    "Status",
    "Store",
    "reduce",
]
