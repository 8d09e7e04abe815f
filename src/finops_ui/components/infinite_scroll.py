"""
Reflex wrapper for react-infinite-scroll-component.

The component calls ``next`` once the end-of-list sentinel scrolls into view.
The list states guard that callback themselves, so a repeated trigger while a
page is loading is harmless.
"""

import reflex as rx


class InfiniteScroll(rx.NoSSRComponent):
    """Scroll container that requests the next page near the bottom."""

    library = "react-infinite-scroll-component@6.1.0"
    tag = "InfiniteScroll"
    is_default = True

    # Number of rendered rows; the component re-arms ``next`` when it grows.
    data_length: int
    next: rx.EventHandler
    has_more: bool

    loader: rx.Component | None = None
    end_message: rx.Component | None = None
    scrollable_target: str | None = None
    # Distance from the bottom that triggers ``next``, e.g. "200px" or 0.8.
    scroll_threshold: str | None = None
