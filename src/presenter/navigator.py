"""
Page navigation driven by gesture events.
"""
from typing import Callable, List, Optional
import logging

from ..gestures.state_machine import NavigationEvent

logger = logging.getLogger(__name__)


class PageNavigator:
    """
    Clamped page index for a document of `page_count` pages.

    Listeners are called with the new page index whenever it changes.
    """

    def __init__(self, page_count: int, current_page: int = 0):
        if page_count < 1:
            raise ValueError(f"page_count must be at least 1, got {page_count}")
        self._page_count = page_count
        self._current_page = max(0, min(page_count - 1, current_page))
        self._listeners: List[Callable[[int], None]] = []

    def add_listener(self, listener: Callable[[int], None]) -> None:
        self._listeners.append(listener)

    def next_page(self) -> bool:
        """Advance one page. Returns False if already on the last page."""
        return self.go_to(self._current_page + 1)

    def previous_page(self) -> bool:
        """Go back one page. Returns False if already on the first page."""
        return self.go_to(self._current_page - 1)

    def go_to(self, page: int) -> bool:
        page = max(0, min(self._page_count - 1, page))
        if page == self._current_page:
            return False
        self._current_page = page
        logger.info("Page %d/%d", page + 1, self._page_count)
        for listener in self._listeners:
            listener(page)
        return True

    def apply(self, event: NavigationEvent) -> Optional[bool]:
        """
        Route a gesture event.

        Returns:
            Whether the page changed, or None for events that do not navigate.
        """
        if event == NavigationEvent.NEXT_PAGE:
            return self.next_page()
        if event == NavigationEvent.PREVIOUS_PAGE:
            return self.previous_page()
        # PAUSE repeats every fist frame; nothing to do with it here
        return None

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_count(self) -> int:
        return self._page_count
