"""Active-tab ownership and the tab activation event."""

import logging
from collections.abc import Callable

from src.models.schemas import Tab

logger = logging.getLogger(__name__)

TabListener = Callable[[Tab], None]


class TabController:
    """Owns which mode of the session window is active.

    ``switch_tab`` is the only writer of the active tab. Every switch, including
    re-selecting the current tab, fires ``on_tab_activated`` to the registered
    listeners in registration order.
    """

    def __init__(self, initial: Tab = Tab.CHAT) -> None:
        self._active = Tab(initial)
        self._listeners: list[TabListener] = []

    @property
    def active(self) -> Tab:
        return self._active

    def subscribe(self, listener: TabListener) -> None:
        self._listeners.append(listener)

    def switch_tab(self, target: Tab | str) -> None:
        """Activate a tab.

        Args:
            target: Tab member or its value ("chat", "inspect", "ingest").

        Raises:
            ValueError: If ``target`` is not a known tab.
        """
        tab = Tab(target)
        logger.debug(f"Switching tab {self._active.value} -> {tab.value}")
        self._active = tab
        for listener in self._listeners:
            listener(tab)
