"""Vector store inspection: latest snapshot plus loading and error status.

A fetch is started every time the inspect tab is activated. There is no
caching, since an ingestion may have changed the store in the meantime.

Fetches are numbered. When tabs are toggled quickly, several fetches can be
in flight and resolve out of order; only the reply to the most recently
issued fetch is applied, older replies are dropped.
"""

import logging

from src.client.backend import BackendClient, BackendError
from src.models.schemas import RecordRow, RecordSet, Tab
from src.session.tasks import Spawn

logger = logging.getLogger(__name__)

DEFAULT_FETCH_ERROR = "Failed to fetch data"
LOADING_PLACEHOLDER = "Loading data..."
EMPTY_PLACEHOLDER = "No vectors found. Ingest a project first."


class InspectionViewer:
    """Owns the inspection state.

    Attributes:
        records: Last successfully fetched snapshot, or None before the
            first success.
        loading: True while the latest fetch is in flight.
        error: Description of the latest failure, cleared on each fetch.
    """

    def __init__(self, backend: BackendClient, spawn: Spawn) -> None:
        self._backend = backend
        self._spawn = spawn
        self._generation = 0
        self.records: RecordSet | None = None
        self.loading: bool = False
        self.error: str | None = None

    def on_tab_activated(self, tab: Tab) -> None:
        """Start a refresh when the inspect tab becomes active."""
        if tab is Tab.INSPECT:
            self._spawn(self._fetch(self._begin()), "inspection-refresh")

    def _begin(self) -> int:
        self._generation += 1
        self.loading = True
        self.error = None
        return self._generation

    async def _fetch(self, generation: int) -> None:
        logger.info(f"Fetching vector store contents (fetch #{generation})")
        try:
            records = await self._backend.fetch_records()
        except BackendError as e:
            if generation != self._generation:
                logger.debug(f"Dropping stale failure of fetch #{generation}")
                return
            logger.warning(f"Vector store fetch failed: {e.description}")
            self.error = e.description or DEFAULT_FETCH_ERROR
        else:
            if generation != self._generation:
                logger.debug(f"Dropping stale reply of fetch #{generation}")
                return
            logger.info(f"Fetched {len(records)} records")
            self.records = records
        finally:
            if generation == self._generation:
                self.loading = False

    @property
    def show_table(self) -> bool:
        return self.records is not None and len(self.records) > 0

    @property
    def placeholder(self) -> str:
        return LOADING_PLACEHOLDER if self.loading else EMPTY_PLACEHOLDER

    def rows(self) -> list[RecordRow]:
        if self.records is None:
            return []
        return self.records.rows()
