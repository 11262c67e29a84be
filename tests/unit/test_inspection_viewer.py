"""Unit tests for InspectionViewer.

Every fetch is driven the way the session drives it: by activating the
inspect tab and letting the spawned background task run.
"""

import asyncio

import pytest
import pytest_check as check

from src.client.backend import BackendError
from src.models.schemas import RecordSet, Tab
from src.session.inspection import (
    DEFAULT_FETCH_ERROR,
    EMPTY_PLACEHOLDER,
    LOADING_PLACEHOLDER,
    InspectionViewer,
)
from src.session.tasks import BackgroundTasks
from tests.fakes import FakeBackend

TWO_RECORDS = RecordSet(ids=["a", "b"], documents=["d1", "d2"], metadatas=[{}, {"k": 1}])


@pytest.fixture
def viewer(fake_backend: FakeBackend, tasks: BackgroundTasks) -> InspectionViewer:
    return InspectionViewer(fake_backend, tasks.spawn)


async def settle() -> None:
    """Let released fetches run to completion."""
    for _ in range(5):
        await asyncio.sleep(0)


async def activate(viewer: InspectionViewer, tasks: BackgroundTasks) -> None:
    """Activate the inspect tab and wait for the fetch to finish."""
    viewer.on_tab_activated(Tab.INSPECT)
    await tasks.wait_idle()


class TestActivation:
    """Tests for the tab activation trigger."""

    @pytest.mark.parametrize("tab", [Tab.CHAT, Tab.INGEST])
    async def test_other_tabs_do_not_fetch(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks, tab: Tab
    ) -> None:
        viewer.on_tab_activated(tab)
        await tasks.wait_idle()

        assert fake_backend.fetch_count == 0

    async def test_every_activation_refetches(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        await activate(viewer, tasks)
        await activate(viewer, tasks)

        assert fake_backend.fetch_count == 2

    async def test_loading_is_set_before_the_fetch_runs(
        self, viewer: InspectionViewer, tasks: BackgroundTasks
    ) -> None:
        viewer.on_tab_activated(Tab.INSPECT)

        check.is_true(viewer.loading)
        await tasks.wait_idle()
        check.is_false(viewer.loading)


class TestFetchOutcomes:
    """Tests for fetch outcomes."""

    async def test_success_replaces_records(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        fake_backend.records = TWO_RECORDS

        await activate(viewer, tasks)

        check.equal(viewer.records, TWO_RECORDS)
        check.is_false(viewer.loading)
        check.is_none(viewer.error)
        check.is_true(viewer.show_table)
        check.equal([row.metadata for row in viewer.rows()], [{}, {"k": 1}])

    async def test_loading_and_cleared_error_while_in_flight(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        viewer.error = "old failure"
        fake_backend.hold = True

        viewer.on_tab_activated(Tab.INSPECT)
        await asyncio.sleep(0)
        check.is_true(viewer.loading)
        check.is_none(viewer.error)
        check.equal(viewer.placeholder, LOADING_PLACEHOLDER)

        fake_backend.release()
        await tasks.wait_idle()
        check.is_false(viewer.loading)
        check.equal(viewer.placeholder, EMPTY_PLACEHOLDER)

    async def test_failure_keeps_previous_records(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        fake_backend.records = TWO_RECORDS
        await activate(viewer, tasks)

        fake_backend.fetch_error = "Connection failed: refused"
        await activate(viewer, tasks)

        check.equal(viewer.records, TWO_RECORDS)
        check.equal(viewer.error, "Connection failed: refused")
        check.is_false(viewer.loading)

    async def test_failure_without_description_uses_fallback(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        fake_backend.fetch_error = ""

        await activate(viewer, tasks)

        check.equal(viewer.error, DEFAULT_FETCH_ERROR)
        check.is_none(viewer.records)

    async def test_unexpected_error_does_not_leave_loading_stuck(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        fake_backend.fetch_results.append(TypeError("object of type 'int' has no len()"))

        await activate(viewer, tasks)

        check.is_false(viewer.loading)
        check.equal(viewer.placeholder, EMPTY_PLACEHOLDER)
        check.is_none(viewer.records)

    async def test_success_after_failure_clears_error_and_replaces(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        fake_backend.records = TWO_RECORDS
        await activate(viewer, tasks)
        fake_backend.fetch_error = "down"
        await activate(viewer, tasks)

        replacement = RecordSet(ids=["z"], documents=["dz"], metadatas=[None])
        fake_backend.fetch_error = None
        fake_backend.records = replacement
        await activate(viewer, tasks)

        check.is_none(viewer.error)
        check.equal(viewer.records, replacement)

    async def test_empty_store_shows_placeholder(
        self, viewer: InspectionViewer, tasks: BackgroundTasks
    ) -> None:
        await activate(viewer, tasks)

        check.equal(len(viewer.records), 0)
        check.is_false(viewer.show_table)
        check.equal(viewer.rows(), [])
        check.equal(viewer.placeholder, EMPTY_PLACEHOLDER)


class TestStaleReplies:
    """Tests for overlapping fetches resolving out of order."""

    async def test_older_reply_does_not_overwrite_newer(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        older = RecordSet(ids=["old"], documents=["o"], metadatas=[{}])
        newer = RecordSet(ids=["new"], documents=["n"], metadatas=[{}])
        fake_backend.fetch_results.extend([older, newer])
        fake_backend.hold = True

        viewer.on_tab_activated(Tab.INSPECT)
        viewer.on_tab_activated(Tab.INSPECT)
        await asyncio.sleep(0)

        fake_backend.release(1)
        await settle()
        check.equal(viewer.records, newer)
        check.is_false(viewer.loading)

        fake_backend.release(0)
        await tasks.wait_idle()
        check.equal(viewer.records, newer)

    async def test_stale_failure_is_dropped(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        fake_backend.fetch_results.extend([BackendError("stale"), TWO_RECORDS])
        fake_backend.hold = True

        viewer.on_tab_activated(Tab.INSPECT)
        viewer.on_tab_activated(Tab.INSPECT)
        await asyncio.sleep(0)

        fake_backend.release(1)
        fake_backend.release(0)
        await tasks.wait_idle()

        check.is_none(viewer.error)
        check.equal(viewer.records, TWO_RECORDS)

    async def test_loading_stays_until_latest_resolves(
        self, viewer: InspectionViewer, fake_backend: FakeBackend, tasks: BackgroundTasks
    ) -> None:
        fake_backend.hold = True
        viewer.on_tab_activated(Tab.INSPECT)
        viewer.on_tab_activated(Tab.INSPECT)
        await asyncio.sleep(0)

        fake_backend.release(0)
        await settle()
        check.is_true(viewer.loading)

        fake_backend.release(1)
        await tasks.wait_idle()
        check.is_false(viewer.loading)
