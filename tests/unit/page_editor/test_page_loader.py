"""Unit tests for page_editor.page_loader module."""

import logging
from unittest.mock import Mock

import pytest

from src.page_editor.models import LoadPhase
from src.page_editor.page_loader import DEFAULT_LOAD_DELAY_SECONDS, PageLoadPipeline
from src.page_editor.scheduling import SessionScope
from src.telegraph_client.errors import APIUnreachableError, StoreError
from tests.helpers.pages import make_page
from tests.helpers.virtual_scheduler import VirtualScheduler

CACHED = make_page(page_id=5, title="cached")
FRESH = make_page(page_id=5, title="fresh")


class LoadRecorder:
    """Collects pipeline callbacks with the virtual time they ran at."""

    def __init__(self, scheduler):
        self.scheduler = scheduler
        self.events = []

    def on_subscribe(self):
        self.events.append(("subscribe", self.scheduler.now()))

    def on_page(self, page, formats):
        self.events.append(("page", page.title, formats, self.scheduler.now()))

    def on_complete(self):
        self.events.append(("complete",))

    def on_error(self, error):
        self.events.append(("error", error))

    def on_terminate(self):
        self.events.append(("terminate",))

    def callbacks(self):
        return dict(
            on_subscribe=self.on_subscribe,
            on_complete=self.on_complete,
            on_error=self.on_error,
            on_terminate=self.on_terminate,
        )


class TestPageLoadPipeline:
    """Test cases for the two-phase load."""

    def setup_method(self):
        self.scheduler = VirtualScheduler()
        self.scope = SessionScope()
        self.interactor = Mock()
        self.interactor.get_cached_page.return_value = CACHED
        self.interactor.get_page_or_create_draft.return_value = FRESH
        self.recorder = LoadRecorder(self.scheduler)

    def start(self, page_id, scheduler=None, load_delay=0.5):
        pipeline = PageLoadPipeline(
            scheduler or self.scheduler,
            self.scope,
            self.interactor,
            convert=lambda page: [f"formats of {page.title}"],
            load_delay=load_delay,
        )
        done = pipeline.start(page_id, self.recorder.on_page, **self.recorder.callbacks())
        return pipeline, done

    def test_default_delay(self):
        assert DEFAULT_LOAD_DELAY_SECONDS == 0.35

    def test_new_page_loads_once(self):
        draft = make_page(page_id=9, title="", text=None, is_draft=True)
        self.interactor.get_page_or_create_draft.return_value = draft

        pipeline, done = self.start(None)

        self.interactor.get_page_or_create_draft.assert_called_once_with(None)
        self.interactor.get_cached_page.assert_not_called()
        assert self.recorder.events == [
            ("subscribe", 0.0),
            ("page", "", ["formats of "], 0.0),
            ("complete",),
            ("terminate",),
        ]
        assert done.result() == draft
        assert pipeline.phase == LoadPhase.DONE

    def test_existing_page_shows_cached_then_fresh(self):
        pipeline, done = self.start(5)

        pages = [event for event in self.recorder.events if event[0] == "page"]
        assert pages == [
            ("page", "cached", ["formats of cached"], 0.0),
            ("page", "fresh", ["formats of fresh"], 0.5),
        ]
        assert self.recorder.events[-2:] == [("complete",), ("terminate",)]
        assert done.result() == FRESH

    def test_fresh_copy_waits_for_remaining_delay_only(self):
        def slow_fetch(page_id):
            self.scheduler.advance(0.25)
            return FRESH

        self.interactor.get_page_or_create_draft.side_effect = slow_fetch

        self.start(5)

        assert self.recorder.events[2] == ("page", "fresh", ["formats of fresh"], 0.5)

    def test_slow_fetch_is_not_delayed_further(self):
        def slow_fetch(page_id):
            self.scheduler.advance(0.75)
            return FRESH

        self.interactor.get_page_or_create_draft.side_effect = slow_fetch

        self.start(5)

        assert self.recorder.events[2] == ("page", "fresh", ["formats of fresh"], 0.75)

    def test_missing_cache_shows_fresh_only(self):
        self.interactor.get_cached_page.return_value = None

        self.start(5)

        assert [event[1] for event in self.recorder.events if event[0] == "page"] == ["fresh"]

    def test_unreadable_cache_is_skipped(self, caplog):
        self.interactor.get_cached_page.side_effect = StoreError("pages.yaml", "read", "boom")

        with caplog.at_level(logging.WARNING):
            _, done = self.start(5)

        assert done.result() == FRESH
        assert "Cached copy of page 5 unavailable" in caplog.text

    def test_fetch_error_after_cached_copy(self):
        error = APIUnreachableError("https://api.telegra.ph")
        self.interactor.get_page_or_create_draft.side_effect = error

        pipeline, done = self.start(5)

        assert self.recorder.events == [
            ("subscribe", 0.0),
            ("page", "cached", ["formats of cached"], 0.0),
            ("error", error),
            ("terminate",),
        ]
        with pytest.raises(APIUnreachableError):
            done.result()
        assert pipeline.phase == LoadPhase.DONE

    def test_conversion_runs_on_computation_role(self):
        self.start(5)

        assert self.scheduler.calls["io"] == 1
        assert self.scheduler.calls["computation"] == 2

    def test_phases(self):
        phases = []
        pipeline = None

        def fetch(page_id):
            phases.append(pipeline.phase)
            return FRESH

        def cached(page_id):
            phases.append(pipeline.phase)
            return CACHED

        self.interactor.get_cached_page.side_effect = cached
        self.interactor.get_page_or_create_draft.side_effect = fetch

        pipeline = PageLoadPipeline(self.scheduler, self.scope, self.interactor, lambda page: [])
        pipeline.start(5, self.recorder.on_page)

        assert phases == [LoadPhase.CACHE_PENDING, LoadPhase.FRESH_PENDING]
        assert pipeline.phase == LoadPhase.DONE

    def test_late_deliveries_are_conflated(self):
        scheduler = VirtualScheduler(deferred=("main",))
        self.recorder.scheduler = scheduler

        _, done = self.start(5, scheduler=scheduler)
        assert not done.done()

        scheduler.run_pending("main")

        assert [event[1] for event in self.recorder.events if event[0] == "page"] == ["fresh"]
        assert done.result() == FRESH

    def test_closing_session_during_delay_abandons_load(self):
        def fetch(page_id):
            self.scope.cancel()
            return FRESH

        self.interactor.get_page_or_create_draft.side_effect = fetch

        _, done = self.start(5)

        assert [event[1] for event in self.recorder.events if event[0] == "page"] == ["cached"]
        assert ("terminate",) not in self.recorder.events
        assert done.cancelled()
