"""
Tests — Bootstrap, Settings & Triggers
========================================
App-start wiring: definitions imported from settings, a locked default
registry, and post_save triggers for configured models.
"""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from django.core.exceptions import ImproperlyConfigured

from timeseries.bootstrap import build_registry, load_definitions
from timeseries.conf import get_setting
from timeseries.definitions import ProjectionRegistry, get_default_registry
from timeseries.engine import ProjectionEngine
from timeseries.events import SourceEvent
from timeseries.store import InMemoryProjectionStore
from timeseries.store.django_store import DjangoProjectionStore
from timeseries.store.models import Projection
from timeseries.triggers import ProjectionTrigger, connect_model, disconnect_model, model_event
from tests.testapp.models import Log
from tests.testapp.projections import single_period


T0 = datetime(2025, 6, 1, tzinfo=timezone.utc)

TEST_DEFINITIONS = [
    "tests.testapp.projections.single_period",
    "tests.testapp.projections.multiple_periods",
    "tests.testapp.projections.single_period_with_unique_key",
]


# ══════════════════════════════════════════════════════════════
# SETTINGS
# ══════════════════════════════════════════════════════════════


class TestSettings:
    def test_configured_values(self):
        assert list(get_setting("DEFINITIONS")) == TEST_DEFINITIONS
        assert list(get_setting("TRIGGER_MODELS")) == ["testapp.Log"]

    def test_defaults_apply_when_missing(self, settings):
        settings.TIME_SERIES = {}
        assert tuple(get_setting("DEFINITIONS")) == ()
        assert get_setting("TIMESTAMP_FIELD") == "created_at"

    def test_unknown_setting_raises(self):
        with pytest.raises(KeyError, match="RETENTION"):
            get_setting("RETENTION")


# ══════════════════════════════════════════════════════════════
# DEFINITION LOADING
# ══════════════════════════════════════════════════════════════


class TestBootstrap:
    def test_default_registry_built_at_app_start(self):
        registry = get_default_registry()
        assert registry.is_locked
        assert [d.name for d in registry.all()] == [
            "single_period",
            "multiple_periods",
            "single_period_with_unique_key",
        ]

    def test_load_definitions_imports_objects(self):
        assert load_definitions(TEST_DEFINITIONS[:1]) == [single_period]

    def test_unimportable_path_rejected(self):
        with pytest.raises(ImproperlyConfigured, match="cannot be imported"):
            load_definitions(["tests.testapp.projections.missing"])

    def test_invalid_definition_rejected(self):
        with pytest.raises(ImproperlyConfigured, match="is invalid") as excinfo:
            load_definitions(["tests.testapp.invalid_projections.without_periods"])
        assert isinstance(excinfo.value.__cause__, ValueError)

    def test_non_definition_rejected(self):
        with pytest.raises(ImproperlyConfigured, match="not a ProjectionDefinition"):
            load_definitions(["tests.testapp.projections.count_events"])

    def test_duplicate_paths_rejected(self):
        with pytest.raises(ImproperlyConfigured, match="already registered"):
            build_registry(TEST_DEFINITIONS[:1] * 2)

    def test_build_registry_locks(self):
        registry = build_registry(TEST_DEFINITIONS)
        assert registry.is_locked
        assert len(registry) == 3
        assert "multiple_periods" in registry


# ══════════════════════════════════════════════════════════════
# TRIGGERS
# ══════════════════════════════════════════════════════════════


def _registry(*definitions):
    registry = ProjectionRegistry(definitions)
    registry.lock()
    return registry


class TestProjectionTrigger:
    def test_handle_applies_matching_definitions(self):
        store = InMemoryProjectionStore()
        trigger = ProjectionTrigger(ProjectionEngine(store), _registry(single_period))

        records = trigger.handle(SourceEvent("testapp.Log", T0, source_id="1"))

        assert [r.projection_name for r in records] == ["single_period"]
        assert records[0].content == {"count": 1}

    def test_handle_without_definitions_returns_nothing(self):
        store = InMemoryProjectionStore()
        trigger = ProjectionTrigger(ProjectionEngine(store), _registry(single_period))

        assert trigger(SourceEvent("shop.Order", T0, source_id="1")) == []
        assert len(store) == 0

    def test_trigger_uses_default_registry(self):
        trigger = ProjectionTrigger(ProjectionEngine(InMemoryProjectionStore()))
        assert trigger.registry is get_default_registry()


@pytest.mark.django_db
class TestModelTriggers:
    def test_model_event_reads_timestamp_field(self, clock):
        log = Log.objects.create()
        event = model_event(log)
        assert event.source_type == "testapp.Log"
        assert event.source_id == str(log.pk)
        assert event.occurred_at == T0
        assert event.subject is log

    def test_model_event_falls_back_to_clock(self, clock):
        log = Log.objects.create()
        event = model_event(log, timestamp_field="missing_field")
        assert event.occurred_at == clock.now_utc()

    def test_disconnected_model_feeds_nothing(self, clock):
        assert disconnect_model(Log)
        try:
            Log.objects.create()
            assert Projection.objects.count() == 0
        finally:
            connect_model(Log, ProjectionTrigger(ProjectionEngine(DjangoProjectionStore())))

        Log.objects.create()
        assert Projection.objects.count() == 5

    def test_raw_saves_are_ignored(self, clock):
        store = InMemoryProjectionStore()
        trigger = ProjectionTrigger(ProjectionEngine(store), _registry(single_period))
        connect_model(Log, trigger, dispatch_uid="tests.raw")
        try:
            log = Log(message="fixture")
            log.save_base(raw=True)
            assert len(store) == 0
        finally:
            disconnect_model(Log, dispatch_uid="tests.raw")
