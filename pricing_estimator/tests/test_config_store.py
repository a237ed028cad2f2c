"""
Tests: configuration store — snapshots, versioning, subscribers.

Run with:
    pytest pricing_estimator/tests/test_config_store.py -v
"""

import logging

import pytest

from pricing_estimator.defaults import DEFAULT_INDUSTRIES, DEFAULT_PRICING, DEFAULT_VARIABLES
from pricing_estimator.models.schemas import evolve
from pricing_estimator.store.config_store import ConfigurationStore


class TestSeededDefaults:
    def test_starts_at_version_one(self, store):
        assert store.version == 1
        assert store.snapshot.pricing == DEFAULT_PRICING
        assert set(store.snapshot.industries) == set(DEFAULT_INDUSTRIES)
        assert store.snapshot.variables == DEFAULT_VARIABLES

    def test_twelve_industries(self, store):
        assert len(store.snapshot.industries) == 12

    def test_default_industry_table_is_read_only(self, store):
        with pytest.raises(TypeError):
            DEFAULT_INDUSTRIES["space-mining"] = store.snapshot.industries["tech"]
        assert "space-mining" not in DEFAULT_INDUSTRIES

    def test_store_owns_a_copy_of_the_defaults(self, store):
        assert store.snapshot.industries is not DEFAULT_INDUSTRIES
        assert isinstance(store.snapshot.industries, dict)

    def test_custom_seed(self):
        store = ConfigurationStore(industries={}, variables=())
        assert store.snapshot.industries == {}
        assert store.snapshot.variables == ()

    def test_snapshot_is_frozen(self, store):
        with pytest.raises(Exception):
            store.snapshot.version = 5


class TestPublish:
    def test_change_bumps_version(self, store):
        old = store.snapshot
        changed = DEFAULT_PRICING.model_copy(update={
            "salary": evolve(DEFAULT_PRICING.salary, base_rate=700),
        })
        assert store.publish(pricing=changed) is True
        assert store.version == 2
        assert store.snapshot.pricing.salary.base_rate == 700
        # previous snapshot untouched
        assert old.version == 1
        assert old.pricing.salary.base_rate == 650

    def test_structurally_equal_publish_is_noop(self, store, caplog):
        calls = []
        store.subscribe(calls.append)
        caplog.set_level(logging.DEBUG, logger="pricing_estimator.store.config_store")

        equal_copy = DEFAULT_PRICING.model_validate(DEFAULT_PRICING.model_dump())
        assert store.publish(pricing=equal_copy) is False
        assert store.publish() is False
        assert store.version == 1
        assert calls == []
        assert "unchanged" in caplog.text

    def test_sections_replaced_independently(self, store):
        store.publish(variables=())
        assert store.snapshot.variables == ()
        assert store.snapshot.pricing == DEFAULT_PRICING

    def test_publish_logs_changed_sections(self, store, caplog):
        caplog.set_level(logging.INFO, logger="pricing_estimator.store.config_store")
        store.publish(variables=())
        assert "v2" in caplog.text
        assert "variables" in caplog.text


class TestSubscribers:
    def test_listener_receives_new_snapshot(self, store):
        received = []
        store.subscribe(received.append)
        store.publish(variables=())
        assert [s.version for s in received] == [2]
        assert received[0] is store.snapshot

    def test_unsubscribe(self, store):
        received = []
        unsubscribe = store.subscribe(received.append)
        unsubscribe()
        unsubscribe()
        store.publish(variables=())
        assert received == []

    def test_listener_may_unsubscribe_during_notify(self, store):
        received = []
        holder = {}

        def once(snapshot):
            received.append(snapshot.version)
            holder["unsubscribe"]()

        holder["unsubscribe"] = store.subscribe(once)
        other = []
        store.subscribe(other.append)
        store.publish(variables=())
        store.publish(variables=DEFAULT_VARIABLES)
        assert received == [2]
        assert len(other) == 2
