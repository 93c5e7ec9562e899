"""Tests for tenant filtering and the active-tracker cache."""

import threading

import pytest
from tracking.environment.environment import ContextEnvironment, StaticEnvironment
from tracking.tracker.active_set import ActiveTrackerCache, TenantContext, is_active
from tracking.tracker.fake_tracker import RecordingTracker
from tracking.tracker.manager import TrackingManager
from tracking.tracker.registry import TrackerRegistry


class CountingEnvironment(StaticEnvironment):
    """Static environment that counts how often tenants are read."""

    def __init__(self, assortment_tenant=None, checkout_tenant=None):
        super().__init__(assortment_tenant, checkout_tenant)
        self.reads = 0

    def current_assortment_tenant(self):
        self.reads += 1
        return super().current_assortment_tenant()


class TestTenantContext:
    @pytest.mark.parametrize("value", [None, ""])
    def test_absent_tenants_resolve_to_default(self, value):
        context = TenantContext.resolve(value, value)
        assert context == TenantContext("default", "default")

    def test_present_tenants_are_kept(self):
        assert TenantContext.resolve("eu", "b2b") == TenantContext("eu", "b2b")

    def test_from_environment(self):
        env = StaticEnvironment(assortment_tenant="eu")
        assert TenantContext.from_environment(env) == TenantContext("eu", "default")


class TestIsActive:
    def test_unscoped_tracker_is_active_everywhere(self):
        tracker = RecordingTracker()
        for context in (
            TenantContext("default", "default"),
            TenantContext("eu", "b2b"),
            TenantContext("us", "vip"),
        ):
            assert is_active(tracker, context)

    def test_checkout_scoped_tracker_matches_on_checkout_regardless_of_assortment(self):
        vip = RecordingTracker(checkout_tenants=["vip"])
        assert is_active(vip, TenantContext("eu", "vip"))
        assert is_active(vip, TenantContext("us", "vip"))
        assert is_active(vip, TenantContext("default", "vip"))

    def test_checkout_scoped_tracker_with_no_assortment_restriction_is_always_active(self):
        # Empty assortment set matches every assortment tenant, and the axes are ORed
        vip = RecordingTracker(checkout_tenants=["vip"])
        assert is_active(vip, TenantContext("us", "retail"))

    def test_scoped_on_both_axes_requires_one_match(self):
        tracker = RecordingTracker(assortment_tenants=["eu"], checkout_tenants=["b2b"])
        assert is_active(tracker, TenantContext("eu", "retail"))
        assert is_active(tracker, TenantContext("us", "b2b"))
        assert not is_active(tracker, TenantContext("us", "retail"))

    def test_assortment_scoped_tracker_with_no_checkout_restriction_is_always_active(self):
        tracker = RecordingTracker(assortment_tenants=["eu"])
        assert is_active(tracker, TenantContext("us", "default"))


class TestActiveTrackerCache:
    def _registry(self, *trackers):
        registry = TrackerRegistry()
        for tracker in trackers:
            registry.register(tracker)
        return registry

    def test_first_call_computes(self):
        cache = ActiveTrackerCache()
        assert cache.snapshot is None

        tracker = RecordingTracker()
        active = cache.get(StaticEnvironment(), self._registry(tracker))

        assert active == (tracker,)
        assert cache.snapshot.context == TenantContext("default", "default")

    def test_same_context_returns_identical_object(self):
        cache = ActiveTrackerCache()
        env = StaticEnvironment("eu", "b2b")
        registry = self._registry(RecordingTracker(), RecordingTracker(assortment_tenants=["eu"]))

        first = cache.get(env, registry)
        second = cache.get(env, registry)

        assert first is second

    def test_tenants_are_read_on_every_call(self):
        cache = ActiveTrackerCache()
        env = CountingEnvironment()
        registry = self._registry(RecordingTracker())

        cache.get(env, registry)
        cache.get(env, registry)
        cache.get(env, registry)

        assert env.reads == 3

    def test_context_switch_recomputes(self):
        eu = RecordingTracker(name="eu", assortment_tenants=["eu"], checkout_tenants=["eu"])
        everywhere = RecordingTracker(name="everywhere")
        cache = ActiveTrackerCache()
        env = StaticEnvironment("eu", "default")
        registry = self._registry(eu, everywhere)

        in_eu = cache.get(env, registry)
        env.set_assortment_tenant("us")
        in_us = cache.get(env, registry)

        assert in_eu == (eu, everywhere)
        assert in_us == (everywhere,)
        assert cache.snapshot.context == TenantContext("us", "default")

    def test_switching_back_recomputes_since_only_one_entry_is_kept(self):
        cache = ActiveTrackerCache()
        env = StaticEnvironment("eu")
        registry = self._registry(RecordingTracker())

        first = cache.get(env, registry)
        env.set_assortment_tenant("us")
        cache.get(env, registry)
        env.set_assortment_tenant("eu")
        again = cache.get(env, registry)

        assert again == first
        assert again is not first

    def test_empty_registry_yields_empty_active_set(self):
        assert ActiveTrackerCache().get(StaticEnvironment(), TrackerRegistry()) == ()

    def test_active_set_preserves_registration_order(self):
        a = RecordingTracker(name="a")
        b = RecordingTracker(name="b", assortment_tenants=["x"], checkout_tenants=["x"])
        c = RecordingTracker(name="c")
        d = RecordingTracker(name="d", checkout_tenants=["vip"])

        active = ActiveTrackerCache().get(StaticEnvironment("eu", "vip"), self._registry(a, b, c, d))

        assert active == (a, c, d)

    def test_invalidate_forces_recompute(self):
        cache = ActiveTrackerCache()
        env = StaticEnvironment()
        registry = self._registry(RecordingTracker())

        first = cache.get(env, registry)
        cache.invalidate()

        assert cache.snapshot is None
        assert cache.get(env, registry) is not first


class TestConcurrentContexts:
    def test_each_thread_gets_the_set_for_its_own_tenants(self):
        eu = RecordingTracker(name="eu", assortment_tenants=["eu"], checkout_tenants=["eu"])
        us = RecordingTracker(name="us", assortment_tenants=["us"], checkout_tenants=["us"])
        everywhere = RecordingTracker(name="everywhere")
        env = ContextEnvironment()
        manager = TrackingManager([eu, us, everywhere], env)

        expected = {"eu": (eu, everywhere), "us": (us, everywhere)}
        mismatches = []

        def worker(tenant):
            with env.tenant_scope(assortment=tenant, checkout=tenant):
                for _ in range(200):
                    active = manager.get_active_trackers()
                    if active != expected[tenant]:
                        mismatches.append((tenant, active))

        threads = [threading.Thread(target=worker, args=(tenant,)) for tenant in ("eu", "us") * 4]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert mismatches == []
        snapshot = manager._active_trackers.snapshot
        assert snapshot.trackers == expected[snapshot.context.assortment_tenant]
