"""
Testes Unitários - composição e inicialização do container
"""
import pytest

from application.services.cache_health import DisabledHealthCheck, PeriodicHealthCheck, SingleShotHealthCheck
from domain.value_objects.reachability import ReachabilityState
from infrastructure.adapters.cache.redis_cache_client import RedisCacheClient
from infrastructure.bootstrap import build_container, shutdown_container, start_container
from shared.config.settings import Settings


class TestBuildContainer:
    """Construção sem abrir conexões"""

    def test_tiered_default_uses_redis(self, fake_provider):
        container = build_container(Settings(redis_url='redis://cache:6379'), weather_provider=fake_provider)

        assert isinstance(container.remote_client, RedisCacheClient)
        assert container.remote_client.url == 'redis://cache:6379'
        assert isinstance(container.health_check, SingleShotHealthCheck)
        assert container.health_check.state is ReachabilityState.UNPROBED

    def test_memory_backend_ignores_remote_client(self, fake_remote, fake_provider):
        container = build_container(
            Settings(cache_backend='memory'),
            remote_client=fake_remote,
            weather_provider=fake_provider
        )

        assert container.remote_client is None
        assert isinstance(container.health_check, DisabledHealthCheck)

    def test_reprobe_interval_selects_periodic_check(self, fake_remote, fake_provider):
        container = build_container(
            Settings(reprobe_interval_seconds=20),
            remote_client=fake_remote,
            weather_provider=fake_provider
        )

        assert isinstance(container.health_check, PeriodicHealthCheck)

    def test_use_cases_share_cache_and_provider(self, fake_remote, fake_provider, clock):
        container = build_container(
            Settings(cache_ttl_seconds=120),
            remote_client=fake_remote,
            weather_provider=fake_provider,
            clock=clock
        )

        assert container.get_weather.cache_service is container.cache_service
        assert container.get_weather.weather_provider is fake_provider
        assert container.get_weather.ttl_seconds == 120
        assert container.cache_service.store is container.store
        assert container.search_cities.weather_provider is fake_provider

    def test_containers_are_independent(self, fake_provider):
        first = build_container(Settings(cache_backend='memory'), weather_provider=fake_provider)
        second = build_container(Settings(cache_backend='memory'), weather_provider=fake_provider)

        assert first.store is not second.store
        assert first.cache_service is not second.cache_service


class TestStartContainer:
    """Probe único + tarefas de background"""

    def test_reachable_remote(self, fake_remote, fake_provider):
        container = build_container(Settings(), remote_client=fake_remote, weather_provider=fake_provider)

        start_container(container)
        try:
            assert container.started
            assert container.health_check.state is ReachabilityState.REACHABLE
            assert container.sweeper.is_running
            assert fake_remote.connect_calls == 1
        finally:
            shutdown_container(container)

        assert not container.started
        assert not container.runner.is_running

    def test_unreachable_remote_does_not_fail_startup(self, fake_remote, fake_provider):
        fake_remote.fail_connect = True
        container = build_container(Settings(), remote_client=fake_remote, weather_provider=fake_provider)

        start_container(container)
        try:
            assert container.started
            assert container.health_check.state is ReachabilityState.UNREACHABLE
        finally:
            shutdown_container(container)

    def test_served_request_after_start(self, fake_provider):
        container = build_container(Settings(cache_backend='memory'), weather_provider=fake_provider)
        start_container(container)
        try:
            first = container.runner.run(container.get_weather.execute('London'))
            second = container.runner.run(container.get_weather.execute('London'))
        finally:
            shutdown_container(container)

        assert first['cached'] is False
        assert second['cached'] is True
