"""Tests for container wiring."""

from nutriplan.containers import build_container
from nutriplan.services.cache import InMemoryCache


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.plan_service is not None
    assert container.plan_service.generator is container.weekly_plan_generator
    assert isinstance(container.selector.cache, InMemoryCache)
    assert container.weekly_plan_generator.days_to_generate == 7
