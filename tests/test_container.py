"""Tests for container wiring."""

import asyncio

from carbon_footprint.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.footprint_service is not None
    assert container.advisory_service.client is not None
    assert container.factor_table.version == "2024.1"
    asyncio.run(container.close_resources())


def test_advisory_disabled_leaves_client_unset(settings) -> None:
    settings = settings.model_copy(update={"advisory_enabled": False})

    container = build_container(settings)

    assert container.advisory_service.client is None
    asyncio.run(container.close_resources())
