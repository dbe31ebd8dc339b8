"""Tests for container wiring."""

import asyncio

from caloai.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.meal_plan_service is not None
    assert container.analysis_service.client is not None
    assert container.analysis_service.model == settings.gemini_model
    asyncio.run(container.close_resources())


def test_build_container_without_gemini_key(settings) -> None:
    container = build_container(settings.model_copy(update={"gemini_api_key": None}))
    assert container.analysis_service.client is None
    asyncio.run(container.close_resources())
