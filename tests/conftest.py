from __future__ import annotations

from datetime import UTC, datetime

import pytest

from staffdesk.config import Settings
from staffdesk.core.engine import CRMEngine, build_engine

FROZEN_NOW = datetime(2025, 12, 15, 9, 0, tzinfo=UTC)


@pytest.fixture
def frozen_clock():
    return lambda: FROZEN_NOW


@pytest.fixture
def settings() -> Settings:
    return Settings(app_env="test", seed_fixtures=False)


@pytest.fixture
def engine(settings: Settings, frozen_clock) -> CRMEngine:
    return CRMEngine(settings, clock=frozen_clock)


@pytest.fixture
def seeded_engine(settings: Settings, frozen_clock) -> CRMEngine:
    return build_engine(settings, clock=frozen_clock, seed=True)


@pytest.fixture
def acme(engine: CRMEngine):
    return engine.companies.create({"name": "Acme", "industry": "technology", "location": "Austin, TX"})
