"""Tests configuration and fixtures."""

from typing import Iterator

import pytest

from serenity.config import AuditSettings, DetectionSettings, Settings
from serenity.infrastructure.audit import AuditDispatcher, InMemoryAuditSink
from serenity.services.detection import CrisisDetectionEngine, KeywordRegistry, load_registry


@pytest.fixture(scope="session")
def registry() -> KeywordRegistry:
    """The packaged keyword registry."""
    return load_registry()


@pytest.fixture
def test_settings() -> Settings:
    """Settings with auditing disabled and default detection limits."""
    return Settings(
        env="development",
        detection=DetectionSettings(),
        audit=AuditSettings(enabled=False),
    )


@pytest.fixture
def engine(registry: KeywordRegistry, test_settings: Settings) -> CrisisDetectionEngine:
    """Engine without audit emission."""
    return CrisisDetectionEngine(registry=registry, settings=test_settings)


@pytest.fixture
def audit_sink() -> InMemoryAuditSink:
    return InMemoryAuditSink()


@pytest.fixture
def audit_dispatcher(audit_sink: InMemoryAuditSink) -> Iterator[AuditDispatcher]:
    dispatcher = AuditDispatcher(audit_sink, timeout_seconds=1.0)
    yield dispatcher
    dispatcher.close()


@pytest.fixture
def audited_engine(
    registry: KeywordRegistry,
    test_settings: Settings,
    audit_dispatcher: AuditDispatcher,
) -> CrisisDetectionEngine:
    """Engine that emits audit events to an in-memory sink."""
    return CrisisDetectionEngine(
        registry=registry,
        settings=test_settings,
        audit_dispatcher=audit_dispatcher,
    )
