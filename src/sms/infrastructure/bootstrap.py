"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from pathlib import Path

from sms.infrastructure.config import Settings
from sms.infrastructure.events.logging_publisher import LoggingEventPublisher
from sms.infrastructure.persistence.json_unit_of_work import JsonUnitOfWork


def unit_of_work(data_dir: Path | None = None) -> JsonUnitOfWork:
    return JsonUnitOfWork(data_dir or Settings.from_env().data_dir)


def event_publisher() -> LoggingEventPublisher:
    return LoggingEventPublisher()
