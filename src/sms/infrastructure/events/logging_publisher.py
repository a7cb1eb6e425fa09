"""EventPublisher that writes every event to the log as JSON."""

from __future__ import annotations

import dataclasses
import json
import logging

from sms.domain.events import Event, EventPublisher, SaleCancelled

logger = logging.getLogger(__name__)


def event_payload(event: Event) -> str:
    body = dataclasses.asdict(event)
    return json.dumps({"event": event.name, **body}, default=str, sort_keys=True)


class LoggingEventPublisher(EventPublisher):

    def publish(self, event: Event) -> None:
        level = logging.WARNING if isinstance(event, SaleCancelled) else logging.INFO
        logger.log(level, "%s %s", event.name, event_payload(event))
