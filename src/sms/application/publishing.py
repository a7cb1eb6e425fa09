"""Fire-and-forget event publication used by the sale handlers."""

from __future__ import annotations

import logging

from sms.domain.events import Event, EventPublisher

logger = logging.getLogger(__name__)


def publish_quietly(publisher: EventPublisher, event: Event) -> bool:
    """Publish ``event``; log and swallow any failure.

    Called after the unit of work has committed, so a broken event sink
    can never roll back the business operation.
    """
    try:
        publisher.publish(event)
    except Exception:
        logger.exception("Failed to publish %s for sale %s", event.name, event.sale_number)
        return False
    return True
