"""
Structured logging utilities for Glow Engine

Plain log lines go through the "glow_engine" logger. Machine-readable events
go through log_structured(), one JSON object per line, and should use a name
from EVENT_TYPES.
"""

import json
import logging
from datetime import datetime, timezone
from typing import Dict, Any

from config.settings import settings

SERVICE_NAME = "glow_engine"

# Structured event names
RECOMMENDATION_GENERATED = "recommendation_generated"
FEEDBACK_APPLIED = "feedback_applied"
FEEDBACK_REJECTED = "feedback_rejected"
CUSTOM_PROFILE_UPDATED = "custom_profile_updated"
PROFILE_REGISTERED = "profile_registered"
SERVICE_STARTED = "service_started"

EVENT_TYPES = frozenset({
    RECOMMENDATION_GENERATED,
    FEEDBACK_APPLIED,
    FEEDBACK_REJECTED,
    CUSTOM_PROFILE_UPDATED,
    PROFILE_REGISTERED,
    SERVICE_STARTED,
})


def setup_logging() -> logging.Logger:
    """Configure application logging from settings.LOG_LEVEL"""
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    return logging.getLogger(SERVICE_NAME)


logger = setup_logging()


def build_event(event_type: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Assemble one structured event

    Event fields never override the envelope keys.
    """
    return {
        **data,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": SERVICE_NAME,
        "event_type": event_type,
    }


def log_structured(event_type: str, data: Dict[str, Any]) -> None:
    """
    Emit a structured JSON event

    Unregistered event names are still emitted, after a warning.

    Args:
        event_type: one of EVENT_TYPES
        data: event payload; non-JSON values are stringified
    """
    if event_type not in EVENT_TYPES:
        logger.warning(f"⚠️ Unregistered structured event: {event_type}")
    logger.info(json.dumps(build_event(event_type, data), ensure_ascii=False, default=str))
