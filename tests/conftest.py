"""Shared pytest fixtures."""
import logging

import pytest

from core.domain.story import StoryRecord
from core.domain.test_case import GenerationContext
from core.services.metrics.logger import LOGGER_NAMESPACE


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo configure_logging so caplog keeps receiving records."""
    yield
    logger = logging.getLogger(LOGGER_NAMESPACE)
    logger.handlers = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def booking_story():
    """A complete story as the parser would produce it."""
    return StoryRecord(
        story_id="US-101",
        description="Create group booking request",
        given="Given the agent is logged in",
        when="When the agent submits a request for 12 passengers",
        then="Then a request reference is generated",
        actor_role="travel agent",
        tags=("booking",),
    )


@pytest.fixture
def booking_context(booking_story):
    """Context selecting one story and two modules."""
    return GenerationContext(
        user_stories=[booking_story],
        selected_modules=["new_request", "ticketing"],
        user_type="travel_agent",
    )
