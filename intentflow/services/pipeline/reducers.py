import logging
from typing import Awaitable, Callable, Optional, Sequence, Union

from intentflow.domain.models import Intent, User, unknown_intent
from intentflow.services.pipeline.resource_provider import PipelineContext

logger = logging.getLogger(__name__)

Reducer = Callable[
    [Sequence[Optional[Intent]], User, PipelineContext],
    Union[Intent, Awaitable[Intent]],
]


def _merge_details(winner: Intent, others: Sequence[Intent]) -> Intent:
    """Returns a copy of `winner` with the merged details; the candidate itself is left untouched."""
    details = winner.details
    for other in others:
        details = details.with_missing_from(other.details)
    return winner.model_copy(update={"details": details})


def default_reducer(intents: Sequence[Optional[Intent]], user: User, context: PipelineContext) -> Intent:
    """
    The first candidate wins. Detail keys it lacks are filled in from the
    remaining candidates, the earliest candidate supplying each key.
    """
    valid_intents = [intent for intent in intents if intent is not None]
    logger.log(context.diagnostic_level, f"[default_reducer] valid intents: {valid_intents}")

    if not valid_intents:
        return unknown_intent()

    decided = _merge_details(valid_intents[0], valid_intents[1:])
    logger.log(context.diagnostic_level, f"[default_reducer] decided: {decided}")
    return decided


def same_topic_reducer(intents: Sequence[Optional[Intent]], user: User, context: PipelineContext) -> Intent:
    """
    Like default_reducer, but only candidates sharing the winner's topic
    contribute details, so one topic's confidence never leaks into another's.
    Cross-cutting keys such as `locations` still reach the winner when the
    extractor already attached them to it.
    """
    valid_intents = [intent for intent in intents if intent is not None]
    if not valid_intents:
        return unknown_intent()

    winner = valid_intents[0]
    same_topic = [intent for intent in valid_intents[1:] if intent.topic == winner.topic]
    return _merge_details(winner, same_topic)
