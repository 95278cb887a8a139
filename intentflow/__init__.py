"""Conversational intent pipeline: classify text, reduce to one intent, dispatch skills."""

from intentflow.domain.exceptions import (  # noqa: F401
    ClassifierSourceError,
    ExtractorTimeoutError,
    IntentFlowError,
    PipelineConfigurationError,
)
from intentflow.domain.models import (  # noqa: F401
    Intent,
    IntentDetails,
    User,
    create_empty_intent,
    create_empty_user,
)
from intentflow.domain.phrase_schema import TopicCollection  # noqa: F401
from intentflow.nlp.classifier_bank import ClassifierBank, build_classifier_bank  # noqa: F401
from intentflow.services.pipeline import (  # noqa: F401
    IntentPipeline,
    PipelineContext,
    default_reducer,
    same_topic_reducer,
)
from intentflow.services.pipeline.extractors import BaseExtractor  # noqa: F401
from intentflow.services.pipeline.skills import BaseSkill, TopicSkill  # noqa: F401
