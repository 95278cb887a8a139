from .orchestrator import IntentPipeline
from .reducers import default_reducer, same_topic_reducer
from .resource_provider import PipelineContext, ResourceProvider

__all__ = ["IntentPipeline", "PipelineContext", "ResourceProvider", "default_reducer", "same_topic_reducer"]
