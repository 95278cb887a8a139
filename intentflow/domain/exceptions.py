# intentflow/domain/exceptions.py

class IntentFlowError(Exception):
    """Base exception for all pipeline-related errors."""
    pass

class ClassifierSourceError(IntentFlowError):
    """Raised when a phrase source cannot be read, validated, or trained on."""
    pass

class PipelineConfigurationError(IntentFlowError):
    """Raised when an extractor, skill, or reducer is registered incorrectly."""
    pass

class ExtractorTimeoutError(IntentFlowError):
    """Raised when an intent extractor does not resolve within the configured timeout."""

    def __init__(self, extractor_name: str, timeout: float):
        super().__init__(f"Extractor '{extractor_name}' did not finish within {timeout}s.")
        self.extractor_name = extractor_name
        self.timeout = timeout
