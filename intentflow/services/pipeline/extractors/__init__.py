from .base_extractor import BaseExtractor
from .classifier_extractor import ClassifierIntentExtractor

# Extractors every new pipeline starts with, in execution order.
# Custom extractors registered later via unshift_intent run before these.
DEFAULT_EXTRACTORS = [
    ClassifierIntentExtractor,
]

__all__ = ["BaseExtractor", "ClassifierIntentExtractor", "DEFAULT_EXTRACTORS"]
