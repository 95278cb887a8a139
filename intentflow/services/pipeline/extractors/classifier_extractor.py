import logging
import re
from typing import List, Optional

from intentflow.domain.models import Classification, Intent, IntentDetails, User
from intentflow.nlp.classifiers import Classifier
from intentflow.services.pipeline.extractors.base_extractor import BaseExtractor
from intentflow.services.pipeline.resource_provider import PipelineContext

logger = logging.getLogger(__name__)

LOCATIONS_TOPIC = "locations"

_LABEL_SEPARATORS = re.compile(r"[-_]")
_NON_WORD = re.compile(r"[\W_]+")


def label_to_action(label: str) -> str:
    return _LABEL_SEPARATORS.sub(" ", label)


def _split_words(text: str) -> List[str]:
    words: List[str] = []
    for chunk in _NON_WORD.split(text):
        if not chunk:
            continue
        start = 0
        for i in range(1, len(chunk)):
            prev, char = chunk[i - 1], chunk[i]
            following = chunk[i + 1] if i + 1 < len(chunk) else ""
            if (
                prev.isdigit() != char.isdigit()
                or (prev.islower() and char.isupper())
                or (prev.isupper() and char.isupper() and following.islower())
            ):
                words.append(chunk[start:i])
                start = i
        words.append(chunk[start:])
    return words


def start_case(text: str) -> str:
    """'new york' -> 'New York', 'newYork' -> 'New York', 'NYC' -> 'NYC', 'zürich' -> 'Zürich'."""
    return " ".join(word[:1].upper() + word[1:] for word in _split_words(text))


def check_using_classifier(text: str, classifier: Classifier, label: str, topic: str) -> Optional[Classification]:
    """Returns a Classification when the classifier says `label` is present in `text`."""
    verdict = classifier.classify(text)
    if verdict.is_negative:
        return None
    return Classification(label=label_to_action(label), topic=topic, value=verdict.score)


class ClassifierIntentExtractor(BaseExtractor):
    """
    The built-in extractor. Asks every topic/label classifier in the bank about
    the text and turns the confident answers into intents, best first.
    """
    name = "classifier_nlp"

    def classify(self, text: str, context: PipelineContext) -> List[Classification]:
        classifications: List[Classification] = []
        for topic, classifiers in context.bank.items():
            for label, classifier in classifiers.items():
                classification = check_using_classifier(text, classifier, label, topic)
                if classification is not None:
                    classifications.append(classification)
        return classifications

    async def extract(self, text: str, user: User, context: PipelineContext) -> Optional[List[Intent]]:
        compacted = self.classify(text, context)
        logger.log(context.diagnostic_level, f"[{self.name}] compacted: {compacted}")

        floor = context.confidence_floor
        if floor is not None:
            compacted = [c for c in compacted if c.value > floor]

        if not compacted:
            return None

        # sorted() is stable with reverse=True, so ties keep their input order.
        ranked = sorted(compacted, key=lambda c: c.value, reverse=True)
        logger.log(context.diagnostic_level, f"[{self.name}] {text!r} ranked: {ranked}")

        locations = [start_case(c.label) for c in ranked if c.topic == LOCATIONS_TOPIC]

        intents: List[Intent] = []
        for classification in ranked:
            details = IntentDetails(confidence=classification.value, locations=list(locations))
            if classification.topic == LOCATIONS_TOPIC:
                details.locations = list(locations)
            intents.append(Intent(action=classification.label, topic=classification.topic, details=details))

        return intents
