import logging
from types import MappingProxyType
from typing import Iterable, Iterator, Mapping, Optional

from intentflow.config.settings import Settings, settings as default_settings
from intentflow.domain.exceptions import ClassifierSourceError, PipelineConfigurationError
from intentflow.nlp.classifiers import CLASSIFIER_FAMILY_REGISTRY, Classifier
from intentflow.nlp.phrase_loader import PhraseSource, load_topic_collections

logger = logging.getLogger(__name__)


class ClassifierBank(Mapping[str, Mapping[str, Classifier]]):
    """
    A read-only topic -> label -> classifier mapping, tagged with the family of
    model that produced it. Banks are never updated in place; a retrain builds a
    new one.
    """
    def __init__(self, classifiers: Mapping[str, Mapping[str, Classifier]], family: str):
        self._topics = MappingProxyType({
            topic: MappingProxyType(dict(labels)) for topic, labels in classifiers.items()
        })
        self.family = str(family)

    def __getitem__(self, topic: str) -> Mapping[str, Classifier]:
        return self._topics[topic]

    def __iter__(self) -> Iterator[str]:
        return iter(self._topics)

    def __len__(self) -> int:
        return len(self._topics)

    def __repr__(self) -> str:
        labels = sum(len(labels) for labels in self._topics.values())
        return f"ClassifierBank(family={self.family!r}, topics={len(self)}, labels={labels})"


def build_classifier_bank(
    sources: Iterable[PhraseSource] = (),
    config: Optional[Settings] = None,
) -> ClassifierBank:
    """
    Trains one classifier per topic/label pair from the given phrase sources plus
    the configured default phrase directory.

    Raises ClassifierSourceError on any unreadable, invalid, or untrainable
    source; nothing is returned unless every classifier trained.
    """
    config = config or default_settings
    family = str(config.classifier_family)
    train = CLASSIFIER_FAMILY_REGISTRY.get(family)
    if train is None:
        raise PipelineConfigurationError(f"Unknown classifier family '{family}'.")

    all_sources = list(sources) + [config.default_phrase_dir]
    collections = load_topic_collections(all_sources)

    classifiers = {}
    for topic, collection in collections.items():
        classifiers[topic] = {}
        for label, positives in collection.labels.items():
            negatives = collection.negatives_for(label)
            if not negatives:
                raise ClassifierSourceError(
                    f"Topic '{topic}' label '{label}' has no negative phrases; "
                    f"add another label or a 'negatives' list."
                )
            try:
                classifiers[topic][label] = train(label, positives, negatives)
            except ValueError as e:
                raise ClassifierSourceError(f"Failed to train classifier for '{topic}/{label}': {e}") from e

    bank = ClassifierBank(classifiers, family)
    logger.info(f"Built {bank!r} from {len(all_sources)} sources.")
    return bank
