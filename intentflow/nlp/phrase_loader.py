import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Union

import yaml
from pydantic import ValidationError

from intentflow.domain.exceptions import ClassifierSourceError
from intentflow.domain.phrase_schema import TopicCollection

logger = logging.getLogger(__name__)

PhraseSource = Union[str, Path, TopicCollection, Mapping[str, Any]]

PHRASE_FILE_SUFFIXES = (".yaml", ".yml")


def _read_phrase_file(path: Path) -> TopicCollection:
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise ClassifierSourceError(f"Failed to read phrase file at {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ClassifierSourceError(f"Phrase file {path} must contain a mapping, got {type(raw).__name__}.")

    try:
        return TopicCollection.model_validate(raw)
    except ValidationError as e:
        raise ClassifierSourceError(f"Phrase file {path} is invalid: {e}") from e


def _load_path(path: Path) -> List[TopicCollection]:
    if path.is_dir():
        files = sorted(p for p in path.iterdir() if p.suffix in PHRASE_FILE_SUFFIXES)
        logger.debug(f"Loading {len(files)} phrase files from {path}")
        return [_read_phrase_file(p) for p in files]
    if path.is_file():
        return [_read_phrase_file(path)]
    raise ClassifierSourceError(f"Phrase source '{path}' not found.")


def load_topic_collections(sources: Iterable[PhraseSource]) -> Dict[str, TopicCollection]:
    """
    Resolves every source into validated TopicCollections, merging collections
    that share a topic name. Topics keep the order in which they were first seen.
    """
    topics: Dict[str, TopicCollection] = {}

    for source in sources:
        if isinstance(source, TopicCollection):
            collections = [source]
        elif isinstance(source, Mapping):
            try:
                collections = [TopicCollection.model_validate(dict(source))]
            except ValidationError as e:
                raise ClassifierSourceError(f"Inline topic collection is invalid: {e}") from e
        elif isinstance(source, (str, Path)):
            collections = _load_path(Path(source))
        else:
            raise ClassifierSourceError(f"Unsupported phrase source type: {type(source).__name__}")

        for collection in collections:
            existing = topics.get(collection.topic)
            topics[collection.topic] = existing.merged_with(collection) if existing else collection

    return topics
