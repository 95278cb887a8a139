"""
Pytest configuration and shared fixtures.

This module provides fixtures for:
- Fake classifiers with fixed verdicts, so pipeline tests need no training
- Classifier banks and pipelines built from those fakes
- Phrase files on disk for loader and training tests
"""

from typing import Dict, Tuple

import pytest

from intentflow.config.settings import Settings
from intentflow.domain.families import ClassifierFamily
from intentflow.domain.models import ClassifierVerdict
from intentflow.nlp.classifier_bank import ClassifierBank
from intentflow.services.pipeline import IntentPipeline


class FakeClassifier:
    """Classifier that returns a fixed verdict and counts its calls."""

    def __init__(self, label: str, score: float):
        self.verdict = ClassifierVerdict(label=label, score=score)
        self.calls = 0

    def classify(self, text: str) -> ClassifierVerdict:
        self.calls += 1
        return self.verdict


class KeywordClassifier:
    """Says `label` with `score` when `keyword` occurs in the text, 'false' otherwise."""

    def __init__(self, label: str, keyword: str, score: float = 0.9):
        self.label = label
        self.keyword = keyword
        self.score = score

    def classify(self, text: str) -> ClassifierVerdict:
        if self.keyword in text.lower():
            return ClassifierVerdict(label=self.label, score=self.score)
        return ClassifierVerdict(label="false", score=0.95)


def bank_from_verdicts(
    verdicts: Dict[str, Dict[str, Tuple[str, float]]],
    family: str = ClassifierFamily.NAIVE_BAYES.value,
) -> ClassifierBank:
    """Builds a bank where every topic/label answers a fixed (label, score)."""
    return ClassifierBank(
        {
            topic: {label: FakeClassifier(*verdict) for label, verdict in labels.items()}
            for topic, labels in verdicts.items()
        },
        family,
    )


# ─────────────────────────────────────────────────────────────────────────────
# Settings & Banks
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def test_settings(tmp_path):
    """Settings whose default phrase directory is an empty temp dir."""
    phrase_dir = tmp_path / "default_phrases"
    phrase_dir.mkdir()
    return Settings(default_phrase_dir=phrase_dir)


@pytest.fixture
def keyword_bank():
    """A bank that recognises greetings and a few cities by keyword."""
    return ClassifierBank(
        {
            "greetings": {
                "hello": KeywordClassifier("hello", "hello", 0.8),
                "goodbye": KeywordClassifier("goodbye", "bye", 0.85),
            },
            "locations": {
                "new-york": KeywordClassifier("new-york", "new york", 0.9),
                "london": KeywordClassifier("london", "london", 0.7),
            },
        },
        ClassifierFamily.NAIVE_BAYES.value,
    )


@pytest.fixture
def pipeline(keyword_bank, test_settings):
    """Pipeline wired to the keyword bank; no training happens."""
    return IntentPipeline(settings=test_settings, bank=keyword_bank)


# ─────────────────────────────────────────────────────────────────────────────
# Phrase Files
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def phrase_dir(tmp_path):
    """A directory holding one valid phrase file for the 'weather' topic."""
    directory = tmp_path / "phrases"
    directory.mkdir()
    (directory / "weather.yaml").write_text(
        "topic: weather\n"
        "labels:\n"
        "  forecast:\n"
        "    - what is the weather tomorrow\n"
        "    - will it rain tomorrow\n"
        "    - weather forecast please\n"
        "  temperature:\n"
        "    - how hot is it\n"
        "    - what is the temperature\n"
        "    - how cold is it outside\n"
        "negatives:\n"
        "  - hello there\n"
        "  - book a flight\n",
        encoding="utf-8",
    )
    (directory / "README.txt").write_text("not a phrase file", encoding="utf-8")
    return directory
