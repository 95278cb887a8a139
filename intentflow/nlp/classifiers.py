from typing import Callable, Dict, List, Protocol, runtime_checkable

from sklearn.feature_extraction.text import CountVectorizer
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import MultinomialNB
from sklearn.pipeline import Pipeline, make_pipeline

from intentflow.domain.families import ClassifierFamily
from intentflow.domain.models import ClassifierVerdict, NEGATIVE_LABEL


@runtime_checkable
class Classifier(Protocol):
    """A trained model for one topic/label pair."""

    def classify(self, text: str) -> ClassifierVerdict:
        """Returns the best label for `text` (the label itself or 'false') and its confidence."""
        ...


ClassifierFactory = Callable[[str, List[str], List[str]], Classifier]


class SklearnPhraseClassifier:
    """
    Binary bag-of-words classifier answering "does this text express `label`?".
    """
    def __init__(self, label: str, model: Pipeline):
        self.label = label
        self.model = model

    def classify(self, text: str) -> ClassifierVerdict:
        probabilities = self.model.predict_proba([text])[0]
        best = int(probabilities.argmax())
        return ClassifierVerdict(
            label=str(self.model.classes_[best]),
            score=float(probabilities[best]),
        )


def _train(label: str, positives: List[str], negatives: List[str], model: Pipeline) -> SklearnPhraseClassifier:
    phrases = positives + negatives
    targets = [label] * len(positives) + [NEGATIVE_LABEL] * len(negatives)
    model.fit(phrases, targets)
    return SklearnPhraseClassifier(label, model)


def train_logistic_regression(label: str, positives: List[str], negatives: List[str]) -> SklearnPhraseClassifier:
    model = make_pipeline(CountVectorizer(lowercase=True), LogisticRegression(C=10.0, max_iter=1000))
    return _train(label, positives, negatives, model)


def train_naive_bayes(label: str, positives: List[str], negatives: List[str]) -> SklearnPhraseClassifier:
    model = make_pipeline(CountVectorizer(lowercase=True), MultinomialNB())
    return _train(label, positives, negatives, model)


# Maps the configured classifier family to the function that trains one
# classifier per topic/label pair. Register a new family here to extend the bank.
CLASSIFIER_FAMILY_REGISTRY: Dict[str, ClassifierFactory] = {
    ClassifierFamily.LOGISTIC_REGRESSION.value: train_logistic_regression,
    ClassifierFamily.NAIVE_BAYES.value: train_naive_bayes,
}
