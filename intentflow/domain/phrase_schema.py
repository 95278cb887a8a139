from pydantic import BaseModel, Field, field_validator
from typing import Dict, List

from intentflow.domain.models import NEGATIVE_LABEL

class TopicCollection(BaseModel):
    """
    One topic's training phrases, as read from a phrase file or passed inline.

    Each label's phrases train that label's classifier; the phrases of the
    topic's other labels plus `negatives` train its negative class.
    """
    topic: str = Field(..., min_length=1)
    labels: Dict[str, List[str]]
    negatives: List[str] = Field(default_factory=list)

    @field_validator("labels")
    @classmethod
    def _check_labels(cls, labels: Dict[str, List[str]]) -> Dict[str, List[str]]:
        if not labels:
            raise ValueError("a topic needs at least one label")
        for label, phrases in labels.items():
            if label == NEGATIVE_LABEL:
                raise ValueError(f"'{NEGATIVE_LABEL}' is reserved for the negative class")
            if not phrases:
                raise ValueError(f"label '{label}' has no phrases")
        return labels

    def merged_with(self, other: "TopicCollection") -> "TopicCollection":
        """Combines two collections for the same topic, concatenating phrases per label."""
        labels = {label: list(phrases) for label, phrases in self.labels.items()}
        for label, phrases in other.labels.items():
            labels.setdefault(label, []).extend(phrases)
        return TopicCollection(
            topic=self.topic,
            labels=labels,
            negatives=self.negatives + other.negatives,
        )

    def negatives_for(self, label: str) -> List[str]:
        phrases: List[str] = []
        for other_label, other_phrases in self.labels.items():
            if other_label != label:
                phrases.extend(other_phrases)
        return phrases + self.negatives
