from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar
from pydantic import BaseModel, ConfigDict, Field

# Pydantic models for the values that flow through the pipeline.
# Intents are created fresh per extraction; User is owned by the caller
# and mutated in place by IntentPipeline.process.

UNKNOWN_ACTION = "none"
NEGATIVE_LABEL = "false"


class IntentDetails(BaseModel):
    """
    Auxiliary data carried by an Intent.

    `confidence` and `locations` are modelled explicitly; any other key a custom
    extractor supplies lands in the open extension area. A key counts as present
    only when it was explicitly set, which is what reducer merges rely on.
    """
    model_config = ConfigDict(extra='allow')

    confidence: Optional[float] = None
    locations: Optional[List[str]] = None

    def present(self) -> Dict[str, Any]:
        """Returns every explicitly set key, known fields first, then extras."""
        values = {
            name: getattr(self, name)
            for name in type(self).model_fields
            if name in self.model_fields_set
        }
        for name, value in (self.model_extra or {}).items():
            values.setdefault(name, value)
        return values

    def has(self, key: str) -> bool:
        return key in self.present()

    def get(self, key: str, default: Any = None) -> Any:
        return self.present().get(key, default)

    def with_missing_from(self, other: "IntentDetails") -> "IntentDetails":
        """Returns a copy with keys present on `other` but absent here folded in."""
        merged = self.present()
        for key, value in other.present().items():
            merged.setdefault(key, value)
        return IntentDetails(**merged)


class Intent(BaseModel):
    action: Optional[str] = None
    topic: Optional[str] = None
    details: IntentDetails = Field(default_factory=IntentDetails)

    @property
    def is_unknown(self) -> bool:
        return self.action == UNKNOWN_ACTION and self.topic is None


class Classification(BaseModel):
    """One classifier's verdict for a topic/label pair. Lives only during extraction."""
    label: str
    topic: str
    value: float


class ClassifierVerdict(BaseModel):
    label: str
    score: float = Field(..., ge=0.0, le=1.0)

    @property
    def is_negative(self) -> bool:
        return self.label == NEGATIVE_LABEL


class User(BaseModel):
    """
    The caller's session record. Extra fields are allowed so skills can keep
    their own bookkeeping on it.
    """
    model_config = ConfigDict(extra='allow')

    conversation: Optional[List[str]] = Field(default_factory=list)
    state: Any = "none"
    intent: Intent = Field(default_factory=Intent)


UserT = TypeVar("UserT", bound=User)


def create_empty_intent() -> Intent:
    return Intent(action=None, topic=None, details=IntentDetails())


def unknown_intent() -> Intent:
    """The sentinel returned when no extractor produced a candidate."""
    return Intent(action=UNKNOWN_ACTION, topic=None)


def create_empty_user(defaults: Optional[Mapping[str, Any]] = None, user_cls: Type[UserT] = User) -> UserT:
    """
    Builds a fresh user. Keys given in `defaults` replace the matching base
    values; every other base value is kept.
    """
    base: Dict[str, Any] = {
        "conversation": [],
        "intent": create_empty_intent(),
        "state": "none",
    }
    base.update(defaults or {})
    return user_cls(**base)
