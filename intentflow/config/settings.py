from pathlib import Path
from typing import Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from intentflow.domain.families import ClassifierFamily

PACKAGED_PHRASE_DIR = Path(__file__).resolve().parent.parent / "nlp" / "phrases"


class Settings(BaseSettings):
    """Loads and validates all pipeline settings from the environment or a .env file."""
    model_config = SettingsConfigDict(
        env_prefix='INTENTFLOW_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )

    classifier_family: ClassifierFamily = ClassifierFamily.LOGISTIC_REGRESSION

    # Classifications at or below the floor for the active family are dropped.
    # Families without an entry are not filtered.
    confidence_floors: Dict[str, float] = Field(
        default_factory=lambda: {ClassifierFamily.LOGISTIC_REGRESSION.value: 0.6}
    )

    # Always merged into the caller's phrase sources on build and retrain.
    default_phrase_dir: Path = PACKAGED_PHRASE_DIR

    extractor_timeout: Optional[float] = Field(default=None, gt=0)
    debug: bool = False
    log_level: str = "INFO"

    def floor_for(self, family: str) -> Optional[float]:
        return self.confidence_floors.get(str(family))


# Create a single, importable instance of the settings
settings = Settings()
