from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Optional

from intentflow.config.settings import Settings
from intentflow.nlp.classifier_bank import ClassifierBank


@dataclass(frozen=True)
class PipelineContext:
    """
    The read-only view every extractor, reducer, and skill receives for one
    request. It pins the classifier bank that was current when the request
    started.
    """
    bank: ClassifierBank
    settings: Settings
    debug: bool = False

    @property
    def confidence_floor(self) -> Optional[float]:
        return self.settings.floor_for(self.bank.family)

    @property
    def diagnostic_level(self) -> int:
        """Log level for candidate/decision diagnostics: INFO in debug mode, DEBUG otherwise."""
        return logging.INFO if self.debug else logging.DEBUG


class ResourceProvider:
    """
    A container for the pipeline's shared state. The classifier bank is replaced
    by swapping a single reference, so a snapshot always sees one whole bank.
    """
    def __init__(self, bank: ClassifierBank, config: Settings):
        self._bank = bank
        self._settings = config
        self._debug = config.debug

    def set_bank(self, bank: ClassifierBank) -> None:
        """Replaces the classifier bank for all requests that start afterwards."""
        self._bank = bank

    def set_debug(self, enabled: bool) -> None:
        self._debug = enabled

    def get_bank(self) -> ClassifierBank:
        return self._bank

    def get_settings(self) -> Settings:
        return self._settings

    @property
    def debug(self) -> bool:
        return self._debug

    def snapshot(self) -> PipelineContext:
        return PipelineContext(bank=self._bank, settings=self._settings, debug=self._debug)
