from abc import ABC, abstractmethod
from typing import Optional, Sequence

from intentflow.domain.models import Intent, User
from intentflow.services.pipeline.resource_provider import PipelineContext

class BaseExtractor(ABC):
    """
    Abstract base class for class-based intent extractors.

    An extractor turns the incoming text into zero or more candidate intents.
    Plain functions with the same call signature work just as well; subclassing
    only adds a stable `name` for ordering and logging.
    """
    name: str = ""

    @abstractmethod
    async def extract(self, text: str, user: User, context: PipelineContext) -> Optional[Sequence[Intent]]:
        """
        Returns the candidate intents found in `text`, best first, or None when
        there are none. It must not modify `user`.
        """
        pass

    async def __call__(self, text: str, user: User, context: PipelineContext) -> Optional[Sequence[Intent]]:
        return await self.extract(text, user, context)
