from abc import ABC, abstractmethod
from typing import Any, Optional

from intentflow.domain.models import User
from intentflow.services.pipeline.resource_provider import PipelineContext

class BaseSkill(ABC):
    """
    Abstract base class for class-based skills.

    A skill reacts to the decided intent on `user`. Returning anything other
    than None claims the request and stops the chain; returning None passes it
    on to the next skill.
    """
    name: str = ""

    @abstractmethod
    async def handle(self, user: User, context: PipelineContext) -> Optional[Any]:
        """Acts on `user.intent`, mutating `user` as needed."""
        pass

    async def __call__(self, user: User, context: PipelineContext) -> Optional[Any]:
        return await self.handle(user, context)


class TopicSkill(BaseSkill):
    """
    A skill that only claims requests whose decided intent matches one topic
    (and optionally one action). Subclasses implement `respond`.
    """
    topic: str = ""
    action: Optional[str] = None

    def matches(self, user: User) -> bool:
        intent = user.intent
        if intent.topic != self.topic:
            return False
        return self.action is None or intent.action == self.action

    async def handle(self, user: User, context: PipelineContext) -> Optional[Any]:
        if not self.matches(user):
            return None
        return await self.respond(user, context)

    @abstractmethod
    async def respond(self, user: User, context: PipelineContext) -> Any:
        pass
