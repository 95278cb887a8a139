import asyncio
import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence

from intentflow.config.settings import Settings, settings as default_settings
from intentflow.domain.exceptions import ExtractorTimeoutError, PipelineConfigurationError
from intentflow.domain.models import Intent, User, UserT, create_empty_intent, create_empty_user
from intentflow.nlp.classifier_bank import ClassifierBank, build_classifier_bank
from intentflow.nlp.phrase_loader import PhraseSource
from intentflow.services.pipeline.callables import RegisteredCallable, invoke, prepend, reorder
from intentflow.services.pipeline.extractors import DEFAULT_EXTRACTORS
from intentflow.services.pipeline.reducers import Reducer, default_reducer
from intentflow.services.pipeline.resource_provider import PipelineContext, ResourceProvider

logger = logging.getLogger(__name__)


def _flatten(results: Sequence[Any]) -> List[Intent]:
    intents: List[Intent] = []
    for result in results:
        if result is None:
            continue
        if isinstance(result, Intent):
            intents.append(result)
        else:
            intents.extend(intent for intent in result if intent is not None)
    return intents


class IntentPipeline:
    """
    Runs one request end to end: every extractor concurrently, then the reducer,
    then the skill chain until a skill claims the request.

    Extractors and skills are kept in execution order. Registering a new one
    puts it in front of everything already registered.
    """
    def __init__(
        self,
        sources: Iterable[PhraseSource] = (),
        *,
        settings: Optional[Settings] = None,
        bank: Optional[ClassifierBank] = None,
    ):
        self.settings = settings or default_settings
        if bank is None:
            bank = build_classifier_bank(sources, self.settings)
        self.resources = ResourceProvider(bank, self.settings)

        self._extractors: List[RegisteredCallable] = []
        for extractor_class in reversed(DEFAULT_EXTRACTORS):
            self._extractors = prepend(self._extractors, extractor_class())
        self._skills: List[RegisteredCallable] = []
        self._reducer: Reducer = default_reducer

    # --- Registration ---

    def unshift_intent(self, extractor: Callable[..., Any], name: Optional[str] = None) -> "IntentPipeline":
        self._extractors = prepend(self._extractors, extractor, name)
        return self

    def unshift_skill(self, skill: Callable[..., Any], name: Optional[str] = None) -> "IntentPipeline":
        self._skills = prepend(self._skills, skill, name)
        return self

    def set_reducer(self, reducer: Reducer) -> "IntentPipeline":
        if not callable(reducer):
            raise PipelineConfigurationError(f"Reducer must be callable, got {type(reducer).__name__}.")
        self._reducer = reducer
        return self

    def turn_on_debug(self) -> "IntentPipeline":
        self.resources.set_debug(True)
        return self

    def reorder_extractors(self, names: Sequence[str]) -> "IntentPipeline":
        self._extractors = reorder(self._extractors, names)
        return self

    def reorder_skills(self, names: Sequence[str]) -> "IntentPipeline":
        self._skills = reorder(self._skills, names)
        return self

    @property
    def extractor_names(self) -> List[str]:
        return [entry.name for entry in self._extractors]

    @property
    def skill_names(self) -> List[str]:
        return [entry.name for entry in self._skills]

    # --- Classifiers ---

    @property
    def classifiers(self) -> ClassifierBank:
        return self.resources.get_bank()

    def retrain_classifiers(self, sources: Iterable[PhraseSource] = ()) -> None:
        """
        Builds a complete new bank and swaps it in. Requests already running keep
        the bank they started with; a failed build leaves the current bank in place.
        """
        bank = build_classifier_bank(sources, self.settings)
        self.resources.set_bank(bank)

    # --- Factories ---

    def create_empty_intent(self) -> Intent:
        return create_empty_intent()

    def create_empty_user(self, defaults: Optional[Mapping[str, Any]] = None) -> User:
        return create_empty_user(defaults)

    # --- Processing ---

    async def _run_extractor(self, entry: RegisteredCallable, text: str, user: User, context: PipelineContext) -> Any:
        timeout = context.settings.extractor_timeout
        loop = asyncio.get_running_loop()
        started = loop.time()
        try:
            if timeout is None:
                return await invoke(entry.func, text, user, context)
            return await asyncio.wait_for(invoke(entry.func, text, user, context), timeout)
        except asyncio.TimeoutError as e:
            # Only the wait_for deadline is translated; an extractor's own
            # TimeoutError raised before the deadline propagates unchanged.
            if timeout is not None and loop.time() - started >= timeout:
                logger.error(f"Extractor '{entry.name}' timed out after {timeout}s.")
                raise ExtractorTimeoutError(entry.name, timeout) from e
            logger.error(f"ERROR in extractor '{entry.name}': {e!r}")
            raise
        except Exception as e:
            logger.error(f"ERROR in extractor '{entry.name}': {e}")
            raise

    async def _run_extractors(self, text: str, user: User, context: PipelineContext) -> List[Any]:
        tasks = [
            asyncio.ensure_future(self._run_extractor(entry, text, user, context))
            for entry in list(self._extractors)
        ]
        try:
            return await asyncio.gather(*tasks)
        except Exception:
            # One extractor failed: stop the rest and collect their outcomes
            # so no exception is left unretrieved.
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _run_reducer(self, intents: List[Intent], user: User, context: PipelineContext) -> Intent:
        try:
            intent = await invoke(self._reducer, intents, user, context)
        except Exception as e:
            logger.error(f"ERROR in reducer: {e}")
            raise
        if not isinstance(intent, Intent):
            raise PipelineConfigurationError(f"Reducer returned {type(intent).__name__}, expected an Intent.")
        return intent

    async def _walk_skills(self, user: User, context: PipelineContext) -> Optional[Any]:
        # Sequential on purpose: the first non-None result ends the walk.
        for entry in list(self._skills):
            try:
                result = await invoke(entry.func, user, context)
            except Exception as e:
                logger.error(f"ERROR in skill '{entry.name}': {e}")
                raise
            if result is not None:
                logger.log(
                    context.diagnostic_level,
                    f"Skill '{entry.name}' handled intent {user.intent.topic}/{user.intent.action}.",
                )
                return result
        return None

    async def process(self, user: UserT, text: str) -> UserT:
        """
        Appends `text` to the user's conversation, decides its intent, lets the
        skills react, and returns the same (mutated) user.
        """
        if user.conversation is None:
            user.conversation = []
        user.conversation.append(text)

        context = self.resources.snapshot()

        results = await self._run_extractors(text, user, context)
        intents = _flatten(results)

        user.intent = await self._run_reducer(intents, user, context)
        logger.log(context.diagnostic_level, f"Decided intent for {text!r}: {user.intent}")

        await self._walk_skills(user, context)
        return user
