import inspect
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from intentflow.domain.exceptions import PipelineConfigurationError


@dataclass(frozen=True)
class RegisteredCallable:
    """An extractor or skill together with the name used to order and log it."""
    name: str
    func: Callable[..., Any]


def _derive_name(func: Callable[..., Any]) -> str:
    name = getattr(func, "name", None)
    if isinstance(name, str) and name:
        return name
    return getattr(func, "__name__", None) or type(func).__name__


def prepend(entries: Sequence[RegisteredCallable], func: Callable[..., Any], name: Optional[str] = None) -> List[RegisteredCallable]:
    """
    Returns a new list with `func` placed before every existing entry.
    Derived names get a numeric suffix on collision; explicit names must be unique.
    """
    if not callable(func):
        raise PipelineConfigurationError(f"Expected a callable, got {type(func).__name__}.")

    taken = {entry.name for entry in entries}
    if name is not None:
        if name in taken:
            raise PipelineConfigurationError(f"A callable named '{name}' is already registered.")
        resolved = name
    else:
        base = _derive_name(func)
        resolved, suffix = base, 2
        while resolved in taken:
            resolved = f"{base}_{suffix}"
            suffix += 1

    return [RegisteredCallable(resolved, func)] + list(entries)


def reorder(entries: Sequence[RegisteredCallable], names: Sequence[str]) -> List[RegisteredCallable]:
    """Moves the named entries to the front in the given order; the rest keep their relative order."""
    by_name = {entry.name: entry for entry in entries}
    unknown = [name for name in names if name not in by_name]
    if unknown:
        raise PipelineConfigurationError(f"Cannot reorder unknown callables: {unknown}")
    if len(set(names)) != len(names):
        raise PipelineConfigurationError(f"Duplicate names in priority list: {list(names)}")

    front = [by_name[name] for name in names]
    moved = set(names)
    rest = [entry for entry in entries if entry.name not in moved]
    return front + rest


async def invoke(func: Callable[..., Any], *args: Any) -> Any:
    """Calls a sync or async callable and returns its resolved result."""
    result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
