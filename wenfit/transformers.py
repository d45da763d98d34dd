"""
Transformer pipeline for post-processing validated values.

Steps run strictly in the order they were added; each receives the previous
step's output.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Protocol, Union, runtime_checkable


@runtime_checkable
class Transformer(Protocol):
    def transform(self, value: Any) -> Any: ...


Step = Union[Transformer, Callable[[Any], Any]]


def _as_callable(step: Step) -> Callable[[Any], Any]:
    if isinstance(step, Transformer):
        return step.transform
    if callable(step):
        return step
    raise TypeError(f"Pipeline steps must be callables or transformers, got {type(step).__name__}")


class TransformerPipeline:
    """
    Immutable, ordered chain of transformations.

    Usage:
        slugify = (
            TransformerPipeline()
            .add(str.strip)
            .add(str.lower)
            .add(lambda s: s.replace(" ", "-"))
        )
        schema = string().min(1).transform(slugify)
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[Step] = ()):
        self._steps: tuple[Callable[[Any], Any], ...] = tuple(_as_callable(s) for s in steps)

    def add(self, step: Step) -> TransformerPipeline:
        """Return a new pipeline with `step` appended."""
        pipeline = TransformerPipeline()
        pipeline._steps = (*self._steps, _as_callable(step))
        return pipeline

    def execute(self, value: Any) -> Any:
        for step in self._steps:
            value = step(value)
        return value

    __call__ = execute

    def is_empty(self) -> bool:
        return not self._steps

    def __len__(self) -> int:
        return len(self._steps)

    def __repr__(self) -> str:
        return f"TransformerPipeline(steps={len(self._steps)})"
