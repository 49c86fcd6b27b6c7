"""
Per-compilation state handed to the step visitors.

GeneratorContext is created once per generate() call. StepVisitorContext is
the traversal cursor: the step being visited, its 1-based position and the
steps of the whole flow, shared by every cursor of one traversal.
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from flowgen.config import GeneratorProperties
from flowgen.generator.route import Flow
from flowgen.model import FlowRequest, Step


@dataclass(frozen=True)
class GeneratorContext:
    generator_properties: GeneratorProperties
    request: FlowRequest
    registry: object
    # Artifact map and route document are owned by a single compilation
    contents: Dict[str, bytes] = field(default_factory=dict)
    flow: Flow = field(default_factory=Flow)


@dataclass(frozen=True)
class StepVisitorContext:
    index: int
    step: Step
    steps: Tuple[Step, ...] = ()

    def __post_init__(self):
        if self.index < 1:
            raise ValueError(f"Step index must be >= 1, got {self.index}")

    @classmethod
    def first(cls, steps) -> Optional["StepVisitorContext"]:
        """Cursor on the first step, or None for an empty flow."""
        steps = tuple(steps)
        if not steps:
            return None
        return cls(index=1, step=steps[0], steps=steps)

    @property
    def remaining(self) -> Tuple[Step, ...]:
        return self.steps[self.index:]

    def has_next(self) -> bool:
        return self.index < len(self.steps)

    def next(self) -> Optional["StepVisitorContext"]:
        """Cursor on the following step, or None once the flow is exhausted."""
        if not self.has_next():
            return None
        return StepVisitorContext(
            index=self.index + 1,
            step=self.steps[self.index],
            steps=self.steps,
        )
