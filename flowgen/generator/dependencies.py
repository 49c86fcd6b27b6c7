"""
Build manifest: the dependency coordinates required by a flow's actions.
"""

from dataclasses import dataclass
from typing import Tuple

from flowgen.errors import MalformedDependencyCoordinate
from flowgen.gen_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class DependencyCoordinate:
    group_id: str
    artifact_id: str
    version: str

    @classmethod
    def parse(cls, text: str) -> "DependencyCoordinate":
        parts = text.split(":")
        if len(parts) != 3:
            raise MalformedDependencyCoordinate(text)
        return cls(*parts)

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}:{self.version}"


def collect_dependencies(steps) -> Tuple[DependencyCoordinate, ...]:
    """
    Collect the distinct coordinates of all actions bound to `steps`.

    Malformed coordinates are skipped. Duplicates collapse to one entry; the
    first-seen order is kept so the rendered manifest is stable.
    """
    coordinates = {}
    for step in steps:
        action = step.action
        if action is None or not action.dependency:
            continue
        try:
            coordinate = DependencyCoordinate.parse(action.dependency)
        except MalformedDependencyCoordinate as e:
            logger.warning(f"  [WARN] {e}, skipping.")
            continue
        coordinates.setdefault(coordinate, None)
    return tuple(coordinates)
