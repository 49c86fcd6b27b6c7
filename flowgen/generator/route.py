"""
Route document: the ordered route elements produced by the step visitors,
and its YAML serialization.
"""

from dataclasses import dataclass, field
from typing import List

import yaml


@dataclass(frozen=True)
class Endpoint:
    uri: str
    kind: str = field(default="endpoint", init=False)

    def as_dict(self) -> dict:
        return {"kind": self.kind, "uri": self.uri}


@dataclass(frozen=True)
class Filter:
    expression: str
    kind: str = field(default="filter", init=False)

    def as_dict(self) -> dict:
        return {"kind": self.kind, "expression": self.expression}


@dataclass(frozen=True)
class Log:
    message: str
    logging_level: str = "INFO"
    kind: str = field(default="log", init=False)

    def as_dict(self) -> dict:
        return {"kind": self.kind, "message": self.message, "loggingLevel": self.logging_level}


@dataclass
class Flow:
    """One ordered flow. Append-only while the steps are visited."""

    name: str = None
    steps: List[object] = field(default_factory=list)

    def add_step(self, element) -> None:
        self.steps.append(element)

    def __len__(self) -> int:
        return len(self.steps)

    def as_dict(self) -> dict:
        data = {}
        if self.name:
            data["name"] = self.name
        data["steps"] = [element.as_dict() for element in self.steps]
        return data


def dump_flow(flow: Flow) -> bytes:
    """Serialize a flow as the project's route document."""
    document = {"flows": [flow.as_dict()]}
    return yaml.safe_dump(document, sort_keys=False, default_flow_style=False).encode("utf-8")
