"""
Built-in step visitors.

Importing this package registers every visitor on DEFAULT_REGISTRY.
"""

from flowgen.generator.visitors.base import StepVisitor
from flowgen.generator.visitors.endpoint import EndpointStepVisitor
from flowgen.generator.visitors.filter import ExpressionFilterStepVisitor, RuleFilterStepVisitor
from flowgen.generator.visitors.log import LogStepVisitor
from flowgen.generator.visitors.mapper import MapperStepVisitor

__all__ = [
    "StepVisitor",
    "EndpointStepVisitor",
    "ExpressionFilterStepVisitor",
    "RuleFilterStepVisitor",
    "LogStepVisitor",
    "MapperStepVisitor",
]
