"""Log step visitor."""

from flowgen.generator.registry import register_visitor
from flowgen.generator.route import Log
from flowgen.generator.visitors.base import StepVisitor

DEFAULT_LOGGING_LEVEL = "INFO"


@register_visitor("log")
class LogStepVisitor(StepVisitor):

    def visit(self, visitor_context):
        properties = visitor_context.step.configured_properties
        return Log(
            message=properties.get("message", ""),
            logging_level=properties.get("loggingLevel", DEFAULT_LOGGING_LEVEL).upper(),
        )
