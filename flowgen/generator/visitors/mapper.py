"""
Data mapper step visitor.

The mapping document configured on the step is written into the project as
a classpath resource named after the step position, and the step becomes an
endpoint on the mapping component pointing at that resource.
"""

from flowgen.gen_logging import get_logger
from flowgen.generator.registry import register_visitor
from flowgen.generator.route import Endpoint
from flowgen.generator.visitors.base import StepVisitor

logger = get_logger(__name__)

MAPPING_PROPERTY = "atlasmapping"
MAPPING_SCHEME = "atlas"
RESOURCES_DIR = "src/main/resources"


@register_visitor("mapper")
class MapperStepVisitor(StepVisitor):

    def visit(self, visitor_context):
        mapping = visitor_context.step.configured_properties.get(MAPPING_PROPERTY)
        if not mapping:
            logger.debug(f"  [SKIP] Mapper step #{visitor_context.index} has no mapping")
            return None

        resource = f"mapping-step-{visitor_context.index}.json"
        self.generator_context.contents[f"{RESOURCES_DIR}/{resource}"] = mapping.encode("utf-8")
        logger.debug(f"  [MAPPING] #{visitor_context.index} -> {resource}")
        return Endpoint(f"{MAPPING_SCHEME}:{resource}")
