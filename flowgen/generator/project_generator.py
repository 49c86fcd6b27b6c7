"""
Project generator: compiles a flow request into the files of a deployable
integration project.

Generated artifacts (relative path -> bytes):
    README.md
    src/main/java/io/flowgen/example/Application.java
    src/main/resources/application.properties
    src/main/resources/flow.yml          route document built by the step visitors
    pom.xml                              build descriptor with the flow's dependencies
    <configured additional resources>
    <artifacts added by visitors, e.g. mapping documents>

Generation is all-or-nothing: any error propagates and no artifact map is
returned.
"""

from pathlib import Path
from typing import Dict

from flowgen.config import GeneratorProperties
from flowgen.gen_logging import get_logger
from flowgen.generator.context import GeneratorContext, StepVisitorContext
from flowgen.generator.dependencies import collect_dependencies
from flowgen.generator.registry import DEFAULT_REGISTRY
from flowgen.generator.route import Flow, dump_flow
from flowgen.generator.templates import TemplateResolver
from flowgen.model import FlowRequest, Integration

# Registers the built-in visitors on DEFAULT_REGISTRY
import flowgen.generator.visitors  # noqa: F401

logger = get_logger(__name__)

README_PATH = "README.md"
APPLICATION_PATH = "src/main/java/io/flowgen/example/Application.java"
APPLICATION_PROPERTIES_PATH = "src/main/resources/application.properties"
FLOW_PATH = "src/main/resources/flow.yml"
POM_PATH = "pom.xml"

# Output file -> template
REQUEST_TEMPLATES = {
    README_PATH: "README.md.jinja",
    APPLICATION_PATH: "Application.java.jinja",
    APPLICATION_PROPERTIES_PATH: "application.properties.jinja",
}
POM_TEMPLATE = "pom.xml.jinja"


class ProjectGenerator:
    def __init__(self, generator_properties: GeneratorProperties = None, registry=None):
        self.generator_properties = generator_properties or GeneratorProperties()
        self.registry = registry if registry is not None else DEFAULT_REGISTRY
        self.templates = TemplateResolver(self.generator_properties.templates)

    def generate(self, request: FlowRequest) -> Dict[str, bytes]:
        integration = request.integration
        logger.info(f"[GENERATE] Integration '{integration.name}' ({len(integration.steps)} step(s))")
        contents = {}

        for resource in self.generator_properties.templates.additional_resources:
            contents[resource.destination] = self.templates.read_resource(resource.source)
            logger.debug(f"  [RESOURCE] {resource.source} -> {resource.destination}")

        context = self._request_context(request)
        for output_path, template_name in REQUEST_TEMPLATES.items():
            contents[output_path] = self.templates.render(template_name, **context)

        flow = self.generate_flow(request, contents)
        contents[FLOW_PATH] = dump_flow(flow)
        contents[POM_PATH] = self.generate_pom(integration)

        logger.info(f"[GENERATE] {len(flow)} route element(s), {len(contents)} file(s)")
        return contents

    def generate_flow(self, request: FlowRequest, contents: Dict[str, bytes] = None) -> Flow:
        """Visit the integration steps in order and return the route document."""
        generator_context = GeneratorContext(
            generator_properties=self.generator_properties,
            request=request,
            registry=self.registry,
            contents=contents if contents is not None else {},
            flow=Flow(name=request.integration.name),
        )
        self._visit_steps(generator_context, StepVisitorContext.first(request.integration.steps))
        return generator_context.flow

    def _visit_steps(self, generator_context: GeneratorContext, visitor_context) -> None:
        while visitor_context is not None:
            factory = generator_context.registry.get(visitor_context.step.kind)
            visitor = factory(generator_context)
            if not visitor.visit_step(visitor_context):
                if visitor_context.has_next():
                    logger.debug(f"  [STOP] Traversal ended at step #{visitor_context.index}")
                break
            visitor_context = visitor_context.next()

    def generate_pom(self, integration: Integration) -> bytes:
        dependencies = collect_dependencies(integration.steps)
        logger.debug(f"  [POM] {len(dependencies)} connector dependency(ies)")
        return self.templates.render(
            POM_TEMPLATE,
            id=integration.id or "",
            name=integration.name,
            description=integration.description,
            connectors=dependencies,
        )

    def _request_context(self, request: FlowRequest) -> dict:
        integration = request.integration
        return {
            "request": request,
            "integration": integration,
            "steps": integration.steps,
            "connectors": request.connectors,
        }


def generate_project(request: FlowRequest, generator_properties: GeneratorProperties = None) -> Dict[str, bytes]:
    """Compile `request` with a default-registry ProjectGenerator."""
    return ProjectGenerator(generator_properties).generate(request)


def write_artifacts(artifacts: Dict[str, bytes], out_dir) -> Path:
    """Write an artifact map below `out_dir`, creating directories as needed."""
    out_path = Path(out_dir)
    for relative_path, content in sorted(artifacts.items()):
        target = out_path / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.debug(f"[GENERATED] {relative_path}")
    return out_path
