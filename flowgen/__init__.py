"""flowgen: compile integration flows into deployable projects."""

from flowgen.config import GeneratorProperties, load_generator_properties
from flowgen.generator import ProjectGenerator, generate_project, write_artifacts
from flowgen.loader import load_flow_request, load_flow_request_str

__version__ = "0.1.0"

__all__ = [
    "GeneratorProperties",
    "load_generator_properties",
    "ProjectGenerator",
    "generate_project",
    "write_artifacts",
    "load_flow_request",
    "load_flow_request_str",
]
