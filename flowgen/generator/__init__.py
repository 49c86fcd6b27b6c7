"""
Flow-to-project compiler.

Architecture:
    - registry: step kind -> visitor factory
    - context: per-compilation GeneratorContext and the step cursor
    - visitors/: one visitor per step kind (endpoint, log, filter, ...)
    - dependencies: build manifest collection
    - templates: jinja2 rendering with an override directory
    - project_generator: orchestration into the final artifact map
"""

from flowgen.generator.context import GeneratorContext, StepVisitorContext
from flowgen.generator.dependencies import DependencyCoordinate, collect_dependencies
from flowgen.generator.project_generator import ProjectGenerator, generate_project, write_artifacts
from flowgen.generator.registry import DEFAULT_REGISTRY, StepVisitorFactoryRegistry, register_visitor
from flowgen.generator.route import Endpoint, Filter, Flow, Log, dump_flow

__all__ = [
    "GeneratorContext",
    "StepVisitorContext",
    "DependencyCoordinate",
    "collect_dependencies",
    "ProjectGenerator",
    "generate_project",
    "write_artifacts",
    "DEFAULT_REGISTRY",
    "StepVisitorFactoryRegistry",
    "register_visitor",
    "Endpoint",
    "Filter",
    "Flow",
    "Log",
    "dump_flow",
]
