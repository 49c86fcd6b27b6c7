"""
Template and static resource resolution.

Templates and additional resources are looked up in the override directory
first (when configured), then in the template root.
"""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, TemplateNotFound, select_autoescape

from flowgen.config import TemplatesProperties
from flowgen.errors import MissingTemplateResource
from flowgen.gen_logging import get_logger
from flowgen.templates import TEMPLATES_DIR

logger = get_logger(__name__)


class TemplateResolver:
    def __init__(self, templates_properties: TemplatesProperties = None):
        properties = templates_properties or TemplatesProperties()
        self.root = Path(properties.root) if properties.root else TEMPLATES_DIR
        self.override_path = properties.override_path

        self.search_path = [self.root]
        if self.override_path:
            # An absolute override path is used as-is
            self.search_path.insert(0, self.root / self.override_path)

        self.env = Environment(
            loader=FileSystemLoader([str(directory) for directory in self.search_path]),
            autoescape=select_autoescape(disabled_extensions=("jinja",)),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def render(self, template_name: str, **context) -> bytes:
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound as e:
            raise MissingTemplateResource(template_name, self.override_path) from e
        logger.debug(f"  [RENDER] {template_name} ({template.filename})")
        return template.render(**context).encode("utf-8")

    def resolve(self, name: str) -> Path:
        """Return the path of a static resource, override directory first."""
        for directory in self.search_path:
            candidate = directory / name
            if candidate.is_file():
                return candidate
        raise MissingTemplateResource(name, self.override_path)

    def read_resource(self, name: str) -> bytes:
        return self.resolve(name).read_bytes()
