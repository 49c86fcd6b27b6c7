"""Load flow requests from YAML or JSON files."""

from pathlib import Path

import yaml
from pydantic import ValidationError

from flowgen.errors import FlowDefinitionError
from flowgen.gen_logging import get_logger
from flowgen.model import FlowRequest

logger = get_logger(__name__)


def flow_request_from_dict(data) -> FlowRequest:
    """Validate a parsed document into a FlowRequest."""
    if not isinstance(data, dict):
        raise FlowDefinitionError("Flow request must be a mapping with 'integration' and 'connectors'")
    try:
        return FlowRequest.model_validate(data)
    except ValidationError as e:
        raise FlowDefinitionError(f"Invalid flow request: {e}") from e


def load_flow_request_str(content: str) -> FlowRequest:
    """Parse a flow request from YAML (or JSON) text."""
    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise FlowDefinitionError(f"Flow request is not valid YAML/JSON: {e}") from e
    return flow_request_from_dict(data)


def load_flow_request(path) -> FlowRequest:
    """Parse a flow request file. JSON files are read through the YAML parser."""
    flow_path = Path(path)
    try:
        content = flow_path.read_text(encoding="utf-8")
    except OSError as e:
        raise FlowDefinitionError(f"Cannot read flow request '{flow_path}': {e}") from e

    request = load_flow_request_str(content)
    logger.debug(
        f"[LOAD] {flow_path.name}: {len(request.integration.steps)} step(s), "
        f"{len(request.connectors)} connector(s)"
    )
    return request
