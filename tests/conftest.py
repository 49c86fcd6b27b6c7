"""
Pytest configuration and shared fixtures for the flowgen test suite.
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from flowgen.config import GeneratorProperties
from flowgen.generator import ProjectGenerator
from flowgen.loader import load_flow_request_str


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def examples_dir(project_root):
    """Return the example flows directory."""
    return project_root / "examples"


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for generated project output."""
    temp_dir = tempfile.mkdtemp(prefix="flowgen_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def build_request():
    """Factory fixture to build a FlowRequest from YAML content."""
    def _build(content: str):
        return load_flow_request_str(content)
    return _build


@pytest.fixture
def write_flow_file(temp_output_dir):
    """Factory fixture to write flow content to a temporary file."""
    def _write(content: str, filename: str = "flow.yml") -> Path:
        file_path = temp_output_dir / filename
        file_path.write_text(content)
        return file_path
    return _write


@pytest.fixture
def generator():
    """Factory fixture returning a ProjectGenerator for the given settings."""
    def _generator(secret_masking_enabled: bool = False, **templates) -> ProjectGenerator:
        properties = GeneratorProperties(
            secret_masking_enabled=secret_masking_enabled,
            templates=templates,
        )
        return ProjectGenerator(properties)
    return _generator


@pytest.fixture
def endpoint_uris(generator):
    """Compile a request and return the URIs of its endpoint route elements."""
    def _uris(request, secret_masking_enabled: bool = False) -> list:
        flow = generator(secret_masking_enabled).generate_flow(request)
        return [element.uri for element in flow.steps if element.kind == "endpoint"]
    return _uris


# Test data fixtures for common scenarios

CONNECTORS = """
connectors:
  timer-connector:
    id: timer-connector
    name: Timer
  twitter:
    id: twitter
    name: Twitter
    properties:
      accessToken:
        secret: true
        componentProperty: true
      consumerKey:
        componentProperty: true
      keywords: {}
  http:
    id: http
    name: HTTP
    properties:
      username: {}
      password:
        secret: true
"""

TWITTER_SEARCH_ACTION = """
      action:
        id: twitter-search
        connectorId: twitter
        camelConnectorPrefix: twitter-search
        camelConnectorGAV: io.flowgen:twitter-search-connector:1.0.0
        propertyDefinitionSteps:
          - name: Search
            properties:
              keywords: {}
              delay: {}
"""

HTTP_GET_ACTION = """
      action:
        id: http-get
        connectorId: http
        camelConnectorPrefix: http-get
        camelConnectorGAV: io.flowgen:http-get-connector:1.0.0
        propertyDefinitionSteps:
          - name: Endpoint
            properties:
              httpUri:
                kind: path
                required: true
              timeout: {}
"""


@pytest.fixture
def connectors_yaml():
    """Connector catalog shared by the endpoint tests."""
    return CONNECTORS


@pytest.fixture
def twitter_search_action():
    return TWITTER_SEARCH_ACTION


@pytest.fixture
def http_get_action():
    return HTTP_GET_ACTION


@pytest.fixture
def timer_to_log_flow():
    """Flow with a periodic timer followed by a log step."""
    return """
integration:
  id: timer-to-log
  name: Timer to log
  description: Logs a message every period
  steps:
    - stepKind: endpoint
      connection:
        connectorId: timer-connector
      action:
        id: periodic-timer-action
        connectorId: timer-connector
        camelConnectorPrefix: periodic-timer
        camelConnectorGAV: io.flowgen:timer-connector:1.0.0
    - stepKind: log
      configuredProperties:
        message: "tick"
""" + CONNECTORS
