"""
Endpoint step visitor.

Resolves a step bound to a connection and an action into an endpoint URI:

    <scheme>[:<positional>...][?<key>=<value>&...]

Configured properties come from the connection and the step (step wins).
Only the properties the connector or the action classify as endpoint-level
make it into the URI; component-level properties are configured elsewhere,
but their presence switches the scheme to the connection-specific one so
two connections of the same connector do not share a component.
"""

from flowgen.errors import ConnectorNotFound
from flowgen.gen_logging import get_logger
from flowgen.generator.registry import register_visitor
from flowgen.generator.route import Endpoint
from flowgen.generator.visitors.base import StepVisitor

logger = get_logger(__name__)

ENDPOINT_STEP_KIND = "endpoint"

# Prefix of the legacy periodic timer connector, which needs a timer name
LEGACY_TIMER_PREFIX = "periodic-timer"
LEGACY_TIMER_PROPERTY = "timerName"
LEGACY_TIMER_NAME = "every"


@register_visitor(ENDPOINT_STEP_KIND)
class EndpointStepVisitor(StepVisitor):

    def visit(self, visitor_context):
        step = visitor_context.step
        if step.action is None or step.connection is None:
            logger.debug(
                f"  [SKIP] Step #{visitor_context.index} has no action or connection bound"
            )
            return None

        endpoint = self.create_endpoint(step, step.connection, step.action)
        logger.debug(f"  [ENDPOINT] #{visitor_context.index} {endpoint.uri}")
        return endpoint

    def create_endpoint(self, step, connection, action) -> Endpoint:
        request = self.generator_context.request
        connector_id = connection.connector_id or action.connector_id
        connector = request.connector(connector_id) if connector_id else None
        if connector is None:
            raise ConnectorNotFound(connector_id)

        prefix = action.connector_prefix
        configured_properties = aggregate(connection.configured_properties, step.configured_properties)
        properties = aggregate(
            connector.filter_properties(configured_properties, connector.is_endpoint_property),
            action.filter_properties(configured_properties, action.is_endpoint_property),
        )
        has_component_options = has_component_properties(configured_properties, connector, action)

        # "twitter-search-1" for connection "1", plain "twitter-search" otherwise
        connector_prefix = f"{prefix}-{connection.id}" if connection.id else prefix
        # The scheme only carries the connection id when the connection has its
        # own component configuration
        connector_scheme = connector_prefix if has_component_options else prefix

        if self.generator_context.generator_properties.secret_masking_enabled:
            properties = mask_secrets(properties, connector_prefix, connector, action)

        if prefix == LEGACY_TIMER_PREFIX:
            properties = _apply_legacy_timer_name(properties)

        return Endpoint(build_endpoint_uri(action, prefix, connector_scheme, properties))


def aggregate(*maps) -> dict:
    """Merge property maps into a new dict; later maps win on equal keys."""
    merged = {}
    for properties in maps:
        merged.update(properties)
    return merged


def has_component_properties(properties, *configurables) -> bool:
    return any(
        configurable.is_component_property(key)
        for configurable in configurables
        for key in properties
    )


def mask_secrets(properties, connector_prefix, *configurables) -> dict:
    """Replace secret values with a {{<connector_prefix>.<key>}} placeholder."""
    masked = {}
    for key, value in properties.items():
        if any(configurable.is_secret(key) for configurable in configurables):
            value = f"{{{{{connector_prefix}.{key}}}}}"
        masked[key] = value
    return masked


def _apply_legacy_timer_name(properties) -> dict:
    # TODO: drop once connector definitions can declare initial endpoint values
    if LEGACY_TIMER_PROPERTY in properties:
        return properties
    return aggregate(properties, {LEGACY_TIMER_PROPERTY: LEGACY_TIMER_NAME})


def build_endpoint_uri(action, prefix: str, scheme: str, endpoint_options) -> str:
    """
    Build the endpoint URI for `action`.

    Positional ("path") properties become ':'-separated segments in
    definition order; required positional properties that were not configured
    fall back to their default value. Everything else is appended as query
    parameters.
    Finally the prefix is swapped for `scheme` when they differ.
    """
    parameters = dict(endpoint_options)
    uri = prefix

    for name, definition in action.properties.items():
        if not definition.is_positional:
            continue
        if name in parameters:
            uri += ":" + parameters.pop(name)
        elif definition.required:
            uri += ":" + (definition.default_value or "")

    if parameters:
        uri += "?" + "&".join(f"{key}={value}" for key, value in parameters.items())

    if scheme != prefix and uri.startswith(prefix):
        uri = scheme + uri[len(prefix):]

    return uri
