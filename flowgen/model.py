"""
Flow request data model.

A FlowRequest bundles the integration being compiled (its ordered steps) with
the connector definitions the steps refer to. All models are frozen: the
generator only ever reads them, and every property merge builds a new dict.

Keys are accepted in snake_case or in the camelCase used by connector
catalogs exported as JSON (stepKind, configuredProperties, camelConnectorPrefix...).
"""

from typing import Annotated, Callable, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel

PATH_PROPERTY_KIND = "path"


def _scalar_text(value):
    # YAML booleans are written the way endpoint options spell them
    if isinstance(value, bool):
        return "true" if value else "false"
    return value


# Configured values and defaults are text; unquoted YAML numbers and booleans are accepted
PropertyValue = Annotated[str, BeforeValidator(_scalar_text)]


class _Model(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
        extra="ignore",
    )


class ConfigurationProperty(_Model):
    """Definition of one configurable property of a connector or action."""

    kind: str = "parameter"
    required: bool = False
    default_value: Optional[PropertyValue] = None
    secret: bool = False
    component_property: bool = False
    display_name: Optional[str] = None
    description: Optional[str] = None

    @property
    def is_positional(self) -> bool:
        return self.kind == PATH_PROPERTY_KIND


class WithConfigurationProperties:
    """
    Property classification shared by connectors and actions.

    Subclasses expose `properties`, a mapping of property name to
    ConfigurationProperty. Keys that are not defined there are neither
    endpoint, component nor secret properties.
    """

    def is_endpoint_property(self, key: str) -> bool:
        definition = self.properties.get(key)
        return definition is not None and not definition.component_property

    def is_component_property(self, key: str) -> bool:
        definition = self.properties.get(key)
        return definition is not None and definition.component_property

    def is_secret(self, key: str) -> bool:
        definition = self.properties.get(key)
        return definition is not None and definition.secret

    def filter_properties(self, properties: Dict[str, str], predicate: Callable[[str], bool]) -> Dict[str, str]:
        return {key: value for key, value in properties.items() if predicate(key)}


class Connector(WithConfigurationProperties, _Model):
    id: str
    name: Optional[str] = None
    description: Optional[str] = None
    properties: Dict[str, ConfigurationProperty] = {}


class PropertyDefinitionGroup(_Model):
    name: Optional[str] = None
    description: Optional[str] = None
    properties: Dict[str, ConfigurationProperty] = {}


class Action(WithConfigurationProperties, _Model):
    id: Optional[str] = None
    name: Optional[str] = None
    connector_id: Optional[str] = None
    connector_prefix: str = Field(alias="camelConnectorPrefix")
    dependency: Optional[str] = Field(default=None, alias="camelConnectorGAV")
    property_definition_groups: List[PropertyDefinitionGroup] = Field(
        default=[], alias="propertyDefinitionSteps"
    )

    @property
    def properties(self) -> Dict[str, ConfigurationProperty]:
        """
        All property definitions across groups, in definition order.

        A name defined by several groups keeps the position of its first
        definition and the content of its last one.
        """
        merged = {}
        for group in self.property_definition_groups:
            merged.update(group.properties)
        return merged


class Connection(_Model):
    # Instance id, used to disambiguate connections sharing a connector
    id: Optional[str] = None
    name: Optional[str] = None
    connector_id: Optional[str] = None
    configured_properties: Dict[str, PropertyValue] = {}


class Step(_Model):
    id: Optional[str] = None
    name: Optional[str] = None
    kind: str = Field(alias="stepKind")
    connection: Optional[Connection] = None
    action: Optional[Action] = None
    configured_properties: Dict[str, PropertyValue] = {}


class Integration(_Model):
    id: Optional[str] = None
    name: str
    description: Optional[str] = None
    steps: List[Step] = []


class FlowRequest(_Model):
    integration: Integration
    connectors: Dict[str, Connector] = {}

    def connector(self, connector_id: str) -> Optional[Connector]:
        return self.connectors.get(connector_id)
