"""
Unit tests for the endpoint step visitor.

Covers property precedence, positional segments, secret masking, scheme
disambiguation and the periodic timer shim.
"""

import pytest

from flowgen.errors import ConnectorNotFound
from flowgen.generator.visitors.endpoint import aggregate, build_endpoint_uri
from flowgen.model import Action, ConfigurationProperty, PropertyDefinitionGroup


class TestPropertyPrecedence:
    """Step-level properties override connection-level ones."""

    def test_step_value_wins_over_connection_value(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        """The same key on connection and step ends up with the step value."""
        request = build_request("""
integration:
  name: Precedence
  steps:
    - stepKind: endpoint
      configuredProperties:
        timeout: "5000"
      connection:
        connectorId: http
        configuredProperties:
          httpUri: example.com
          timeout: "1000"
""" + http_get_action + connectors_yaml)

        uris = endpoint_uris(request)

        assert uris == ["http-get:example.com?timeout=5000"]

    def test_aggregate_returns_new_mapping(self):
        """Merging never mutates its inputs."""
        connection = {"a": "1", "b": "2"}
        step = {"b": "3"}

        merged = aggregate(connection, step)

        assert merged == {"a": "1", "b": "3"}
        assert connection == {"a": "1", "b": "2"}
        assert step == {"b": "3"}

    def test_undefined_properties_are_not_endpoint_options(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        """Keys unknown to both connector and action never reach the URI."""
        request = build_request("""
integration:
  name: Unknown keys
  steps:
    - stepKind: endpoint
      configuredProperties:
        notAnOption: value
      connection:
        connectorId: http
        configuredProperties:
          httpUri: example.com
""" + http_get_action + connectors_yaml)

        assert endpoint_uris(request) == ["http-get:example.com"]


class TestPositionalProperties:
    """Path-kind properties become ':'-prefixed segments."""

    def test_positional_property_is_not_a_query_parameter(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        request = build_request("""
integration:
  name: Positional
  steps:
    - stepKind: endpoint
      connection:
        connectorId: http
        configuredProperties:
          httpUri: example.com/api
          username: admin
""" + http_get_action + connectors_yaml)

        uri = endpoint_uris(request)[0]

        assert uri == "http-get:example.com/api?username=admin"
        assert "httpUri" not in uri

    def test_segments_follow_definition_order_with_defaults(self):
        """Required positional properties fall back to their default value."""
        action = Action(
            connector_prefix="net",
            property_definition_groups=[
                PropertyDefinitionGroup(properties={
                    "host": ConfigurationProperty(kind="path", required=True),
                }),
                PropertyDefinitionGroup(properties={
                    "port": ConfigurationProperty(kind="path", required=True, default_value="80"),
                    "resource": ConfigurationProperty(kind="path"),
                    "verbose": ConfigurationProperty(),
                }),
            ],
        )

        uri = build_endpoint_uri(action, "net", "net", {"verbose": "true", "host": "localhost"})

        assert uri == "net:localhost:80?verbose=true"

    def test_required_positional_without_default_is_empty(self):
        action = Action(
            connector_prefix="queue",
            property_definition_groups=[
                PropertyDefinitionGroup(properties={
                    "name": ConfigurationProperty(kind="path", required=True),
                }),
            ],
        )

        assert build_endpoint_uri(action, "queue", "queue", {}) == "queue:"

    def test_duplicate_definition_last_one_wins(self):
        """A name redefined as a query parameter in a later group is no longer positional."""
        action = Action(
            connector_prefix="dup",
            property_definition_groups=[
                PropertyDefinitionGroup(properties={"name": ConfigurationProperty(kind="path")}),
                PropertyDefinitionGroup(properties={"name": ConfigurationProperty(kind="parameter")}),
            ],
        )

        assert build_endpoint_uri(action, "dup", "dup", {"name": "x"}) == "dup?name=x"

    def test_scheme_rewrite_keeps_segments_and_query(self):
        action = Action(
            connector_prefix="http-get",
            property_definition_groups=[
                PropertyDefinitionGroup(properties={"httpUri": ConfigurationProperty(kind="path")}),
            ],
        )

        uri = build_endpoint_uri(action, "http-get", "http-get-7", {"httpUri": "host", "a": "b"})

        assert uri == "http-get-7:host?a=b"


class TestSecretMasking:
    """Secret values are replaced by placeholders when masking is enabled."""

    FLOW = """
integration:
  name: Masking
  steps:
    - stepKind: endpoint
      connection:
        id: "7"
        connectorId: http
        configuredProperties:
          httpUri: example.com
          username: admin
          password: s3cret
"""

    def test_secret_value_is_masked(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        request = build_request(self.FLOW + http_get_action + connectors_yaml)

        uri = endpoint_uris(request, secret_masking_enabled=True)[0]

        assert "s3cret" not in uri
        assert "password={{http-get-7.password}}" in uri
        assert "username=admin" in uri

    def test_secret_value_kept_when_masking_disabled(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        request = build_request(self.FLOW + http_get_action + connectors_yaml)

        uri = endpoint_uris(request, secret_masking_enabled=False)[0]

        assert "password=s3cret" in uri

    def test_placeholder_uses_plain_prefix_without_connection_id(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        request = build_request("""
integration:
  name: Masking without id
  steps:
    - stepKind: endpoint
      connection:
        connectorId: http
        configuredProperties:
          password: s3cret
""" + http_get_action + connectors_yaml)

        uri = endpoint_uris(request, secret_masking_enabled=True)[0]

        assert uri == "http-get:?password={{http-get.password}}"

    def test_secret_declared_only_by_action(self, build_request, endpoint_uris):
        request = build_request("""
integration:
  name: Action secret
  steps:
    - stepKind: endpoint
      connection:
        id: "9"
        connectorId: vault
        configuredProperties:
          token: abc
      action:
        connectorId: vault
        camelConnectorPrefix: vault-read
        propertyDefinitionSteps:
          - properties:
              token:
                secret: true
connectors:
  vault:
    id: vault
""")

        uri = endpoint_uris(request, secret_masking_enabled=True)[0]

        assert uri == "vault-read?token={{vault-read-9.token}}"


class TestSchemeDisambiguation:
    """Connections of the same connector get distinct schemes only with component options."""

    @staticmethod
    def _two_connections(properties: str) -> str:
        steps = ""
        for connection_id in ("1", "2"):
            steps += f"""
    - stepKind: endpoint
      connection:
        id: "{connection_id}"
        connectorId: twitter
        configuredProperties:
{properties}
""" + TestSchemeDisambiguation.ACTION
        return "integration:\n  name: Two searches\n  steps:" + steps

    ACTION = """      action:
        id: twitter-search
        connectorId: twitter
        camelConnectorPrefix: twitter-search
        propertyDefinitionSteps:
          - properties:
              keywords: {}
"""

    def test_component_property_suffixes_scheme(self, build_request, endpoint_uris, connectors_yaml):
        content = self._two_connections("          accessToken: tok\n          keywords: flowgen")
        request = build_request(content + connectors_yaml)

        uris = endpoint_uris(request)

        assert uris == ["twitter-search-1?keywords=flowgen", "twitter-search-2?keywords=flowgen"]
        assert all("accessToken" not in uri for uri in uris)

    def test_without_component_property_schemes_are_shared(self, build_request, endpoint_uris, connectors_yaml):
        content = self._two_connections("          keywords: flowgen")
        request = build_request(content + connectors_yaml)

        uris = endpoint_uris(request)

        assert uris == ["twitter-search?keywords=flowgen", "twitter-search?keywords=flowgen"]

    def test_component_property_declared_only_by_action(self, build_request, endpoint_uris):
        request = build_request("""
integration:
  name: Action component option
  steps:
    - stepKind: endpoint
      connection:
        id: "3"
        connectorId: vault
        configuredProperties:
          apiKey: k
          query: q
      action:
        connectorId: vault
        camelConnectorPrefix: vault-read
        propertyDefinitionSteps:
          - properties:
              apiKey:
                componentProperty: true
              query: {}
connectors:
  vault:
    id: vault
""")

        uris = endpoint_uris(request)

        assert uris == ["vault-read-3?query=q"]


class TestConnectorResolution:
    """Connector lookup and unbound steps."""

    def test_action_connector_used_when_connection_has_none(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        request = build_request("""
integration:
  name: Fallback
  steps:
    - stepKind: endpoint
      connection:
        configuredProperties:
          httpUri: example.com
""" + http_get_action + connectors_yaml)

        assert endpoint_uris(request) == ["http-get:example.com"]

    def test_unknown_connector_raises(self, build_request, generator, http_get_action, connectors_yaml):
        request = build_request("""
integration:
  name: Missing
  steps:
    - stepKind: endpoint
      connection:
        connectorId: ftp
""" + http_get_action + connectors_yaml)

        with pytest.raises(ConnectorNotFound) as exc_info:
            generator().generate_flow(request)

        assert exc_info.value.connector_id == "ftp"

    def test_step_without_connection_emits_nothing(self, build_request, generator, http_get_action, connectors_yaml):
        request = build_request("""
integration:
  name: Unbound
  steps:
    - stepKind: endpoint
""" + http_get_action + connectors_yaml)

        assert len(generator().generate_flow(request)) == 0

    def test_step_without_action_emits_nothing(self, build_request, generator, connectors_yaml):
        request = build_request("""
integration:
  name: No action
  steps:
    - stepKind: endpoint
      connection:
        connectorId: http
""" + connectors_yaml)

        assert len(generator().generate_flow(request)) == 0


class TestLegacyTimer:
    """The periodic timer always gets a timer name."""

    def test_timer_name_added(self, build_request, endpoint_uris, timer_to_log_flow):
        uris = endpoint_uris(build_request(timer_to_log_flow))

        assert uris == ["periodic-timer?timerName=every"]

    def test_explicit_timer_name_kept(self, build_request, endpoint_uris, connectors_yaml):
        request = build_request("""
integration:
  name: Named timer
  steps:
    - stepKind: endpoint
      configuredProperties:
        timerName: mine
      connection:
        connectorId: timer-connector
      action:
        connectorId: timer-connector
        camelConnectorPrefix: periodic-timer
        propertyDefinitionSteps:
          - properties:
              timerName: {}
              period: {}
""" + connectors_yaml)

        uri = endpoint_uris(request)[0]

        assert "timerName=mine" in uri
        assert "timerName=every" not in uri

    def test_other_prefixes_untouched(self, build_request, endpoint_uris, http_get_action, connectors_yaml):
        request = build_request("""
integration:
  name: Not a timer
  steps:
    - stepKind: endpoint
      connection:
        connectorId: http
        configuredProperties:
          httpUri: example.com
""" + http_get_action + connectors_yaml)

        assert "timerName" not in endpoint_uris(request)[0]
