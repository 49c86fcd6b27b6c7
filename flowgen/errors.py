"""
Exception taxonomy for flowgen.

Every error raised by the generator derives from GeneratorError so callers
(the CLI in particular) can treat "any GeneratorError" as "no output".
"""


class GeneratorError(Exception):
    """Base class for all project generation failures."""


class FlowDefinitionError(GeneratorError):
    """The flow request (or one of its step configurations) is invalid."""


class UnknownStepKind(GeneratorError):
    """No visitor factory is registered for a step kind."""

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"No step visitor registered for step kind '{kind}'.")


class ConnectorNotFound(GeneratorError):
    """An endpoint step references a connector missing from the request."""

    def __init__(self, connector_id: str):
        self.connector_id = connector_id
        super().__init__(f"Connector:[{connector_id}] not found.")


class MissingTemplateResource(GeneratorError):
    """A template or additional resource is absent from both template roots."""

    def __init__(self, name: str, override_path: str = None):
        self.name = name
        self.override_path = override_path
        super().__init__(
            f"Unable to find the required resource (override_path={override_path}, name={name})"
        )


class MalformedDependencyCoordinate(GeneratorError):
    """A dependency coordinate is not of the form group:artifact:version."""

    def __init__(self, text: str):
        self.text = text
        super().__init__(f"Malformed dependency coordinate '{text}' (expected group:artifact:version)")
