"""
Step visitor registry.

Maps a step kind to the factory that builds its visitor. A factory is any
callable taking the GeneratorContext and returning an object with a
`visit(step_visitor_context)` method; visitor classes are their own factories.

Built-in visitors register themselves on DEFAULT_REGISTRY with the
@register_visitor decorator when flowgen.generator.visitors is imported.
"""

from flowgen.errors import UnknownStepKind
from flowgen.gen_logging import get_logger

logger = get_logger(__name__)


class StepVisitorFactoryRegistry:
    def __init__(self, factories=None):
        self._factories = {}
        for kind, factory in (factories or {}).items():
            self.register(kind, factory)

    def register(self, kind: str, factory) -> None:
        if kind in self._factories:
            logger.warning(f"[REGISTRY] Replacing visitor factory for step kind '{kind}'")
        self._factories[kind] = factory

    def lookup(self, kind: str):
        """Return the factory for `kind`, or None when no visitor is registered."""
        return self._factories.get(kind)

    def get(self, kind: str):
        """Return the factory for `kind`; unknown kinds are never skipped silently."""
        factory = self._factories.get(kind)
        if factory is None:
            raise UnknownStepKind(kind)
        return factory

    def kinds(self) -> list:
        return sorted(self._factories)

    def copy(self) -> "StepVisitorFactoryRegistry":
        return StepVisitorFactoryRegistry(self._factories)

    def __contains__(self, kind) -> bool:
        return kind in self._factories

    def __len__(self) -> int:
        return len(self._factories)


DEFAULT_REGISTRY = StepVisitorFactoryRegistry()


def register_visitor(kind: str, registry: StepVisitorFactoryRegistry = None):
    """
    Class decorator registering a visitor under a step kind.

    Usage:
        @register_visitor("log")
        class LogStepVisitor(StepVisitor): ...
    """
    target = registry if registry is not None else DEFAULT_REGISTRY

    def decorator(cls):
        cls.STEP_KIND = kind
        target.register(kind, cls)
        return cls

    return decorator
