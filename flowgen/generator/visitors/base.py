"""Base class for step visitors."""


class StepVisitor:
    """
    Turns one step into at most one route element.

    A new visitor is built for every visited step; it may read the generator
    context and add artifacts to `generator_context.contents`. Subclasses
    implement `visit`, which builds the element, and may override
    `should_continue` to end the traversal after their step.
    """

    STEP_KIND = None

    def __init__(self, generator_context):
        self.generator_context = generator_context

    def visit_step(self, visitor_context) -> bool:
        """
        Emit the element for the current step into the route document.

        Returns:
            True if the traversal should go on with the next step
        """
        element = self.visit(visitor_context)
        if element is not None:
            self.generator_context.flow.add_step(element)
        return self.should_continue(visitor_context)

    def visit(self, visitor_context):
        """Return the route element for `visitor_context.step`, or None."""
        raise NotImplementedError

    def should_continue(self, visitor_context) -> bool:
        return visitor_context.has_next()
