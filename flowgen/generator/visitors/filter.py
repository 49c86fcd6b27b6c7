"""
Filter step visitors.

`filter` steps carry a ready-made simple-language expression. `rule-filter`
steps carry a list of rules that are compiled into one expression, e.g.

    predicate: AND
    rules: [{"path": "text", "op": "contains", "value": "flowgen"},
            {"path": "user.followers", "op": ">", "value": "10"}]

    -> ${body.text} contains 'flowgen' && ${body.user.followers} > '10'
"""

import json

from flowgen.errors import FlowDefinitionError
from flowgen.gen_logging import get_logger
from flowgen.generator.registry import register_visitor
from flowgen.generator.route import Filter
from flowgen.generator.visitors.base import StepVisitor

logger = get_logger(__name__)

PREDICATE_OPERATORS = {
    "AND": " && ",
    "OR": " || ",
}


@register_visitor("filter")
class ExpressionFilterStepVisitor(StepVisitor):

    def visit(self, visitor_context):
        expression = visitor_context.step.configured_properties.get("filter", "").strip()
        if not expression:
            logger.debug(f"  [SKIP] Filter step #{visitor_context.index} has no expression")
            return None
        return Filter(expression)


@register_visitor("rule-filter")
class RuleFilterStepVisitor(StepVisitor):

    def visit(self, visitor_context):
        properties = visitor_context.step.configured_properties
        rules = parse_rules(properties.get("rules"), visitor_context.index)
        if not rules:
            logger.debug(f"  [SKIP] Rule filter step #{visitor_context.index} has no rules")
            return None

        predicate = properties.get("predicate", "AND").upper()
        if predicate not in PREDICATE_OPERATORS:
            raise FlowDefinitionError(
                f"Rule filter step #{visitor_context.index}: unknown predicate '{predicate}' "
                f"(expected one of {', '.join(PREDICATE_OPERATORS)})"
            )
        return Filter(PREDICATE_OPERATORS[predicate].join(rule_expression(rule) for rule in rules))


def parse_rules(raw, index: int) -> list:
    if not raw:
        return []
    try:
        rules = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FlowDefinitionError(f"Rule filter step #{index}: rules are not valid JSON: {e}") from e

    if not isinstance(rules, list):
        raise FlowDefinitionError(f"Rule filter step #{index}: rules must be a JSON list")
    for rule in rules:
        if not isinstance(rule, dict) or not rule.get("path") or not rule.get("op"):
            raise FlowDefinitionError(
                f"Rule filter step #{index}: every rule needs a 'path' and an 'op', got {rule!r}"
            )
    return rules


def rule_expression(rule: dict) -> str:
    value = str(rule.get("value", "")).replace("'", "\\'")
    return f"${{body.{rule['path']}}} {rule['op']} '{value}'"
