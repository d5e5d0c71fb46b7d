"""Registry of per-node-kind evaluation rules.

Maps NodeKind tags to handler functions implementing the evaluation rule for
that kind of node. The Evaluator consults this table after the baseline has
declined; kinds without an entry evaluate to UNKNOWN.
"""

from macroeval.reader.parser import NodeKind
from macroeval.evaluation.rules.member_rules import member_rule, optional_member_rule
from macroeval.evaluation.rules.literal_rules import (
    array_rule,
    boolean_rule,
    null_rule,
    number_rule,
    object_rule,
    string_rule,
)
from macroeval.evaluation.rules.assignment_rule import assignment_rule
from macroeval.evaluation.rules.call_rule import call_rule
from macroeval.evaluation.rules.operator_rules import binary_rule, conditional_rule, unary_rule
from macroeval.evaluation.rules.identifier_rules import identifier_rule, parenthesized_rule

NODE_RULES = {
    NodeKind.MEMBER: member_rule,
    NodeKind.OPTIONAL_MEMBER: optional_member_rule,
    NodeKind.STRING: string_rule,
    NodeKind.NUMBER: number_rule,
    NodeKind.BOOLEAN: boolean_rule,
    NodeKind.NULL: null_rule,
    NodeKind.OBJECT: object_rule,
    NodeKind.ARRAY: array_rule,
    NodeKind.ASSIGNMENT: assignment_rule,
    NodeKind.CALL: call_rule,
    NodeKind.BINARY: binary_rule,
    NodeKind.CONDITIONAL: conditional_rule,
    NodeKind.UNARY: unary_rule,
    NodeKind.IDENTIFIER: identifier_rule,
    NodeKind.PARENTHESIZED: parenthesized_rule,
}
