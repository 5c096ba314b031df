# Core type aliases for Monkey's data model.
# Syntax is represented by the Node classes in monkey.ast.nodes and runtime
# values by the Object classes in monkey.types.objects.
#
# Naming guidance:
# - MonkeyNode:  use in parser/macro code to denote syntax (code-as-data).
# - MonkeyValue: use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

__version__ = "0.1.0"

MonkeyNode = Any
MonkeyValue = Any

# Node -> Node rewrite callback used by monkey.ast.modify
ModifierFn = Callable[[MonkeyNode], MonkeyNode]

# Evaluator function type, passed into quote/macro helpers
EvaluatorFn = Callable[..., MonkeyValue]
