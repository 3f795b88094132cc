from __future__ import annotations

from cyclomatic.parsing.syntax import if_branches, expression_children


def count_decision_points(body) -> int:
    """
    Count the branch points of a function or method body.

    Every `if` adds one and is followed into its `then` block and its `else`
    target, so an `else if` chain of N clauses adds N. Blocks, arrays,
    assignments and `break` values are walked through without adding
    anything; any other expression ends the walk. Conditions are not
    inspected. The implicit `+1` of McCabe's formula is not included.
    """
    if body is None:
        return 0
    count = 0
    stack = [body]
    while stack:
        node = stack.pop()
        if node.type == "if_expression":
            count += 1
            stack.extend(if_branches(node))
        else:
            stack.extend(expression_children(node))
    return count
