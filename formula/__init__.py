# Core type aliases for formula's data model.
# Forms are plain Python values: lists are call forms, Vector/SetLiteral are
# list subclasses, dicts are map literals and Symbol stands for names.
#
# Naming guidance:
# - SExpression: a form (code-as-data) anywhere in the reader, expander or walker.
# - TransformerFunction: a Python macro transformer, called as fn(args, env).
# - WalkFn: the hoisting walker, which form handlers recurse through as
#   walk_fn(form, scope, ctx).

from typing import Any, Callable

SExpression = Any

TransformerFunction = Callable[[list, Any], SExpression]

WalkFn = Callable[..., SExpression]
