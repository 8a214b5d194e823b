"""Hoisting: decomposing an expression into a closure and its dependencies."""

from formula.hoisting.hoist import cell_form, hoist, macroexpand_all

__all__ = ["hoist", "cell_form", "macroexpand_all"]
