
class FormulaError(Exception):
    """ Base class for all formula errors"""
    pass

class FormulaSyntaxError(FormulaError):
    """ Raised when source text cannot be read"""

class FormulaArityError(FormulaError):
    """ Raised when a builtin macro receives the wrong number of arguments"""

class FormulaTypeError(FormulaError):
    """ Raised when a builtin macro receives a malformed argument"""

class UnsupportedFormError(FormulaError):
    """ Raised when a definitional form appears inside a formula expression"""

    def __init__(self, op):
        super().__init__(f"formula expansion contains unsupported {op} form")
        self.op = op
