"""
Typed query exception definitions
"""


class TypedQueryError(Exception):
    """Base class for errors raised by the query layer itself"""


class DefaultParameterError(TypedQueryError):
    """A "use column default" parameter was asked for its bound value"""

    def __init__(self, message: str = "A default parameter cannot be bound as a SQL value"):
        super().__init__(message)


class UnsupportedOperandError(TypedQueryError, TypeError):
    """An operand that is neither a Field nor a Constant was used in an expression"""

    def __init__(self, operand: object):
        self.operand = operand
        super().__init__(
            f"Expected a Field or Constant operand, got {type(operand).__name__}"
        )
