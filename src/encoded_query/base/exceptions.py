class QueryBuilderException(Exception):
    """Base class for errors raised while assembling an encoded query."""

    def __init__(self, message: str = "Invalid encoded query operation."):
        super().__init__(message)


class QueryMissingFieldException(QueryBuilderException):
    """Exception raised when a condition is added before any field was selected."""

    def __init__(self, message: str = "Conditions require a field."):
        super().__init__(message)


class QueryTypeException(QueryBuilderException, TypeError):
    """Exception raised when an operand's type is not accepted by a condition."""

    def __init__(self, message: str = "Invalid type passed."):
        super().__init__(message)


class QueryEmptyException(QueryBuilderException):
    """Exception raised when building a query that holds no tokens."""

    def __init__(self, message: str = "At least one condition is required in query."):
        super().__init__(message)
