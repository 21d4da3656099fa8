# src/encoded_query/base/query.py
import logging
from enum import Enum
from typing import Any, Dict, List, NoReturn, Optional, Sequence, Tuple, Union

from .exceptions import (
    QueryEmptyException,
    QueryMissingFieldException,
    QueryTypeException,
)
from .params import QueryParams
from .utils import (
    DATE,
    LIST,
    NUMBER,
    STRING,
    describe_types,
    format_datetime_utc,
    join_values,
    type_name,
    type_tag,
)

# --- Setup Logging ---
log = logging.getLogger(__name__)


# --- Encoded Query Vocabulary ---
class QueryOperator(Enum):
    """Condition operators of the encoded query grammar."""

    # Comparison
    EQ = "="
    NE = "!="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    BETWEEN = "BETWEEN"
    # Membership
    IN = "IN"
    NOT_IN = "NOT IN"
    # String
    STARTSWITH = "STARTSWITH"
    ENDSWITH = "ENDSWITH"
    LIKE = "LIKE"
    NOT_LIKE = "NOTLIKE"
    # Emptiness
    IS_EMPTY = "ISEMPTY"
    IS_NOT_EMPTY = "ISNOTEMPTY"
    EMPTY_STRING = "EMPTYSTRING"
    ANYTHING = "ANYTHING"


class LogicalOperator(Enum):
    """Separators combining conditions. Each carries its own ``^`` marker."""

    AND = "^"
    OR = "^OR"
    NQ = "^NQ"


class OrderDirection(Enum):
    """Ordering markers, prefixed to the field name."""

    ASC = "ORDERBY"
    DESC = "ORDERBYDESC"


Scalar = Union[str, int, float]
ListOperand = Union[List[Any], Tuple[Any, ...]]


# --- Query Builder ---
class QueryBuilder:
    """
    Builds ServiceNow encoded query strings using a fluent API.

    The builder keeps an ordered list of tokens (conditions, logical
    separators and ordering markers) plus the field that subsequent
    conditions apply to. ``build()`` concatenates the tokens in the order
    they were added.

    Example:
        ```python
        query = (QueryBuilder()
            .field("priority").equals(1)
            .and_()
            .field("state").not_equals(6)
            .build())
        # "priority=1^state!=6"
        ```
    """

    _query: List[str]
    _current_field: str
    _logger: logging.Logger

    def __init__(self):
        self._logger = log
        self._query = []
        self._current_field = ""
        self._logger.debug("Initialized empty QueryBuilder.")

    # --- Introspection ---

    @property
    def tokens(self) -> Tuple[str, ...]:
        """Snapshot of the tokens appended so far."""
        return tuple(self._query)

    @property
    def current_field(self) -> str:
        return self._current_field

    def __len__(self) -> int:
        return len(self._query)

    def __repr__(self) -> str:
        return f"QueryBuilder(field={self._current_field!r}, tokens={self._query!r})"

    # --- Field selection and ordering ---

    def field(self, field_name: str) -> "QueryBuilder":
        """Sets the field that following conditions operate on."""
        self._current_field = field_name
        self._logger.debug(f"Current field set to '{field_name}'")
        return self

    def order_ascending(self) -> "QueryBuilder":
        """Orders results by the current field, ascending."""
        return self._add_token(OrderDirection.ASC.value + self._current_field)

    def order_descending(self) -> "QueryBuilder":
        """Orders results by the current field, descending."""
        return self._add_token(OrderDirection.DESC.value + self._current_field)

    # --- String conditions ---

    def starts_with(self, value: str) -> "QueryBuilder":
        """Adds a STARTSWITH condition."""
        return self._add_condition(QueryOperator.STARTSWITH, value, (STRING,))

    def ends_with(self, value: str) -> "QueryBuilder":
        """Adds an ENDSWITH condition."""
        return self._add_condition(QueryOperator.ENDSWITH, value, (STRING,))

    def contains(self, value: str) -> "QueryBuilder":
        """Adds a LIKE condition."""
        return self._add_condition(QueryOperator.LIKE, value, (STRING,))

    def does_not_contain(self, value: str) -> "QueryBuilder":
        """Adds a NOTLIKE condition."""
        return self._add_condition(QueryOperator.NOT_LIKE, value, (STRING,))

    # --- Emptiness conditions (no operand) ---

    def is_empty(self) -> "QueryBuilder":
        return self._add_condition(QueryOperator.IS_EMPTY, "", (STRING, NUMBER))

    def is_not_empty(self) -> "QueryBuilder":
        return self._add_condition(QueryOperator.IS_NOT_EMPTY, "", (STRING, NUMBER))

    def is_anything(self) -> "QueryBuilder":
        return self._add_condition(QueryOperator.ANYTHING, "", (STRING, NUMBER))

    def is_empty_string(self) -> "QueryBuilder":
        return self._add_condition(QueryOperator.EMPTY_STRING, "", (STRING,))

    # --- Equality and membership ---

    def equals(self, data: Union[Scalar, ListOperand]) -> "QueryBuilder":
        """
        Adds an equality condition.

        A string or number produces ``field=value``; a list or tuple produces
        ``fieldINa,b,c``. List items must be strings, numbers or booleans.

        The current field is checked before the operand, so calling this
        without a field raises QueryMissingFieldException even for an
        unsupported operand.
        """
        return self._add_equality(data, QueryOperator.EQ, QueryOperator.IN)

    def not_equals(self, data: Union[Scalar, ListOperand]) -> "QueryBuilder":
        """
        Adds a non-equality condition.

        A string or number produces ``field!=value``; a list or tuple produces
        ``fieldNOT INa,b,c``.
        """
        return self._add_equality(data, QueryOperator.NE, QueryOperator.NOT_IN)

    def is_one_of(self, data: ListOperand) -> "QueryBuilder":
        """
        Adds an IN condition. Only lists and tuples of strings, numbers or
        booleans are accepted.

        A missing field is reported before an unsupported operand.
        """
        self._require_field(QueryOperator.IN)
        if type_tag(data) != LIST:
            self._raise_type_error(f"Expected list type, found: {type_name(data)}")
        return self._add_condition(QueryOperator.IN, self._join_list(data), (STRING,))

    # --- Comparison ---

    def greater_than(self, value: Any) -> "QueryBuilder":
        return self._add_comparison(QueryOperator.GT, value)

    def greater_than_or_is(self, value: Any) -> "QueryBuilder":
        return self._add_comparison(QueryOperator.GTE, value)

    def less_than(self, value: Any) -> "QueryBuilder":
        return self._add_comparison(QueryOperator.LT, value)

    def less_than_or_is(self, value: Any) -> "QueryBuilder":
        return self._add_comparison(QueryOperator.LTE, value)

    def between(self, start: Any, end: Any) -> "QueryBuilder":
        """
        Adds a BETWEEN condition rendered as ``start@end``.

        Both bounds must share a type: two numbers, two strings, or two
        dates/datetimes. Dates are converted to UTC literals.
        """
        self._require_field(QueryOperator.BETWEEN)
        start_tag, end_tag = type_tag(start), type_tag(end)
        if start_tag == end_tag and start_tag in (NUMBER, STRING):
            operand = f"{start}@{end}"
        elif start_tag == end_tag == DATE:
            operand = f"{format_datetime_utc(start)}@{format_datetime_utc(end)}"
        else:
            self._raise_type_error(
                "Expected matching string/date/number types, found: "
                f"{type_name(start)} and {type_name(end)}"
            )
        return self._add_condition(QueryOperator.BETWEEN, operand, (STRING,))

    # --- Logical operators ---

    def and_(self) -> "QueryBuilder":
        """Adds the AND separator."""
        return self._add_token(LogicalOperator.AND.value)

    def or_(self) -> "QueryBuilder":
        """Adds the OR separator."""
        return self._add_token(LogicalOperator.OR.value)

    def nq(self) -> "QueryBuilder":
        """Adds the NQ separator, starting an independent OR'd query."""
        return self._add_token(LogicalOperator.NQ.value)

    # --- Build ---

    def build(self) -> str:
        """
        Builds the encoded query string.

        Raises:
            QueryEmptyException: if nothing was added to the query.
        """
        if not self._query:
            raise QueryEmptyException()
        encoded = "".join(self._query)
        self._logger.info(f"Built encoded query: '{encoded}'")
        return encoded

    def build_params(
        self,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        fields: Optional[Sequence[str]] = None,
        display_value: Union[bool, str] = True,
        exclude_reference_link: bool = True,
    ) -> Dict[str, str]:
        """
        Builds the query and wraps it in Table API ``sysparm_*`` parameters.

        ``fields`` may be a single field name or a sequence of names.
        """
        if isinstance(fields, str):
            fields = [fields]
        params = QueryParams(
            query=self.build(),
            display_value=display_value,
            exclude_reference_link=exclude_reference_link,
            limit=limit,
            offset=offset,
            fields=list(fields) if fields is not None else None,
        )
        return params.to_request_params()

    # --- Internals ---

    def _add_token(self, token: str) -> "QueryBuilder":
        self._query.append(token)
        self._logger.debug(f"Appended token '{token}' ({len(self._query)} total)")
        return self

    def _add_equality(
        self, data: Any, scalar_op: QueryOperator, list_op: QueryOperator
    ) -> "QueryBuilder":
        self._require_field(scalar_op)
        tag = type_tag(data)
        if tag in (STRING, NUMBER):
            return self._add_condition(scalar_op, data, (STRING, NUMBER))
        if tag == LIST:
            return self._add_condition(list_op, self._join_list(data), (STRING,))
        self._raise_type_error(
            f"Expected string, number or list type, found: {type_name(data)}"
        )

    def _join_list(self, data: ListOperand) -> str:
        """Comma-joins list items, which must be strings, numbers or booleans."""
        for item in data:
            if type_tag(item) not in (STRING, NUMBER) and not isinstance(item, bool):
                self._raise_type_error(
                    f"Expected string or number list items, found: {type_name(item)}"
                )
        return join_values(data)

    def _add_comparison(self, operator: QueryOperator, value: Any) -> "QueryBuilder":
        self._require_field(operator)
        tag = type_tag(value)
        if tag == DATE:
            value = format_datetime_utc(value)
        elif tag not in (NUMBER, STRING):
            self._raise_type_error(
                f"Expected string/date/number type, found: {type_name(value)}"
            )
        return self._add_condition(operator, value, (NUMBER, STRING))

    def _require_field(self, operator: QueryOperator) -> None:
        if not self._current_field:
            self._logger.debug(
                f"Rejected {operator.name} condition: no field selected."
            )
            raise QueryMissingFieldException()

    def _add_condition(
        self, operator: QueryOperator, operand: Any, types: Sequence[str]
    ) -> "QueryBuilder":
        """Validates field and operand type, then appends ``field + op + operand``."""
        self._require_field(operator)

        if type_tag(operand) not in types:
            self._raise_type_error(
                f"Invalid type passed. {describe_types(types)}. "
                f"Found: {type_name(operand)}"
            )

        return self._add_token(f"{self._current_field}{operator.value}{operand}")

    def _raise_type_error(self, message: str) -> NoReturn:
        self._logger.debug(f"Type validation failed: {message}")
        raise QueryTypeException(message)
