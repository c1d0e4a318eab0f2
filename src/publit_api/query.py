"""Query string helpers for the general Publit API interface.

Each ``query_*`` function returns a query modifier: a callable that appends
``(key, value)`` pairs to the query of a GET request. Pass them to
:meth:`publit_api.apiclient.APIClient.get`.
"""

import enum
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import TypeAlias

Query: TypeAlias = list[tuple[str, str]]
QueryModifier: TypeAlias = Callable[[Query], None]

# Reserved query string keys of the general API interface.
QUERY_KEY_LIMIT = "limit"
QUERY_KEY_WITH = "with"
QUERY_KEY_SCOPE = "scope"
QUERY_KEY_AUX = "auxiliary"
QUERY_KEY_ORDER = "order_by"
QUERY_KEY_ORDER_DIR = "order_dir"
QUERY_KEY_GROUP_BY = "group_by"
QUERY_ARGS_SUFFIX = "_args"


class Operator(enum.Enum):
    """Comparison operators for attribute filters."""

    EQUAL = "EQUAL"
    NOT_EQUAL = "NOT_EQUAL"
    GREATER_EQUAL = "GREATER_EQUAL"
    GREATER = "GREATER"
    LESS_EQUAL = "LESS_EQUAL"
    LESS = "LESS"

    def as_string(self) -> str:
        return self.value


class Combinator(enum.Enum):
    """Combinators joining attribute filters."""

    AND = "AND"
    OR = "OR"

    def as_string(self) -> str:
        return self.value


class OrderDir(enum.Enum):
    """Sort directions."""

    ASC = "ASC"
    DESC = "DESC"

    def as_string(self) -> str:
        return self.value


@dataclass(frozen=True)
class Scope:
    """A named scope with an optional filter argument."""

    scope: str
    filter: str = ""

    def as_string(self) -> str:
        if self.filter:
            return f"{self.scope};{self.filter}"
        return self.scope


@dataclass(frozen=True)
class AttrArgs:
    """Operators and combinators applied to an attribute filter.

    Combinators pair with operators by position; an operator without a
    matching combinator is sent alone.
    """

    operators: Sequence[Operator] = ()
    combinators: Sequence[Combinator] = ()

    def is_empty(self) -> bool:
        return not self.operators and not self.combinators

    def as_string(self) -> str:
        parts = []
        for i, op in enumerate(self.operators):
            if i < len(self.combinators):
                parts.append(f"{op.as_string()};{self.combinators[i].as_string()}")
            else:
                parts.append(op.as_string())
        return ",".join(parts)


@dataclass(frozen=True)
class AttrQuery:
    """Filter on one attribute."""

    name: str
    value: str
    args: AttrArgs = field(default_factory=AttrArgs)


def query_limit(limit: int, offset: int = 0) -> QueryModifier:
    """Limit the result set; sent as ``limit=<offset>,<limit>``."""
    value = f"{offset},{limit}"

    def modify(q: Query) -> None:
        q.append((QUERY_KEY_LIMIT, value))

    return modify


def query_with(*relations: str) -> QueryModifier:
    """Include related resources in the response."""
    value = ",".join(relations)

    def modify(q: Query) -> None:
        q.append((QUERY_KEY_WITH, value))

    return modify


def query_scope(scopes: Iterable[Scope]) -> QueryModifier:
    """Restrict the query to the given scopes."""
    value = ",".join(s.as_string() for s in scopes)

    def modify(q: Query) -> None:
        q.append((QUERY_KEY_SCOPE, value))

    return modify


def query_auxiliary(*attributes: str) -> QueryModifier:
    """Request auxiliary attributes."""
    value = ",".join(attributes)

    def modify(q: Query) -> None:
        q.append((QUERY_KEY_AUX, value))

    return modify


def query_order_by(
    attributes: Iterable[str],
    direction: OrderDir | None = None,
) -> QueryModifier:
    """Order by the given attributes, optionally in a set direction."""
    value = ",".join(attributes)

    def modify(q: Query) -> None:
        q.append((QUERY_KEY_ORDER, value))
        if direction is not None:
            q.append((QUERY_KEY_ORDER_DIR, direction.as_string()))

    return modify


def query_group_by(attributes: Iterable[str]) -> QueryModifier:
    """Group results by the given attributes."""
    value = ",".join(attributes)

    def modify(q: Query) -> None:
        q.append((QUERY_KEY_GROUP_BY, value))

    return modify


def query_attr(*attributes: AttrQuery) -> QueryModifier:
    """Filter on attribute values.

    Each attribute adds ``name=value``; attributes with arguments also add
    ``name_args=OP;COMB,OP,...``.
    """

    def modify(q: Query) -> None:
        for attr in attributes:
            q.append((attr.name, attr.value))
            if not attr.args.is_empty():
                q.append((attr.name + QUERY_ARGS_SUFFIX, attr.args.as_string()))

    return modify
