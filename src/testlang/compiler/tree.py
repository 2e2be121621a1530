"""Syntax tree models for TestLang++.

The tree is built once per compilation and never mutated; every model is
frozen and sequences are tuples. Each node owns its children outright.
"""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Node(BaseModel):
    """Base for all tree nodes."""

    model_config = ConfigDict(frozen=True)


class HttpMethod(str, Enum):
    """HTTP verb of a request statement."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Request(Node):
    """METHOD "path";"""

    method: HttpMethod
    path: str


class StatusEquals(Node):
    """expect status = code;"""

    kind: Literal["status_equals"] = "status_equals"
    code: int


class StatusInRange(Node):
    """expect status in min..max; (inclusive on both ends)"""

    kind: Literal["status_in_range"] = "status_in_range"
    min: int
    max: int


class BodyContains(Node):
    """expect body contains "text";"""

    kind: Literal["body_contains"] = "body_contains"
    text: str


class HeaderEquals(Node):
    """expect header "Name" = "value";"""

    kind: Literal["header_equals"] = "header_equals"
    name: str
    value: str


Assertion = Annotated[
    Union[StatusEquals, StatusInRange, BodyContains, HeaderEquals],
    Field(discriminator="kind"),
]


class TestBlock(Node):
    """test Name { ... }

    Requests and assertions keep their source order. Which statement kinds
    were interleaved in the source is not preserved.
    """

    __test__ = False  # not a pytest class

    name: str
    requests: tuple[Request, ...] = ()
    assertions: tuple[Assertion, ...] = ()


class Program(Node):
    """Root of the tree: every test block in declaration order."""

    tests: tuple[TestBlock, ...] = ()
