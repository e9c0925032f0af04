"""Build reaction and decay trees from their textual representation.

Reactions and decays are written with the reactants (or the decaying element)
on the left of an arrow and the products on its right. Nested processes are
enclosed in braces:

.. code-block:: none

    reaction := items "->" items
    item     := NAME | "{" reaction "}"

    decay    := NAME "->" ditems
    ditem    := NAME | "{" decay "}"

Names are any run of characters other than whitespace, braces and arrows.
Each name is converted into an element with a resolver, which by default
searches the database of the requested kind.
"""

import re
from enum import Enum
from typing import Callable, List, Optional, Union

import attr

from reactions.context import Context, Resolver, get_resolver
from reactions.elements import Element, ElementKind, to_element_kind
from reactions.errors import ProcessSyntaxError
from reactions.nodes import Decay, Reaction


class _TokenType(Enum):
    ARROW = "->"
    OPEN = "{"
    CLOSE = "}"
    NAME = "name"


@attr.s(frozen=True)
class _Token:
    type: _TokenType = attr.ib()
    value: str = attr.ib()
    position: int = attr.ib()


_TOKEN_PATTERN = re.compile(
    r"\s*(?:(?P<arrow>->)|(?P<open>\{)|(?P<close>\})"
    r"|(?P<name>(?:(?!->)[^\s{}])+))"
)


def _tokenize(text: str) -> List[_Token]:
    tokens = list()
    position = 0
    text = text.rstrip()
    while position < len(text):
        match = _TOKEN_PATTERN.match(text, position)
        if match is None:  # pragma: no cover
            raise ProcessSyntaxError(
                "Unexpected character", text, position + 1
            )
        for group, token_type in [
            ("arrow", _TokenType.ARROW),
            ("open", _TokenType.OPEN),
            ("close", _TokenType.CLOSE),
            ("name", _TokenType.NAME),
        ]:
            value = match[group]
            if value is not None:
                tokens.append(
                    _Token(token_type, value, match.start(group))
                )
                break
        position = match.end()
    return tokens


class _Parser:
    """Recursive descent parser over the tokens of an expression."""

    def __init__(
        self, text: str, resolver: Resolver, kind: ElementKind
    ) -> None:
        self.__text = text
        self.__resolver = resolver
        self.__kind = kind
        self.__tokens = _tokenize(text)
        self.__index = 0
        self.__depth = 0

    def __peek(self) -> Optional[_Token]:
        if self.__index < len(self.__tokens):
            return self.__tokens[self.__index]
        return None

    def __next(self) -> _Token:
        token = self.__tokens[self.__index]
        self.__index += 1
        return token

    def __error(
        self, message: str, token: Optional[_Token] = None
    ) -> ProcessSyntaxError:
        if token is None:
            token = self.__peek()
        position = len(self.__text) if token is None else token.position
        return ProcessSyntaxError(message, self.__text, position + 1)

    def __is_next(self, token_type: _TokenType) -> bool:
        token = self.__peek()
        return token is not None and token.type is token_type

    def __check_not_empty(self) -> None:
        if not self.__tokens:
            raise ProcessSyntaxError("Empty expression", self.__text, 1)

    def __check_finished(self) -> None:
        token = self.__peek()
        if token is None:
            return
        if token.type is _TokenType.CLOSE:
            raise self.__error("Mismatching braces")
        if token.type is _TokenType.ARROW:
            raise self.__error("Duplicated arrow")
        raise self.__error("Unexpected token")  # pragma: no cover

    def __expect_arrow(self, missing_message: str) -> None:
        token = self.__peek()
        if token is None:
            raise self.__error("Missing arrow")
        if token.type is _TokenType.CLOSE and self.__depth == 0:
            raise self.__error("Mismatching braces")
        if token.type is not _TokenType.ARROW:
            raise self.__error(missing_message)
        self.__next()
        if self.__is_next(_TokenType.ARROW):
            raise self.__error("Duplicated arrow")

    def __expect_close(self) -> None:
        if not self.__is_next(_TokenType.CLOSE):
            if self.__is_next(_TokenType.ARROW):
                raise self.__error("Duplicated arrow")
            raise self.__error("Expected closing braces")
        self.__next()
        self.__depth -= 1

    def __parse_nested(
        self, function: Callable[[], Union[Reaction, Decay]]
    ) -> Union[Reaction, Decay]:
        self.__next()
        self.__depth += 1
        node = function()
        self.__expect_close()
        return node

    def __parse_items(
        self, function: Callable[[], Union[Reaction, Decay]]
    ) -> List[Union[Element, Reaction, Decay]]:
        items: List[Union[Element, Reaction, Decay]] = list()
        while True:
            token = self.__peek()
            if token is None:
                return items
            if token.type is _TokenType.NAME:
                items.append(self.__resolver(self.__next().value))
            elif token.type is _TokenType.OPEN:
                items.append(self.__parse_nested(function))
            else:
                return items

    def __parse_reaction(self) -> Reaction:
        reactants = self.__parse_items(self.__parse_reaction)
        if not reactants:
            if self.__is_next(_TokenType.CLOSE) and self.__depth == 0:
                raise self.__error("Mismatching braces")
            raise self.__error("Missing reactants")
        self.__expect_arrow("Expected an arrow")
        products = self.__parse_items(self.__parse_reaction)
        if not products:
            raise self.__error("Missing products")
        return Reaction(reactants, products, self.__kind)

    def __parse_decay(self) -> Decay:
        token = self.__peek()
        if token is None or token.type is _TokenType.ARROW:
            raise self.__error("Missing head")
        if token.type is _TokenType.OPEN:
            raise self.__error("The head of a decay must be an element")
        if token.type is _TokenType.CLOSE:
            raise self.__error("Mismatching braces")
        head = self.__resolver(self.__next().value)
        self.__expect_arrow("Multiple heads in decay")
        products = self.__parse_items(self.__parse_decay)
        if not products:
            raise self.__error("Missing products")
        return Decay(head, products, self.__kind)

    def parse_reaction(self) -> Reaction:
        self.__check_not_empty()
        reaction = self.__parse_reaction()
        self.__check_finished()
        return reaction

    def parse_decay(self) -> Decay:
        self.__check_not_empty()
        decay = self.__parse_decay()
        self.__check_finished()
        return decay


def make_reaction(
    text: Optional[str] = None,
    kind: Union[str, ElementKind] = ElementKind.STRING,
    context: Optional[Context] = None,
    resolver: Optional[Resolver] = None,
) -> Reaction:
    """Create a reaction from its textual representation.

    Without text, an empty reaction is returned so that it can be filled
    programmatically.

    >>> reaction = make_reaction("A B -> C {D -> E}")
    >>> [str(n) for n in reaction.products]
    ['C', 'D -> E']
    """
    kind = to_element_kind(kind)
    if text is None:
        return Reaction(kind=kind)
    if resolver is None:
        resolver = get_resolver(kind, context)
    return _Parser(text, resolver, kind).parse_reaction()


def make_decay(
    text: Optional[str] = None,
    kind: Union[str, ElementKind] = ElementKind.STRING,
    context: Optional[Context] = None,
    resolver: Optional[Resolver] = None,
) -> Decay:
    """Create a decay from its textual representation.

    Without text, a decay without head nor products is returned.
    """
    kind = to_element_kind(kind)
    if text is None:
        return Decay(kind=kind)
    if resolver is None:
        resolver = get_resolver(kind, context)
    return _Parser(text, resolver, kind).parse_decay()
