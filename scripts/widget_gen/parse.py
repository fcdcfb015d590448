"""
Declaration parsing module

Parses rust-bindgen output with the lark grammar in declarations.lark and
provides helpers to walk the resulting syntax tree.
"""

from pathlib import Path
from typing import Iterator, Union

from lark import Lark, Token, Tree, UnexpectedInput

_GRAMMAR_PATH = Path(__file__).with_name('declarations.lark')
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()

_PARSER = Lark(
    _GRAMMAR_SRC,
    parser='lalr',
    start=['start', 'type_expr'],
    propagate_positions=True,
    maybe_placeholders=False,
)


class GeneratorError(Exception):
    """Base class for fatal generator errors"""


class ParseFailure(GeneratorError):
    """Declaration text is not well-formed"""

    def __init__(self, message: str, line: int = -1, column: int = -1):
        super().__init__(message)
        self.line = line
        self.column = column


class TypeParseFailure(GeneratorError):
    """Type literal expected to name a type could not be parsed"""

    def __init__(self, literal: str):
        super().__init__(f'Cannot parse {literal!r} as a type')
        self.literal = literal


def parse_source(text: str) -> Tree:
    """Parse a declaration text into a syntax tree"""
    try:
        return _PARSER.parse(text, start='start')
    except UnexpectedInput as exc:
        context = exc.get_context(text).rstrip()
        raise ParseFailure(
            f'malformed declarations at line {exc.line}, column {exc.column}:\n{context}',
            exc.line, exc.column,
        ) from exc


def parse_type(literal: str) -> Tree:
    """Parse a single type literal, e.g. '* const cty :: c_char'"""
    try:
        return _PARSER.parse(literal, start='type_expr')
    except UnexpectedInput as exc:
        raise TypeParseFailure(literal) from exc


def node_name(node: Union[Tree, Token]) -> str:
    """Rule name of a tree, or terminal type of a token"""
    if isinstance(node, Tree):
        data = node.data
        if isinstance(data, Token):
            return data.value
        return data
    return node.type


def child_trees(node: Tree, name: str) -> Iterator[Tree]:
    """Yield direct subtrees with the given rule name"""
    for child in node.children:
        if isinstance(child, Tree) and node_name(child) == name:
            yield child


def child_token(node: Tree, kind: str) -> Token:
    """First direct token of the given terminal type"""
    return next(c for c in node.children if isinstance(c, Token) and c.type == kind)


def has_token(node: Tree, kind: str) -> bool:
    """Check if a direct token of the given terminal type exists"""
    return any(isinstance(c, Token) and c.type == kind for c in node.children)


def tokens(node: Tree) -> Iterator[Token]:
    """Yield all tokens below a tree in source order"""
    for child in node.children:
        if isinstance(child, Tree):
            yield from tokens(child)
        else:
            yield child


def type_literal(node: Tree) -> str:
    """Canonical literal text of a type: its tokens joined by single spaces

    Examples:
        *const cty::c_char -> '* const cty :: c_char'
        *mut lv_obj_t      -> '* mut lv_obj_t'
    """
    return ' '.join(tok.value for tok in tokens(node))


def foreign_functions(tree: Tree) -> Iterator[Tree]:
    """Yield the fn items of every extern block, in source order"""
    for module in child_trees(tree, 'foreign_mod'):
        yield from child_trees(module, 'foreign_fn')
