"""
IR (Intermediate Representation) module

Reads and represents the foreign function declarations of bindgen output.
"""

from dataclasses import dataclass, field
from typing import Optional

from lark import Tree

from .parse import (
    ParseFailure, parse_source, foreign_functions, child_token, child_trees,
    has_token, type_literal,
)
from .types import TypeShape, BASE_OBJECT_TYPES, classify_type


@dataclass(frozen=True)
class Param:
    """Function parameter information"""
    name: str
    type: str  # Type literal, e.g. '* mut lv_obj_t'
    shape: Optional[TypeShape] = field(default=None, compare=False)

    def __post_init__(self):
        if self.shape is None:
            object.__setattr__(self, 'shape', classify_type(self.type))


@dataclass(frozen=True)
class Declaration:
    """Foreign function declaration"""
    name: str
    params: tuple[Param, ...] = ()
    ret: Optional[str] = None  # Return type literal, None for no return value
    variadic: bool = False
    ret_shape: Optional[TypeShape] = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, 'params', tuple(self.params))
        if self.ret is not None and self.ret_shape is None:
            object.__setattr__(self, 'ret_shape', classify_type(self.ret))

    def is_method(self, base_name: str = 'lv_obj_t') -> bool:
        """Check if the first parameter is a base object"""
        if self.params:
            return base_name in self.params[0].type
        return False


@dataclass
class Widget:
    """Widget namespace with its methods in declaration order"""
    name: str
    methods: list[Declaration] = field(default_factory=list)


@dataclass
class IR:
    """Intermediate representation of a bindgen output file"""
    prefix: str
    funcs: list[Declaration]

    @classmethod
    def load(cls, path: str, prefix: str = 'lv_',
             base_types: tuple[str, ...] = BASE_OBJECT_TYPES) -> 'IR':
        """Load IR from a bindgen output file"""
        try:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
        except UnicodeDecodeError as exc:
            raise ParseFailure(f'{path}: input is not valid UTF-8 ({exc.reason})') from exc
        return cls.from_source(text, prefix, base_types)

    @classmethod
    def from_source(cls, text: str, prefix: str = 'lv_',
                    base_types: tuple[str, ...] = BASE_OBJECT_TYPES) -> 'IR':
        """Create IR from bindgen output text

        Only functions whose name starts with the library prefix are kept.
        """
        tree = parse_source(text)
        funcs = []
        for node in foreign_functions(tree):
            name = child_token(node, 'NAME').value
            if name.startswith(prefix):
                funcs.append(cls._parse_func(node, base_types))
        return cls(prefix=prefix, funcs=funcs)

    @staticmethod
    def _parse_func(node: Tree, base_types: tuple[str, ...]) -> Declaration:
        """Parse fn declaration"""
        params = []
        variadic = False
        for group in child_trees(node, 'params'):
            variadic = has_token(group, 'VARIADIC')
            for p in child_trees(group, 'param'):
                literal = type_literal(next(child_trees(p, 'type_expr')))
                params.append(Param(
                    name=child_token(p, 'NAME').value,
                    type=literal,
                    shape=classify_type(literal, base_types),
                ))

        ret = None
        ret_shape = None
        for ret_node in child_trees(node, 'type_expr'):
            ret = type_literal(ret_node)
            ret_shape = classify_type(ret, base_types)

        return Declaration(
            name=child_token(node, 'NAME').value,
            params=tuple(params),
            ret=ret,
            variadic=variadic,
            ret_shape=ret_shape,
        )

    def get_func(self, name: str) -> Optional[Declaration]:
        """Get declaration by name"""
        for func in self.funcs:
            if func.name == name:
                return func
        return None

    def function_names(self) -> list[str]:
        """Names of all loaded declarations, in source order"""
        return [f.name for f in self.funcs]
