"""
Type classification module

Maps bindgen type literals to structural shapes, and shapes to the Rust
parameter types and FFI argument expressions of the generated wrappers.
"""

from dataclasses import dataclass
from typing import Optional

from .codegen import compact_type, rust_ident
from .parse import parse_type

# Spellings of the C character type
CHAR_TYPES = {
    'cty :: c_char',
    'std :: os :: raw :: c_char',
    ':: std :: os :: raw :: c_char',
    'core :: ffi :: c_char',
    ':: core :: ffi :: c_char',
}

# Spellings of the C void type
VOID_TYPES = {
    'cty :: c_void',
    'std :: os :: raw :: c_void',
    ':: std :: os :: raw :: c_void',
    'core :: ffi :: c_void',
    ':: core :: ffi :: c_void',
}

# Base object type names (current and historical spelling)
BASE_OBJECT_TYPES = ('lv_obj_t', '_lv_obj_t')

# Value types passed through unchanged
PRIMITIVE_TYPES = {
    'u8', 'i8', 'u16', 'i16', 'u32', 'i32', 'u64', 'i64',
    'usize', 'isize', 'f32', 'f64', 'bool',
}


class SkipDeclaration(Exception):
    """Raised when a declaration cannot be wrapped"""

    def __init__(self, reason: str, literal: str = ''):
        super().__init__(f'{reason} ({literal})' if literal else reason)
        self.reason = reason
        self.literal = literal


def split_pointer(literal: str) -> tuple[Optional[str], str]:
    """Split a pointer literal into qualifier and pointee

    Examples:
        '* const cty :: c_char' -> ('const', 'cty :: c_char')
        '* mut * mut lv_obj_t'  -> ('mut', '* mut lv_obj_t')
        'u16'                   -> (None, 'u16')
    """
    parts = literal.split()
    if len(parts) >= 3 and parts[0] == '*' and parts[1] in ('const', 'mut'):
        return parts[1], ' '.join(parts[2:])
    return None, literal


def is_const_literal(literal: str) -> bool:
    """Check if the first qualifier of a literal is const"""
    parts = literal.split()
    if parts and parts[0] == '*':
        parts = parts[1:]
    return bool(parts) and parts[0] == 'const'


@dataclass(frozen=True)
class TypeShape:
    """Structural classification of a type literal"""
    literal: str

    @property
    def const(self) -> bool:
        return is_const_literal(self.literal)

    @property
    def is_pointer(self) -> bool:
        return self.literal.startswith('*')


class ConstStringPtr(TypeShape):
    """Pointer to const char"""


class MutStringPtr(TypeShape):
    """Pointer to mutable char"""


class ConstObjectPtr(TypeShape):
    """Pointer to const base object"""


class MutObjectPtr(TypeShape):
    """Pointer to mutable base object"""


class VoidPtr(TypeShape):
    """Pointer to the opaque void type"""


class PointerArray(TypeShape):
    """Pointer to pointer"""


@dataclass(frozen=True)
class OtherPointer(TypeShape):
    """Any other pointer; inner is the pointee without qualifier"""
    inner: str


class Value(TypeShape):
    """Type passed by value"""

    @property
    def name(self) -> str:
        return self.literal


class Primitive(Value):
    """Primitive numeric or boolean value"""


def classify_type(literal: str, base_types=BASE_OBJECT_TYPES) -> TypeShape:
    """Classify a type literal

    Raises TypeParseFailure when a literal that should name a type
    does not parse as one.
    """
    qualifier, inner = split_pointer(literal)

    if qualifier == 'const' and inner in CHAR_TYPES:
        return ConstStringPtr(literal)
    if qualifier == 'mut' and inner in CHAR_TYPES:
        return MutStringPtr(literal)
    if qualifier == 'const' and inner in base_types:
        return ConstObjectPtr(literal)
    if qualifier == 'mut' and inner in base_types:
        return MutObjectPtr(literal)

    if qualifier is not None:
        if inner.startswith('*'):
            return PointerArray(literal)
        if inner in VOID_TYPES:
            return VoidPtr(literal)
        parse_type(inner)
        return OtherPointer(literal, inner)

    parse_type(literal)
    if literal in PRIMITIVE_TYPES:
        return Primitive(literal)
    return Value(literal)


class TypeConverter:
    """Lowers type shapes to wrapper parameter types and FFI arguments"""

    def __init__(self, cstr_crate: str = 'cstr_core'):
        self.cstr_crate = cstr_crate

    def param_type(self, shape: TypeShape) -> str:
        """Rust type of a wrapper parameter"""
        if isinstance(shape, ConstStringPtr):
            return f'&{self.cstr_crate}::CStr'

        elif isinstance(shape, MutStringPtr):
            return f'&mut {self.cstr_crate}::CString'

        elif isinstance(shape, ConstObjectPtr):
            return '&impl NativeObject'

        elif isinstance(shape, MutObjectPtr):
            return '&mut impl NativeObject'

        elif isinstance(shape, PointerArray):
            raise SkipDeclaration('array as argument', shape.literal)

        elif isinstance(shape, VoidPtr):
            raise SkipDeclaration('void pointer as argument', shape.literal)

        elif isinstance(shape, OtherPointer):
            inner = compact_type(shape.inner)
            return f'&{inner}' if shape.const else f'&mut {inner}'

        elif isinstance(shape, Value):
            return compact_type(shape.name)

        raise SkipDeclaration('unsupported argument type', shape.literal)

    def usage(self, shape: TypeShape, name: str) -> str:
        """Expression passing a wrapper parameter to the native function"""
        ident = rust_ident(name)
        if isinstance(shape, ConstStringPtr):
            return f'{ident}.as_ptr()'
        elif isinstance(shape, MutStringPtr):
            return self.raw_name(name)
        elif isinstance(shape, ConstObjectPtr):
            return f'{ident}.raw().as_ref()'
        elif isinstance(shape, MutObjectPtr):
            return f'{ident}.raw().as_mut()'
        return ident

    def return_type(self, shape: Optional[TypeShape]) -> Optional[str]:
        """Rust return type, None for functions without a return value"""
        if shape is None:
            return None
        if shape.is_pointer:
            raise SkipDeclaration('return value is pointer', shape.literal)
        return compact_type(shape.literal)

    def cstring(self) -> str:
        return f'{self.cstr_crate}::CString'

    @staticmethod
    def raw_name(name: str) -> str:
        """Temporary holding a detached string buffer"""
        return f'{name}_raw'
