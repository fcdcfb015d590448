"""
widget_gen - Rust widget wrapper generation for C UI toolkits

This framework turns the foreign function declarations emitted by
rust-bindgen into safe, per-widget Rust wrappers. It is designed to be
configured by toolkit-specific modules that set prefixes, crate paths
and ignored declarations.
"""

from .parse import GeneratorError, ParseFailure, TypeParseFailure, parse_source, parse_type
from .ir import IR, Param, Declaration, Widget
from .types import TypeShape, TypeConverter, SkipDeclaration, classify_type
from .codegen import CodeGen
from .extract import WidgetExtractor, get_widget_names
from .func import FuncGenerator, LoweredOperation, Skipped
from .emit import OperationEmitter
from .widget import WidgetGenerator, GeneratedModule
from .generator import Generator, GeneratorConfig

__all__ = [
    'GeneratorError', 'ParseFailure', 'TypeParseFailure', 'parse_source', 'parse_type',
    'IR', 'Param', 'Declaration', 'Widget',
    'TypeShape', 'TypeConverter', 'SkipDeclaration', 'classify_type',
    'CodeGen',
    'WidgetExtractor', 'get_widget_names',
    'FuncGenerator', 'LoweredOperation', 'Skipped',
    'OperationEmitter',
    'WidgetGenerator', 'GeneratedModule',
    'Generator', 'GeneratorConfig',
]
