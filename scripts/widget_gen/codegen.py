"""
Code generation utilities

Provides helpers for generating Rust code.
"""

import re

# Rust reserved keywords (strict and reserved)
RUST_KEYWORDS = {
    'as', 'break', 'const', 'continue', 'crate', 'else', 'enum', 'extern',
    'false', 'fn', 'for', 'if', 'impl', 'in', 'let', 'loop', 'match', 'mod',
    'move', 'mut', 'pub', 'ref', 'return', 'self', 'Self', 'static', 'struct',
    'super', 'trait', 'true', 'type', 'unsafe', 'use', 'where', 'while',
    'async', 'await', 'dyn', 'abstract', 'become', 'box', 'do', 'final',
    'macro', 'override', 'priv', 'typeof', 'unsized', 'virtual', 'yield', 'try',
}

# Keywords that cannot be raw identifiers
_NON_RAW_KEYWORDS = {'crate', 'self', 'Self', 'super'}


class CodeGen:
    """Code generation helper with indentation support"""

    def __init__(self):
        self._lines: list[str] = []
        self._indent: int = 0
        self._indent_str: str = '    '  # 4 spaces

    def line(self, text: str = ''):
        """Add a line with current indentation"""
        if text:
            self._lines.append(self._indent_str * self._indent + text)
        else:
            self._lines.append('')

    def lines(self, *texts: str):
        """Add multiple lines"""
        for text in texts:
            self.line(text)

    def indent(self):
        """Increase indentation"""
        self._indent += 1

    def dedent(self):
        """Decrease indentation"""
        if self._indent > 0:
            self._indent -= 1

    def block(self, header: str, footer: str = '}'):
        """Context manager for code blocks

        An empty header continues a branch opened by the previous footer.
        """
        return _BlockContext(self, header, footer)

    def handoff(self, detach: list[str], reattach: list[str]):
        """Context manager for buffers handed to a native call

        Writes the detach steps on entry and the reattach steps on exit,
        so every statement written inside runs with the buffers detached.
        """
        return _HandoffContext(self, detach, reattach)

    def output(self) -> str:
        """Get generated code as string"""
        return '\n'.join(self._lines)


class _BlockContext:
    """Context manager for indented code blocks"""

    def __init__(self, gen: CodeGen, header: str, footer: str):
        self._gen = gen
        self._header = header
        self._footer = footer

    def __enter__(self):
        if self._header:
            self._gen.line(self._header)
        self._gen.indent()
        return self

    def __exit__(self, *args):
        self._gen.dedent()
        self._gen.line(self._footer)


class _HandoffContext:
    """Context manager pairing detach and reattach steps"""

    def __init__(self, gen: CodeGen, detach: list[str], reattach: list[str]):
        self._gen = gen
        self._detach = detach
        self._reattach = reattach

    def __enter__(self):
        self._gen.lines(*self._detach)
        return self

    def __exit__(self, *args):
        self._gen.lines(*self._reattach)


def as_pascal_case(name: str) -> str:
    """Convert snake_case name to PascalCase

    Examples:
        arc -> Arc
        btnmatrix -> Btnmatrix
        color_wheel -> ColorWheel
    """
    return ''.join(part.capitalize() for part in name.split('_') if part)


def rust_ident(name: str) -> str:
    """Escape a name that collides with a Rust keyword

    Examples:
        type -> r#type
        text -> text
    """
    if name in RUST_KEYWORDS and name not in _NON_RAW_KEYWORDS:
        return f'r#{name}'
    return name


_TIGHT_BEFORE = re.compile(r'\s+(::|<|>|,|;|\]|\))')
_TIGHT_AFTER = re.compile(r'(::|<|&|\[|\()\s+')


def compact_type(literal: str) -> str:
    """Render a spaced type literal the way Rust source spells it

    Examples:
        'cty :: c_int'             -> 'cty::c_int'
        'Option < lv_event_cb_t >' -> 'Option<lv_event_cb_t>'
        '* mut lv_point_t'         -> '*mut lv_point_t'
        'Option < unsafe extern "C" fn ( e : * mut lv_event_t ) >'
            -> 'Option<unsafe extern "C" fn(e: *mut lv_event_t)>'
    """
    text = _TIGHT_BEFORE.sub(r'\1', literal)
    text = _TIGHT_AFTER.sub(r'\1', text)
    text = re.sub(r'\*\s+(const|mut)\b', r'*\1', text)
    text = re.sub(r'\bfn \(', 'fn(', text).replace(' : ', ': ')
    return text.replace(',', ', ').replace(';', '; ').replace('  ', ' ')
