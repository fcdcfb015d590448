"""
Operation emission module

Renders lowered operations as Rust functions.
"""

from typing import TYPE_CHECKING

from .codegen import CodeGen
from .func import CONSTRUCTOR, DEFAULT_CONSTRUCTOR

if TYPE_CHECKING:
    from .func import LoweredOperation


class OperationEmitter:
    """Renders lowered operations"""

    def __init__(self, root_type: str = 'crate::Obj', root_trait: str = 'Widget',
                 invalid_reference: str = 'crate::LvError::InvalidReference'):
        self.root_type = root_type
        self.root_trait = root_trait
        self.invalid_reference = invalid_reference

    def emit(self, op: 'LoweredOperation', gen: CodeGen):
        """Render one operation"""
        if op.kind == CONSTRUCTOR:
            self._emit_constructor(op, gen)
        elif op.kind == DEFAULT_CONSTRUCTOR:
            self._emit_default_constructor(op, gen)
        else:
            self._emit_method(op, gen)

    def signature(self, op: 'LoweredOperation') -> str:
        """Function header up to the opening brace"""
        args = [op.receiver] if op.receiver else []
        args += [f'{p.name}: {p.type}' for p in op.params]
        visibility = 'pub ' if op.public else ''
        header = f'{visibility}fn {op.identifier}({", ".join(args)})'
        if op.returns is not None:
            header += f' -> {op.returns}'
        return header + ' {'

    def _emit_method(self, op: 'LoweredOperation', gen: CodeGen):
        with gen.block(self.signature(op)):
            with gen.block('unsafe {'):
                with gen.handoff(op.pre_steps, op.post_steps):
                    if op.returns is None:
                        gen.line(f'{op.call};')
                    elif op.post_steps:
                        gen.line(f'let result = {op.call};')
                    else:
                        gen.line(op.call)
                if op.returns is not None and op.post_steps:
                    gen.line('result')

    def _emit_constructor(self, op: 'LoweredOperation', gen: CodeGen):
        with gen.block(self.signature(op)):
            with gen.block('unsafe {'):
                gen.line(f'let ptr = {op.call};')
                with gen.block('if let Some(raw) = core::ptr::NonNull::new(ptr) {', '} else {'):
                    gen.line(f'let core = <{self.root_type} as {self.root_trait}>::from_raw(raw).unwrap();')
                    gen.line('Ok(Self { core })')
                with gen.block(''):
                    gen.line(f'Err({self.invalid_reference})')

    def _emit_default_constructor(self, op: 'LoweredOperation', gen: CodeGen):
        with gen.block(self.signature(op)):
            gen.lines(*op.pre_steps)
            gen.line(op.call)
