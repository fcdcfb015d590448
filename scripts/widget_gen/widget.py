"""
Widget assembly module

Combines the lowered operations of a widget into one Rust module: the
root widget becomes the Widget trait, every other widget a concrete type
defined with define_object!.
"""

from dataclasses import dataclass, field

from .codegen import CodeGen, as_pascal_case
from .emit import OperationEmitter
from .func import FuncGenerator, LoweredOperation, Skipped, CONSTRUCTOR
from .ir import Widget


@dataclass
class GeneratedModule:
    """Generated source of one widget"""
    name: str
    text: str
    skipped: list[Skipped] = field(default_factory=list)


class WidgetGenerator:
    """Assembles widget modules"""

    ROOT_TRAIT = 'Widget'

    def __init__(self, func_gen: FuncGenerator, emitter: OperationEmitter,
                 base_type: str = 'lv_obj_t'):
        self.func_gen = func_gen
        self.emitter = emitter
        self.base_type = base_type

    @property
    def root_widget(self) -> str:
        return self.func_gen.root_widget

    @property
    def sys_crate(self) -> str:
        return self.func_gen.sys_crate

    def lower(self, widget: Widget) -> tuple[list[LoweredOperation], list[Skipped]]:
        """Lower all methods of a widget, in declaration order

        A constructor is followed by its new() counterpart.
        """
        ops: list[LoweredOperation] = []
        skipped: list[Skipped] = []
        for func in widget.methods:
            result = self.func_gen.lower(func, widget)
            if isinstance(result, Skipped):
                skipped.append(result)
                continue
            ops.append(result)
            if result.kind == CONSTRUCTOR:
                ops.append(self.func_gen.default_constructor(result))
        return ops, skipped

    def generate(self, widget: Widget) -> GeneratedModule:
        """Generate the module of a widget"""
        ops, skipped = self.lower(widget)
        gen = CodeGen()
        if widget.name == self.root_widget:
            self._gen_trait(gen, ops)
        else:
            self._gen_object(gen, widget, ops)
        return GeneratedModule(widget.name, gen.output(), skipped)

    def _gen_trait(self, gen: CodeGen, ops: list[LoweredOperation]):
        """Root widget: capability trait with default methods"""
        prefix = self.func_gen.prefix
        with gen.block(f"pub trait {self.ROOT_TRAIT}<'a>: NativeObject + Sized + 'a {{"):
            gen.line('type SpecialEvent;')
            gen.line(f'type Part: Into<{self.sys_crate}::{prefix}part_t>;')
            gen.line()
            gen.line('/// Construct an instance of the object from a raw pointer.')
            gen.line(f'unsafe fn from_raw(raw_pointer: core::ptr::NonNull<{self.sys_crate}::{self.base_type}>)'
                     ' -> Option<Self>;')
            for op in ops:
                gen.line()
                self.emitter.emit(op, gen)

    def _gen_object(self, gen: CodeGen, widget: Widget, ops: list[LoweredOperation]):
        """Derived widget: object definition and inherent impl"""
        name = as_pascal_case(widget.name)
        gen.line(f'define_object!({name});')
        gen.line()
        with gen.block(f"impl<'a> {name}<'a> {{"):
            for i, op in enumerate(ops):
                if i > 0:
                    gen.line()
                self.emitter.emit(op, gen)
