"""
Main generator module

Orchestrates all components to generate the Rust widget wrappers.
"""

import os
from dataclasses import dataclass, field
from typing import Optional

from .codegen import CodeGen
from .emit import OperationEmitter
from .extract import WidgetExtractor
from .func import FuncGenerator
from .ir import IR, Widget
from .types import TypeConverter, BASE_OBJECT_TYPES
from .widget import WidgetGenerator, GeneratedModule

HEADER = '// machine generated, do not edit'


@dataclass
class GeneratorConfig:
    """Configuration of a generator run"""
    prefix: str = 'lv_'
    root_widget: str = 'obj'
    base_object_types: tuple[str, ...] = BASE_OBJECT_TYPES
    sys_crate: str = 'lvgl_sys'
    cstr_crate: str = 'cstr_core'
    separator_boundary: bool = True  # False: legacy unbounded prefix grouping
    quiet: bool = False
    ignores: set[str] = field(default_factory=set)

    @property
    def base_type(self) -> str:
        return self.base_object_types[0]


class Generator:
    """Main widget wrapper generator"""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()

    def ignore(self, *names: str):
        """Add declarations to ignore"""
        self.config.ignores.update(names)

    def load(self, input_path: str) -> IR:
        """Load declarations from a bindgen output file"""
        return IR.load(input_path, self.config.prefix, self.config.base_object_types)

    def extract(self, ir: IR) -> list[Widget]:
        """Group the loaded declarations into widgets"""
        extractor = WidgetExtractor(
            prefix=self.config.prefix,
            base_name=self.config.base_type,
            separator_boundary=self.config.separator_boundary,
        )
        funcs = [f for f in ir.funcs if f.name not in self.config.ignores]
        return extractor.extract(funcs)

    def modules(self, ir: IR) -> list[GeneratedModule]:
        """Generate one module per widget, in discovery order"""
        config = self.config
        func_gen = FuncGenerator(
            TypeConverter(config.cstr_crate),
            prefix=config.prefix,
            root_widget=config.root_widget,
            sys_crate=config.sys_crate,
        )
        widget_gen = WidgetGenerator(func_gen, OperationEmitter(), base_type=config.base_type)

        modules = []
        for widget in self.extract(ir):
            module = widget_gen.generate(widget)
            self._report(module)
            modules.append(module)
        return modules

    def render(self, ir: IR) -> str:
        """Render all widget modules as one source file"""
        gen = CodeGen()
        gen.line(HEADER)
        for module in self.modules(ir):
            gen.line()
            gen.line(module.text)
        return gen.output() + '\n'

    def generate_code(self, text: str) -> str:
        """Render the wrappers of bindgen output text"""
        config = self.config
        return self.render(IR.from_source(text, config.prefix, config.base_object_types))

    def generate(self, input_path: str, output_path: str):
        """Generate the combined wrapper file"""
        print('=== Generating widget wrappers:')
        print(f'  {input_path} => {output_path}')
        code = self.render(self.load(input_path))
        self._write(output_path, code)

    def generate_modules(self, input_path: str, output_dir: str):
        """Generate one file per widget and a mod.rs including them"""
        print('=== Generating widget wrappers:')
        ir = self.load(input_path)
        includes = CodeGen()
        includes.line(HEADER)
        includes.line()
        for module in self.modules(ir):
            filename = f'{module.name}.rs'
            print(f'  {input_path} => {os.path.join(output_dir, filename)}')
            self._write(os.path.join(output_dir, filename), f'{HEADER}\n\n{module.text}\n')
            includes.line(f'include!("{filename}");')
        self._write(os.path.join(output_dir, 'mod.rs'), includes.output() + '\n')

    def _report(self, module: GeneratedModule):
        """Print skipped declarations"""
        if self.config.quiet:
            return
        for skipped in module.skipped:
            print(f'  >> skipping {skipped}')

    @staticmethod
    def _write(path: str, code: str):
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(path, 'w', newline='\n') as f:
            f.write(code)
