"""
Function lowering module

Lowers foreign function declarations to wrapper operations.
"""

from dataclasses import dataclass, field
from typing import Optional, Union, TYPE_CHECKING

from .codegen import rust_ident
from .types import (
    TypeConverter, SkipDeclaration, MutStringPtr,
)

if TYPE_CHECKING:
    from .ir import Declaration, Widget

# Operation kinds
METHOD = 'method'
CONSTRUCTOR = 'constructor'
DEFAULT_CONSTRUCTOR = 'default_constructor'


@dataclass
class LoweredParam:
    """Wrapper parameter and the argument it becomes in the native call"""
    name: str
    type: str
    usage: str


@dataclass
class BufferHandoff:
    """String buffer whose ownership moves into a native call and back"""
    name: str
    raw: str
    cstring: str

    def detach(self) -> str:
        return f'let {self.raw} = {self.name}.clone().into_raw();'

    def reattach(self) -> str:
        return f'*{self.name} = {self.cstring}::from_raw({self.raw});'


@dataclass
class LoweredOperation:
    """Wrapper operation synthesized from one declaration"""
    identifier: str
    native: str
    kind: str = METHOD
    receiver: Optional[str] = None  # '&self', '&mut self' or None
    params: list[LoweredParam] = field(default_factory=list)
    handoffs: list[BufferHandoff] = field(default_factory=list)
    pre_steps: list[str] = field(default_factory=list)
    call: str = ''
    post_steps: list[str] = field(default_factory=list)
    returns: Optional[str] = None  # None: unit result, statement form
    public: bool = True


@dataclass
class Skipped:
    """Declaration left out of the generated code"""
    name: str
    reason: str
    literal: str = ''

    def __str__(self) -> str:
        if self.literal:
            return f'{self.name}: {self.reason} ({self.literal})'
        return f'{self.name}: {self.reason}'


class FuncGenerator:
    """Lowers declarations to wrapper operations"""

    # Runtime paths used by constructors
    RESULT_TYPE = 'crate::LvResult<Self>'
    NATIVE_OBJECT = 'crate::NativeObject'
    DEFAULT_PARENT = 'crate::display::get_scr_act()?'

    def __init__(self, type_conv: TypeConverter, prefix: str = 'lv_',
                 root_widget: str = 'obj', sys_crate: str = 'lvgl_sys'):
        self.type_conv = type_conv
        self.prefix = prefix
        self.root_widget = root_widget
        self.sys_crate = sys_crate

    def short_name(self, func: 'Declaration', widget: 'Widget') -> str:
        """Operation name: declaration name without '<prefix><widget>_'

        Removes the first occurrence, wherever it is in the name.
        """
        return func.name.replace(f'{self.prefix}{widget.name}_', '', 1)

    def is_constructor(self, func: 'Declaration', widget: 'Widget') -> bool:
        return self.short_name(func, widget) == 'create' and widget.name != self.root_widget

    def lower(self, func: 'Declaration', widget: 'Widget') -> Union[LoweredOperation, Skipped]:
        """Lower a declaration owned by a widget"""
        try:
            if self.is_constructor(func, widget):
                return self._lower_constructor(func)
            return self._lower_method(func, widget)
        except SkipDeclaration as exc:
            return Skipped(func.name, exc.reason, exc.literal)

    def default_constructor(self, create: LoweredOperation) -> LoweredOperation:
        """new(): create() on the active screen"""
        return LoweredOperation(
            identifier='new',
            native=create.native,
            kind=DEFAULT_CONSTRUCTOR,
            pre_steps=[f'let mut parent = {self.DEFAULT_PARENT};'],
            call=f'Self::{create.identifier}(&mut parent)',
            returns=self.RESULT_TYPE,
        )

    def _lower_constructor(self, func: 'Declaration') -> LoweredOperation:
        """create(parent): only the parent is passed to the native constructor"""
        parent = LoweredParam(
            name='parent',
            type=f'&mut impl {self.NATIVE_OBJECT}',
            usage='parent.raw().as_mut()',
        )
        return LoweredOperation(
            identifier='create',
            native=func.name,
            kind=CONSTRUCTOR,
            params=[parent],
            call=f'{self.sys_crate}::{func.name}({parent.usage})',
            returns=self.RESULT_TYPE,
        )

    def _lower_method(self, func: 'Declaration', widget: 'Widget') -> LoweredOperation:
        if not func.params:
            raise SkipDeclaration('no receiver argument')
        if func.variadic:
            raise SkipDeclaration('variadic function', '...')

        returns = self.type_conv.return_type(func.ret_shape)

        receiver, self_usage = self._receiver(func, widget)
        params = []
        handoffs = []
        for param in func.params[1:]:
            shape = param.shape
            params.append(LoweredParam(
                name=rust_ident(param.name),
                type=self.type_conv.param_type(shape),
                usage=self.type_conv.usage(shape, param.name),
            ))
            if isinstance(shape, MutStringPtr):
                handoffs.append(BufferHandoff(
                    name=rust_ident(param.name),
                    raw=self.type_conv.raw_name(param.name),
                    cstring=self.type_conv.cstring(),
                ))

        args = ', '.join([self_usage] + [p.usage for p in params])
        return LoweredOperation(
            identifier=rust_ident(self.short_name(func, widget)),
            native=func.name,
            receiver=receiver,
            params=params,
            handoffs=handoffs,
            pre_steps=[h.detach() for h in handoffs],
            call=f'{self.sys_crate}::{func.name}({args})',
            post_steps=[h.reattach() for h in reversed(handoffs)],
            returns=returns,
            public=widget.name != self.root_widget,
        )

    def _receiver(self, func: 'Declaration', widget: 'Widget') -> tuple[str, str]:
        """Receiver declaration and its usage as the first native argument"""
        handle = 'self.raw()' if widget.name == self.root_widget else 'self.core.raw()'
        if func.params[0].shape.const:
            return '&self', f'{handle}.as_ref()'
        return '&mut self', f'{handle}.as_mut()'
