"""
Widget extraction module

Discovers widget namespaces from constructor names and groups the
method declarations of each widget.
"""

import re
from typing import Iterable

from .ir import Declaration, Widget


def get_widget_names(funcs: Iterable[Declaration], prefix: str = 'lv_') -> list[str]:
    """Discover widget names from single-parameter constructors

    Examples:
        lv_btn_create(parent)        -> btn
        lv_btn_create(parent, copy)  -> (ignored, legacy signature)
        lv_color_wheel_create(...)   -> (ignored, name has a separator)
    """
    create_func = re.compile(rf'^{re.escape(prefix)}([^_]+)_create$')
    names: list[str] = []
    for func in funcs:
        match = create_func.match(func.name)
        if match and len(func.params) == 1 and match.group(1) not in names:
            names.append(match.group(1))
    return names


class WidgetExtractor:
    """Groups declarations into per-widget method lists"""

    def __init__(self, prefix: str = 'lv_', base_name: str = 'lv_obj_t',
                 separator_boundary: bool = True):
        self.prefix = prefix
        self.base_name = base_name
        self.separator_boundary = separator_boundary

    def extract(self, funcs: list[Declaration]) -> list[Widget]:
        """Build widgets in constructor discovery order

        Methods keep declaration order. Widgets without any method are dropped.
        """
        names = get_widget_names(funcs, self.prefix)
        widgets = {name: Widget(name) for name in names}

        for func in funcs:
            if not func.is_method(self.base_name):
                continue
            for name in self.owners(func, names):
                widgets[name].methods.append(func)

        return [w for w in widgets.values() if w.methods]

    def owners(self, func: Declaration, names: list[str]) -> list[str]:
        """Widgets a declaration belongs to

        With separator_boundary the widget name must be followed by '_'.
        Widget names never contain '_', so at most one widget matches.
        Without it any textual prefix matches, and lv_btnmatrix_set_map
        also lands in btn.
        """
        if self.separator_boundary:
            return [n for n in names if func.name.startswith(f'{self.prefix}{n}_')]
        return [n for n in names if func.name.startswith(f'{self.prefix}{n}')]
