"""
LVGL wrapper configuration

Configures the widget generator for the lvgl crate:
- lv_ prefix, lv_obj_t base object, obj as the root widget
- lvgl_sys / cstr_core crate paths
- declarations implemented by hand in the lvgl crate
"""

from widget_gen import Generator


def configure(gen: Generator):
    """Configure generator with LVGL-specific settings"""
    config = gen.config
    config.prefix = 'lv_'
    config.root_widget = 'obj'
    config.base_object_types = ('lv_obj_t', '_lv_obj_t')
    config.sys_crate = 'lvgl_sys'
    config.cstr_crate = 'cstr_core'

    # Hand written in lvgl::Widget / Obj
    gen.ignore(
        'lv_obj_add_style',
        'lv_obj_del',
        'lv_obj_del_async',
    )

    # Event handling goes through the lvgl crate's callback registry
    gen.ignore(
        'lv_obj_add_event_cb',
        'lv_obj_remove_event_cb',
        'lv_obj_remove_event_cb_with_user_data',
        'lv_obj_remove_event_dsc',
    )
