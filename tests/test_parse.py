"""Loading foreign declarations from bindgen output."""

import pytest

from widget_gen import IR, ParseFailure, TypeParseFailure, parse_source, parse_type
from widget_gen.parse import foreign_functions, child_token, type_literal
from widget_gen.types import ConstStringPtr, MutObjectPtr, Primitive


def test_loads_prefixed_functions_in_source_order(bindings_source):
    ir = IR.from_source(bindings_source)
    names = ir.function_names()
    assert names[:3] == ['lv_init', 'lv_obj_create', 'lv_obj_set_pos']
    assert names[-1] == 'lv_img_set_src'
    assert 'memcpy' not in names


def test_foreign_statics_and_other_items_are_ignored(bindings_source):
    tree = parse_source(bindings_source)
    names = [child_token(fn, 'NAME').value for fn in foreign_functions(tree)]
    assert 'lv_global_counter' not in names
    assert 'memcpy' in names
    assert len(names) == 22


def test_declaration_fields(bindings_source):
    ir = IR.from_source(bindings_source)
    func = ir.get_func('lv_label_set_text')
    assert [p.name for p in func.params] == ['label', 'text']
    assert func.params[0].type == '* mut lv_obj_t'
    assert func.params[1].type == '* const cty :: c_char'
    assert func.ret is None
    assert not func.variadic


def test_shapes_are_classified_at_load_time(bindings_source):
    func = IR.from_source(bindings_source).get_func('lv_label_set_text')
    assert isinstance(func.params[0].shape, MutObjectPtr)
    assert isinstance(func.params[1].shape, ConstStringPtr)

    recolor = IR.from_source(bindings_source).get_func('lv_label_get_recolor')
    assert recolor.ret == 'bool'
    assert isinstance(recolor.ret_shape, Primitive)


def test_variadic_and_trailing_comma(bindings_source):
    ir = IR.from_source(bindings_source)
    assert ir.get_func('lv_label_set_text_fmt').variadic
    rotate = ir.get_func('lv_arc_rotate_obj_to_angle')
    assert [p.name for p in rotate.params] == ['obj', 'obj_to_rotate', 'r_offset']
    assert not rotate.variadic


def test_type_literal_does_not_depend_on_spacing():
    tight = IR.from_source('extern "C" { pub fn lv_a(s: *const cty::c_char); }')
    loose = IR.from_source('extern "C" {\n    pub fn lv_a(s: * const  cty :: c_char);\n}')
    assert tight.funcs[0].params[0].type == '* const cty :: c_char'
    assert loose.funcs[0].params[0].type == tight.funcs[0].params[0].type


def test_type_literal_of_parsed_type():
    assert type_literal(parse_type('*mut *const cty::c_char')) == '* mut * const cty :: c_char'


def test_function_pointer_types():
    ir = IR.from_source(
        'extern "C" {\n'
        '    pub fn lv_obj_add_event_cb(obj: *mut lv_obj_t,'
        ' event_cb: lv_event_cb_t, user_data: *mut ::core::ffi::c_void) -> *mut _lv_event_dsc_t;\n'
        '    pub fn lv_timer_set_cb(timer: *mut lv_timer_t,'
        ' cb: ::core::option::Option<unsafe extern "C" fn(arg1: *mut _lv_timer_t)>);\n'
        '}\n'
    )
    assert ir.function_names() == ['lv_obj_add_event_cb', 'lv_timer_set_cb']
    cb = ir.get_func('lv_timer_set_cb').params[1]
    assert cb.type.startswith(':: core :: option :: Option <')


def test_prefix_filter():
    ir = IR.from_source('extern "C" { pub fn sg_setup(); pub fn lv_init(); }', prefix='sg_')
    assert ir.function_names() == ['sg_setup']


def test_load_from_file(bindings_path):
    ir = IR.load(str(bindings_path))
    assert ir.get_func('lv_arc_create') is not None
    assert ir.get_func('lv_missing') is None


def test_malformed_declarations_raise_parse_failure():
    with pytest.raises(ParseFailure) as info:
        IR.from_source('extern "C" {\n    pub fn lv_x(a: *mut);\n}\n')
    assert info.value.line == 2


def test_unterminated_block_raises_parse_failure():
    with pytest.raises(ParseFailure):
        parse_source('pub struct lv_area_t {\n    pub x1: lv_coord_t,\n')


def test_parse_type():
    parse_type('* mut * const cty :: c_char')
    parse_type('[u8 ; 4usize]')
    with pytest.raises(TypeParseFailure) as info:
        parse_type('lv_coord_t lv_coord_t')
    assert info.value.literal == 'lv_coord_t lv_coord_t'


ARC_CREATE = (
    'extern "C" {\n'
    '    pub fn lv_arc_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;\n'
    '}\n'
)


def _loaded_names(items):
    return IR.from_source(items + ARC_CREATE).function_names()


def test_derive_attribute_before_pub_struct():
    items = (
        '#![allow(non_snake_case)]\n'
        '#[repr(C)]\n'
        '#[derive(Debug, Default, Copy, Clone)]\n'
        'pub struct lv_point_t {\n'
        '    pub x: lv_coord_t,\n'
        '    pub y: lv_coord_t,\n'
        '}\n'
    )
    assert _loaded_names(items) == ['lv_arc_create']


def test_doc_attribute_before_pub_type():
    items = (
        '#[doc = " Coordinate type"]\n'
        'pub type lv_coord_t = i16;\n'
        '#[doc = " Event callback"]\n'
        'pub type lv_event_cb_t = ::core::option::Option<unsafe extern "C" fn(e: *mut lv_event_t)>;\n'
    )
    assert _loaded_names(items) == ['lv_arc_create']


def test_pub_fields_and_consts():
    items = (
        'pub const LV_SYMBOL_OK: &[u8; 4usize] = b"\\xEF\\x80\\x8C\\0";\n'
        'pub static mut LV_COUNTER: u32 = 0;\n'
        'pub struct _lv_obj_spec_attr_t {\n'
        '    pub children: *mut *mut _lv_obj_t,\n'
        '    pub scroll: lv_point_t,\n'
        '    pub _bitfield_1: __BindgenBitfieldUnit<[u8; 1usize]>,\n'
        '}\n'
    )
    assert _loaded_names(items) == ['lv_arc_create']


def test_impl_with_where_clause():
    items = (
        '#[repr(C)]\n'
        'pub struct __BindgenBitfieldUnit<Storage> {\n'
        '    storage: Storage,\n'
        '}\n'
        'impl<Storage> __BindgenBitfieldUnit<Storage>\n'
        'where\n'
        '    Storage: AsRef<[u8]> + AsMut<[u8]>,\n'
        '{\n'
        '    #[inline]\n'
        '    pub fn get_bit(&self, index: usize) -> bool {\n'
        '        let byte_index = index / 8;\n'
        '        let byte = self.storage.as_ref()[byte_index];\n'
        '        byte & (1 << (index % 8)) == (1 << (index % 8))\n'
        '    }\n'
        '    pub const fn new(storage: Storage) -> Self {\n'
        '        Self { storage }\n'
        '    }\n'
        '}\n'
        'impl Default for lv_point_t {\n'
        '    fn default() -> Self {\n'
        '        let mut s = ::core::mem::MaybeUninit::<Self>::uninit();\n'
        '        unsafe {\n'
        '            ::core::ptr::write_bytes(s.as_mut_ptr(), 0, 1);\n'
        '            s.assume_init()\n'
        '        }\n'
        '    }\n'
        '}\n'
        'extern crate core;\n'
    )
    assert _loaded_names(items) == ['lv_arc_create']


def test_attributes_inside_extern_block():
    ir = IR.from_source(
        '#[link(name = "lvgl")]\n'
        'extern "C" {\n'
        '    #[doc = " Create an arc object"]\n'
        '    #[link_name = "\\u{1}_lv_arc_create"]\n'
        '    pub fn lv_arc_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;\n'
        '    #[doc = " Global counter"]\n'
        '    pub static mut lv_counter: u32;\n'
        '    pub fn lv_arc_set_value(obj: *mut lv_obj_t, value: i16);\n'
        '}\n'
        '#[doc = " Trailing alias"]\n'
        'pub type lv_arc_mode_t = u8;\n'
    )
    assert ir.function_names() == ['lv_arc_create', 'lv_arc_set_value']


def test_invalid_utf8_file_raises_parse_failure(tmp_path):
    path = tmp_path / 'bindings.rs'
    path.write_bytes(b'extern "C" { pub fn lv_init(); }\n// \xff\xfe\n')
    with pytest.raises(ParseFailure) as info:
        IR.load(str(path))
    assert 'UTF-8' in str(info.value)
