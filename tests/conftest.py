"""Shared fixtures: a trimmed rust-bindgen output of LVGL."""

from pathlib import Path

import pytest

BINDINGS = '''\
/* automatically generated by rust-bindgen 0.59.2 */

#![allow(non_camel_case_types)]
#![allow(non_upper_case_globals)]

pub const LV_ANIM_OFF: u32 = 0;
pub type lv_coord_t = i16;
pub type lv_part_t = u32;
pub type lv_event_cb_t = ::core::option::Option<unsafe extern "C" fn(e: *mut lv_event_t)>;
#[repr(C)]
#[derive(Debug, Copy, Clone)]
pub struct _lv_obj_t {
    pub parent: *mut _lv_obj_t,
    pub user_data: *mut cty::c_void,
    pub flags: u32,
}
pub type lv_obj_t = _lv_obj_t;
impl Default for _lv_obj_t {
    fn default() -> Self {
        unsafe { ::core::mem::zeroed() }
    }
}
extern "C" {
    pub static mut lv_global_counter: u32;
}
extern "C" {
    pub fn lv_init();
}
extern "C" {
    pub fn lv_obj_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;
}
extern "C" {
    pub fn lv_obj_set_pos(obj: *mut lv_obj_t, x: lv_coord_t, y: lv_coord_t);
}
extern "C" {
    pub fn lv_obj_get_width(obj: *const lv_obj_t) -> lv_coord_t;
}
extern "C" {
    pub fn lv_obj_get_parent(obj: *const lv_obj_t) -> *mut lv_obj_t;
}
extern "C" {
    pub fn lv_obj_del(obj: *mut lv_obj_t);
}
extern "C" {
    pub fn lv_arc_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;
}
extern "C" {
    pub fn lv_arc_set_bg_end_angle(arc: *mut lv_obj_t, end: u16);
}
extern "C" {
    pub fn lv_arc_rotate_obj_to_angle(
        obj: *const lv_obj_t,
        obj_to_rotate: *mut lv_obj_t,
        r_offset: lv_coord_t,
    );
}
extern "C" {
    #[doc = " Set a new text for a label."]
    pub fn lv_label_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;
}
extern "C" {
    pub fn lv_label_set_text(label: *mut lv_obj_t, text: *const cty::c_char);
}
extern "C" {
    pub fn lv_label_set_text_fmt(label: *mut lv_obj_t, fmt: *const cty::c_char, ...);
}
extern "C" {
    pub fn lv_label_get_text(label: *const lv_obj_t) -> *mut cty::c_char;
}
extern "C" {
    pub fn lv_label_get_recolor(label: *const lv_obj_t) -> bool;
}
extern "C" {
    pub fn lv_btnmatrix_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;
}
extern "C" {
    pub fn lv_btnmatrix_set_map(obj: *mut lv_obj_t, map: *mut *const cty::c_char);
}
extern "C" {
    pub fn lv_btnmatrix_set_one_checked(obj: *mut lv_obj_t, en: bool);
}
extern "C" {
    pub fn lv_btn_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;
}
extern "C" {
    pub fn lv_dropdown_create(parent: *mut lv_obj_t) -> *mut lv_obj_t;
}
extern "C" {
    pub fn lv_dropdown_get_selected_str(obj: *const lv_obj_t, buf: *mut cty::c_char, buf_size: u32);
}
extern "C" {
    pub fn lv_img_set_src(obj: *mut lv_obj_t, src: *const cty::c_void);
}
extern "C" {
    pub fn memcpy(dst: *mut cty::c_void, src: *const cty::c_void, n: usize) -> *mut cty::c_void;
}
'''


@pytest.fixture
def bindings_source() -> str:
    return BINDINGS


@pytest.fixture
def bindings_path(tmp_path: Path) -> Path:
    path = tmp_path / 'bindings.rs'
    path.write_text(BINDINGS, encoding='utf-8')
    return path
