# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from mirrorgen.parser import parse_source, parse_type
from mirrorgen.render import render_decls, render_type

CANONICAL = """#[derive(Debug)]
pub struct Pair<T> {
    #[serde(default)]
    pub left: Vec<T>,
    right: HashMap<String, &'static [u8; 4]>,
}

struct Unit;

struct Empty {}

pub(crate) struct Wrapper<T>(pub T, Option<Box<T>>) where T: Copy;

pub enum Shape {
    Unit,
    Circle { radius: f64 },
    Poly(Vec<Point>, u8),
    Tagged = 7,
}
"""


def test_canonical_source_renders_unchanged() -> None:
	assert render_decls(parse_source(CANONICAL)) == CANONICAL


def test_render_decls_empty() -> None:
	assert render_decls([]) == ""


@pytest.mark.parametrize(
	"src, expected",
	[
		("Vec < u8 >", "Vec<u8>"),
		("( u8 , )", "(u8,)"),
		("& 'a mut  T", "&'a mut T"),
		("fn(u8)->u8", "fn(u8) -> u8"),
		("Box<dyn  Fn(u8)  + Send>", "Box<dyn Fn(u8) + Send>"),
		("[u8 ; N * 2]", "[u8; N * 2]"),
		("Iterator<Item=u8>", "Iterator<Item = u8>"),
		(":: std :: io :: Error", "::std::io::Error"),
		("*mut [u8]", "*mut [u8]"),
	],
)
def test_type_rendering_is_canonical(src: str, expected: str) -> None:
	assert render_type(parse_type(src)) == expected
