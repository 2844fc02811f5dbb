# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest
from lark.exceptions import UnexpectedInput

from mirrorgen.parser import AttributeSyntaxError, parse_source
from mirrorgen.parser.ast import NAMED, TUPLE, UNIT, ArrayType, Located, RecordDecl, UnionDecl
from mirrorgen.render import render_type

SRC = """
// leading comment
/* block
   comment */
pub(crate) struct Config<'a, T: Clone, const N: usize> {
    pub(super) name: &'a str, // trailing
    values: [T; N],
}

struct Wrapper<T>(T) where T: Copy;

pub struct Marker;

enum Level {
    Low = 1,
    High = 1 << 4,
}
"""


def test_parse_declarations_in_order() -> None:
	decls = parse_source(SRC)
	assert [d.name for d in decls] == ["Config", "Wrapper", "Marker", "Level"]
	assert [type(d) for d in decls] == [RecordDecl, RecordDecl, RecordDecl, UnionDecl]


def test_named_record() -> None:
	config = parse_source(SRC)[0]
	assert config.kind == NAMED
	assert config.visibility == "pub(crate)"
	assert config.loc == Located(line=5, column=19)
	assert config.generics.params == "<'a, T: Clone, const N: usize>"
	assert config.generics.type_params == ("T",)
	name, values = config.fields
	assert name.visibility == "pub(super)"
	assert name.name == "name"
	assert render_type(name.type_expr) == "&'a str"
	assert name.loc == Located(line=6, column=16)
	assert isinstance(values.type_expr, ArrayType)
	assert values.type_expr.length == "N"


def test_tuple_record_with_where_clause() -> None:
	wrapper = parse_source(SRC)[1]
	assert wrapper.kind == TUPLE
	assert wrapper.generics.params == "<T>"
	assert wrapper.generics.where_clause == "where T: Copy"
	assert [render_type(f.type_expr) for f in wrapper.fields] == ["T"]
	assert wrapper.fields[0].name is None


def test_unit_record() -> None:
	marker = parse_source(SRC)[2]
	assert marker.kind == UNIT
	assert marker.visibility == "pub"
	assert marker.fields == []


def test_union_discriminants() -> None:
	level = parse_source(SRC)[3]
	assert [v.kind for v in level.variants] == [UNIT, UNIT]
	assert [v.discriminant for v in level.variants] == ["1", "1 << 4"]


def test_attributes() -> None:
	src = """
#[derive(Debug, Clone)]
#[doc = "a [bracketed] doc"]
#[ mirror ( remote ) ]
struct A {
    #[serde(rename = "b")]
    b: u8,
}
"""
	decl = parse_source(src)[0]
	assert [a.path for a in decl.attrs] == ["derive", "doc", "mirror"]
	assert [a.args for a in decl.attrs] == ["Debug, Clone", None, "remote"]
	assert decl.attrs[2].is_mirror
	assert decl.attrs[0].loc == Located(line=2, column=1)
	assert decl.fields[0].attrs[0].text == '#[serde(rename = "b")]'


def test_doc_comments_are_attributes() -> None:
	src = """//! module docs, not attached
/// Record doc.
/** Block
    doc. */
//// four slashes is a plain comment
#[mirror(remote)]
struct S {
    /// field doc
    a: Foo,
}

enum E {
    /// first
    A,
    B(/// inner
      u8),
}
"""
	record, union = parse_source(src)
	assert [a.path for a in record.attrs] == ["doc", "doc", "mirror"]
	assert [a.text for a in record.attrs[:2]] == ["/// Record doc.", "/** Block\n    doc. */"]
	assert record.attrs[0].loc == Located(line=2, column=1)
	assert record.attrs[2].is_mirror
	assert [(a.path, a.text) for a in record.fields[0].attrs] == [("doc", "/// field doc")]
	assert [a.text for a in union.variants[0].attrs] == ["/// first"]
	assert union.variants[1].attrs == []
	assert [a.text for a in union.variants[1].fields[0].attrs] == ["/// inner"]


def test_nested_tokens_and_raw_identifiers() -> None:
	src = """
#[foo([[1]], "]")]
struct r#Match {
    r#type: r#Inner,
}

enum Code {
    A = foo(bar(1)),
    B = { 1 + { 2 } },
    C = [[0u8; 2]; 1].len() as isize,
}
"""
	record, union = parse_source(src)
	assert record.name == "r#Match"
	assert record.attrs[0].path == "foo"
	assert record.attrs[0].args == '[[1]], "]"'
	assert record.fields[0].name == "r#type"
	assert render_type(record.fields[0].type_expr) == "r#Inner"
	assert [v.discriminant for v in union.variants] == [
		"foo(bar(1))",
		"{ 1 + { 2 } }",
		"[[0u8; 2]; 1].len() as isize",
	]


def test_attribute_nesting_limit() -> None:
	with pytest.raises(UnexpectedInput):
		parse_source("#[a([[[1]]])] struct A;")


def test_field_named_like_visibility_keyword() -> None:
	decl = parse_source("struct A { public: u8, pub published: bool }")[0]
	assert [(f.visibility, f.name) for f in decl.fields] == [("", "public"), ("pub", "published")]


def test_trailing_commas_and_empty_bodies() -> None:
	decls = parse_source("struct A {}\nstruct B();\nenum C {}\nstruct D { x: u8, }\nenum E { X, }\n")
	assert [d.name for d in decls] == ["A", "B", "C", "D", "E"]
	assert decls[1].kind == TUPLE
	assert decls[1].fields == []
	assert len(decls[3].fields) == 1
	assert len(decls[4].variants) == 1


def test_empty_source() -> None:
	assert parse_source("") == []
	assert parse_source("// nothing here\n") == []


def test_syntax_error() -> None:
	with pytest.raises(UnexpectedInput):
		parse_source("struct {")
	with pytest.raises(UnexpectedInput):
		parse_source("struct A { x u8 }")


def test_unreadable_attribute() -> None:
	with pytest.raises(AttributeSyntaxError) as info:
		parse_source("\n#[] struct A;")
	assert info.value.loc == Located(line=2, column=1)
