# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from mirrorgen.mirror import MirrorError, MirrorOptions, mirror_declaration, request_for
from mirrorgen.mirror.errors import DirectiveCountMismatch
from mirrorgen.parser import parse_source
from mirrorgen.parser.ast import NAMED, TUPLE
from mirrorgen.render import render_decl


def _mirror(src: str, options: MirrorOptions | None = None):
	options = options or MirrorOptions()
	decl = parse_source(src)[0]
	request = request_for(decl, options)
	assert request is not None
	return mirror_declaration(decl, request, options)


def test_named_record_remote() -> None:
	src = """
#[mirror(remote)]
#[serde(rename_all = "camelCase")]
pub struct Pair<'a, T: Clone> where T: Default {
    pub left: Vec<Inner>,
    right: &'a [T; 4],
    count: u64,
}
"""
	out = _mirror(src)
	assert out.name == "PairMirror"
	assert out.kind == NAMED
	assert [f.name for f in out.fields] == ["left", "right", "count"]
	assert render_decl(out) == (
		"#[derive(Mirror)]\n"
		"#[mirror(Pair)]\n"
		'#[serde(rename_all = "camelCase")]\n'
		"pub struct PairMirror<'a, T: Clone> where T: Default {\n"
		"    pub left: Vec<InnerMirror>,\n"
		"    right: &'a [T; 4],\n"
		"    count: u64,\n"
		"}"
	)


def test_type_parameters_are_passthrough_unless_annotated() -> None:
	src = """
#[mirror(remote)]
struct S<T> {
    a: T,
    #[mirror(field((T, mirror)))]
    b: T,
}
"""
	assert render_decl(_mirror(src)).splitlines()[2:5] == ["struct SMirror<T> {", "    a: T,", "    b: TMirror,"]


def test_doc_comments_are_copied() -> None:
	src = """
#[mirror(remote)]
/// doc
struct S {
    /// field doc
    a: Foo,
}
"""
	assert render_decl(_mirror(src)) == (
		"#[derive(Mirror)]\n"
		"#[mirror(S)]\n"
		"/// doc\n"
		"struct SMirror {\n"
		"    /// field doc\n"
		"    a: FooMirror,\n"
		"}"
	)


def test_positional_field_doc_renders_as_doc_attribute() -> None:
	src = """
#[mirror(remote)]
struct T(/// first
    pub Foo, u8);
"""
	assert render_decl(_mirror(src)).splitlines()[-1] == 'struct TMirror(#[doc = " first"] pub FooMirror, u8);'


def test_named_record_explicit_mode_only_touches_annotated_fields() -> None:
	src = """
#[mirror]
struct Ledger {
    #[mirror(field((Entry, mirror)))]
    entries: Vec<Entry>,
    owner: Account,
}
"""
	out = _mirror(src)
	assert render_decl(out) == (
		"#[derive(Mirror)]\n"
		"#[mirror(Ledger)]\n"
		"struct LedgerMirror {\n"
		"    entries: Vec<EntryMirror>,\n"
		"    owner: Account,\n"
		"}"
	)


def test_tuple_record_with_name_and_derives() -> None:
	src = "#[mirror(name = Wrapped, derive(Debug, Clone))]\npub struct Wrapper(pub Inner, #[serde(skip)] u8);\n"
	out = _mirror(src)
	assert out.kind == TUPLE
	assert render_decl(out) == (
		"#[derive(Mirror, Debug, Clone)]\n"
		"#[mirror(Wrapper)]\n"
		"pub struct Wrapped(pub Inner, #[serde(skip)] u8);"
	)


def test_derive_marker_can_be_disabled() -> None:
	out = _mirror("#[mirror]\nstruct Point { x: u8 }\n", MirrorOptions(derive_marker=""))
	assert [a.text for a in out.attrs] == ["#[mirror(Point)]"]


def test_custom_suffix_names_declaration() -> None:
	out = _mirror("#[mirror]\nstruct Point { x: u8 }\n", MirrorOptions(suffix="Redefined"))
	assert out.name == "PointRedefined"


def test_empty_named_record() -> None:
	out = _mirror("#[mirror(remote)]\nstruct Empty {}\n")
	assert render_decl(out).endswith("struct EmptyMirror {}")


def test_unit_record_is_rejected() -> None:
	with pytest.raises(MirrorError) as info:
		_mirror("#[mirror]\npub struct Marker;\n")
	assert info.value.loc is not None
	assert info.value.loc.line == 2


def test_first_failing_field_aborts_record() -> None:
	src = """
#[mirror]
struct Broken {
    ok: u8,
    #[mirror(field((A, mirror), (B, mirror)))]
    bad: A,
    #[mirror(field((C, D), (E, F)))]
    worse: C,
}
"""
	with pytest.raises(DirectiveCountMismatch) as info:
		_mirror(src)
	assert info.value.subject == "field `bad`"
	assert info.value.loc.line == 6


def test_input_declaration_is_untouched() -> None:
	decl = parse_source("#[mirror(remote)]\nstruct Pair { left: Inner }\n")[0]
	options = MirrorOptions()
	mirror_declaration(decl, request_for(decl, options), options)
	assert decl.name == "Pair"
	assert [a.text for a in decl.attrs] == ["#[mirror(remote)]"]
	assert decl.fields[0].type_expr.segments[0].name == "Inner"
