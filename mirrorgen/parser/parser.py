# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Lark front-end for the declaration subset (`grammar.lark`).

The grammar produces lark trees; the `_build_*` helpers below adapt them to
`mirrorgen.parser.ast`. Opaque pieces (attribute tokens, generic parameter
lists, where clauses, array lengths) are recovered as source slices, which is
why most builders take the original source text alongside the tree.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import List, Optional

from lark import Lark, Token, Tree

from .ast import (
	DOC_PATH,
	NAMED,
	TUPLE,
	UNIT,
	AngleArgs,
	ArrayType,
	AssocArg,
	Attribute,
	ConstArg,
	Decl,
	Field,
	FnPtrType,
	GenericArg,
	Generics,
	InferType,
	LifetimeArg,
	Located,
	NeverType,
	ParenArgs,
	ParenType,
	PathSegment,
	PathType,
	PtrType,
	RecordDecl,
	RefType,
	SliceType,
	TraitObjectType,
	TupleType,
	TypeExpr,
	UnionDecl,
	Variant,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


def make_parser(start: str) -> Lark:
	"""Build an LALR parser over the shared grammar for the given start rule."""
	return Lark(
		GRAMMAR_SRC,
		parser="lalr",
		lexer="contextual",
		start=start,
		propagate_positions=True,
		maybe_placeholders=False,
	)


_PARSER = make_parser("source")
_TYPE_PARSER = make_parser("type_expr")

_ATTR_RE = re.compile(
	r"#\[\s*(?P<path>[A-Za-z_][A-Za-z0-9_]*(?:\s*::\s*[A-Za-z_][A-Za-z0-9_]*)*)\s*(?P<rest>.*)\]\Z",
	re.S,
)


class AttributeSyntaxError(ValueError):
	"""
	User-facing error for an attribute whose head cannot be read
	(`#[]`, `#[= x]`).

	The attribute body itself stays opaque; only the path is required.
	"""

	def __init__(self, message: str, *, loc: Located | None) -> None:
		super().__init__(message)
		self.loc = loc


def parse_source(source: str) -> List[Decl]:
	"""
	Parse a file of struct/enum declarations.

	Raises lark `UnexpectedInput` on syntax errors and `AttributeSyntaxError`
	on unreadable attributes; the driver turns both into diagnostics.
	"""
	tree = _PARSER.parse(source)
	return [_build_decl(child, source) for child in tree.children if isinstance(child, Tree)]


def parse_type(source: str) -> TypeExpr:
	"""Parse a single type expression, e.g. `&'a [Vec<Inner>; 4]`."""
	tree = _TYPE_PARSER.parse(source)
	return _build_type(tree, source)


def _build_decl(tree: Tree, src: str) -> Decl:
	attrs = _build_attributes(tree.children[0])
	vis = _visibility(tree)
	body = tree.children[-1]
	name_tok = _first_token(body, "NAME")
	loc = _loc_from_token(name_tok)
	generics_node = _child(body, "generics")
	if _name(body) == "struct_decl":
		shape = next(c for c in body.children if isinstance(c, Tree) and _name(c) in _STRUCT_BODIES)
		generics = _build_generics(generics_node, _child(shape, "where_clause"), src)
		kind = _STRUCT_BODIES[_name(shape)]
		fields_node = _child(shape, "named_fields") or _child(shape, "tuple_fields")
		return RecordDecl(
			name=name_tok.value,
			kind=kind,
			fields=_build_fields(fields_node, src) if fields_node is not None else [],
			generics=generics,
			visibility=vis,
			attrs=attrs,
			loc=loc,
		)
	generics = _build_generics(generics_node, _child(body, "where_clause"), src)
	variants_node = _child(body, "variants")
	variants = [_build_variant(v, src) for v in _trees(variants_node)] if variants_node is not None else []
	return UnionDecl(
		name=name_tok.value,
		variants=variants,
		generics=generics,
		visibility=vis,
		attrs=attrs,
		loc=loc,
	)


_STRUCT_BODIES = {"named_body": NAMED, "tuple_body": TUPLE, "unit_body": UNIT}


def _build_variant(tree: Tree, src: str) -> Variant:
	name_tok = _first_token(tree, "NAME")
	disc_tok = _first_token(tree, "DISCRIMINANT")
	fields_node = _child(tree, "named_fields") or _child(tree, "tuple_fields")
	if fields_node is None:
		kind = UNIT
	else:
		kind = NAMED if _name(fields_node) == "named_fields" else TUPLE
	return Variant(
		name=name_tok.value,
		kind=kind,
		fields=_build_fields(fields_node, src) if fields_node is not None else [],
		attrs=_build_attributes(tree.children[0]),
		discriminant=disc_tok.value[1:].strip() if disc_tok is not None else None,
		loc=_loc_from_token(name_tok),
	)


def _build_fields(tree: Tree, src: str) -> List[Field]:
	# Field order is the declared order; it drives both rendering and the
	# order in which per-field errors surface.
	fields: List[Field] = []
	for node in _trees(tree):
		type_node = node.children[-1]
		name_tok = _first_token(node, "NAME")
		if _name(node) == "named_field":
			loc = _loc_from_token(name_tok)
			name: Optional[str] = name_tok.value
		else:
			loc = _loc(type_node)
			name = None
		fields.append(
			Field(
				name=name,
				type_expr=_build_type(type_node, src),
				visibility=_visibility(node),
				attrs=_build_attributes(node.children[0]),
				loc=loc,
			)
		)
	return fields


def _build_attributes(tree: Tree) -> List[Attribute]:
	return [_build_attribute(tok) for tok in tree.children if isinstance(tok, Token)]


def _build_attribute(tok: Token) -> Attribute:
	loc = _loc_from_token(tok)
	if tok.type == "DOC_COMMENT":
		return Attribute(text=tok.value.rstrip(), path=DOC_PATH, loc=loc)
	m = _ATTR_RE.match(tok.value)
	if m is None:
		raise AttributeSyntaxError(f"malformed attribute `{tok.value}`", loc=loc)
	path = re.sub(r"\s+", "", m.group("path"))
	rest = m.group("rest").strip()
	args: Optional[str] = None
	if rest.startswith("(") and rest.endswith(")"):
		args = rest[1:-1].strip()
	return Attribute(text=tok.value, path=path, args=args, loc=loc)


def _build_generics(params: Optional[Tree], where: Optional[Tree], src: str) -> Generics:
	type_params: List[str] = []
	if params is not None:
		for param in _trees(params):
			if _name(param) == "type_param":
				type_params.append(_first_token(param, "NAME").value)
	return Generics(
		params=_source_text(params, src) if params is not None else "",
		where_clause=_source_text(where, src) if where is not None else "",
		type_params=tuple(type_params),
	)


def _build_type(node: Tree, src: str) -> TypeExpr:
	kind = _name(node)
	if kind == "type_expr":
		return _build_type(_trees(node)[0], src)
	if kind == "path_type":
		return _build_path(node, src)
	if kind == "ref_type":
		lifetime = _first_token(node, "LIFETIME")
		return RefType(
			element=_build_type(node.children[-1], src),
			mutable=_first_token(node, "MUT") is not None,
			lifetime=lifetime.value if lifetime is not None else None,
		)
	if kind == "array_type":
		elem, length = _trees(node)
		return ArrayType(element=_build_type(elem, src), length=_source_text(length, src))
	if kind == "slice_type":
		return SliceType(element=_build_type(_trees(node)[0], src))
	if kind == "tuple_type":
		return TupleType(elements=tuple(_build_type(c, src) for c in _trees(node)))
	if kind == "paren_type":
		return ParenType(element=_build_type(_trees(node)[0], src))
	if kind == "ptr_type":
		return PtrType(element=_build_type(node.children[-1], src), mutable=_first_token(node, "MUT") is not None)
	if kind == "fn_ptr_type":
		inputs, output = _split_arrow(node, src)
		return FnPtrType(inputs=inputs, output=output)
	if kind == "trait_object":
		keyword = node.children[0]
		return TraitObjectType(keyword=keyword.value, bounds=_source_text(node.children[-1], src))
	if kind == "never_type":
		return NeverType()
	if kind == "infer_type":
		return InferType()
	raise ValueError(f"unexpected type node {kind}")


def _build_path(node: Tree, src: str) -> PathType:
	leading = bool(node.children) and isinstance(node.children[0], Token)
	segments = []
	for seg in _trees(node):
		name_tok = seg.children[0]
		args_node = seg.children[1] if len(seg.children) > 1 else None
		segments.append(PathSegment(name=name_tok.value, args=_build_args(args_node, src)))
	return PathType(segments=tuple(segments), leading_colons=leading)


def _build_args(node: Optional[Tree], src: str) -> Optional[AngleArgs | ParenArgs]:
	if node is None:
		return None
	if _name(node) == "paren_args":
		inputs, output = _split_arrow(node, src)
		return ParenArgs(inputs=inputs, output=output)
	args: List[GenericArg] = []
	for arg in _trees(node):
		kind = _name(arg)
		if kind == "lifetime_arg":
			args.append(LifetimeArg(text=arg.children[0].value))
		elif kind == "const_arg":
			args.append(ConstArg(text=" ".join(arg.children[0].value.split())))
		elif kind == "assoc_arg":
			args.append(AssocArg(name=arg.children[0].value, type_expr=_build_type(arg.children[-1], src)))
		else:
			args.append(_build_type(arg, src))
	return AngleArgs(args=tuple(args))


def _split_arrow(node: Tree, src: str) -> tuple[tuple[TypeExpr, ...], Optional[TypeExpr]]:
	"""Split `(A, B) -> C` children into input types and the optional output."""
	inputs: List[TypeExpr] = []
	output: Optional[TypeExpr] = None
	seen_arrow = False
	for child in node.children:
		if isinstance(child, Token):
			seen_arrow = seen_arrow or child.type == "RARROW"
		elif seen_arrow:
			output = _build_type(child, src)
		else:
			inputs.append(_build_type(child, src))
	return tuple(inputs), output


def _visibility(tree: Tree) -> str:
	tok = _first_token(tree, "VIS")
	if tok is None:
		return ""
	# `pub ( crate )` -> `pub(crate)`; `pub(in a::b)` keeps its inner space.
	return re.sub(r"\s*([()])\s*", r"\1", " ".join(tok.value.split()))


def _source_text(node: Tree, src: str) -> str:
	meta = node.meta
	if getattr(meta, "empty", True):
		return ""
	return " ".join(src[meta.start_pos:meta.end_pos].split())


def _child(tree: Tree, name: str) -> Optional[Tree]:
	return next((c for c in tree.children if isinstance(c, Tree) and _name(c) == name), None)


def _trees(tree: Tree) -> List[Tree]:
	return [c for c in tree.children if isinstance(c, Tree)]


def _first_token(tree: Tree, type_name: str) -> Optional[Token]:
	return next((c for c in tree.children if isinstance(c, Token) and c.type == type_name), None)


def _loc(tree: Tree) -> Located:
	meta = tree.meta
	return Located(line=meta.line, column=meta.column)


def _loc_from_token(token: Token) -> Located:
	return Located(line=token.line, column=token.column)


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


__all__ = ["parse_source", "parse_type", "make_parser", "AttributeSyntaxError", "GRAMMAR_SRC"]
