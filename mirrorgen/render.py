# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Render declarations and type expressions back to source text.

Output uses canonical spacing: `Vec<A, B>`, `&'a mut T`, `[T; N]`, four-space
indentation inside declaration bodies and a trailing comma after every named
field and variant. Opaque pieces (attributes, generics, discriminants) are
emitted as stored.
"""

from __future__ import annotations

from typing import List

from mirrorgen.parser.ast import (
	NAMED,
	TUPLE,
	AngleArgs,
	ArrayType,
	AssocArg,
	ConstArg,
	Decl,
	Field,
	FnPtrType,
	GenericArg,
	Generics,
	InferType,
	LifetimeArg,
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

INDENT = "    "


def render_type(expr: TypeExpr) -> str:
	if isinstance(expr, PathType):
		prefix = "::" if expr.leading_colons else ""
		return prefix + "::".join(render_segment(seg) for seg in expr.segments)
	if isinstance(expr, RefType):
		out = "&"
		if expr.lifetime:
			out += f"{expr.lifetime} "
		if expr.mutable:
			out += "mut "
		return out + render_type(expr.element)
	if isinstance(expr, ArrayType):
		return f"[{render_type(expr.element)}; {expr.length}]"
	if isinstance(expr, SliceType):
		return f"[{render_type(expr.element)}]"
	if isinstance(expr, TupleType):
		if len(expr.elements) == 1:
			return f"({render_type(expr.elements[0])},)"
		return "(" + ", ".join(render_type(e) for e in expr.elements) + ")"
	if isinstance(expr, ParenType):
		return f"({render_type(expr.element)})"
	if isinstance(expr, PtrType):
		return ("*mut " if expr.mutable else "*const ") + render_type(expr.element)
	if isinstance(expr, FnPtrType):
		return "fn" + _render_fn_args(expr.inputs, expr.output)
	if isinstance(expr, TraitObjectType):
		return f"{expr.keyword} {expr.bounds}"
	if isinstance(expr, NeverType):
		return "!"
	if isinstance(expr, InferType):
		return "_"
	raise TypeError(f"cannot render {type(expr).__name__}")


def render_segment(seg: PathSegment) -> str:
	if isinstance(seg.args, AngleArgs):
		return f"{seg.name}<" + ", ".join(render_generic_arg(a) for a in seg.args.args) + ">"
	if isinstance(seg.args, ParenArgs):
		return seg.name + _render_fn_args(seg.args.inputs, seg.args.output)
	return seg.name


def render_generic_arg(arg: GenericArg) -> str:
	if isinstance(arg, (LifetimeArg, ConstArg)):
		return arg.text
	if isinstance(arg, AssocArg):
		return f"{arg.name} = {render_type(arg.type_expr)}"
	return render_type(arg)


def _render_fn_args(inputs, output) -> str:
	out = "(" + ", ".join(render_type(t) for t in inputs) + ")"
	if output is not None:
		out += f" -> {render_type(output)}"
	return out


def render_field(f: Field, *, inline: bool = False) -> str:
	"""
	Render one field. Named fields outside an inline body put each attribute
	on its own line; positional fields and inline bodies keep them in front.
	"""
	head = f"{f.visibility} " if f.visibility else ""
	body = f"{f.name}: {render_type(f.type_expr)}" if f.name is not None else render_type(f.type_expr)
	if inline or f.name is None:
		return "".join(f"{a.inline_text} " for a in f.attrs) + head + body
	return "".join(f"{a.text}\n{INDENT}" for a in f.attrs) + head + body


def render_decl(decl: Decl) -> str:
	lines = [a.text for a in decl.attrs]
	head = f"{decl.visibility} " if decl.visibility else ""
	if isinstance(decl, RecordDecl):
		lines.append(head + f"struct {decl.name}{decl.generics.params}" + _render_record_body(decl))
	elif isinstance(decl, UnionDecl):
		lines.append(head + f"enum {decl.name}{decl.generics.params}{_where(decl.generics, ' ')}" + " {")
		for variant in decl.variants:
			lines.extend(f"{INDENT}{a.text}" for a in variant.attrs)
			lines.append(f"{INDENT}{render_variant(variant)},")
		lines.append("}")
	else:
		raise TypeError(f"cannot render {type(decl).__name__}")
	return "\n".join(lines)


def render_variant(variant: Variant) -> str:
	out = variant.name
	if variant.kind == NAMED:
		out += " { " + ", ".join(render_field(f, inline=True) for f in variant.fields) + " }"
	elif variant.kind == TUPLE:
		out += "(" + ", ".join(render_field(f) for f in variant.fields) + ")"
	if variant.discriminant is not None:
		out += f" = {variant.discriminant}"
	return out


def render_decls(decls: List[Decl]) -> str:
	return "\n\n".join(render_decl(d) for d in decls) + ("\n" if decls else "")


def _render_record_body(decl: RecordDecl) -> str:
	generics = decl.generics
	if decl.kind == NAMED:
		if not decl.fields:
			return f"{_where(generics, ' ')} {{}}"
		lines = [f"{_where(generics, ' ')} {{"]
		lines.extend(f"{INDENT}{render_field(f)}," for f in decl.fields)
		lines.append("}")
		return "\n".join(lines)
	if decl.kind == TUPLE:
		fields = ", ".join(render_field(f) for f in decl.fields)
		return f"({fields}){_where(generics, ' ')};"
	return f"{_where(generics, ' ')};"


def _where(generics: Generics, sep: str) -> str:
	return f"{sep}{generics.where_clause}" if generics.where_clause else ""


__all__ = [
	"render_type",
	"render_segment",
	"render_generic_arg",
	"render_field",
	"render_decl",
	"render_decls",
	"render_variant",
]
