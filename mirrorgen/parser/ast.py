# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration AST consumed by the mirror generator.

Type expressions are immutable (frozen dataclasses holding tuples): the
rewriter builds new trees with `dataclasses.replace` and never edits the
parsed input. Declarations and fields are plain dataclasses; they live for a
single generation pass.

Pieces the generator never inspects (attribute tokens, generic parameter
lists, where clauses, array lengths, discriminants) are kept as source text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union


@dataclass(frozen=True)
class Located:
	line: int
	column: int


class TypeExpr:
	"""Base class for every type expression shape."""


@dataclass(frozen=True)
class LifetimeArg:
	"""A lifetime generic argument (`'a`), passed through untouched."""

	text: str


@dataclass(frozen=True)
class ConstArg:
	"""A const generic argument (`3`, `{ N + 1 }`), passed through untouched."""

	text: str


@dataclass(frozen=True)
class AssocArg:
	"""An associated type binding (`Item = T`), passed through untouched."""

	name: str
	type_expr: TypeExpr


GenericArg = Union[TypeExpr, LifetimeArg, ConstArg, AssocArg]


@dataclass(frozen=True)
class AngleArgs:
	args: Tuple[GenericArg, ...] = ()


@dataclass(frozen=True)
class ParenArgs:
	"""Function-trait style arguments: `Fn(A, B) -> C`."""

	inputs: Tuple[TypeExpr, ...] = ()
	output: Optional[TypeExpr] = None


@dataclass(frozen=True)
class PathSegment:
	name: str
	args: Optional[Union[AngleArgs, ParenArgs]] = None


@dataclass(frozen=True)
class PathType(TypeExpr):
	"""A possibly qualified named type, e.g. `std::vec::Vec<Inner>`."""

	segments: Tuple[PathSegment, ...]
	leading_colons: bool = False

	@staticmethod
	def named(*names: str) -> "PathType":
		"""Construct an argument-less path from bare segment names."""
		return PathType(segments=tuple(PathSegment(name=n) for n in names))


@dataclass(frozen=True)
class ArrayType(TypeExpr):
	element: TypeExpr
	length: str


@dataclass(frozen=True)
class SliceType(TypeExpr):
	element: TypeExpr


@dataclass(frozen=True)
class RefType(TypeExpr):
	element: TypeExpr
	mutable: bool = False
	lifetime: Optional[str] = None


# Shapes below are parsed and rendered but the rewriter has no rule for them.


@dataclass(frozen=True)
class TupleType(TypeExpr):
	elements: Tuple[TypeExpr, ...] = ()


@dataclass(frozen=True)
class ParenType(TypeExpr):
	element: TypeExpr


@dataclass(frozen=True)
class PtrType(TypeExpr):
	element: TypeExpr
	mutable: bool = False


@dataclass(frozen=True)
class FnPtrType(TypeExpr):
	inputs: Tuple[TypeExpr, ...] = ()
	output: Optional[TypeExpr] = None


@dataclass(frozen=True)
class TraitObjectType(TypeExpr):
	keyword: str  # "dyn" or "impl"
	bounds: str


@dataclass(frozen=True)
class NeverType(TypeExpr):
	pass


@dataclass(frozen=True)
class InferType(TypeExpr):
	pass


DOC_PATH = "doc"


@dataclass(frozen=True)
class Attribute:
	"""
	An outer attribute `#[path(args)]`, or a doc comment (`/// text`,
	`/** text */`) with path `doc`.

	`text` is the verbatim source of the whole attribute. `args` holds the
	token text between the outermost parentheses, or None when the attribute
	has no parenthesized arguments (`#[non_exhaustive]`, `#[doc = "x"]`).
	"""

	text: str
	path: str
	args: Optional[str] = None
	loc: Optional[Located] = None

	@property
	def is_mirror(self) -> bool:
		return self.path == "mirror"

	@property
	def inline_text(self) -> str:
		"""
		Text that can be followed by more tokens on the same line: a `///`
		comment becomes the equivalent `#[doc = "..."]`.
		"""
		if not self.text.startswith("///"):
			return self.text
		body = self.text[3:].replace("\\", "\\\\").replace('"', '\\"')
		return f'#[{DOC_PATH} = "{body}"]'

	@staticmethod
	def synthesize(path: str, args: Optional[str] = None) -> "Attribute":
		"""Build an attribute that has no source location (generator output)."""
		text = f"#[{path}({args})]" if args is not None else f"#[{path}]"
		return Attribute(text=text, path=path, args=args)


@dataclass(frozen=True)
class Generics:
	"""
	Generic parameter list and where clause of a declaration.

	`params` includes the angle brackets (`<'a, T: Clone>`) and is empty when
	the declaration is not generic. `type_params` lists the declared type
	parameter names (`T`), which automatic mirroring leaves untouched.
	"""

	params: str = ""
	where_clause: str = ""
	type_params: Tuple[str, ...] = ()


@dataclass
class Field:
	"""One named (`name` set) or positional (`name` None) field."""

	name: Optional[str]
	type_expr: TypeExpr
	visibility: str = ""
	attrs: List[Attribute] = field(default_factory=list)
	loc: Optional[Located] = None

	@property
	def label(self) -> str:
		return f"field `{self.name}`" if self.name is not None else "positional field"


# Field shapes shared by records and variants.
NAMED = "named"
TUPLE = "tuple"
UNIT = "unit"


@dataclass
class RecordDecl:
	name: str
	kind: str  # NAMED, TUPLE or UNIT
	fields: List[Field] = field(default_factory=list)
	generics: Generics = field(default_factory=Generics)
	visibility: str = ""
	attrs: List[Attribute] = field(default_factory=list)
	loc: Optional[Located] = None


@dataclass
class Variant:
	name: str
	kind: str  # NAMED, TUPLE or UNIT
	fields: List[Field] = field(default_factory=list)
	attrs: List[Attribute] = field(default_factory=list)
	discriminant: Optional[str] = None
	loc: Optional[Located] = None


@dataclass
class UnionDecl:
	name: str
	variants: List[Variant] = field(default_factory=list)
	generics: Generics = field(default_factory=Generics)
	visibility: str = ""
	attrs: List[Attribute] = field(default_factory=list)
	loc: Optional[Located] = None


Decl = Union[RecordDecl, UnionDecl]


__all__ = [
	"Located",
	"TypeExpr",
	"LifetimeArg",
	"ConstArg",
	"AssocArg",
	"GenericArg",
	"AngleArgs",
	"ParenArgs",
	"PathSegment",
	"PathType",
	"ArrayType",
	"SliceType",
	"RefType",
	"TupleType",
	"ParenType",
	"PtrType",
	"FnPtrType",
	"TraitObjectType",
	"NeverType",
	"InferType",
	"Attribute",
	"Generics",
	"Field",
	"NAMED",
	"TUPLE",
	"UNIT",
	"RecordDecl",
	"Variant",
	"UnionDecl",
	"Decl",
]
