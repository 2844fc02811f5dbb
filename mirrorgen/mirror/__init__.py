# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Mirror generation engine.

Layers, leaves first: directive queue -> type rewriter -> field transformer
-> record/union assemblers. `mirror_declaration` is the entry point for one
parsed declaration.
"""

from __future__ import annotations

from mirrorgen.parser.ast import Decl, RecordDecl, UnionDecl

from .directives import Directive, DirectiveMode, DirectiveQueue
from .errors import DirectiveCountMismatch, MalformedAnnotation, MirrorError, UnsupportedTypeShape
from .fields import transform_field
from .options import MirrorOptions
from .records import mirror_record
from .request import MirrorRequest, output_attrs, request_for
from .rewriter import rewrite_type
from .unions import mirror_union


def mirror_declaration(decl: Decl, request: MirrorRequest, options: MirrorOptions | None = None) -> Decl:
	"""Generate the mirror of one record or union declaration."""
	options = options or MirrorOptions()
	if isinstance(decl, RecordDecl):
		return mirror_record(decl, request, options)
	if isinstance(decl, UnionDecl):
		return mirror_union(decl, request, options)
	raise TypeError(f"cannot mirror {type(decl).__name__}")


__all__ = [
	"Directive",
	"DirectiveMode",
	"DirectiveQueue",
	"DirectiveCountMismatch",
	"MalformedAnnotation",
	"MirrorError",
	"UnsupportedTypeShape",
	"MirrorOptions",
	"MirrorRequest",
	"mirror_declaration",
	"mirror_record",
	"mirror_union",
	"output_attrs",
	"request_for",
	"rewrite_type",
	"transform_field",
]
