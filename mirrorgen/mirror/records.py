# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Record assembler: mirrors a struct with named or positional fields."""

from __future__ import annotations

import logging

from mirrorgen.mirror.errors import MirrorError
from mirrorgen.mirror.fields import transform_field
from mirrorgen.mirror.options import MirrorOptions
from mirrorgen.mirror.request import MirrorRequest, output_attrs
from mirrorgen.parser.ast import NAMED, TUPLE, RecordDecl

logger = logging.getLogger(__name__)


def mirror_record(decl: RecordDecl, request: MirrorRequest, options: MirrorOptions) -> RecordDecl:
	"""
	Build the mirror of `decl`: same shape, generics and visibility, fields
	transformed in declaration order.
	"""
	if decl.kind not in (NAMED, TUPLE):
		raise MirrorError(
			f"cannot mirror `{decl.name}`: expected a struct with named or positional fields",
			loc=decl.loc,
		)
	passthrough = options.passthrough(decl.generics.type_params)
	fields = [
		transform_field(f, remote=request.remote, options=options, passthrough=passthrough) for f in decl.fields
	]
	logger.debug("mirrored struct %s -> %s (%d field(s))", decl.name, request.mirror_name, len(fields))
	return RecordDecl(
		name=request.mirror_name,
		kind=decl.kind,
		fields=fields,
		generics=decl.generics,
		visibility=decl.visibility,
		attrs=output_attrs(decl, request, options),
		loc=decl.loc,
	)


__all__ = ["mirror_record"]
