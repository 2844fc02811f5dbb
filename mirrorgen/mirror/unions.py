# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Tagged-union assembler.

Variant fields go through the field transformer with the union's `remote`
flag; unit variants, discriminants and variant attributes are copied as
written.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import FrozenSet

from mirrorgen.mirror.errors import MirrorError
from mirrorgen.mirror.fields import transform_field
from mirrorgen.mirror.options import MirrorOptions
from mirrorgen.mirror.request import MirrorRequest, output_attrs
from mirrorgen.parser.ast import UNIT, UnionDecl, Variant

logger = logging.getLogger(__name__)


def mirror_union(decl: UnionDecl, request: MirrorRequest, options: MirrorOptions) -> UnionDecl:
	passthrough = options.passthrough(decl.generics.type_params)
	variants = [_mirror_variant(v, request.remote, options, passthrough) for v in decl.variants]
	logger.debug("mirrored enum %s -> %s (%d variant(s))", decl.name, request.mirror_name, len(variants))
	return UnionDecl(
		name=request.mirror_name,
		variants=variants,
		generics=decl.generics,
		visibility=decl.visibility,
		attrs=output_attrs(decl, request, options),
		loc=decl.loc,
	)


def _mirror_variant(
	variant: Variant,
	remote: bool,
	options: MirrorOptions,
	passthrough: FrozenSet[str],
) -> Variant:
	attrs = [a for a in variant.attrs if not a.is_mirror]
	if variant.kind == UNIT:
		return replace(variant, attrs=attrs)
	try:
		fields = [transform_field(f, remote=remote, options=options, passthrough=passthrough) for f in variant.fields]
	except MirrorError as err:
		# Keep the field location; name the variant in the message.
		err.subject = f"variant `{variant.name}`, {err.subject}" if err.subject else f"variant `{variant.name}`"
		raise
	return replace(variant, fields=fields, attrs=attrs)


__all__ = ["mirror_union"]
