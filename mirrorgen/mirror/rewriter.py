# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Type-expression rewriter.

`rewrite_type` walks a field type and decides, for every path segment, whether
to rename it (mirror suffix, explicit target) or leave it alone, consuming the
field's `DirectiveQueue` as it goes. Traversal order is left to right and
outer to inner, which is also the order directives are matched positionally.

Only paths, arrays, slices and references are rewritable. Any other shape
raises `UnsupportedTypeShape`; there is no best-effort output.
"""

from __future__ import annotations

from dataclasses import replace
from typing import FrozenSet, List

from mirrorgen.mirror.directives import DirectiveQueue
from mirrorgen.mirror.errors import UnsupportedTypeShape
from mirrorgen.mirror.options import MirrorOptions
from mirrorgen.parser.ast import (
	AngleArgs,
	ArrayType,
	GenericArg,
	ParenArgs,
	PathSegment,
	PathType,
	RefType,
	SliceType,
	TypeExpr,
)


def rewrite_type(
	expr: TypeExpr,
	queue: DirectiveQueue,
	auto_mirror: bool,
	options: MirrorOptions,
	passthrough: FrozenSet[str] | None = None,
) -> TypeExpr:
	"""
	Return a rewritten copy of `expr`.

	`queue` is shared by every recursive call for one field (siblings consume
	it left to right). `passthrough` is the set of names automatic mirroring
	keeps; it defaults to the option's primitive set.
	"""
	if passthrough is None:
		passthrough = options.passthrough()
	if isinstance(expr, PathType):
		segments = [_rewrite_segment(seg, queue, auto_mirror, options, passthrough) for seg in expr.segments]
		return replace(expr, segments=tuple(segments))
	if isinstance(expr, ArrayType):
		return replace(expr, element=rewrite_type(expr.element, queue, auto_mirror, options, passthrough))
	if isinstance(expr, SliceType):
		return replace(expr, element=rewrite_type(expr.element, queue, auto_mirror, options, passthrough))
	if isinstance(expr, RefType):
		return replace(expr, element=rewrite_type(expr.element, queue, auto_mirror, options, passthrough))
	raise UnsupportedTypeShape(expr)


def _rewrite_segment(
	seg: PathSegment,
	queue: DirectiveQueue,
	auto_mirror: bool,
	options: MirrorOptions,
	passthrough: FrozenSet[str],
) -> PathSegment:
	new_name = queue.resolve(
		seg.name,
		has_args=seg.args is not None,
		auto_mirror=auto_mirror,
		suffix=options.suffix,
		compat=options.compat,
		passthrough=passthrough,
	)
	if new_name is not None:
		# A renamed (or explicitly kept) segment is consumed whole, arguments included.
		return replace(seg, name=new_name)
	if isinstance(seg.args, AngleArgs):
		args: List[GenericArg] = []
		for arg in seg.args.args:
			if isinstance(arg, TypeExpr):
				arg = rewrite_type(arg, queue, auto_mirror, options, passthrough)
			args.append(arg)
		return replace(seg, args=AngleArgs(args=tuple(args)))
	if isinstance(seg.args, ParenArgs):
		inputs = tuple(rewrite_type(t, queue, auto_mirror, options, passthrough) for t in seg.args.inputs)
		output = seg.args.output
		if output is not None and not options.compat:
			output = rewrite_type(output, queue, auto_mirror, options, passthrough)
		return replace(seg, args=ParenArgs(inputs=inputs, output=output))
	return seg


__all__ = ["rewrite_type"]
