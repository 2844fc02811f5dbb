# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Field transformer: one field in, one mirrored field out.

- `#[mirror(field(...))]` on the field: rewrite with that directive queue
  (automatic mirroring off) and require the queue to drain.
- otherwise, in a remote declaration: rewrite with automatic mirroring.
- otherwise: keep the type as written.

Name, visibility and every non-`mirror` attribute are copied verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import FrozenSet, List, Optional

from lark.exceptions import UnexpectedInput

from mirrorgen.mirror.directives import Directive, DirectiveQueue
from mirrorgen.mirror.errors import DirectiveCountMismatch, MalformedAnnotation, MirrorError
from mirrorgen.mirror.options import MirrorOptions
from mirrorgen.mirror.rewriter import rewrite_type
from mirrorgen.parser.ast import Attribute, Field
from mirrorgen.parser.attrs import MirrorArgs, parse_mirror_args

logger = logging.getLogger(__name__)

FIELD_ITEM = "field"


def transform_field(
	field: Field,
	*,
	remote: bool,
	options: MirrorOptions,
	passthrough: FrozenSet[str] | None = None,
) -> Field:
	"""
	Return the mirrored copy of `field`.

	Raises `MirrorError` subclasses located at the field.
	"""
	try:
		return _transform(field, remote, options, passthrough)
	except MirrorError as err:
		raise err.locate(field.loc, field.label)


def _transform(
	field: Field,
	remote: bool,
	options: MirrorOptions,
	passthrough: FrozenSet[str] | None,
) -> Field:
	directives: Optional[List[Directive]] = None
	kept: List[Attribute] = []
	for attr in field.attrs:
		if not attr.is_mirror:
			kept.append(attr)
			continue
		if directives is not None:
			raise MalformedAnnotation("duplicate `mirror` attribute", loc=attr.loc)
		directives = field_directives(attr)

	if directives is not None:
		queue = DirectiveQueue(directives)
		new_type = rewrite_type(field.type_expr, queue, False, options, passthrough)
		if queue:
			raise DirectiveCountMismatch(queue.leftovers())
		logger.debug("%s: rewrote with %d directive(s)", field.label, len(directives))
	elif remote:
		new_type = rewrite_type(field.type_expr, DirectiveQueue(), True, options, passthrough)
		logger.debug("%s: rewrote automatically", field.label)
	else:
		new_type = field.type_expr
	return replace(field, type_expr=new_type, attrs=kept)


def field_directives(attr: Attribute) -> List[Directive]:
	"""Read the `field((Source, target), ...)` pairs of a field-level attribute."""
	args = parse_attr_args(attr)
	extra = [name for name in args.names() if name != FIELD_ITEM]
	if extra:
		raise MalformedAnnotation(f"unexpected item `{extra[0]}` in field-level `mirror` attribute", loc=attr.loc)
	item = args.get(FIELD_ITEM)
	if item is None:
		raise MalformedAnnotation("field-level `mirror` attribute needs `field((Type, target), ...)`", loc=attr.loc)
	if item.elems is None:
		raise MalformedAnnotation("`field` expects a list of `(Type, target)` pairs", loc=attr.loc)
	directives: List[Directive] = []
	for elem in item.elems:
		if not isinstance(elem, tuple):
			raise MalformedAnnotation(f"`field` entry `{elem}` is not a `(Type, target)` pair", loc=attr.loc)
		directives.append(Directive.from_pair(*elem))
	return directives


def parse_attr_args(attr: Attribute) -> MirrorArgs:
	"""Parse a `mirror` attribute's content, reporting syntax errors as `MalformedAnnotation`."""
	try:
		return parse_mirror_args(attr.args)
	except UnexpectedInput as err:
		raise MalformedAnnotation(f"malformed `{attr.text}`: {_short(err)}", loc=attr.loc) from err


def _short(err: UnexpectedInput) -> str:
	return str(err).strip().splitlines()[0]


__all__ = ["transform_field", "field_directives", "parse_attr_args"]
