# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Declaration-level mirror requests.

	#[mirror(remote, name = PairMirror, derive(Debug, Clone))]
	pub struct Pair { ... }

`remote` turns on automatic mirroring for fields without their own
directives, `name` overrides the mirror declaration name and `derive` adds
derives to the generated declaration. The output declaration carries

	#[derive(Mirror, Debug, Clone)]
	#[mirror(Pair)]

the derive (marker first) and the linkage annotation naming the original.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from mirrorgen.mirror.errors import MalformedAnnotation
from mirrorgen.mirror.fields import parse_attr_args
from mirrorgen.mirror.options import MirrorOptions
from mirrorgen.parser.ast import Attribute, Decl

REMOTE_ITEM = "remote"
NAME_ITEM = "name"
DERIVE_ITEM = "derive"


@dataclass(frozen=True)
class MirrorRequest:
	original: str
	mirror_name: str
	remote: bool = False
	derives: tuple = ()


def request_for(decl: Decl, options: MirrorOptions) -> Optional[MirrorRequest]:
	"""
	Read the declaration's `mirror` attribute.

	Returns None for an unmarked declaration unless `include_unmarked` is set,
	in which case an explicit-mode request with the default name is made.
	"""
	attrs = [a for a in decl.attrs if a.is_mirror]
	if not attrs:
		if not options.include_unmarked:
			return None
		return MirrorRequest(original=decl.name, mirror_name=options.mirror_name(decl.name))
	if len(attrs) > 1:
		raise MalformedAnnotation("duplicate declaration-level `mirror` attribute", loc=attrs[1].loc)
	attr = attrs[0]
	args = parse_attr_args(attr)
	remote = False
	mirror_name = options.mirror_name(decl.name)
	derives: List[str] = []
	seen: set[str] = set()
	for item in args.items:
		if item.name in seen:
			raise MalformedAnnotation(f"duplicate `{item.name}` in `mirror` attribute", loc=attr.loc)
		seen.add(item.name)
		if item.name == REMOTE_ITEM and item.is_flag:
			remote = True
		elif item.name == NAME_ITEM and item.value is not None:
			mirror_name = item.value
		elif item.name == DERIVE_ITEM and item.elems is not None:
			for elem in item.elems:
				if not isinstance(elem, str):
					raise MalformedAnnotation("`derive` expects trait paths", loc=attr.loc)
				derives.append(elem)
		else:
			raise MalformedAnnotation(f"unexpected item `{item.name}` in `mirror` attribute", loc=attr.loc)
	return MirrorRequest(original=decl.name, mirror_name=mirror_name, remote=remote, derives=tuple(derives))


def output_attrs(decl: Decl, request: MirrorRequest, options: MirrorOptions) -> List[Attribute]:
	"""Derive + linkage annotations followed by the declaration's own non-`mirror` attributes."""
	attrs: List[Attribute] = []
	derives = ([options.derive_marker] if options.derive_marker else []) + list(request.derives)
	if derives:
		attrs.append(Attribute.synthesize("derive", ", ".join(derives)))
	attrs.append(Attribute.synthesize("mirror", request.original))
	attrs.extend(a for a in decl.attrs if not a.is_mirror)
	return attrs


__all__ = ["MirrorRequest", "request_for", "output_attrs"]
