# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Parser for the token content of `#[mirror(...)]` attributes.

Shares `grammar.lark` with the declaration parser (start rule `mirror_args`).
The result is purely structural: which items are allowed where, and what
they mean, is decided by `mirrorgen.mirror`.

	remote, name = PairMirror, derive(Debug, serde::Serialize)
	field((Inner, mirror), (Other, same), (Leaf, Target))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from lark import Token, Tree

from .parser import make_parser

_ATTR_PARSER = make_parser("mirror_args")

MirrorElem = Union[str, Tuple[str, str]]


@dataclass
class MirrorItem:
	"""
	One comma-separated item of a mirror attribute.

	- flag:  `remote`            -> value None, elems None
	- value: `name = PairMirror` -> value "PairMirror"
	- list:  `field((A, B))`     -> elems [("A", "B")]; paths are strings
	"""

	name: str
	value: Optional[str] = None
	elems: Optional[List[MirrorElem]] = None

	@property
	def is_flag(self) -> bool:
		return self.value is None and self.elems is None


@dataclass
class MirrorArgs:
	items: List[MirrorItem] = field(default_factory=list)

	def get(self, name: str) -> Optional[MirrorItem]:
		return next((item for item in self.items if item.name == name), None)

	def names(self) -> List[str]:
		return [item.name for item in self.items]


def parse_mirror_args(text: Optional[str]) -> MirrorArgs:
	"""
	Parse `remote, field((A, B))`-style content into ordered items.

	`text` is the attribute's parenthesized content (None for a bare
	`#[mirror]`). Raises lark `UnexpectedInput` on malformed content.
	"""
	tree = _ATTR_PARSER.parse(text or "")
	return MirrorArgs(items=[_build_item(node) for node in tree.children if isinstance(node, Tree)])


def _build_item(node: Tree) -> MirrorItem:
	kind = node.data
	names = [tok.value for tok in node.children if isinstance(tok, Token)]
	if kind == "mirror_flag":
		return MirrorItem(name=names[0])
	if kind == "mirror_value":
		return MirrorItem(name=names[0], value=names[1])
	elems: List[MirrorElem] = []
	elems_node = next((c for c in node.children if isinstance(c, Tree)), None)
	if elems_node is not None:
		for elem in elems_node.children:
			parts = [tok.value for tok in elem.children if isinstance(tok, Token) and tok.type == "NAME"]
			if elem.data == "mirror_pair":
				elems.append((parts[0], parts[1]))
			else:
				elems.append("::".join(parts))
	return MirrorItem(name=names[0], elems=elems)


__all__ = ["MirrorArgs", "MirrorItem", "MirrorElem", "parse_mirror_args"]
