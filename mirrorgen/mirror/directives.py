# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Per-field directive queue.

A field annotated with

	#[mirror(field((Inner, mirror), (Other, same), (Leaf, Target)))]

gets a fresh `DirectiveQueue` holding those pairs in declaration order. The
rewriter consumes entries while walking the field's type left to right; the
queue must be empty once the walk is done.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Deque, FrozenSet, Iterable, Iterator, List, Optional

logger = logging.getLogger(__name__)

MIRROR_KEYWORD = "mirror"
SAME_KEYWORD = "same"


class DirectiveMode(Enum):
	MIRROR = "mirror"  # substitute `{name}{suffix}`
	SAME = "same"  # keep the name
	EXPLICIT = "explicit"  # substitute `target`


@dataclass(frozen=True)
class Directive:
	source: str
	mode: DirectiveMode
	target: Optional[str] = None

	@staticmethod
	def from_pair(source: str, target: str) -> "Directive":
		"""Interpret one `(Source, target)` pair from an annotation."""
		if target == MIRROR_KEYWORD:
			return Directive(source=source, mode=DirectiveMode.MIRROR)
		if target == SAME_KEYWORD:
			return Directive(source=source, mode=DirectiveMode.SAME)
		return Directive(source=source, mode=DirectiveMode.EXPLICIT, target=target)

	@property
	def target_key(self) -> str:
		"""The second element of the pair as written (keyword or name)."""
		if self.mode is DirectiveMode.EXPLICIT:
			assert self.target is not None
			return self.target
		return self.mode.value

	def apply(self, name: str, suffix: str) -> str:
		if self.mode is DirectiveMode.MIRROR:
			return f"{name}{suffix}"
		if self.mode is DirectiveMode.SAME:
			return name
		if self.mode is DirectiveMode.EXPLICIT:
			assert self.target is not None
			return self.target
		raise AssertionError(f"unhandled directive mode {self.mode}")

	def __str__(self) -> str:
		return f"({self.source}, {self.target_key})"


class DirectiveQueue:
	"""
	Ordered, consumable directive list owned by one field rewrite.

	Resolution of a path segment (`resolve`):
	1. an entry anywhere in the queue whose source equals the segment name is
	   applied and removed;
	2. otherwise a segment with generic arguments is left for the caller to
	   walk;
	3. otherwise (compat only) the front entry is dequeued and discarded; it
	   cannot match here since step 1 would have found it;
	4. otherwise, with automatic mirroring on, non-passthrough names get the
	   mirror suffix.
	"""

	def __init__(self, directives: Iterable[Directive] = ()) -> None:
		self._items: Deque[Directive] = deque(directives)

	def __len__(self) -> int:
		return len(self._items)

	def __bool__(self) -> bool:
		return bool(self._items)

	def __iter__(self) -> Iterator[Directive]:
		return iter(self._items)

	def __repr__(self) -> str:
		return f"DirectiveQueue([{', '.join(str(d) for d in self._items)}])"

	def find(self, name: str) -> Optional[Directive]:
		return next((d for d in self._items if d.source == name), None)

	def pop_front(self) -> Optional[Directive]:
		return self._items.popleft() if self._items else None

	def consume(self, directive: Directive, *, compat: bool) -> None:
		"""
		Remove a matched directive.

		compat: drop every entry sharing the matched source name or the matched
		target key. Otherwise drop exactly the first occurrence.
		"""
		if compat:
			self._items = deque(
				d for d in self._items if d.source != directive.source and d.target_key != directive.target_key
			)
		else:
			self._items.remove(directive)

	def leftovers(self) -> List[Directive]:
		return list(self._items)

	def resolve(
		self,
		name: str,
		*,
		has_args: bool,
		auto_mirror: bool,
		suffix: str,
		compat: bool,
		passthrough: FrozenSet[str],
	) -> Optional[str]:
		"""
		Return the new name for a segment, or None when the segment's own
		arguments must be walked instead.
		"""
		named = self.find(name)
		if named is not None:
			self.consume(named, compat=compat)
			return named.apply(name, suffix)
		if has_args:
			return None
		front = self.pop_front() if compat else None
		if front is not None:
			logger.debug("discarding directive %s at segment `%s`", front, name)
			return name
		if auto_mirror and name not in passthrough:
			return f"{name}{suffix}"
		return name


__all__ = ["Directive", "DirectiveMode", "DirectiveQueue", "MIRROR_KEYWORD", "SAME_KEYWORD"]
