# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Generator configuration shared by every declaration of one run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Iterable

from mirrorgen.core.primitives import PRIMITIVE_NAMES


@dataclass(frozen=True)
class MirrorOptions:
	"""
	Knobs for one generation run.

	`compat` reproduces the historical directive handling byte for byte:
	- a named match also drops every other directive sharing its source name
	  or its target,
	- an unmatched argument-less segment consumes (and discards) the front
	  directive,
	- `Fn(A) -> B` outputs are not rewritten.
	With `compat` off, exactly the matched directive is consumed, unmatched
	segments consume nothing (leftovers fail the exhaustion check) and
	function outputs are rewritten like inputs.
	"""

	suffix: str = "Mirror"
	compat: bool = False
	extra_primitives: FrozenSet[str] = field(default_factory=frozenset)
	derive_marker: str = "Mirror"
	include_unmarked: bool = False

	def mirror_name(self, name: str) -> str:
		return f"{name}{self.suffix}"

	def passthrough(self, type_params: Iterable[str] = ()) -> FrozenSet[str]:
		"""Names automatic mirroring leaves alone for a declaration."""
		return PRIMITIVE_NAMES | self.extra_primitives | frozenset(type_params)


__all__ = ["MirrorOptions"]
