# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Names that automatic mirroring never suffixes.

Scalar primitives plus the std leaf types that have no mirrored counterpart.
Container types (`Vec`, `Option`, `HashMap`, ...) do not need to be listed:
a segment with generic arguments is walked, not renamed.
"""

from __future__ import annotations

from typing import FrozenSet

SCALAR_PRIMITIVES: FrozenSet[str] = frozenset(
	{
		"bool",
		"char",
		"str",
		"u8",
		"u16",
		"u32",
		"u64",
		"u128",
		"usize",
		"i8",
		"i16",
		"i32",
		"i64",
		"i128",
		"isize",
		"f32",
		"f64",
	}
)

WELL_KNOWN: FrozenSet[str] = frozenset(
	{
		"String",
		"Self",
		"PathBuf",
		"Duration",
		"Instant",
		"SystemTime",
		"PhantomData",
		"Ordering",
	}
)

PRIMITIVE_NAMES: FrozenSet[str] = SCALAR_PRIMITIVES | WELL_KNOWN


__all__ = ["SCALAR_PRIMITIVES", "WELL_KNOWN", "PRIMITIVE_NAMES"]
