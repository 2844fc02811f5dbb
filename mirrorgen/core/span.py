# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source positions attached to diagnostics.

The parser hands out `Located(line, column)`; lark errors carry their own
`line`/`column`. Both are folded into a `Span`, which adds the file name the
driver knows about and keeps the original object in `raw`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""File, 1-based line and column; any part may be unknown."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	raw: Any = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Build a Span from a `Located`, a lark error or another Span.

		`file` only fills a missing file name; it never overrides one the
		location already carries.
		"""
		if isinstance(loc, cls):
			return loc.with_file(file)
		span = cls(file=file, raw=loc)
		if loc is not None:
			span = replace(span, line=getattr(loc, "line", None), column=getattr(loc, "column", None))
		return span.with_file(getattr(loc, "file", None)) if span.file is None else span

	def with_file(self, file: Optional[str]) -> "Span":
		if self.file is not None or file is None:
			return self
		return replace(self, file=file)

	def describe(self) -> str:
		parts = [self.file or "<input>"]
		parts += [str(v) if v is not None else "?" for v in (self.line, self.column)]
		return ":".join(parts)


__all__ = ["Span"]
