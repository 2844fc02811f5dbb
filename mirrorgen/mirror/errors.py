# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Generation errors.

Every failure aborts the declaration being mirrored; the driver converts the
exception into one `mirror`-phase diagnostic and moves on to the next
declaration. Errors raised deep in the rewriter have no location; the field
transformer anchors them with `locate` on the way out.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from mirrorgen.parser.ast import Located, TypeExpr
from mirrorgen.render import render_type


class MirrorError(ValueError):
	"""Base class; also used directly for configuration errors."""

	code = "mirror-error"

	def __init__(self, message: str, *, loc: Optional[Located] = None) -> None:
		super().__init__(message)
		self.loc = loc
		self.subject: Optional[str] = None

	def locate(self, loc: Optional[Located], subject: str) -> "MirrorError":
		"""Attach the innermost location/subject that is still missing."""
		if self.loc is None:
			self.loc = loc
		if self.subject is None:
			self.subject = subject
		return self

	def __str__(self) -> str:
		message = super().__str__()
		return f"{self.subject}: {message}" if self.subject else message


class UnsupportedTypeShape(MirrorError):
	code = "unsupported-type-shape"

	def __init__(self, expr: TypeExpr, *, loc: Optional[Located] = None) -> None:
		self.expr = expr
		self.text = render_type(expr)
		super().__init__(f"cannot mirror {type(expr).__name__} `{self.text}`", loc=loc)


class DirectiveCountMismatch(MirrorError):
	"""A field's directive list has more entries than substitution points."""

	code = "directive-count-mismatch"

	def __init__(self, leftovers: Iterable[object], *, loc: Optional[Located] = None) -> None:
		self.leftovers: List[object] = list(leftovers)
		unused = ", ".join(str(d) for d in self.leftovers)
		super().__init__(
			f"`mirror(field(...))` must have one entry per substituted type; unused: {unused}",
			loc=loc,
		)


class MalformedAnnotation(MirrorError):
	code = "malformed-annotation"


__all__ = ["MirrorError", "UnsupportedTypeShape", "DirectiveCountMismatch", "MalformedAnnotation"]
