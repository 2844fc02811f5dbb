# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared core pieces: spans, diagnostics, primitive names."""

from .diagnostics import Diagnostic, has_errors
from .primitives import PRIMITIVE_NAMES
from .span import Span

__all__ = ["Diagnostic", "has_errors", "PRIMITIVE_NAMES", "Span"]
