# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Front-end for mirrorgen: lark grammar, declaration AST and the
`#[mirror(...)]` content parser.
"""

from __future__ import annotations

from . import ast
from .attrs import MirrorArgs, MirrorItem, parse_mirror_args
from .parser import AttributeSyntaxError, parse_source, parse_type

__all__ = [
	"ast",
	"AttributeSyntaxError",
	"MirrorArgs",
	"MirrorItem",
	"parse_mirror_args",
	"parse_source",
	"parse_type",
]
