# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
mirrorgen: generate structurally parallel "mirror" declarations.

Given a struct or enum declaration, produce a second declaration whose field
types are substituted per `#[mirror(...)]` directives, linked back to the
original with `#[mirror(Original)]`.

Packages:
  parser: lark grammar, declaration AST, `mirror(...)` content parser
  mirror: directive queue, type rewriter, field/record/union assemblers
  core:   spans, diagnostics, primitive names
"""

__all__ = ["core", "mirror", "parser", "render", "mirrorc"]
