# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
mirrorc: generate mirror declarations for a source file.

Pipeline per file:

source -> parse_source (parser phase)
       -> for each declaration: request_for + mirror_declaration (mirror phase)
       -> render_decls

A declaration that fails produces one diagnostic and no output; the remaining
declarations are still generated so a single run reports every failure.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from lark.exceptions import UnexpectedInput

from mirrorgen.core.diagnostics import Diagnostic, has_errors
from mirrorgen.core.span import Span
from mirrorgen.mirror import MirrorError, MirrorOptions, mirror_declaration, request_for
from mirrorgen.parser import AttributeSyntaxError, parse_source
from mirrorgen.parser.ast import Decl
from mirrorgen.render import render_decls

logger = logging.getLogger(__name__)


@dataclass
class GenerateResult:
	decls: List[Decl] = field(default_factory=list)
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def ok(self) -> bool:
		return not has_errors(self.diagnostics)

	def text(self) -> str:
		return render_decls(self.decls)


def generate(source: str, *, options: MirrorOptions | None = None, file: Optional[str] = None) -> GenerateResult:
	"""Mirror every marked declaration in `source`, collecting diagnostics."""
	options = options or MirrorOptions()
	result = GenerateResult()
	try:
		decls = parse_source(source)
	except AttributeSyntaxError as err:
		result.diagnostics.append(
			Diagnostic(message=str(err), code="attribute-syntax", phase="parser", span=Span.from_loc(err.loc, file=file))
		)
		return result
	except UnexpectedInput as err:
		span = Span(file=file, line=getattr(err, "line", None), column=getattr(err, "column", None), raw=err)
		result.diagnostics.append(Diagnostic(message=str(err).strip(), code="syntax", phase="parser", span=span))
		return result

	for decl in decls:
		try:
			request = request_for(decl, options)
			if request is None:
				logger.debug("skipping unmarked declaration %s", decl.name)
				continue
			result.decls.append(mirror_declaration(decl, request, options))
		except MirrorError as err:
			logger.debug("mirroring %s failed: %s", decl.name, err)
			result.diagnostics.append(
				Diagnostic(
					message=f"cannot generate mirror of `{decl.name}`: {err}",
					code=err.code,
					phase="mirror",
					span=Span.from_loc(err.loc or decl.loc, file=file),
				)
			)
	return result


def generate_file(path: Path, *, options: MirrorOptions | None = None) -> GenerateResult:
	return generate(path.read_text(encoding="utf-8"), options=options, file=str(path))


def _io_error(path: Path, reason: str) -> Diagnostic:
	return Diagnostic(message=f"cannot read {path}: {reason}", code="io", phase="io", span=Span(file=str(path)))


def main(argv: list[str] | None = None) -> int:
	"""
	CLI: mirror the declarations of one or more files.

	Generated source goes to stdout (or `-o`). With --json, prints
	{"exit_code", "diagnostics"} and no source; otherwise diagnostics go to
	stderr as `file:line:col: severity: message`.
	"""
	parser = argparse.ArgumentParser(prog="mirrorc", description="Generate mirror type declarations")
	parser.add_argument("source", type=Path, nargs="+", help="Path(s) to declaration source file(s)")
	parser.add_argument("-o", "--output", type=Path, help="Write generated declarations to this path")
	parser.add_argument("--suffix", default="Mirror", help="Suffix appended to mirrored names (default: Mirror)")
	parser.add_argument(
		"--compat",
		action="store_true",
		help="Historical directive handling (broad removal, positional discard, Fn outputs untouched)",
	)
	parser.add_argument(
		"--primitive",
		dest="primitives",
		action="append",
		default=[],
		metavar="NAME",
		help="Extra type name automatic mirroring leaves untouched (repeatable)",
	)
	parser.add_argument("--no-derive", action="store_true", help="Do not add the derive marker to generated declarations")
	parser.add_argument("--all", action="store_true", help="Also mirror declarations without a `mirror` attribute")
	parser.add_argument("--json", action="store_true", help="Emit diagnostics as JSON")
	parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging to stderr")
	args = parser.parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s %(name)s: %(message)s",
	)
	options = MirrorOptions(
		suffix=args.suffix,
		compat=args.compat,
		extra_primitives=frozenset(args.primitives),
		derive_marker="" if args.no_derive else "Mirror",
		include_unmarked=args.all,
	)

	decls: List[Decl] = []
	diagnostics: List[Diagnostic] = []
	for path in args.source:
		try:
			result = generate_file(path, options=options)
		except OSError as err:
			diagnostics.append(_io_error(path, err.strerror))
			continue
		except UnicodeDecodeError as err:
			diagnostics.append(_io_error(path, f"not valid UTF-8 (byte {err.start})"))
			continue
		decls.extend(result.decls)
		diagnostics.extend(result.diagnostics)

	exit_code = 1 if has_errors(diagnostics) else 0
	if args.json:
		print(json.dumps({"exit_code": exit_code, "diagnostics": [d.to_json() for d in diagnostics]}))
	else:
		for d in diagnostics:
			print(d.format(), file=sys.stderr)
	if exit_code:
		return exit_code

	text = render_decls(decls)
	if args.output is not None:
		args.output.write_text(text)
	elif not args.json:
		sys.stdout.write(text)
	return 0


__all__ = ["GenerateResult", "generate", "generate_file", "main"]
