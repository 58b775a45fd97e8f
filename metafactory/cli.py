# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Inspection CLI over the reflective catalog.

  python -m metafactory describe pkg.mod.Point
  python -m metafactory resolve pkg.mod.Point int int

With --json, prints a structured payload with an exit_code; otherwise prints
human-readable lines (errors go to stderr).
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Any, Dict, List

from metafactory.config import MetafactoryConfig
from metafactory.constructor_index import ConstructorDescriptor
from metafactory.core.errors import ClassCreationError
from metafactory.meta_class import open_class
from metafactory.resolver import format_signature, score_candidates


def _ctor_to_json(ctor: ConstructorDescriptor) -> Dict[str, Any]:
	return {
		"name": ctor.name,
		"signature": ctor.signature(),
		"arity": ctor.arity,
		"params": [{"name": n, "type": t} for n, t in zip(ctor.param_names, ctor.param_type_names)],
		"public": ctor.is_public,
		"ordinal": ctor.ordinal,
	}


def _describe(args: argparse.Namespace) -> Dict[str, Any]:
	meta = open_class(args.identifier, config=MetafactoryConfig.from_env())
	ctors = meta.index.constructors_of(meta.target)
	return {"exit_code": 0, "type": meta.name, "constructors": [_ctor_to_json(c) for c in ctors]}


def _resolve(args: argparse.Namespace) -> Dict[str, Any]:
	meta = open_class(args.identifier, config=MetafactoryConfig.from_env())
	arg_types = [meta.catalog.lookup(n) for n in args.types]
	scores = score_candidates(meta.index, meta.scorer, meta.target, arg_types)
	fact = meta.build_factory(*arg_types)
	return {
		"exit_code": 0,
		"request": format_signature(meta.index, meta.target, arg_types),
		"selected": _ctor_to_json(fact.constructor),
		"candidates": [{"signature": s.constructor.signature(), "distance": s.total} for s in scores],
	}


def _print_human(command: str, payload: Dict[str, Any]) -> None:
	if command == "describe":
		print(payload["type"])
		for ctor in payload["constructors"]:
			vis = "" if ctor["public"] else "  [restricted]"
			print(f"  #{ctor['ordinal']} {ctor['signature']}{vis}")
		return
	print(f"{payload['request']} -> {payload['selected']['signature']}")
	for cand in payload["candidates"]:
		dist = "unrelated" if cand["distance"] is None else cand["distance"]
		print(f"  {cand['signature']}: {dist}")


def main(argv: List[str] | None = None) -> int:
	parser = argparse.ArgumentParser(prog="metafactory", description="inspect constructor resolution")
	parser.add_argument("--json", action="store_true", help="Emit structured JSON output")
	parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
	sub = parser.add_subparsers(dest="command", required=True)
	p_desc = sub.add_parser("describe", help="List the constructors of a type")
	p_desc.add_argument("identifier", help="Type identifier (builtin name or dotted path)")
	p_res = sub.add_parser("resolve", help="Show which constructor a signature selects")
	p_res.add_argument("identifier", help="Type identifier (builtin name or dotted path)")
	p_res.add_argument("types", nargs="*", help="Argument type identifiers, in order")
	args = parser.parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

	handler = _describe if args.command == "describe" else _resolve
	try:
		payload = handler(args)
	except (ClassCreationError, ValueError) as exc:
		if args.json:
			print(json.dumps({"exit_code": 1, "error": {"kind": type(exc).__name__, "message": str(exc)}}))
		else:
			print(f"{type(exc).__name__}: {exc}", file=sys.stderr)
		return 1
	if args.json:
		print(json.dumps(payload))
	else:
		_print_human(args.command, payload)
	return 0


__all__ = ["main"]
