# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Constructor resolution atop ConstructorIndex and DistanceScorer.

This module applies the selection rules:
- Arity must match exactly.
- Every slot must be reachable: distance(provided[k], declared[k]) is not UNRELATED.
- The candidate with the smallest summed distance wins.
- Ties go to the earliest discovered constructor (lowest ordinal).

It returns a single ConstructorDescriptor or raises ConstructorNotFoundError.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

from metafactory.constructor_index import ConstructorDescriptor, ConstructorIndex
from metafactory.core.errors import ConstructorNotFoundError
from metafactory.core.types_protocol import TypeHandle
from metafactory.distance import UNRELATED, DistanceScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CandidateScore:
	"""Per-candidate outcome; `total` is None when some slot is unrelated."""

	constructor: ConstructorDescriptor
	total: Optional[int]


def score_constructor(
	scorer: DistanceScorer, ctor: ConstructorDescriptor, arg_types: Sequence[TypeHandle]
) -> Optional[int]:
	"""Sum of slot distances, or None if the arity differs or any slot is unrelated."""
	if ctor.arity != len(arg_types):
		return None
	total = 0
	for provided, declared in zip(arg_types, ctor.param_types):
		dist = scorer.distance(provided, declared)
		if dist is UNRELATED:
			return None
		total += dist
	return total


def score_candidates(
	index: ConstructorIndex, scorer: DistanceScorer, target: TypeHandle, arg_types: Sequence[TypeHandle]
) -> List[CandidateScore]:
	"""Score every arity-matching constructor of `target` (in discovery order)."""
	return [
		CandidateScore(constructor=ctor, total=score_constructor(scorer, ctor, arg_types))
		for ctor in index.with_arity(target, len(arg_types))
	]


def format_signature(index: ConstructorIndex, target: TypeHandle, arg_types: Sequence[TypeHandle]) -> str:
	catalog = index.catalog
	return f"{catalog.name_of(target)}({', '.join(catalog.name_of(t) for t in arg_types)})"


def resolve_constructor(
	index: ConstructorIndex,
	scorer: DistanceScorer,
	target: TypeHandle,
	arg_types: Sequence[TypeHandle],
) -> ConstructorDescriptor:
	arg_types = tuple(arg_types)
	best: Optional[CandidateScore] = None
	for cand in score_candidates(index, scorer, target, arg_types):
		logger.debug("candidate %s scored %s", cand.constructor.signature(), cand.total)
		if cand.total is None:
			continue
		# Strict `<` keeps the earliest candidate on ties; candidates arrive in ordinal order.
		if best is None or cand.total < best.total:  # type: ignore[operator]
			best = cand
	if best is None:
		raise ConstructorNotFoundError(
			f"no constructor found to match: {format_signature(index, target, arg_types)}"
		)
	logger.debug(
		"resolved %s to %s (distance %d)",
		format_signature(index, target, arg_types),
		best.constructor.signature(),
		best.total,
	)
	return best.constructor


__all__ = [
	"CandidateScore",
	"score_constructor",
	"score_candidates",
	"format_signature",
	"resolve_constructor",
]
