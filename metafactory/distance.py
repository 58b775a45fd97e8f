# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Hierarchy distance between a provided argument type and a declared parameter type.

Rules:
- Same type: 0.
- Declared primitive/boxed pair: 0.
- Otherwise 1 + the shortest distance from the parent or any interface.
- No structural path but a virtual subtype (e.g. `list` registered with
  `collections.abc.Sequence`): 1.
- No path: UNRELATED.

The metric is directional. Callers always score the provided argument type
(candidate) against the declared parameter type (target), never the reverse.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

from metafactory.core.types_protocol import TypeCatalog, TypeHandle

# Distance sentinel for "no parent/interface chain reaches the target".
UNRELATED = None

Distance = Optional[int]


class DistanceScorer:
	"""
	Score candidate/target pairs over one catalog.

	With `cache=True` results are memoized per `(candidate, target)`, which
	keeps repeated scoring of shared ancestor chains linear. Entries are
	deterministic, so concurrent writers can only store the same value.
	"""

	def __init__(self, catalog: TypeCatalog, *, cache: bool = True) -> None:
		self._catalog = catalog
		self._cache: Optional[Dict[Tuple[TypeHandle, TypeHandle], Distance]] = {} if cache else None

	@property
	def catalog(self) -> TypeCatalog:
		return self._catalog

	def distance(self, candidate: Optional[TypeHandle], target: TypeHandle) -> Distance:
		"""Return the hop count from `candidate` up to `target`, or UNRELATED."""
		if candidate is None:
			return UNRELATED
		if self._cache is None:
			return self._compute(candidate, target)
		key = (candidate, target)
		if key in self._cache:
			return self._cache[key]
		dist = self._compute(candidate, target)
		self._cache[key] = dist
		return dist

	def _compute(self, candidate: TypeHandle, target: TypeHandle) -> Distance:
		if candidate == target:
			return 0
		if self._catalog.is_equivalent_primitive(candidate, target):
			return 0
		best: Distance = UNRELATED
		for up in (self._catalog.parent_of(candidate), *self._catalog.interfaces_of(candidate)):
			dist = self.distance(up, target)
			if dist is not UNRELATED and (best is UNRELATED or dist < best):
				best = dist
		if best is UNRELATED:
			# No structural path; a virtual (registered) subtype counts as one interface hop.
			return 1 if self._catalog.is_virtual_subtype(candidate, target) else UNRELATED
		return best + 1

	def is_assignable(self, candidate: TypeHandle, target: TypeHandle) -> bool:
		return self.distance(candidate, target) is not UNRELATED

	def clear(self) -> None:
		if self._cache is not None:
			self._cache.clear()


__all__ = ["UNRELATED", "Distance", "DistanceScorer"]
