# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import collections.abc
import ctypes
import numbers

import pytest

from metafactory.core.reflect_catalog import ReflectiveCatalog
from metafactory.core.types_core import TypeTable
from metafactory.distance import UNRELATED, DistanceScorer
from metafactory.test_support import samples


def _java_like_table():
	table = TypeTable()
	obj = table.ensure_object()
	serializable = table.new_interface("Serializable")
	comparable = table.new_interface("Comparable")
	char_seq = table.new_interface("CharSequence")
	number = table.new_class("Number", obj, [serializable])
	integer = table.new_class("Integer", number, [comparable])
	string = table.new_class("String", obj, [serializable, comparable, char_seq])
	int_prim = table.new_primitive("int")
	table.declare_boxing(int_prim, integer)
	return table, dict(
		obj=obj,
		serializable=serializable,
		comparable=comparable,
		char_seq=char_seq,
		number=number,
		integer=integer,
		string=string,
		int=int_prim,
	)


@pytest.mark.parametrize("cache", [True, False])
def test_distance_to_self_is_zero(cache):
	table, t = _java_like_table()
	scorer = DistanceScorer(table, cache=cache)
	for ty in t.values():
		assert scorer.distance(ty, ty) == 0
	reflective = DistanceScorer(ReflectiveCatalog(), cache=cache)
	for cls in (object, int, samples.Pet, samples.Named):
		assert reflective.distance(cls, cls) == 0


def test_boxing_pairs_are_zero_in_both_directions():
	table, t = _java_like_table()
	scorer = DistanceScorer(table)
	assert scorer.distance(t["int"], t["integer"]) == 0
	assert scorer.distance(t["integer"], t["int"]) == 0
	reflective = DistanceScorer(ReflectiveCatalog())
	assert reflective.distance(int, ctypes.c_int) == 0
	assert reflective.distance(ctypes.c_int, int) == 0


def test_single_inheritance_chain_counts_hops():
	table, t = _java_like_table()
	scorer = DistanceScorer(table)
	assert scorer.distance(t["integer"], t["number"]) == 1
	assert scorer.distance(t["integer"], t["obj"]) == 2
	reflective = DistanceScorer(ReflectiveCatalog())
	assert reflective.distance(samples.Dog, samples.Animal) == 2
	assert reflective.distance(samples.Dog, object) == 3
	assert reflective.distance(bool, int) == 1


def test_interfaces_count_as_one_hop_and_shortest_path_wins():
	table, t = _java_like_table()
	scorer = DistanceScorer(table)
	assert scorer.distance(t["string"], t["char_seq"]) == 1
	# Integer -> Comparable directly (1) beats Integer -> Number -> Serializable (2).
	assert scorer.distance(t["integer"], t["comparable"]) == 1
	assert scorer.distance(t["integer"], t["serializable"]) == 2
	reflective = DistanceScorer(ReflectiveCatalog())
	assert reflective.distance(samples.Pet, samples.Named) == 1
	assert reflective.distance(samples.Pet, samples.Trained) == 1
	# Pet -> Trained -> object (2) beats the long way through Dog.
	assert reflective.distance(samples.Pet, object) == 2


def test_unrelated_types_and_directionality():
	table, t = _java_like_table()
	scorer = DistanceScorer(table)
	assert scorer.distance(t["string"], t["integer"]) is UNRELATED
	assert scorer.distance(t["obj"], t["string"]) is UNRELATED
	assert scorer.distance(t["int"], t["obj"]) is UNRELATED  # primitives have no parent
	reflective = DistanceScorer(ReflectiveCatalog())
	assert reflective.distance(samples.Animal, samples.Dog) is UNRELATED
	assert reflective.distance(samples.Rock, samples.Animal) is UNRELATED
	assert reflective.distance(int, float) is UNRELATED
	assert reflective.distance(None, object) is UNRELATED


def test_cache_is_memo_only():
	table, t = _java_like_table()
	cached = DistanceScorer(table, cache=True)
	uncached = DistanceScorer(table, cache=False)
	for a in t.values():
		for b in t.values():
			assert cached.distance(a, b) == uncached.distance(a, b)
	cached.clear()
	assert cached.distance(t["integer"], t["obj"]) == 2
	assert cached.is_assignable(t["string"], t["obj"])
	assert not cached.is_assignable(t["obj"], t["string"])


def test_abc_registration_counts_as_one_hop():
	scorer = DistanceScorer(ReflectiveCatalog())
	# list and tuple never name Sequence among their bases; they are registered with it.
	assert scorer.distance(list, collections.abc.Sequence) == 1
	assert scorer.distance(tuple, collections.abc.Sequence) == 1
	assert scorer.distance(int, numbers.Number) == 1
	assert scorer.distance(bool, numbers.Number) == 2  # bool -> int -> Number
	assert scorer.distance(dict, collections.abc.Sequence) is UNRELATED
	assert scorer.distance(collections.abc.Sequence, list) is UNRELATED


def test_registered_graph_has_no_virtual_subtypes():
	table, t = _java_like_table()
	for a in t.values():
		for b in t.values():
			assert table.is_virtual_subtype(a, b) is False
