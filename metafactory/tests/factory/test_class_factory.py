# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from metafactory.constructor_index import ConstructorIndex
from metafactory.core.errors import (
	ArgumentMismatchError,
	ClassCastError,
	ConstructorNotFoundError,
	InvocationError,
)
from metafactory.core.reflect_catalog import ReflectiveCatalog
from metafactory.core.types_core import TypeTable
from metafactory.distance import DistanceScorer
from metafactory.factory import ClassFactory
from metafactory.test_support import samples


def _tools(cat=None):
	if cat is None:
		cat = ReflectiveCatalog()
	return ConstructorIndex(cat), DistanceScorer(cat)


def test_independent_factories_are_equal_and_hash_equal():
	cat = ReflectiveCatalog()
	a = ClassFactory.resolve(*_tools(cat), samples.Point, [int, int])
	b = ClassFactory.resolve(*_tools(cat), samples.Point, [int, int])
	assert a is not b
	assert a == b
	assert hash(a) == hash(b)
	assert len({a, b}) == 1


def test_equality_uses_requested_signature():
	index, scorer = _tools()
	by_int = ClassFactory.resolve(index, scorer, samples.Point, [int, int])
	by_bool = ClassFactory.resolve(index, scorer, samples.Point, [bool, int])
	assert by_int.constructor is by_bool.constructor
	assert by_int != by_bool
	assert by_int != ClassFactory.resolve(index, scorer, samples.Window, [int, int])
	assert by_int != "Point"


def test_factory_is_immutable_and_reusable():
	fact = ClassFactory.resolve(*_tools(), samples.Point, [int, int])
	with pytest.raises(AttributeError):
		fact.target = samples.Window  # type: ignore[misc]
	with pytest.raises(AttributeError):
		del fact._constructor
	assert fact.create_instance(1, 2) == samples.Point(1, 2)
	assert fact.create_instance(3, 4) == samples.Point(3, 4)
	assert fact.constructor.arity == len(fact.param_types)


def test_factory_repr_and_name():
	fact = ClassFactory.resolve(*_tools(), samples.Point, [int, int])
	assert fact.name == "metafactory.test_support.samples.Point"
	assert repr(fact) == "ClassFactory(metafactory.test_support.samples.Point(int, int))"


def test_resolution_failure_builds_no_factory():
	with pytest.raises(ConstructorNotFoundError):
		ClassFactory.resolve(*_tools(), samples.NeedsArg, [])


def test_expect_checks_capability():
	fact = ClassFactory.resolve(*_tools(), samples.Circle, [float])
	circle = fact.create_instance(2.0, expect=samples.Shape)
	assert isinstance(circle, samples.Circle)
	with pytest.raises(ClassCastError) as err:
		fact.create_instance(2.0, expect=samples.Animal)
	assert "metafactory.test_support.samples.Circle" in str(err.value)
	assert "metafactory.test_support.samples.Animal" in str(err.value)


def test_argument_check_rejects_foreign_values():
	fact = ClassFactory.resolve(*_tools(), samples.Point, [int, int])
	with pytest.raises(ArgumentMismatchError, match="argument 1"):
		fact.create_instance(1, "two")
	with pytest.raises(ArgumentMismatchError):
		fact.create_instance(1)


def test_argument_check_can_be_disabled():
	index, scorer = _tools()
	fact = ClassFactory.resolve(index, scorer, samples.Exploding, [int], check_arguments=False)
	# Without the check the foreign value reaches the constructor body.
	with pytest.raises(InvocationError) as err:
		fact.create_instance("text")
	assert isinstance(err.value.cause, TypeError)


def test_constructor_failure_is_wrapped():
	fact = ClassFactory.resolve(*_tools(), samples.Exploding, [int])
	with pytest.raises(InvocationError) as err:
		fact.create_instance(-1)
	assert isinstance(err.value.cause, ValueError)


def test_arity_must_match_the_bound_constructor():
	index, scorer = _tools()
	ctor = index.constructors_of(samples.Point)[0]
	with pytest.raises(ValueError):
		ClassFactory(index.catalog, samples.Point, [int], ctor)


def test_registered_graph_factory():
	table = TypeTable()
	obj = table.ensure_object()
	string = table.new_class("String", obj, python_type=str)
	greeting = table.new_class("Greeting", obj)
	table.add_constructor(greeting, [string], lambda s: f"hello {s}")
	fact = ClassFactory.resolve(ConstructorIndex(table), DistanceScorer(table), greeting, [string])
	assert fact.create_instance("world") == "hello world"
	assert repr(fact) == "ClassFactory(Greeting(String))"
	with pytest.raises(ArgumentMismatchError):
		fact.create_instance(42)  # int has no registered type


def _shaped_table():
	table = TypeTable()
	obj = table.ensure_object()
	string = table.new_class("S", obj, python_type=str)
	point = table.new_class("P", obj)
	table.add_constructor(point, [string], lambda s: (id(table), s))
	return table, point, string


def test_factories_from_different_catalogs_are_not_equal():
	first, p1, s1 = _shaped_table()
	second, p2, s2 = _shaped_table()
	# Same ids in both tables, different types.
	assert (p1, s1) == (p2, s2)
	a = ClassFactory.resolve(*_tools(first), p1, [s1])
	b = ClassFactory.resolve(*_tools(second), p2, [s2])
	assert a != b
	assert len({a, b}) == 2
	assert a.create_instance("x") != b.create_instance("x")

	# Two reflective catalogs are distinct too, even over the same classes.
	c = ClassFactory.resolve(*_tools(), samples.Point, [int, int])
	d = ClassFactory.resolve(*_tools(), samples.Point, [int, int])
	assert c != d
