# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import pytest

from metafactory.core.errors import ClassNotFoundError
from metafactory.core.types_core import TypeKind, TypeTable


def test_type_table_registers_kinds_and_links():
	table = TypeTable()
	obj = table.ensure_object()
	comparable = table.new_interface("Comparable")
	char_seq = table.new_interface("CharSequence")
	string = table.new_class("String", obj, [comparable, char_seq], python_type=str)
	int_prim = table.new_primitive("int")

	assert table.get(string).kind is TypeKind.CLASS
	assert table.get(comparable).kind is TypeKind.INTERFACE
	assert table.get(int_prim).kind is TypeKind.PRIMITIVE
	assert table.parent_of(string) == obj
	assert table.parent_of(obj) is None
	assert table.interfaces_of(string) == (comparable, char_seq)
	assert table.interfaces_of(obj) == ()
	assert table.is_primitive(int_prim)
	assert not table.is_primitive(string)


def test_type_table_seeds_object_once():
	table = TypeTable()
	assert table.ensure_object() == table.ensure_object()
	assert table.name_of(table.ensure_object()) == "Object"


def test_type_table_rejects_duplicates_and_bad_links():
	table = TypeTable()
	obj = table.ensure_object()
	iface = table.new_interface("Runnable")
	with pytest.raises(ValueError):
		table.new_class("Object")
	with pytest.raises(ValueError):
		table.new_class("Task", iface)  # parent must be a class
	with pytest.raises(ValueError):
		table.new_class("Task", obj, [obj])  # interfaces must be interfaces
	with pytest.raises(ClassNotFoundError):
		table.new_class("Task", 999)


def test_type_table_boxing_is_symmetric_and_declared_only():
	table = TypeTable()
	obj = table.ensure_object()
	int_prim = table.new_primitive("int")
	long_prim = table.new_primitive("long")
	integer = table.new_class("Integer", obj)
	table.declare_boxing(int_prim, integer)

	assert table.is_equivalent_primitive(int_prim, integer)
	assert table.is_equivalent_primitive(integer, int_prim)
	assert not table.is_equivalent_primitive(long_prim, integer)
	with pytest.raises(ValueError):
		table.declare_boxing(integer, int_prim)  # first argument must be primitive
	with pytest.raises(ValueError):
		table.declare_boxing(int_prim, int_prim)


def test_type_table_lookup_and_is_type():
	table = TypeTable()
	obj = table.ensure_object()
	assert table.lookup("Object") == obj
	assert table.is_type(obj)
	assert not table.is_type(12345)
	assert not table.is_type("Object")
	assert not table.is_type(True)
	with pytest.raises(ClassNotFoundError):
		table.lookup("Missing")


def test_type_table_maps_values_through_mro():
	class Base:
		pass

	class Derived(Base):
		pass

	table = TypeTable()
	obj = table.ensure_object()
	base = table.new_class("Base", obj, python_type=Base)
	other = table.new_class("Other", obj)

	assert table.type_of(Derived()) == base
	assert table.is_instance(Derived(), base)
	assert table.is_instance(Derived(), obj)
	assert not table.is_instance(Derived(), other)
	assert not table.is_instance(3.5, obj)  # float has no registered type
	with pytest.raises(ClassNotFoundError):
		table.type_of(3.5)


def test_type_table_constructors_in_registration_order():
	table = TypeTable()
	obj = table.ensure_object()
	string = table.new_class("String", obj, python_type=str)
	box = table.new_class("Box", obj)
	first = table.add_constructor(box, [obj], lambda v: ("obj", v))
	second = table.add_constructor(box, [string], lambda v: ("str", v), name="_fromString")

	assert table.declared_constructors(box) == (first, second)
	assert [c.ordinal for c in table.declared_constructors(box)] == [0, 1]
	assert first.is_public and not second.is_public
	assert second.signature() == "Box._fromString(String)"
	assert table.declared_constructors(string) == ()
	with pytest.raises(ValueError):
		table.add_constructor(table.new_interface("Iface"), [], lambda: None)
