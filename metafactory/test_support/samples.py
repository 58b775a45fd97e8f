# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Sample classes exercising reflective constructor discovery and resolution.

Tests look several of these up by dotted name, so keep them at module level
(or nested in `Outer`) under stable names.
"""

from __future__ import annotations

import ctypes
import numbers
from abc import ABC
from typing import Any, List, Optional, Sequence

from metafactory.constructor_index import constructor


class Point:
	"""(int, int) via __init__, (float, float) via `from_floats`."""

	def __init__(self, x: int, y: int) -> None:
		self.x = x
		self.y = y
		self.kind = "int"

	@constructor
	@classmethod
	def from_floats(cls, x: float, y: float) -> "Point":
		pt = cls(x, y)  # type: ignore[arg-type]
		pt.kind = "float"
		return pt

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Point):
			return NotImplemented
		return (self.x, self.y) == (other.x, other.y)

	def __hash__(self) -> int:
		return hash((self.x, self.y))


class Holder:
	"""(object) via __init__, (str) via `from_text`."""

	def __init__(self, value: object) -> None:
		self.value = value
		self.via = "object"

	@constructor
	@classmethod
	def from_text(cls, text: str) -> "Holder":
		obj = cls(text)
		obj.via = "str"
		return obj


class Sealed:
	"""Public (str, int) initializer plus a restricted (str) constructor."""

	def __init__(self, token: str, level: int) -> None:
		self.token = token
		self.level = level

	@constructor
	@classmethod
	def _from_token(cls, token: str) -> "Sealed":
		return cls(token, 0)


class Exploding:
	def __init__(self, value: int) -> None:
		if value < 0:
			raise ValueError(f"negative value {value}")
		self.value = value


class Fragile:
	"""Only a restricted constructor, and it can fail."""

	def __init__(self, value: int, check: bool) -> None:
		self.value = value

	@constructor
	@staticmethod
	def _make(value: int) -> "Fragile":
		if value == 0:
			raise ZeroDivisionError("zero is not allowed")
		return Fragile(value, True)


class NeedsArg:
	def __init__(self, required: int) -> None:
		self.required = required


class Window:
	def __init__(self, width: int, height: int = 10) -> None:
		self.width = width
		self.height = height


class KeywordOnly:
	def __init__(self, *, name: str) -> None:
		self.name = name


class Loose:
	def __init__(self, a, b: Any, c: Optional[int] = None, d: List[int] | None = None) -> None:
		self.args = (a, b, c, d)


class Spread:
	def __init__(self, first: str, *rest: Any, **extra: Any) -> None:
		self.first = first


class Typed:
	def __init__(self, items: List[int]) -> None:
		self.items = items


class Broken:
	def __init__(self, thing: "DoesNotExist") -> None:  # type: ignore[name-defined]  # noqa: F821
		self.thing = thing


class Plain:
	pass


# --- hierarchy ---------------------------------------------------------------


class Animal:
	def __init__(self, name: str) -> None:
		self.name = name


class Mammal(Animal):
	pass


class Dog(Mammal):
	pass


class Named(ABC):
	pass


class Trained:
	pass


class Pet(Dog, Named, Trained):
	pass


class Rock:
	pass


class Kennel:
	"""(Animal) via __init__, (Mammal) via `for_mammal`."""

	def __init__(self, resident: Animal) -> None:
		self.resident = resident
		self.via = "animal"

	@constructor
	@classmethod
	def for_mammal(cls, resident: Mammal) -> "Kennel":
		k = cls(resident)
		k.via = "mammal"
		return k


class Shelter:
	"""Two constructors at equal distance; discovery order decides."""

	def __init__(self, resident: Animal) -> None:
		self.via = "init"

	@constructor
	@classmethod
	def also_animal(cls, resident: Animal) -> "Shelter":
		obj = cls(resident)
		obj.via = "also_animal"
		return obj


class Badge:
	"""Constructor taking an interface type."""

	def __init__(self, owner: Named) -> None:
		self.owner = owner


class Shape(ABC):
	pass


class Circle(Shape):
	def __init__(self, radius: float) -> None:
		self.radius = radius


class Outer:
	class Inner:
		def __init__(self, label: str) -> None:
			self.label = label


not_a_class = 42


class Tally:
	"""Declares a ctypes parameter; Python ints are accepted as its boxed form."""

	def __init__(self, count: ctypes.c_int) -> None:
		self.count = count


class Bag:
	"""`list` and `tuple` are Sequences only through ABC registration."""

	def __init__(self, items: Sequence[int]) -> None:
		self.items = items


class Gauge:
	def __init__(self, reading: numbers.Number) -> None:
		self.reading = reading
