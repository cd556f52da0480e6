"""
This module aims to express an interface agreement
between the evaluator and various kinds of data.

Basic primitive values play themselves:
nil is None, booleans are bool, numbers are float, and strings are str.
Special things like closures, classes, and instances are LoxValue objects.
"""

from abc import ABC
from typing import Union, Sequence

class LoxValue(ABC):
	""" Root for classes that implement specialized run-time data structures """

NATIVE_DATA = Union[None, bool, float, str]
VALUE = Union[NATIVE_DATA, LoxValue]
ARGS = Sequence[VALUE]

def is_number(x:VALUE) -> bool:
	# bool is a subclass of int, not float, so this stays honest.
	return isinstance(x, float)

def is_truthy(x:VALUE) -> bool:
	""" Only nil and false are false. Zero and the empty string are true. """
	return not (x is None or x is False)

def are_equal(a:VALUE, b:VALUE) -> bool:
	"""
	Values of different kinds are never equal; in particular true is not 1.
	Objects compare by identity, which is what Python does for them anyway.
	"""
	return type(a) is type(b) and a == b

def display(x:VALUE) -> str:
	""" The text `print` shows for a value. """
	if x is None: return "nil"
	if x is True: return "true"
	if x is False: return "false"
	if isinstance(x, float):
		text = repr(x)
		return text[:-2] if text.endswith(".0") else text
	if isinstance(x, str): return x
	assert isinstance(x, LoxValue), type(x)
	return str(x)
