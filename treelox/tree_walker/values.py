"""
This module defines the specialized value-types that the tree-walker operates in terms of.
Basic primitive values play themselves, but special things like closures need more help.
"""
from abc import abstractmethod
from typing import Callable, Optional
from .. import syntax
from ..ontology import THIS, INIT
from ..diagnostics import RuntimeNameError
from .types import LoxValue, VALUE, ARGS
from .environment import Frame
from .evaluator import execute_each

class Function(LoxValue):
	"""
	A run-time object that can be applied with arguments.
	Whoever calls `apply` has already checked the argument count against `arity`.
	"""
	@abstractmethod
	def arity(self) -> int: pass

	@abstractmethod
	def apply(self, caller:Frame, args:ARGS) -> VALUE: pass

class Closure(Function):
	""" The run-time manifestation of a function: code tied to its natal environment. """
	def __init__(self, fn:syntax.FunDef, frame:Frame, is_initializer:bool=False):
		self._fn = fn
		self._frame = frame
		self.is_initializer = is_initializer

	def __str__(self): return "<fn %s>" % self._fn.name

	def arity(self) -> int: return len(self._fn.params)

	def apply(self, caller:Frame, args:ARGS) -> VALUE:
		inner = self._frame.child()
		# Later duplicates win, same as any other re-declaration in one frame.
		for name, value in zip(self._fn.params, args):
			inner.bind(name, value)
		outcome = execute_each(self._fn.body, inner)
		if self.is_initializer:
			return self._frame.lookup(0, THIS)
		return None if outcome is None else outcome.value

	def bind(self, instance:"Instance") -> "Closure":
		""" Same code, but one more frame: the one where `this` lives. """
		frame = self._frame.child()
		frame.bind(THIS, instance)
		return Closure(self._fn, frame, self.is_initializer)

class LoxClass(Function):
	def __init__(self, name:str, superclass:Optional["LoxClass"], frame:Frame, methods:dict[str, Closure]):
		self.name = name
		self.superclass = superclass
		self._frame = frame
		self._methods = methods

	def __str__(self): return "<class %s>" % self.name

	def find_method(self, name:str) -> Optional[Closure]:
		""" Own methods first, then each ancestor in turn. """
		klass = self
		while klass is not None:
			if name in klass._methods:
				return klass._methods[name]
			klass = klass.superclass

	def arity(self) -> int:
		initializer = self.find_method(INIT)
		return 0 if initializer is None else initializer.arity()

	def apply(self, caller:Frame, args:ARGS) -> "Instance":
		instance = Instance(self)
		initializer = self.find_method(INIT)
		if initializer is not None:
			initializer.bind(instance).apply(caller, args)
		return instance

def make_class(dfn:syntax.ClassDef, superclass:Optional[LoxClass], frame:Frame) -> LoxClass:
	methods = {m.name: Closure(m, frame, m.name == INIT) for m in dfn.methods}
	return LoxClass(dfn.name, superclass, frame, methods)

class Instance(LoxValue):
	def __init__(self, klass:LoxClass):
		self.klass = klass
		self.fields = {}

	def __str__(self): return "<instance %s>" % self.klass.name

	def get(self, name:str) -> VALUE:
		if name in self.fields:
			return self.fields[name]
		method = self.klass.find_method(name)
		if method is None:
			raise RuntimeNameError("Undefined property '%s'." % name)
		return method.bind(self)

	def set(self, name:str, value:VALUE):
		self.fields[name] = value

class Builtin(Function):
	""" A native capability. The native function gets the caller's frame and then the arguments. """
	def __init__(self, name:str, arity:int, native:Callable[..., VALUE]):
		self.name = name
		self._arity = arity
		self._native = native

	def __str__(self): return "<native fn %s>" % self.name

	def arity(self) -> int: return self._arity

	def apply(self, caller:Frame, args:ARGS) -> VALUE:
		return self._native(caller, *args)
