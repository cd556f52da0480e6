"""
These most-fundamental classes in the syntax class hierarchy
are separate from the rest so that the resolver, the evaluator,
and the diagnostics can all talk about nodes in general
without dragging in every concrete node type.

References get a depth filled in during the resolution pass.
"""

class _Unresolved:
	""" Sentinel for a depth the resolver has not yet filled in. """
	def __repr__(self): return "?"

UNRESOLVED = _Unresolved()

class Phrase:
	""" Any node in the syntax tree. """
	def __repr__(self): return "<%s %s>" % (type(self).__name__, self)

class Statement(Phrase): pass

class Expression(Phrase): pass

class Reference(Expression):
	"""
	An expression that reaches for a binding by name.
	The resolver sets `depth` to the number of frames
	between the point of use and the frame that holds the name.
	"""
	depth: int

	def __init__(self, name:str):
		assert isinstance(name, str), type(name)
		self.name = name
		self.depth = UNRESOLVED

	def is_resolved(self) -> bool:
		return self.depth is not UNRESOLVED

	def __str__(self): return "%s@%r" % (self.name, self.depth)

# Names with special meaning to the resolver and the run-time.
THIS = "this"
SUPER = "super"
INIT = "init"
