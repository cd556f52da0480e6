"""
All the name resolution stuff goes here.
By the time this pass is finished, every variable, `this`, and `super`
knows how many frames out from the point of use its binding will live.
Along the way, the pass rejects any `return`, `this`, or `super`
that appears where it cannot possibly mean anything.

The scopes here mirror the frames the run-time builds, one for one.
That is the whole trick: if they ever disagree, lookups land in the wrong frame.
"""
from typing import Optional, Iterable
from boozetools.support.foundation import Visitor
from . import syntax
from .ontology import Phrase, THIS, SUPER, INIT
from .diagnostics import ResolutionError

# Function kinds:
NOT_IN_FUNCTION = "none"
FUNCTION = "function"
INITIALIZER = "initializer"

# Class kinds:
NOT_IN_CLASS = "none"
CLASS = "class"
SUBCLASS = "subclass"

class StaticScope:
	""" The resolver's counterpart to a run-time frame: just the names, and what sort of code we're in. """
	def __init__(self, outer: Optional["StaticScope"], function_kind:str, class_kind:str):
		self.outer = outer
		self.function_kind = function_kind
		self.class_kind = class_kind
		self._names = set()

	def child(self, *, function_kind:str=None, class_kind:str=None) -> "StaticScope":
		return StaticScope(self, function_kind or self.function_kind, class_kind or self.class_kind)

	def declare(self, name:str):
		self._names.add(name)

	def depth(self, name:str) -> int:
		"""
		Count the hops out to the nearest scope declaring `name`.
		If nobody declares it, the answer is the hops to the outermost scope:
		It might be a global defined some other way, such as a builtin.
		Whether it really exists is the run-time's problem.
		"""
		hops, scope = 0, self
		while name not in scope._names and scope.outer is not None:
			scope = scope.outer
			hops += 1
		return hops

def root_scope() -> StaticScope:
	return StaticScope(None, NOT_IN_FUNCTION, NOT_IN_CLASS)

class TopDown(Visitor):
	"""
	Convenience base-class to handle the dreary bits of a
	perfectly ordinary top-down walk through a syntax tree.
	"""

	def tour(self, items:Iterable[Phrase], *args):
		for i in items:
			self.visit(i, *args)

	def visit_Literal(self, l:syntax.Literal, scope): pass

	def visit_UnaryExp(self, expr:syntax.UnaryExp, scope):
		self.visit(expr.arg, scope)

	def visit_BinExp(self, expr:syntax.BinExp, scope):
		self.visit(expr.lhs, scope)
		self.visit(expr.rhs, scope)

	def visit_ShortCutExp(self, expr:syntax.ShortCutExp, scope):
		self.visit(expr.lhs, scope)
		self.visit(expr.rhs, scope)

	def visit_Call(self, expr:syntax.Call, scope):
		self.visit(expr.callee, scope)
		self.tour(expr.args, scope)

	def visit_Get(self, expr:syntax.Get, scope):
		# Property names are dynamic; only the object has anything to resolve.
		self.visit(expr.obj, scope)

	def visit_Set(self, expr:syntax.Set, scope):
		self.visit(expr.obj, scope)
		self.visit(expr.value, scope)

	def visit_Print(self, stmt:syntax.Print, scope):
		self.visit(stmt.expr, scope)

	def visit_ExprStmt(self, stmt:syntax.ExprStmt, scope):
		self.visit(stmt.expr, scope)

	def visit_If(self, stmt:syntax.If, scope):
		self.visit(stmt.condition, scope)
		self.visit(stmt.then_branch, scope)
		if stmt.else_branch is not None:
			self.visit(stmt.else_branch, scope)

	def visit_While(self, stmt:syntax.While, scope):
		self.visit(stmt.condition, scope)
		self.visit(stmt.body, scope)

class Resolver(TopDown):
	"""
	This single top-down tree-walk annotates every reference with its depth,
	and raises ResolutionError at the first structural problem it sees.
	"""

	def visit_Program(self, program:syntax.Program, scope:StaticScope):
		# The program runs directly in the root frame, so it gets no scope of its own.
		self.tour(program.statements, scope)

	def visit_Block(self, block:syntax.Block, scope:StaticScope):
		self.tour(block.statements, scope.child())

	def visit_VarDecl(self, decl:syntax.VarDecl, scope:StaticScope):
		# The initializer must not see the name it initializes.
		if decl.initializer is not None:
			self.visit(decl.initializer, scope)
		scope.declare(decl.name)

	def visit_FunDef(self, fn:syntax.FunDef, scope:StaticScope):
		# Declare first, so the body can call itself.
		scope.declare(fn.name)
		self._function(fn, scope, FUNCTION)

	def _function(self, fn:syntax.FunDef, scope:StaticScope, kind:str):
		inner = scope.child(function_kind=kind)
		for p in fn.params: inner.declare(p)
		self.tour(fn.body, inner)

	def visit_ClassDef(self, cls:syntax.ClassDef, scope:StaticScope):
		scope.declare(cls.name)
		if cls.superclass is None:
			kind, outer = CLASS, scope
		else:
			self.visit(cls.superclass, scope)
			kind, outer = SUBCLASS, scope.child(class_kind=SUBCLASS)
			outer.declare(SUPER)
		inner = outer.child(class_kind=kind)
		inner.declare(THIS)
		for method in cls.methods:
			self._function(method, inner, INITIALIZER if method.name == INIT else FUNCTION)

	def visit_Return(self, ret:syntax.Return, scope:StaticScope):
		if scope.function_kind == NOT_IN_FUNCTION:
			raise ResolutionError("Can't return from top-level code.", ret)
		if ret.value is not None:
			if scope.function_kind == INITIALIZER:
				raise ResolutionError("Can't return a value from an initializer.", ret)
			self.visit(ret.value, scope)

	def visit_Variable(self, ref:syntax.Variable, scope:StaticScope):
		ref.depth = scope.depth(ref.name)

	def visit_Assign(self, expr:syntax.Assign, scope:StaticScope):
		self.visit(expr.value, scope)
		self.visit(expr.target, scope)

	def visit_This(self, ref:syntax.This, scope:StaticScope):
		if scope.class_kind == NOT_IN_CLASS:
			raise ResolutionError("Can't use 'this' outside of a class.", ref)
		ref.depth = scope.depth(THIS)

	def visit_Super(self, ref:syntax.Super, scope:StaticScope):
		if scope.class_kind == NOT_IN_CLASS:
			raise ResolutionError("Can't use 'super' outside of a class.", ref)
		if scope.class_kind != SUBCLASS:
			raise ResolutionError("Can't use 'super' in a class with no superclass.", ref)
		ref.depth = scope.depth(SUPER)

def resolve(program:syntax.Program, scope:StaticScope=None):
	""" Annotate the program in place, or raise ResolutionError. """
	Resolver().visit(program, scope or root_scope())
