"""
The set of syntax-tree nodes in simple form.
A front end calls these constructors bottom-up to build a program.
The resolver later fills in the depth of each reference; nothing else changes.
Class-level type annotations make peace with the IDE wherever later passes add fields.

Each node renders to something close to the source text,
which is handy for error messages and for listing a resolved program.
"""
from typing import Optional, Sequence, Any
from .ontology import Statement, Expression, Reference, THIS, SUPER

LITERAL_TYPES = (type(None), bool, float, str)

def _render_value(value):
	if value is None: return "nil"
	if isinstance(value, bool): return "true" if value else "false"
	if isinstance(value, str): return '"%s"' % value
	text = repr(value)
	return text[:-2] if text.endswith(".0") else text

def _render_each(items) -> str:
	return ", ".join(map(str, items))

###############################################################################

class Literal(Expression):
	def __init__(self, value: Any):
		# Numbers are double-precision in this language, whatever the host handed over.
		if isinstance(value, int) and not isinstance(value, bool):
			value = float(value)
		assert isinstance(value, LITERAL_TYPES), type(value)
		self.value = value
	def __str__(self): return _render_value(self.value)

class UnaryExp(Expression):
	def __init__(self, op:str, arg: Expression):
		self.op, self.arg = op, arg
	def __str__(self): return "%s%s" % (self.op, self.arg)

class Binary(Expression):
	def __init__(self, lhs: Expression, op:str, rhs: Expression):
		self.lhs, self.op, self.rhs = lhs, op, rhs
	def __str__(self): return "(%s %s %s)" % (self.lhs, self.op, self.rhs)

class BinExp(Binary): pass
class ShortCutExp(Binary): pass

class Variable(Reference): pass

class This(Reference):
	def __init__(self): super().__init__(THIS)

class Super(Reference):
	""" Refers to a method as seen from the superclass of the current class. """
	def __init__(self, method:str):
		super().__init__(SUPER)
		self.method = method
	def __str__(self): return "%s.%s" % (super().__str__(), self.method)

class Assign(Expression):
	def __init__(self, target: Variable, value: Expression):
		assert isinstance(target, Variable), type(target)
		self.target, self.value = target, value
	def __str__(self): return "(%s = %s)" % (self.target, self.value)

class Call(Expression):
	def __init__(self, callee: Expression, args: Sequence[Expression] = ()):
		self.callee, self.args = callee, tuple(args)
	def __str__(self): return "%s(%s)" % (self.callee, _render_each(self.args))

class Get(Expression):
	def __init__(self, obj: Expression, name:str):
		self.obj, self.name = obj, name
	def __str__(self): return "%s.%s" % (self.obj, self.name)

class Set(Expression):
	def __init__(self, obj: Expression, name:str, value: Expression):
		self.obj, self.name, self.value = obj, name, value
	def __str__(self): return "(%s.%s = %s)" % (self.obj, self.name, self.value)

###############################################################################

def _render_body(statements) -> str:
	return "{ %s }" % " ".join(map(str, statements)) if statements else "{ }"

class Program(Statement):
	def __init__(self, statements: Sequence[Statement]):
		self.statements = list(statements)
	def __str__(self): return "\n".join(map(str, self.statements))

class Block(Statement):
	def __init__(self, statements: Sequence[Statement]):
		self.statements = list(statements)
	def __str__(self): return _render_body(self.statements)

class VarDecl(Statement):
	def __init__(self, name:str, initializer: Optional[Expression] = None):
		self.name, self.initializer = name, initializer
	def __str__(self):
		if self.initializer is None: return "var %s;" % self.name
		return "var %s = %s;" % (self.name, self.initializer)

class FunDef(Statement):
	"""
	A named function or, within a class, a method.
	The body runs directly in the frame that holds the parameters.
	"""
	def __init__(self, name:str, params: Sequence[str], body: Sequence[Statement]):
		self.name = name
		self.params = tuple(params)
		self.body = list(body)
	def signature(self) -> str: return "%s(%s)" % (self.name, ", ".join(self.params))
	def __str__(self): return "fun %s %s" % (self.signature(), _render_body(self.body))

class ClassDef(Statement):
	def __init__(self, name:str, methods: Sequence[FunDef] = (), superclass: Optional[Variable] = None):
		assert superclass is None or isinstance(superclass, Variable), type(superclass)
		self.name = name
		self.methods = list(methods)
		self.superclass = superclass
	def __str__(self):
		head = "class %s" % self.name
		if self.superclass is not None: head += " < %s" % self.superclass
		methods = " ".join(m.signature() + " " + _render_body(m.body) for m in self.methods)
		return "%s { %s }" % (head, methods) if methods else head + " { }"

class If(Statement):
	def __init__(self, condition: Expression, then_branch: Statement, else_branch: Optional[Statement] = None):
		self.condition, self.then_branch, self.else_branch = condition, then_branch, else_branch
	def __str__(self):
		text = "if (%s) %s" % (self.condition, self.then_branch)
		if self.else_branch is not None: text += " else %s" % self.else_branch
		return text

class While(Statement):
	def __init__(self, condition: Expression, body: Statement):
		self.condition, self.body = condition, body
	def __str__(self): return "while (%s) %s" % (self.condition, self.body)

class Return(Statement):
	def __init__(self, value: Optional[Expression] = None):
		self.value = value
	def __str__(self):
		return "return;" if self.value is None else "return %s;" % self.value

class Print(Statement):
	def __init__(self, expr: Expression):
		self.expr = expr
	def __str__(self): return "print %s;" % self.expr

class ExprStmt(Statement):
	def __init__(self, expr: Expression):
		self.expr = expr
	def __str__(self): return "%s;" % self.expr
