"""
One evaluation method per kind of syntax node.
Importing this module fills the evaluator's dispatch tables.
"""
import math
import operator
from .. import syntax
from ..ontology import THIS, SUPER
from ..diagnostics import RuntimeTypeError, RuntimeNameError, ArityError
from .types import VALUE, is_number, is_truthy, are_equal, display
from .environment import Frame
from .evaluator import (
	OUTCOME, Returned, evaluate, execute, execute_each, attach_evaluation_methods,
)
from .values import Function, Closure, LoxClass, Instance, make_class

###############################################################################

def _divide(a:float, b:float) -> float:
	# IEEE-754 rather than Python's ZeroDivisionError.
	if b == 0.0:
		if a == 0.0 or math.isnan(a): return math.nan
		return math.copysign(math.inf, a) * math.copysign(1.0, b)
	return a / b

ARITHMETIC = {
	"-"  : operator.sub,
	"*"  : operator.mul,
	"/"  : _divide,
	"<"  : operator.lt,
	"<=" : operator.le,
	">"  : operator.gt,
	">=" : operator.ge,
}

def _add(a:VALUE, b:VALUE) -> VALUE:
	if is_number(a) and is_number(b): return a + b
	if isinstance(a, str) and isinstance(b, str): return a + b
	raise RuntimeTypeError("Operands must be two numbers or two strings.")

def binary_operation(a:VALUE, op:str, b:VALUE) -> VALUE:
	if op == "+": return _add(a, b)
	if op == "==": return are_equal(a, b)
	if op == "!=": return not are_equal(a, b)
	if not (is_number(a) and is_number(b)):
		raise RuntimeTypeError("Operands must be numbers.")
	return ARITHMETIC[op](a, b)

def _check_arity(fn:Function, args:list):
	if len(args) != fn.arity():
		raise ArityError(fn.arity(), len(args))

###############################################################################

def _eval_literal(expr:syntax.Literal, frame:Frame):
	return expr.value

def _eval_unary_exp(expr:syntax.UnaryExp, frame:Frame):
	arg = evaluate(expr.arg, frame)
	if expr.op == "!": return not is_truthy(arg)
	assert expr.op == "-", expr.op
	if not is_number(arg): raise RuntimeTypeError("Operand must be a number.")
	return -arg

def _eval_bin_exp(expr:syntax.BinExp, frame:Frame):
	a = evaluate(expr.lhs, frame)
	b = evaluate(expr.rhs, frame)
	return binary_operation(a, expr.op, b)

def _eval_shortcut_exp(expr:syntax.ShortCutExp, frame:Frame):
	lhs = evaluate(expr.lhs, frame)
	# `or` stops at the first truthy operand; `and` at the first falsy one.
	if is_truthy(lhs) == (expr.op == "or"): return lhs
	return evaluate(expr.rhs, frame)

def _eval_variable(expr:syntax.Variable, frame:Frame):
	assert expr.is_resolved(), expr
	return frame.lookup(expr.depth, expr.name)

def _eval_assign(expr:syntax.Assign, frame:Frame):
	value = evaluate(expr.value, frame)
	assert expr.target.is_resolved(), expr
	frame.assign(expr.target.depth, expr.target.name, value)
	return value

def _eval_this(expr:syntax.This, frame:Frame):
	assert expr.is_resolved(), expr
	return frame.lookup(expr.depth, THIS)

def _eval_super(expr:syntax.Super, frame:Frame):
	assert expr.is_resolved(), expr
	superclass = frame.lookup(expr.depth, expr.name)
	assert isinstance(superclass, LoxClass), superclass
	# The method's `this` lives one frame nearer than the class scope's `super`.
	instance = frame.lookup(expr.depth - 1, THIS)
	method = superclass.find_method(expr.method)
	if method is None:
		raise RuntimeNameError("Undefined method '%s' on superclass %s." % (expr.method, superclass.name))
	return method.bind(instance)

def _eval_call(expr:syntax.Call, frame:Frame):
	function = evaluate(expr.callee, frame)
	args = [evaluate(a, frame) for a in expr.args]
	if not isinstance(function, Function):
		raise RuntimeTypeError("Can only call functions and classes, not %s." % display(function))
	_check_arity(function, args)
	return function.apply(frame, args)

def _eval_get(expr:syntax.Get, frame:Frame):
	obj = evaluate(expr.obj, frame)
	if not isinstance(obj, Instance):
		raise RuntimeTypeError("Only instances have properties, not %s." % display(obj))
	return obj.get(expr.name)

def _eval_set(expr:syntax.Set, frame:Frame):
	obj = evaluate(expr.obj, frame)
	if not isinstance(obj, Instance):
		raise RuntimeTypeError("Only instances have fields, not %s." % display(obj))
	value = evaluate(expr.value, frame)
	obj.set(expr.name, value)
	return value

###############################################################################

def _exec_program(stmt:syntax.Program, frame:Frame) -> OUTCOME:
	return execute_each(stmt.statements, frame)

def _exec_block(stmt:syntax.Block, frame:Frame) -> OUTCOME:
	return execute_each(stmt.statements, frame.child())

def _exec_var_decl(stmt:syntax.VarDecl, frame:Frame) -> OUTCOME:
	value = None if stmt.initializer is None else evaluate(stmt.initializer, frame)
	frame.bind(stmt.name, value)

def _exec_fun_def(stmt:syntax.FunDef, frame:Frame) -> OUTCOME:
	frame.bind(stmt.name, Closure(stmt, frame))

def _exec_class_def(stmt:syntax.ClassDef, frame:Frame) -> OUTCOME:
	if stmt.superclass is None:
		superclass, scope = None, frame
	else:
		superclass = evaluate(stmt.superclass, frame)
		if not isinstance(superclass, LoxClass):
			raise RuntimeTypeError("Superclass must be a class, not %s." % display(superclass), stmt.superclass)
		scope = frame.child()
		scope.bind(SUPER, superclass)
	frame.bind(stmt.name, make_class(stmt, superclass, scope))

def _exec_if(stmt:syntax.If, frame:Frame) -> OUTCOME:
	if is_truthy(evaluate(stmt.condition, frame)):
		return execute(stmt.then_branch, frame)
	elif stmt.else_branch is not None:
		return execute(stmt.else_branch, frame)

def _exec_while(stmt:syntax.While, frame:Frame) -> OUTCOME:
	while is_truthy(evaluate(stmt.condition, frame)):
		outcome = execute(stmt.body, frame)
		if outcome is not None: return outcome

def _exec_return(stmt:syntax.Return, frame:Frame) -> OUTCOME:
	return Returned(None if stmt.value is None else evaluate(stmt.value, frame))

def _exec_print(stmt:syntax.Print, frame:Frame) -> OUTCOME:
	print(display(evaluate(stmt.expr, frame)), file=frame.out)

def _exec_expr_stmt(stmt:syntax.ExprStmt, frame:Frame) -> OUTCOME:
	evaluate(stmt.expr, frame)

attach_evaluation_methods(globals())
