"""
The generic machinery that everything needs,
without the specific methods corresponding to particular syntax.

Expressions evaluate to values. Statements execute to an outcome:
Either None, meaning the statement ran to completion,
or a Returned carrying the value of a `return` on its way out to the nearest call.
Every construct that runs statements in sequence must pass a Returned along untouched.
Failures are exceptions, and only the executive catches them.
"""

from typing import NamedTuple, Optional, Iterable
from .. import syntax
from ..ontology import Statement, Expression
from ..diagnostics import LoxRuntimeError
from .types import VALUE
from .environment import Frame

class Returned(NamedTuple):
	value: VALUE

OUTCOME = Optional[Returned]

EVALUATE = {}
EXECUTE = {}

def evaluate(expr:Expression, frame:Frame) -> VALUE:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	try: return fn(expr, frame)
	except LoxRuntimeError as ex:
		if ex.site is None: ex.site = expr
		raise

def execute(stmt:Statement, frame:Frame) -> OUTCOME:
	try: fn = EXECUTE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	try: return fn(stmt, frame)
	except LoxRuntimeError as ex:
		if ex.site is None: ex.site = stmt
		raise

def execute_each(statements:Iterable[Statement], frame:Frame) -> OUTCOME:
	""" Run statements in order, stopping early only to pass along a Returned. """
	for stmt in statements:
		outcome = execute(stmt, frame)
		if outcome is not None: return outcome

def attach_evaluation_methods(python_scope):
	"""
	Install each `_eval_*` and `_exec_*` function in the corresponding table,
	keyed on the annotated type of its first parameter.
	Then make sure no concrete node type got left out.
	"""
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"): table, key = EVALUATE, "expr"
		elif _k.startswith("_exec_"): table, key = EXECUTE, "stmt"
		else: continue
		_t = _v.__annotations__[key]
		assert isinstance(_t, type), (_k, _t)
		assert _t not in table, (_k, _t)
		table[_t] = _v
	_check_coverage(Expression, EVALUATE)
	_check_coverage(Statement, EXECUTE)

def _concrete_node_types(base:type):
	for sub in base.__subclasses__():
		if sub.__module__ == syntax.__name__ and not sub.__subclasses__():
			yield sub
		yield from _concrete_node_types(sub)

def _check_coverage(base:type, table:dict):
	missing = set(_concrete_node_types(base)) - set(table)
	assert not missing, "No evaluation method for %s" % sorted(t.__name__ for t in missing)
