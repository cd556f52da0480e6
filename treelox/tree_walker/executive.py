"""
This is the overall control for the run-time:
Resolve a program, then run it, and say what went wrong if anything did.
"""
from typing import Optional, TextIO
from .. import syntax
from ..diagnostics import Report, LoxError
from ..primitive import install_builtins
from ..resolution import resolve
from .environment import Frame, root_frame
from .evaluator import execute
from . import runtime  # NOQA: fills the dispatch tables

class Session:
	"""
	One root frame, with the builtins bound, kept across any number of programs.
	Globals one program defines remain visible to the next, as in a REPL.
	"""
	frame: Frame

	def __init__(self, out:Optional[TextIO]=None, report:Optional[Report]=None):
		self.frame = install_builtins(root_frame(out))
		self.report = report or Report(verbose=False)

	def check(self, program:syntax.Program) -> Optional[str]:
		""" Resolve only. Answers the failure message, if any. Each program starts with a clean report. """
		self.report.reset()
		self.report.info("Resolving.")
		try: resolve(program)
		except LoxError as ex:
			self.report.failed(ex)
			return ex.message

	def run(self, program:syntax.Program) -> Optional[str]:
		""" Resolve, then evaluate. Answers the first failure message, or None if all went well. """
		failure = self.check(program)
		if failure is not None: return failure
		self.report.info("Running.")
		try: outcome = execute(program, self.frame)
		except LoxError as ex:
			self.report.failed(ex)
			return ex.message
		except RecursionError:
			self.report.stack_overflow()
			return "Stack overflow."
		assert outcome is None, "The resolver lets no return escape to the top level."

def run(program:syntax.Program, out:Optional[TextIO]=None, report:Optional[Report]=None) -> Optional[str]:
	return Session(out, report).run(program)
