"""
Everything to do with things going wrong:
The exception classes that stop a run, and the report that explains them.
"""
import sys, random
from typing import Sequence, Any, Optional
from .ontology import Phrase

class LoxError(Exception):
	"""
	Anything fatal to the current run.
	The site is the syntax node closest to the trouble, if known.
	"""
	def __init__(self, message:str, site:Optional[Phrase]=None):
		super().__init__(message)
		self.message = message
		self.site = site
	def __str__(self): return self.message

class ResolutionError(LoxError):
	""" Structurally illegal program. Nothing runs. """

class LoxRuntimeError(LoxError):
	""" Root of the failures that can happen only while a program runs. """

class RuntimeTypeError(LoxRuntimeError):
	""" An operation got a kind of value it cannot work with. """

class RuntimeNameError(LoxRuntimeError):
	""" A name, property, or method is not where the program expects it. """

class ArityError(LoxRuntimeError):
	def __init__(self, need:int, got:int, site:Optional[Phrase]=None):
		plural = '' if need == 1 else 's'
		super().__init__("Expected %d argument%s but got %d." % (need, plural, got), site)
		self.need, self.got = need, got

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'Blargh', 'Confound it', 'Crud', 'Curses', "Crikey",
		'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', "Mercy", 'Nuts', 'Rats',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Report:
	""" Collects issues for the benefit of whoever gets to explain them. """
	_issues : list["Pic"]

	def __init__(self, *, verbose:int=0, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)

	def issue(self, it:"Pic"):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def reset(self):
		self._issues.clear()

	def first_message(self) -> Optional[str]:
		if self._issues: return self._issues[0].intro

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the resolver and run-time failures come through:
	def failed(self, ex:LoxError):
		guilty = [] if ex.site is None else [ex.site]
		if isinstance(ex, LoxRuntimeError): phase = "Happened while the program was running."
		else: phase = "Found while resolving names."
		self.issue(Pic(ex.message, guilty, [phase]))

	def stack_overflow(self):
		self.issue(Pic("Stack overflow.", [], ["The program recursed deeper than the host allows."]))

	# Methods the command-line driver might call:
	def no_such_file(self, path):
		self.issue(Pic("I see no file called %s" % path, []))

	def broken_file(self, path):
		self.issue(Pic("Something went pear-shaped while trying to read %s" % path, []))

	def missing_front_end(self, name:str):
		footer = ["A front end is a Python module with a function parse(text, path)."]
		self.issue(Pic("There's no front-end module called %r." % name, [], footer))

	def broken_front_end(self, name:str, detail:Any):
		self.issue(Pic("The front-end module %r is not usable: %s" % (name, detail), []))

	def no_front_end(self):
		footer = ["Name one with --front-end."]
		self.issue(Pic("I need a front end to read source text.", [], footer))

	def parse_failed(self, detail:Any):
		self.issue(Pic("The front end could not make sense of the text: %s" % detail, []))

class Pic:
	""" One issue: an introduction, the guilty parties, and perhaps some advice. """
	def __init__(self, intro:str, guilty:Sequence[Phrase], footer=()):
		self.intro, self._guilty, self._footer = intro, list(guilty), footer
	def as_text(self):
		lines = [self.intro]
		lines.extend("    at: %s" % g for g in self._guilty)
		lines.extend(self._footer)
		return '\n'.join(lines)

def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
