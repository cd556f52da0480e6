"""
This is a tree-walking interpreter for Lox, a small language with closures and classes.

{0}

The interpreter proper starts from a syntax tree, so it needs a front end to read text.
A front end is any Python module with a function parse(text, path) that answers
a treelox.syntax.Program, or raises SyntaxError (or ValueError) on bad text.

For example:

    treelox -f my_front_end program.lox

will run program.lox if possible, or else try to explain why not.
Name several files to run them one after another, sharing global definitions.

    treelox -f my_front_end

reads one program per line from standard input and runs each in turn,
keeping global definitions from one line to the next.

    treelox -h

will explain all the arguments.
"""
import sys, argparse
from importlib import import_module
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="treelox",
	description="Tree-walking interpreter for the Lox language.",
)
parser.add_argument("program", nargs="*", help="Source files to run in turn, sharing globals. Leave them out to read programs from standard input.")
parser.add_argument('-f', "--front-end", help="Python module providing parse(text, path).")
parser.add_argument('-c', "--check", action="store_true", help="Resolve the program but do not actually execute it.")
parser.add_argument('-l', "--list", action="store_true", help="Print the resolved program, with the depth of every reference, instead of running it.")
parser.add_argument('-v', "--verbose", action="count", help="Say what is going on, on the standard-error stream.")

def load_front_end(name, report):
	""" Answer the front end's parse function, or None after reporting why not. """
	if name is None:
		report.no_front_end()
		return
	try: module = import_module(name)
	except ModuleNotFoundError:
		report.missing_front_end(name)
		return
	except ImportError as ex:
		report.broken_front_end(name, ex)
		return
	if not callable(getattr(module, "parse", None)):
		report.broken_front_end(name, "it has no parse function")
		return
	report.info("Front end:", module.__name__)
	return module.parse

def _parse(parse, text:str, path:Path, report):
	try: return parse(text, path)
	except (SyntaxError, ValueError) as ex:
		report.parse_failed(ex)

def _read(path:Path, report):
	report.info("Loading", path)
	try:
		with open(path, "r", encoding="utf-8") as fh:
			return fh.read()
	except FileNotFoundError:
		report.no_such_file(path)
	except OSError:
		report.broken_file(path)

def _run_file(session, parse, path:Path, args) -> bool:
	""" Run (or check, or list) one source file in the session. Answers whether it went well. """
	report = session.report
	text = _read(path, report)
	program = None if text is None else _parse(parse, text, path, report)
	if program is None:
		return False
	if args.check or args.list:
		failure = session.check(program)
	else:
		failure = session.run(program)
	if failure is not None:
		return False
	if args.list:
		print(program)
	return True

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .tree_walker.executive import Session
	report = Report(verbose=args.verbose)
	parse = load_front_end(args.front_end, report)
	if parse is None:
		report.complain_to_console()
		return 1
	session = Session(report=report)
	if not args.program:
		return repl(parse, session)
	status = 0
	try:
		# Each file runs in the same session, so later files see earlier globals.
		for name in args.program:
			if not _run_file(session, parse, Path.cwd() / name, args):
				report.complain_to_console()
				report.reset()
				status = 1
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if args.check and not status:
		print("Looks plausible to me.", file=sys.stderr)
	return status

def repl(parse, session):
	report = session.report
	path = Path("<stdin>")
	for line in sys.stdin:
		if not line.strip(): continue
		program = _parse(parse, line, path, report)
		if program is not None:
			session.run(program)
		if report.sick():
			report.complain_to_console()
			report.reset()
	return 0

def main():
	if len(sys.argv) > 1:
		sys.exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
