import io
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from treelox import cmdline

def _invoke(*argv, stdin=""):
	""" Run the command line; answer the exit code, standard output, and standard error. """
	args = cmdline.parser.parse_args(list(argv))
	with patch("sys.stdout", new_callable=io.StringIO) as out, \
		patch("sys.stderr", new_callable=io.StringIO) as err, \
		patch("sys.stdin", io.StringIO(stdin)):
		code = cmdline.run(args)
	return code, out.getvalue(), err.getvalue()

class CommandLineTests(unittest.TestCase):
	""" The `zoo` test module doubles as a front end: source text names a specimen. """

	def setUp(self):
		self._folder = tempfile.TemporaryDirectory()
		self.folder = Path(self._folder.name)

	def tearDown(self):
		self._folder.cleanup()

	def source(self, specimen_name) -> str:
		path = self.folder / (specimen_name + ".lox")
		path.write_text(specimen_name + "\n", encoding="utf-8")
		return str(path)

	def test_run(self):
		code, out, err = _invoke("-f", "zoo", self.source("counters"))
		self.assertEqual(0, code)
		self.assertEqual("1\n2\n1\n", out)
		self.assertEqual("", err)

	def test_check(self):
		code, out, err = _invoke("-f", "zoo", "--check", self.source("counters"))
		self.assertEqual(0, code)
		self.assertEqual("", out)
		self.assertIn("Looks plausible to me.", err)

	def test_list_shows_depths(self):
		code, out, err = _invoke("-f", "zoo", "-l", self.source("counters"))
		self.assertEqual(0, code)
		self.assertIn("(i@1 = (i@1 + 1))", out)

	def test_check_catches_resolution_error(self):
		code, out, err = _invoke("-f", "zoo", "-c", self.source("return_at_top"))
		self.assertEqual(1, code)
		self.assertIn("Can't return from top-level code.", err)

	def test_runtime_failure(self):
		code, out, err = _invoke("-f", "zoo", self.source("add_nil"))
		self.assertEqual(1, code)
		self.assertEqual("before\n", out)
		self.assertIn("Operands must be two numbers or two strings.", err)

	def test_no_front_end(self):
		code, out, err = _invoke(self.source("counters"))
		self.assertEqual(1, code)
		self.assertIn("--front-end", err)

	def test_missing_front_end(self):
		code, out, err = _invoke("-f", "no_such_front_end_anywhere", self.source("counters"))
		self.assertEqual(1, code)
		self.assertIn("no_such_front_end_anywhere", err)

	def test_unusable_front_end(self):
		code, out, err = _invoke("-f", "tempfile", self.source("counters"))
		self.assertEqual(1, code)
		self.assertIn("no parse function", err)

	def test_missing_file(self):
		code, out, err = _invoke("-f", "zoo", str(self.folder / "nothing_here.lox"))
		self.assertEqual(1, code)
		self.assertIn("nothing_here.lox", err)

	def test_front_end_rejects_text(self):
		path = self.folder / "gibberish.lox"
		path.write_text("no such specimen", encoding="utf-8")
		code, out, err = _invoke("-f", "zoo", str(path))
		self.assertEqual(1, code)
		self.assertIn("could not make sense", err)

	def test_several_files_share_globals(self):
		code, out, err = _invoke("-f", "zoo", self.source("define_greeting"), self.source("print_greeting"))
		self.assertEqual(0, code)
		self.assertEqual("hello\n", out)

	def test_failing_files_do_not_stop_the_rest(self):
		names = ["print_greeting", "unbound_variable", "add_nil", "define_greeting", "return_at_top", "print_greeting"]
		code, out, err = _invoke("-f", "zoo", *map(self.source, names))
		self.assertEqual(1, code)
		self.assertEqual("before\nhello\n", out)
		self.assertEqual(2, err.count("Unbound variable"))
		self.assertIn("Can't return from top-level code.", err)
		self.assertNotIn("Giving up", err)

	def test_verbose(self):
		code, out, err = _invoke("-f", "zoo", "-v", self.source("counters"))
		self.assertEqual(0, code)
		self.assertIn("Running.", err)

	def test_repl_keeps_globals_and_survives_failure(self):
		lines = "print_greeting\n\ndefine_greeting\nbogus\nprint_greeting\n"
		code, out, err = _invoke("-f", "zoo", stdin=lines)
		self.assertEqual(0, code)
		self.assertEqual("hello\n", out)
		self.assertIn("Unbound variable 'greeting'.", err)
		self.assertIn("could not make sense", err)

	def test_repl_outlasts_many_failures(self):
		code, out, err = _invoke("-f", "zoo", stdin="print_greeting\n" * 5 + "define_greeting\nprint_greeting\n")
		self.assertEqual(0, code)
		self.assertEqual("hello\n", out)
		self.assertEqual(5, err.count("Unbound variable"))

	def test_main_without_arguments_explains_itself(self):
		with patch("sys.argv", ["treelox"]), patch("sys.stdout", new_callable=io.StringIO) as out:
			cmdline.main()
		self.assertIn("front end", out.getvalue())
		self.assertIn("usage: treelox", out.getvalue())

	def test_main_exits_with_the_code(self):
		with patch("sys.argv", ["treelox", "-f", "zoo", self.source("unbound_variable")]), \
			patch("sys.stderr", new_callable=io.StringIO):
			with self.assertRaises(SystemExit) as cm:
				cmdline.main()
		self.assertEqual(1, cm.exception.code)

if __name__ == '__main__':
	unittest.main()
