import unittest

from zoo import v, op, call, fun, let, say, do, klass, L
from treelox import syntax
from treelox.diagnostics import ResolutionError
from treelox.resolution import resolve, root_scope

class DepthTests(unittest.TestCase):
	""" The resolver counts frames exactly as the run-time will build them. """

	def test_global_from_function(self):
		a = v("a")
		resolve(syntax.Program([let("a", L(1)), fun("f", [], say(a))]))
		self.assertEqual(1, a.depth)

	def test_parameter_is_local(self):
		x = v("x")
		resolve(syntax.Program([fun("f", ["x"], say(x))]))
		self.assertEqual(0, x.depth)

	def test_undeclared_name_points_at_root(self):
		zzz = v("zzz")
		resolve(syntax.Program([fun("f", [], syntax.Block([say(zzz)]))]))
		self.assertEqual(2, zzz.depth)

	def test_initializer_cannot_see_its_own_name(self):
		inner = v("a")
		resolve(syntax.Program([syntax.Block([let("a", inner)])]))
		self.assertEqual(1, inner.depth)

	def test_function_sees_itself(self):
		f = v("f")
		resolve(syntax.Program([fun("f", [], do(call(f)))]))
		self.assertEqual(1, f.depth)

	def test_use_before_local_declaration_finds_outer(self):
		early, late = v("a"), v("a")
		resolve(syntax.Program([let("a"), syntax.Block([say(early), let("a"), say(late)])]))
		self.assertEqual(1, early.depth)
		self.assertEqual(0, late.depth)

	def test_assignment_target(self):
		target = v("i")
		resolve(syntax.Program([fun("outer", [], let("i", L(0)), fun("inner", [], do(syntax.Assign(target, L(1))))) ]))
		self.assertEqual(1, target.depth)

	def test_this_and_super(self):
		this, deeper_this, sup = syntax.This(), syntax.This(), syntax.Super("m")
		resolve(syntax.Program([
			klass("A"),
			klass("B",
				fun("m", [], say(this), do(call(sup)), syntax.Block([say(deeper_this)])),
				base="A",
			),
		]))
		self.assertEqual(1, this.depth)
		self.assertEqual(2, deeper_this.depth)
		self.assertEqual(2, sup.depth)

	def test_superclass_resolves_outside_the_class(self):
		base = syntax.Variable("A")
		resolve(syntax.Program([syntax.Block([klass("A"), syntax.ClassDef("B", [], base)])]))
		self.assertEqual(0, base.depth)

	def test_listing_shows_depths(self):
		a = v("a")
		program = syntax.Program([let("a", L(1)), fun("f", [], say(op(a, "+", L(2))))])
		self.assertEqual("a@?", str(a))
		resolve(program)
		self.assertEqual("var a = 1;\nfun f() { print (a@1 + 2); }", str(program))

	def test_shared_scope_across_programs(self):
		scope = root_scope()
		resolve(syntax.Program([let("g", L(1))]), scope)
		g = v("g")
		resolve(syntax.Program([fun("f", [], say(g))]), scope)
		self.assertEqual(1, g.depth)

class RejectionTests(unittest.TestCase):

	def expect(self, program, message):
		with self.assertRaises(ResolutionError) as cm:
			resolve(program)
		self.assertEqual(message, cm.exception.message)
		self.assertIsNotNone(cm.exception.site)

	def test_return_at_top_level(self):
		self.expect(syntax.Program([syntax.Return()]), "Can't return from top-level code.")

	def test_return_in_nested_block_at_top_level(self):
		self.expect(syntax.Program([syntax.Block([syntax.Return(L(1))])]), "Can't return from top-level code.")

	def test_value_from_initializer(self):
		self.expect(syntax.Program([klass("A", fun("init", [], syntax.Return(L(1))))]), "Can't return a value from an initializer.")

	def test_bare_return_in_initializer_is_fine(self):
		resolve(syntax.Program([klass("A", fun("init", [], syntax.Return()))]))

	def test_value_from_function_nested_in_initializer_is_fine(self):
		resolve(syntax.Program([klass("A", fun("init", [], fun("helper", [], syntax.Return(L(1)))))]))

	def test_this_outside_class(self):
		self.expect(syntax.Program([say(syntax.This())]), "Can't use 'this' outside of a class.")

	def test_super_outside_class(self):
		self.expect(syntax.Program([say(call(syntax.Super("m")))]), "Can't use 'super' outside of a class.")

	def test_super_without_superclass(self):
		self.expect(
			syntax.Program([klass("A", fun("m", [], do(call(syntax.Super("m")))))]),
			"Can't use 'super' in a class with no superclass.",
		)

	def test_super_in_nested_class_without_superclass(self):
		inner = klass("Inner", fun("m", [], do(call(syntax.Super("m")))))
		program = syntax.Program([klass("A"), klass("B", fun("make", [], inner), base="A")])
		self.expect(program, "Can't use 'super' in a class with no superclass.")

if __name__ == '__main__':
	unittest.main()
