import unittest

from plar.errors import NameNotFound
from plar.syntax import ClassDecl, InterfaceDecl
from plar.tree_walker.environment import Environment
from plar.tree_walker.values import Integer, Object, NULL

class LookupTests(unittest.TestCase):
	def setUp(self):
		self.outer = Environment()
		self.inner = self.outer.child()

	def test_child_sees_parent(self):
		self.outer.define("x", Integer(1))
		self.assertEqual(Integer(1), self.inner.get("x"))

	def test_shadowing(self):
		self.outer.define("x", Integer(1))
		self.inner.define("x", Integer(2))
		self.assertEqual(Integer(2), self.inner.get("x"))
		self.assertEqual(Integer(1), self.outer.get("x"))

	def test_missing(self):
		with self.assertRaises(NameNotFound):
			self.inner.get("ninguem")

	def test_nulo_is_always_there(self):
		self.assertIs(NULL, self.inner.get("nulo"))

	def test_local_null_is_found(self):
		self.inner.define("x", NULL)
		self.assertIs(NULL, self.inner.get("x"))

	def test_null_from_enclosing_scope_counts_as_missing(self):
		self.outer.define("x", NULL)
		with self.assertRaises(NameNotFound):
			self.inner.get("x")

class ReceiverTests(unittest.TestCase):
	def setUp(self):
		self.outer = Environment()
		self.env = Environment(self.outer)
		self.obj = Object("Conta", {"saldo": Integer(10)})
		self.env.this_object = self.obj

	def test_fields_are_visible(self):
		self.assertEqual(Integer(10), self.env.get("saldo"))
		self.assertIs(self.obj, self.env.get("this"))

	def test_fields_come_before_enclosing_scope(self):
		self.outer.define("saldo", Integer(99))
		self.assertEqual(Integer(10), self.env.get("saldo"))

	def test_locals_come_before_fields(self):
		self.env.define("saldo", Integer(0))
		self.assertEqual(Integer(0), self.env.get("saldo"))

	def test_blocks_inherit_the_receiver(self):
		self.assertIs(self.obj, self.env.child().this_object)

class UpdateTests(unittest.TestCase):
	def test_updates_where_found(self):
		outer = Environment()
		outer.define("x", Integer(1))
		inner = outer.child()
		inner.update_or_define("x", Integer(2))
		self.assertEqual(Integer(2), outer.get("x"))
		self.assertNotIn("x", inner.values)

	def test_defines_locally_otherwise(self):
		outer = Environment()
		inner = outer.child()
		inner.update_or_define("y", Integer(3))
		self.assertIn("y", inner.values)
		self.assertNotIn("y", outer.values)

class DeclarationTests(unittest.TestCase):
	def test_classes(self):
		outer = Environment()
		decl = ClassDecl("Animal", None, None)
		outer.define_class("Animal", decl)
		inner = outer.child()
		self.assertIs(decl, inner.get_class("Animal"))
		self.assertIsNone(inner.get_class("Gato"))
		self.assertTrue(outer.class_exists("Animal"))
		self.assertFalse(inner.class_exists("Animal"))

	def test_interfaces(self):
		outer = Environment()
		decl = InterfaceDecl("Descritivel")
		outer.set_interface("Descritivel", decl)
		inner = outer.child()
		self.assertIs(decl, inner.get_interface("Descritivel"))
		self.assertTrue(outer.interface_exists("Descritivel"))
		self.assertFalse(inner.interface_exists("Descritivel"))

if __name__ == '__main__':
	unittest.main()
