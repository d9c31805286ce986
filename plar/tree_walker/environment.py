"""
Scope records for the tree-walker.

Each block, each call activation, and the process-wide global scope get one.
Besides plain variables, a scope can hold class and interface declarations,
and it may carry a receiver object which child blocks inherit.

The lookup order in `get` is deliberately unusual: the receiver's fields
are consulted AFTER the local scope but BEFORE the enclosing scopes.
"""
from typing import Optional
from ..errors import NameNotFound
from .. import syntax
from .values import PlarValue, Object, NULL

class Environment:
	def __init__(self, enclosing:Optional["Environment"]=None):
		self.enclosing = enclosing
		self.values:dict[str, PlarValue] = {}
		self.classes:dict[str, syntax.ClassDecl] = {}
		self.interfaces:dict[str, syntax.InterfaceDecl] = {}
		self.this_object:Optional[Object] = None

	def __repr__(self):
		return "<Environment %s>" % sorted(self.values)

	def child(self) -> "Environment":
		""" A block scope: fresh bindings, same receiver. """
		inner = Environment(self)
		inner.this_object = self.this_object
		return inner

	def define(self, name:str, value:PlarValue):
		self.values[name] = value

	def get(self, name:str) -> PlarValue:
		if name == "nulo": return NULL
		if name == "this" and self.this_object is not None: return self.this_object
		try: return self.values[name]
		except KeyError: pass
		if self.this_object is not None:
			try: return self.this_object.fields[name]
			except KeyError: pass
		if self.enclosing is not None:
			outer = self.enclosing.get(name)
			if outer is not NULL: return outer
		raise NameNotFound(name)

	def update_or_define(self, name:str, value:PlarValue):
		env = self
		while env is not None:
			if name in env.values:
				env.values[name] = value
				return
			env = env.enclosing
		self.values[name] = value

	def define_class(self, name:str, declaration:"syntax.ClassDecl"):
		self.classes[name] = declaration

	def get_class(self, name:str) -> Optional["syntax.ClassDecl"]:
		env = self
		while env is not None:
			if name in env.classes: return env.classes[name]
			env = env.enclosing

	def class_exists(self, name:str) -> bool:
		return name in self.classes

	def set_interface(self, name:str, declaration:"syntax.InterfaceDecl"):
		self.interfaces[name] = declaration

	def get_interface(self, name:str) -> Optional["syntax.InterfaceDecl"]:
		env = self
		while env is not None:
			if name in env.interfaces: return env.interfaces[name]
			env = env.enclosing

	def interface_exists(self, name:str) -> bool:
		return name in self.interfaces
