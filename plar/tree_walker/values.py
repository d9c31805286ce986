"""
This module defines the closed family of run-time values the tree-walker operates in terms of.

Scalars (Integer, Real, Text, Logic) compare and hash by kind and content,
so they make fine map keys. Containers and objects compare by identity:
two freshly-made empty lists are never the same list.
"""
from typing import Optional, Callable, Sequence

class PlarValue:
	""" Common base for everything a Plar program can hold in a variable. """
	def type_string(self) -> str:
		raise NotImplementedError(type(self))
	def display(self) -> str:
		""" The debugging form: like coercion, but text comes out quoted. """
		return coerce_text(self)
	def __repr__(self):
		return "<%s %s>" % (type(self).__name__, self.display())

class Scalar(PlarValue):
	__slots__ = ("value",)
	def __init__(self, value): self.value = value
	def __eq__(self, other):
		return type(self) is type(other) and self.value == other.value
	def __hash__(self): return hash((type(self), self.value))

class Integer(Scalar):
	def type_string(self): return "Inteiro"

class Real(Scalar):
	def type_string(self): return "Real"

class Text(Scalar):
	def type_string(self): return "Texto"
	def display(self): return '"%s"' % self.value

class Logic(Scalar):
	def type_string(self): return "Logico"

TRUE = Logic(True)
FALSE = Logic(False)

def truth(flag:bool) -> Logic:
	return TRUE if flag else FALSE

class List(PlarValue):
	def __init__(self, elements:list, capacity:Optional[int]=None):
		self.elements = elements
		self.capacity = len(elements) if capacity is None else capacity
	def type_string(self): return "Lista"
	def display(self): return "[%s]" % ", ".join(e.display() for e in self.elements)

class Map(PlarValue):
	def __init__(self, elements:Optional[dict]=None):
		self.elements = {} if elements is None else elements
	def type_string(self): return "Mapa"
	def display(self):
		return "[[%s]]" % ", ".join("%s: %s" % (k.display(), v.display()) for k, v in self.elements.items())

class Object(PlarValue):
	""" An instance of a user-defined class. The field map is mutated in place. """
	def __init__(self, class_name:str, fields:dict, superclass:Optional[str]=None, interfaces:Sequence[str]=()):
		self.class_name = class_name
		self.fields = fields
		self.superclass = superclass
		self.interfaces = list(interfaces)
	def type_string(self): return self.class_name
	def conforms_to(self, type_name:str) -> bool:
		""" Would a declaration of this type name accept this object? """
		return type_name in (self.class_name, self.superclass) or type_name in self.interfaces

class Function(PlarValue):
	"""
	Both user-defined and native functions look like this at run-time.
	Either way, `apply` is how you call one. For user-defined functions,
	the interpreter supplies an implementation that runs the body
	in a fresh activation record parented at the closure.
	"""
	def __init__(self, name:str, declaration=None, return_type:Optional[str]=None, closure=None, implementation:Optional[Callable]=None):
		self.name = name
		self.declaration = declaration
		self.return_type = return_type
		self.closure = closure
		self.implementation = implementation
	def type_string(self): return self.name
	def apply(self, args:list) -> PlarValue:
		return self.implementation(args)

class Interface(PlarValue):
	def __init__(self, name:str, signatures:dict):
		self.name = name
		self.signatures = signatures
	def type_string(self): return self.name

class _Null(PlarValue):
	def type_string(self): return "Nulo"
	def __bool__(self): return False

NULL = _Null()

def coerce_text(value:PlarValue) -> str:
	""" The form a value takes when glued onto text with `+`, printed, or converted to `texto`. """
	if isinstance(value, Text): return value.value
	if isinstance(value, Logic): return "verdadeiro" if value.value else "falso"
	if isinstance(value, (Integer, Real)): return str(value.value)
	if isinstance(value, List): return "[%s]" % ", ".join(map(coerce_text, value.elements))
	if isinstance(value, Map):
		return "[[%s]]" % ", ".join("%s: %s" % (coerce_text(k), coerce_text(v)) for k, v in value.elements.items())
	if isinstance(value, Object): return "[Objeto %s]" % value.class_name
	if isinstance(value, Function): return "[fun %s]" % value.name
	if isinstance(value, Interface): return "[Interface %s]" % value.name
	if value is NULL: return "nulo"
	raise TypeError(value)

def is_number(value:PlarValue) -> bool:
	return isinstance(value, (Integer, Real))
