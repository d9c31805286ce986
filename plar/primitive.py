"""
Build the primitive namespace.

Native functions are ordinary methods on adapter objects, marked with `@native`.
`install_natives` binds every marked method into an environment as a Function
whose implementation takes the list of argument values and returns a value,
so a program calls them exactly the way it calls its own functions.

The type-oriented natives live here; the ones that talk to the outside world
live in the adapters package.
"""
from .errors import SemanticError, InputError, UserError
from .tree_walker.values import PlarValue, Function, Integer, Real, Text, Logic, List, Map, truth, coerce_text

def native(*names:str, returns=None):
	""" Mark an adapter method as the implementation of one or more built-in names. """
	def mark(fn):
		fn.native_names = names
		fn.native_returns = returns
		return fn
	return mark

def install_natives(env, *adapters):
	for adapter in adapters:
		for attr in dir(type(adapter)):
			method = getattr(adapter, attr)
			for name in getattr(method, "native_names", ()):
				env.define(name, Function(name, None, method.native_returns, env, method))

def default_adapters(report):
	from .adapters.teletype_adapter import Console
	from .adapters.fs_adapter import FileSystem
	from .adapters.socket_adapter import Sockets
	from .adapters.thread_adapter import Threads
	return [Primitives(), Console(), FileSystem(), Sockets(), Threads(report)]

def expect_arity(name:str, args:list, low:int, high=None):
	high = low if high is None else high
	if not low <= len(args) <= high:
		if low == high: wanted = str(low)
		else: wanted = "de %d a %d" % (low, high)
		raise SemanticError("Função '%s' espera %s argumento(s), mas recebeu %d" % (name, wanted, len(args)))

def expect_kind(name:str, value:PlarValue, kind:type, what:str):
	if not isinstance(value, kind):
		raise InputError("Função '%s': argumento deve ser %s, não %s" % (name, what, value.type_string()))
	return value

###############################################################################

def _to_integer(value:PlarValue) -> Integer:
	if isinstance(value, Integer): return value
	if isinstance(value, Real): return Integer(int(value.value))
	if isinstance(value, Text): return Integer(int(value.value.strip()))
	if isinstance(value, Logic): return Integer(1 if value.value else 0)
	raise ValueError(value)

def _to_real(value:PlarValue) -> Real:
	if isinstance(value, Real): return value
	if isinstance(value, Integer): return Real(float(value.value))
	if isinstance(value, Text): return Real(float(value.value.strip()))
	if isinstance(value, Logic): return Real(1.0 if value.value else 0.0)
	raise ValueError(value)

_TRUTHY_TEXT = {"verdadeiro": True, "true": True, "1": True, "falso": False, "false": False, "0": False}

def _to_logic(value:PlarValue) -> Logic:
	if isinstance(value, Logic): return value
	if isinstance(value, (Integer, Real)): return truth(value.value != 0)
	if isinstance(value, Text): return truth(_TRUTHY_TEXT[value.value.strip().lower()])
	raise ValueError(value)

CONVERSIONS = {
	"inteiro": _to_integer,
	"real": _to_real,
	"texto": lambda value: Text(coerce_text(value)),
	"logico": _to_logic,
	"lógico": _to_logic,
}

class Primitives:
	""" Natives about values themselves: their types, sizes, and conversions. """

	@staticmethod
	@native("consultar_tipo", returns="Texto")
	def type_of(args):
		expect_arity("consultar_tipo", args, 1)
		return Text(args[0].type_string())

	@staticmethod
	@native("converter_tipo")
	def convert(args):
		expect_arity("converter_tipo", args, 2)
		target = expect_kind("converter_tipo", args[0], Text, "um Texto")
		value = args[1]
		try:
			conversion = CONVERSIONS[target.value.strip().lower()]
			return conversion(value)
		except (KeyError, ValueError, OverflowError) as ex:
			raise InputError("Nao foi possível converter '%s' para %s" % (coerce_text(value), target.value)) from ex

	@staticmethod
	@native("tamanho", returns="Inteiro")
	def size(args):
		expect_arity("tamanho", args, 1)
		subject = args[0]
		if isinstance(subject, (List, Map)): return Integer(len(subject.elements))
		if isinstance(subject, Text): return Integer(len(subject.value))
		raise InputError("Funcao tamanho só funciona com listas, mapas ou textos")

	@staticmethod
	@native("jogarError")
	def throw(args):
		expect_arity("jogarError", args, 1)
		message = expect_kind("jogarError", args[0], Text, "um texto (mensagem de erro)")
		raise UserError(message.value)
