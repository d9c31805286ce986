"""
This is the overall control for the run-time: the Interpreter owns the
current-environment cursor and the current-function register, processes
a program's declarations in their fixed order, and implements the object
model (instantiation, hierarchy walks, method and function invocation).
"""
import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from .. import syntax
from ..diagnostics import Report
from ..errors import PlarError, SemanticError, ArquivoError, NameNotFound
from ..modularity import Loader
from ..primitive import install_natives, default_adapters
from . import runtime  # NOQA: fills the dispatch tables
from .environment import Environment
from .evaluator import evaluate, execute, execute_all, COMPLETED, Returned, Outcome
from .values import PlarValue, Function, Object, NULL

MAX_LOOP = 10_000
MAX_DO_LOOP = 100
# Each Plar call costs a dozen or so Python frames.
RECURSION_LIMIT = 20_000

BASIC_TYPES = frozenset(["Inteiro", "Real", "Texto", "Logico", "Lista", "Mapa", "Nulo"])

def is_return_invalid(type_name:Optional[str], env:Environment) -> bool:
	""" A declared return type must name a basic type, or a class or interface of that very scope. """
	if type_name is None or type_name in BASIC_TYPES: return False
	return not (env.class_exists(type_name) or env.interface_exists(type_name))

_SAME = object()

class Interpreter:
	def __init__(self, report:Optional[Report]=None, *, loader:Optional[Loader]=None, max_loop=MAX_LOOP, max_do_loop=MAX_DO_LOOP, adapters=None):
		self.report = report or Report()
		self.loader = loader or Loader(self.report)
		self.max_loop = max_loop
		self.max_do_loop = max_do_loop
		self.global_env = Environment()
		self.env = self.global_env
		self.current_function:Optional[Function] = None
		if adapters is None: adapters = default_adapters(self.report)
		install_natives(self.global_env, *adapters)

	@contextmanager
	def in_scope(self, env:Environment, function=_SAME):
		""" Swap the cursor (and maybe the current function), restoring both on every way out. """
		prior_env, prior_function = self.env, self.current_function
		self.env = env
		if function is not _SAME: self.current_function = function
		try: yield env
		finally:
			self.env, self.current_function = prior_env, prior_function

	###########################################################################
	# Whole programs

	def interpret(self, program:syntax.Program) -> PlarValue:
		""" Run the program, reporting (rather than raising) whatever goes wrong. """
		try:
			return self.run(program)
		except Exception as ex:
			self.report.runtime_error(ex)
			self.report.complain_to_console()
			return NULL

	def run(self, program:syntax.Program) -> PlarValue:
		sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))
		base =program.path.parent if program.path else Path.cwd()
		for directive in program.imports:
			self.process_import(directive, base)
		self.declare_all(program)
		outcome = execute_all(program.statements, self)
		return self._outcome_value(outcome, "programa")

	def declare_all(self, program:syntax.Program):
		for decl in program.interfaces: self.declare_interface(decl)
		for decl in program.classes: self.declare_class(decl)
		for decl in program.functions: execute(decl, self)
		for decl in program.variables: execute(decl, self)

	def process_import(self, directive:syntax.ImportDecl, base:Path):
		try:
			program = self.loader.load(base, directive.relative_path)
			if program is None: return
			for inner in program.imports:
				self.process_import(inner, program.path.parent)
			with self.in_scope(self.global_env):
				self.declare_all(program)
		except ArquivoError:
			raise
		except PlarError as ex:
			raise ArquivoError("Falha ao processar import '%s': %s" % (directive.relative_path, ex)) from ex

	###########################################################################
	# Declarations

	def declare_interface(self, decl:syntax.InterfaceDecl):
		self.global_env.set_interface(decl.name, decl)

	def declare_class(self, decl:syntax.ClassDecl):
		if decl.superclass is not None:
			if decl.superclass == decl.name:
				raise SemanticError("Classe '%s' não pode estender a si mesma" % decl.name)
			if self.global_env.get_class(decl.superclass) is None:
				raise SemanticError("Superclasse '%s' não encontrada para a classe '%s'" % (decl.superclass, decl.name))
		for name in decl.interfaces:
			interface = self.global_env.get_interface(name)
			if interface is None:
				raise SemanticError("Interface '%s' não encontrada para a classe '%s'" % (name, decl.name))
			for method_name in interface.signatures:
				if decl.method(method_name) is None and self._inherited_method(decl.superclass, method_name) is None:
					raise SemanticError("Classe '%s' não implementa o método '%s' da interface '%s'" % (decl.name, method_name, name))
		self.global_env.define_class(decl.name, decl)

	def declare_function(self, decl:syntax.FunctionDecl) -> Function:
		if is_return_invalid(decl.return_type, self.global_env):
			raise SemanticError("Tipo de retorno inválido: %s" % decl.return_type)
		fn = Function(decl.name or "anonima", decl, decl.return_type, self.env)
		fn.implementation = lambda args: self.call_user_function(fn, args)
		if decl.name is not None:
			self.env.define(decl.name, fn)
		return fn

	def declare_variable(self, decl:syntax.VarDecl):
		if decl.initializer is None:
			value = NULL
		else:
			value = evaluate(decl.initializer, self)
			if decl.type_name is not None: self._check_declared_type(decl, value)
		self.env.define(decl.name, value)

	@staticmethod
	def _check_declared_type(decl:syntax.VarDecl, value:PlarValue):
		if isinstance(value, Object):
			if not value.conforms_to(decl.type_name):
				raise SemanticError("Tipo de variável '%s' não corresponde ao tipo do objeto '%s'" % (decl.type_name, value.class_name))
		elif decl.type_name != value.type_string():
			raise SemanticError("Tipo da variavel '%s' (%s) nao corresponde ao valor atribuido (%s)" % (decl.name, decl.type_name, value.type_string()))

	def check_return(self, value:PlarValue):
		fn = self.current_function
		if fn is None or fn.return_type is None: return
		expected, actual = fn.return_type, value.type_string()
		if expected == actual: return
		if isinstance(value, Object) and value.conforms_to(expected): return
		raise SemanticError("Erro de tipo: funcao '%s' deve retornar '%s', mas esta retornando '%s'" % (fn.name, expected, actual))

	###########################################################################
	# Calls

	def call_by_name(self, name:str, args:list) -> PlarValue:
		receiver = self.env.this_object
		if receiver is not None:
			method = self.find_method(receiver, name)
			if method is not None:
				return self.invoke_method(receiver, method, args)
		try: fn = self.env.get(name)
		except NameNotFound: fn = None
		if not isinstance(fn, Function):
			raise SemanticError("Função não encontrada ou não é função: %s" % name)
		if fn.implementation is None:
			raise SemanticError("Função '%s' não possui implementação." % name)
		return fn.apply(args)

	def call_user_function(self, fn:Function, args:list) -> PlarValue:
		decl = fn.declaration
		if len(args) > len(decl.params):
			raise SemanticError("Função '%s' recebeu %d parâmetros, mas espera %d" % (fn.name, len(args), len(decl.params)))
		activation = Environment(fn.closure)
		self._bind_params(activation, decl, args)
		with self.in_scope(activation, fn):
			outcome = execute(decl.body, self)
		return self._outcome_value(outcome, fn.name)

	def invoke_method(self, receiver:Object, method:syntax.FunctionDecl, args:list) -> PlarValue:
		activation = Environment(self.global_env)
		activation.this_object = receiver
		self._bind_params(activation, method, args)
		fn = Function(method.name, method, method.return_type, activation)
		with self.in_scope(activation, fn):
			outcome = execute(method.body, self)
		return self._outcome_value(outcome, method.name)

	@staticmethod
	def _bind_params(activation:Environment, decl:syntax.FunctionDecl, args:list):
		for i, name in enumerate(decl.param_names()):
			activation.define(name, args[i] if i < len(args) else NULL)

	@staticmethod
	def _outcome_value(outcome:Outcome, where:str) -> PlarValue:
		if isinstance(outcome, Returned): return outcome.value
		if outcome is COMPLETED: return NULL
		raise SemanticError("'quebrar' ou 'continuar' fora de um laço em %s" % where)

	###########################################################################
	# The object model

	def instantiate(self, class_name:str, args:list) -> Object:
		decl = self._class(class_name)
		obj = Object(class_name, {}, decl.superclass, decl.interfaces)
		if decl.superclass is not None:
			self._initialize_inherited(obj, decl.superclass, {class_name})
		for field in decl.fields:
			obj.fields[field.name] = self._field_value(obj, field)
		constructor = decl.method("inicializar")
		if constructor is not None:
			self.invoke_method(obj, constructor, args)
		return obj

	def _initialize_inherited(self, obj:Object, base_name:str, seen:set):
		base = self.global_env.get_class(base_name)
		if base is None or base_name in seen: return
		seen.add(base_name)
		if base.superclass is not None:
			self._initialize_inherited(obj, base.superclass, seen)
		for field in base.fields:
			if field.name not in obj.fields:
				obj.fields[field.name] = self._field_value(obj, field)

	def _field_value(self, obj:Object, field:syntax.VarDecl) -> PlarValue:
		if field.initializer is None: return NULL
		env = Environment(self.global_env)
		env.this_object = obj
		with self.in_scope(env):
			return evaluate(field.initializer, self)

	def _class(self, class_name:str) -> syntax.ClassDecl:
		decl = self.global_env.get_class(class_name)
		if decl is None: raise SemanticError("Classe não encontrada: %s" % class_name)
		return decl

	def transient_object(self, class_name:str) -> Object:
		""" A throwaway instance of a class, with only its own fields initialized. """
		decl = self._class(class_name)
		obj = Object(class_name, {}, decl.superclass, decl.interfaces)
		for field in decl.fields:
			obj.fields[field.name] = self._field_value(obj, field)
		return obj

	def find_property(self, obj:Object, name:str) -> Optional[PlarValue]:
		seen = set()
		while True:
			if name in obj.fields: return obj.fields[name]
			seen.add(obj.class_name)
			if obj.superclass is None or obj.superclass in seen: return None
			obj = self.transient_object(obj.superclass)

	def find_method(self, obj:Object, name:str) -> Optional[syntax.FunctionDecl]:
		decl = self.global_env.get_class(obj.class_name)
		if decl is None: return None
		return decl.method(name) or self._inherited_method(obj.superclass, name, {obj.class_name})

	def _inherited_method(self, class_name:Optional[str], name:str, seen=None) -> Optional[syntax.FunctionDecl]:
		seen = set() if seen is None else seen
		while class_name is not None and class_name not in seen:
			seen.add(class_name)
			decl = self.global_env.get_class(class_name)
			if decl is None: return None
			method = decl.method(name)
			if method is not None: return method
			class_name = decl.superclass
		return None
