"""
The conditions a Plar program can raise at run-time.

Control-flow signals (return, break, continue) are NOT in here:
they travel as ordinary results of statement execution.
Everything in this module is a genuine failure, and any of it
can be caught by a program-level `tentar ... capturar` block.
"""

class PlarError(Exception):
	"""
	Base for every failure the interpreter raises on behalf of the program.
	The evaluator fills in `site` with the innermost statement that was
	running, so the diagnostic can point at the guilty line.
	"""
	site = None

	def __init__(self, message:str):
		super().__init__(message)
		self.message = message

	def __str__(self): return self.message

class SemanticError(PlarError):
	""" Type mismatches, unknown classes and methods, arity violations, and the like. """

class NameNotFound(PlarError):
	""" A lookup fell off the end of the environment chain. """
	def __init__(self, name:str):
		super().__init__("Nao foi possivel achar a variavel '%s'" % name)
		self.name = name

class DivisionByZero(PlarError):
	def __init__(self): super().__init__("Divisão por zero")

class ModuloByZero(PlarError):
	def __init__(self): super().__init__("Módulo por zero")

class UnsupportedOperator(PlarError):
	def __init__(self, op:str, left:str, right:str):
		super().__init__("Operador '%s' não suportado para %s e %s" % (op, left, right))
		self.op = op

class PlarTypeError(PlarError):
	""" An operand of the wrong kind, such as a number given to `ou`. """

class ArquivoError(PlarError):
	""" File trouble, whether in a built-in or while importing. """

class InputError(PlarError):
	""" Something could not be converted or read as requested. """

class UserError(PlarError):
	""" Raised on purpose by the program, via `jogarError`. """

class PlarRuntimeError(PlarError):
	""" Host-level trouble surfacing through a built-in, like a socket that won't bind. """
