"""
Dispatch by node class, and the outcomes that statements produce.

Expressions evaluate to values. Statements execute to an Outcome:
either they complete normally, or they carry one of the three
non-local signals (break, continue, return) up to whichever construct
gives that signal its meaning. Errors, by contrast, are raised.
"""
from .. import syntax
from ..errors import PlarError
from .values import PlarValue

class Outcome:
	""" What happened when a statement ran. """
	__slots__ = ()

class _Completed(Outcome):
	def __repr__(self): return "COMPLETED"

class _Broke(Outcome):
	def __repr__(self): return "BROKE"

class _Continued(Outcome):
	def __repr__(self): return "CONTINUED"

class Returned(Outcome):
	__slots__ = ("value",)
	def __init__(self, value:PlarValue): self.value = value
	def __repr__(self): return "Returned(%r)" % (self.value,)

COMPLETED = _Completed()
BROKE = _Broke()
CONTINUED = _Continued()

EVALUATE = {}
EXECUTE = {}

def evaluate(expr:syntax.Phrase, run) -> PlarValue:
	try: fn = EVALUATE[type(expr)]
	except KeyError: raise NotImplementedError(type(expr), expr)
	return fn(expr, run)

def execute(stmt:syntax.Phrase, run) -> Outcome:
	try: fn = EXECUTE[type(stmt)]
	except KeyError: raise NotImplementedError(type(stmt), stmt)
	try:
		return fn(stmt, run)
	except PlarError as ex:
		if ex.site is None: ex.site = stmt
		raise

def execute_all(statements, run) -> Outcome:
	""" Run statements in order until one of them doesn't complete normally. """
	for stmt in statements:
		outcome = execute(stmt, run)
		if outcome is not COMPLETED: return outcome
	return COMPLETED

def attach_evaluation_methods(python_scope):
	for _k, _v in list(python_scope.items()):
		if _k.startswith("_eval_"):
			_t = _v.__annotations__["expr"]
			assert isinstance(_t, type), (_k, _t)
			EVALUATE[_t] = _v
		elif _k.startswith("_exec_"):
			_t = _v.__annotations__["stmt"]
			assert isinstance(_t, type), (_k, _t)
			EXECUTE[_t] = _v
