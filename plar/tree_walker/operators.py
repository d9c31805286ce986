"""
Pure functions for the binary and unary operators.

Mixed Integer/Real arithmetic always promotes to Real.
Adding anything to Text glues the coercion forms together.
Zero divisors are checked before anything else about the operands.
"""
import math
import operator
from ..errors import DivisionByZero, ModuloByZero, UnsupportedOperator, PlarTypeError
from .values import PlarValue, Integer, Real, Text, Logic, NULL, truth, coerce_text, is_number

def _unsupported(op:str, a:PlarValue, b:PlarValue):
	return UnsupportedOperator(op, a.type_string(), b.type_string())

def _numeric(op:str, fn, a:PlarValue, b:PlarValue) -> PlarValue:
	if isinstance(a, Integer) and isinstance(b, Integer):
		return Integer(fn(a.value, b.value))
	if is_number(a) and is_number(b):
		return Real(fn(float(a.value), float(b.value)))
	raise _unsupported(op, a, b)

def add(a:PlarValue, b:PlarValue) -> PlarValue:
	if isinstance(a, Text) or isinstance(b, Text):
		return Text(coerce_text(a) + coerce_text(b))
	return _numeric("+", operator.add, a, b)

def subtract(a:PlarValue, b:PlarValue) -> PlarValue:
	return _numeric("-", operator.sub, a, b)

def multiply(a:PlarValue, b:PlarValue) -> PlarValue:
	return _numeric("*", operator.mul, a, b)

def _is_zero(b:PlarValue) -> bool:
	return is_number(b) and b.value == 0

def divide(a:PlarValue, b:PlarValue) -> PlarValue:
	if _is_zero(b): raise DivisionByZero()
	if isinstance(a, Integer) and isinstance(b, Integer):
		q, r = divmod(a.value, b.value)
		return Integer(q) if r == 0 else Real(a.value / b.value)
	return _numeric("/", operator.truediv, a, b)

def _truncated_mod(x:int, y:int) -> int:
	# The sign follows the dividend, unlike Python's floored `%`.
	r = abs(x) % abs(y)
	return r if x >= 0 else -r

def modulo(a:PlarValue, b:PlarValue) -> PlarValue:
	if _is_zero(b): raise ModuloByZero()
	if isinstance(a, Integer) and isinstance(b, Integer):
		return Integer(_truncated_mod(a.value, b.value))
	return _numeric("%", math.fmod, a, b)

RELATIONS = {
	"<": operator.lt,
	"<=": operator.le,
	">": operator.gt,
	">=": operator.ge,
}

def compare(op:str, a:PlarValue, b:PlarValue) -> Logic:
	relation = RELATIONS[op]
	if is_number(a) and is_number(b):
		return truth(relation(a.value, b.value))
	if isinstance(a, Text) and isinstance(b, Text):
		return truth(relation(a.value, b.value))
	raise _unsupported(op, a, b)

def are_equal(a:PlarValue, b:PlarValue) -> bool:
	if is_number(a) and is_number(b):
		return float(a.value) == float(b.value)
	if isinstance(a, (Text, Logic)):
		return a == b
	return a is b

def equality(op:str, a:PlarValue, b:PlarValue) -> Logic:
	if a is NULL or b is NULL:
		same = a is b
	else:
		same = are_equal(a, b)
	return truth(same if op == "==" else not same)

def negate(a:PlarValue) -> PlarValue:
	if isinstance(a, Integer): return Integer(-a.value)
	if isinstance(a, Real): return Real(-a.value)
	raise PlarTypeError("Operador '-' requer valor numérico")

def logical_not(a:PlarValue) -> Logic:
	if isinstance(a, Logic): return truth(not a.value)
	raise PlarTypeError("Operador '!' requer valor lógico")

BINARY = {
	"+": add,
	"-": subtract,
	"*": multiply,
	"/": divide,
	"%": modulo,
	"==": lambda a, b: equality("==", a, b),
	"!=": lambda a, b: equality("!=", a, b),
}
BINARY.update({op: (lambda rel: lambda a, b: compare(rel, a, b))(op) for op in RELATIONS})

UNARY = {
	"-": negate,
	"!": logical_not,
}

def binary(op:str, a:PlarValue, b:PlarValue) -> PlarValue:
	return BINARY[op](a, b)
