"""
Parse-nodes for Plar, one class per grammar rule that needs one.
The front-end calls these constructors with subordinate semantic-values in a bottom-up tree transduction,
so each constructor's parameters line up with the children of the grammar rule of the same name.
The evaluator never mutates these nodes; class and interface declarations get registered
by reference and looked up again for every instantiation and hierarchy walk.
"""
from pathlib import Path
from typing import Optional, Sequence
from .tree_walker.values import PlarValue

class Phrase:
	""" Anything with a position in the source text. The front-end fills these in. """
	line: Optional[int] = None
	column: Optional[int] = None
	width: int = 1
	path: Optional[Path] = None

	def locate(self, line, column, width=1, path=None):
		self.line, self.column, self.width, self.path = line, column, max(width, 1), path
		return self

	def where(self) -> str:
		if self.line is None: return "?"
		return "%s:%d:%d" % (self.path or "<texto>", self.line, self.column)

class Statement(Phrase): pass
class Expression(Phrase): pass

###############################################################################
# Declarations

class Param(Phrase):
	def __init__(self, name:str, type_name:Optional[str]):
		self.name, self.type_name = name, type_name
	def __repr__(self): return "<:%s:%s>" % (self.name, self.type_name)

class FunctionDecl(Statement):
	"""
	Serves for top-level functions, methods, and function-literals alike.
	A function-literal may lack a name.
	"""
	def __init__(self, name:Optional[str], params:Optional[Sequence[Param]], return_type:Optional[str], body:"Block"):
		self.name = name
		self.params = list(params or ())
		self.return_type = return_type
		self.body = body
	def param_names(self): return [p.name for p in self.params]
	def __repr__(self): return "<funcao %s/%d>" % (self.name, len(self.params))

class Signature(Phrase):
	def __init__(self, name:str, params:Optional[Sequence[Param]], return_type:Optional[str]):
		self.name = name
		self.params = list(params or ())
		self.return_type = return_type

class InterfaceDecl(Statement):
	def __init__(self, name:str, *signatures:Signature):
		self.name = name
		self.signatures = {s.name: s for s in signatures}

class VarDecl(Statement):
	def __init__(self, name:str, type_name:Optional[str], initializer:Optional[Phrase]):
		self.name = name
		self.type_name = type_name
		self.initializer = initializer
	def __repr__(self): return "<var %s>" % self.name

class ClassDecl(Statement):
	def __init__(self, name:str, superclass:Optional[str], interfaces:Optional[Sequence[str]], *members):
		self.name = name
		self.superclass = superclass
		self.interfaces = list(interfaces or ())
		self.fields = [m for m in members if isinstance(m, VarDecl)]
		self.methods = [m for m in members if isinstance(m, FunctionDecl)]

	def method(self, name:str) -> Optional[FunctionDecl]:
		for m in self.methods:
			if m.name == name: return m

	def __repr__(self): return "<classe %s>" % self.name

class ImportDecl(Statement):
	def __init__(self, relative_path:str):
		self.relative_path = relative_path

class Program(Phrase):
	""" One source unit. The constructor sorts the top-levels into the order they get processed. """
	def __init__(self, *top_levels):
		self.imports = []
		self.interfaces = []
		self.classes = []
		self.functions = []
		self.variables = []
		self.statements = []
		for item in top_levels:
			if isinstance(item, ImportDecl): self.imports.append(item)
			elif isinstance(item, InterfaceDecl): self.interfaces.append(item)
			elif isinstance(item, ClassDecl): self.classes.append(item)
			elif isinstance(item, FunctionDecl): self.functions.append(item)
			elif isinstance(item, VarDecl): self.variables.append(item)
			else: self.statements.append(item)

###############################################################################
# Statements

class Block(Statement):
	def __init__(self, *statements):
		self.statements = statements

class IfStatement(Statement):
	def __init__(self, condition:Expression, then_part:Statement, else_part:Optional[Statement]):
		self.condition, self.then_part, self.else_part = condition, then_part, else_part

class WhileStatement(Statement):
	def __init__(self, condition:Expression, body:Statement):
		self.condition, self.body = condition, body

class ForStatement(Statement):
	def __init__(self, initializer:Optional[Phrase], condition:Expression, step:Optional[Expression], body:Statement):
		self.initializer, self.condition, self.step, self.body = initializer, condition, step, body

class DoWhileStatement(Statement):
	def __init__(self, body:Statement, condition:Expression):
		self.body, self.condition = body, condition

class BreakStatement(Statement): pass
class ContinueStatement(Statement): pass

class ReturnStatement(Statement):
	def __init__(self, expr:Optional[Expression]):
		self.expr = expr

class TryCatch(Statement):
	def __init__(self, body:Block, handler:Block):
		self.body, self.handler = body, handler

class ExpressionStatement(Statement):
	def __init__(self, expr:Expression):
		self.expr = expr

###############################################################################
# Expressions

class Literal(Expression):
	def __init__(self, value:PlarValue):
		self.value = value
	def __repr__(self): return "<lit %s>" % self.value.display()

class Variable(Expression):
	def __init__(self, name:str):
		self.name = name
	def __repr__(self): return "<ref:%s>" % self.name

class This(Expression):
	def __repr__(self): return "<este>"

class Assignment(Expression):
	def __init__(self, target:Expression, value:Expression):
		self.target, self.value = target, value

class LogicalChain(Expression):
	""" `a ou b ou c` is one chain with three operands, not two nested binaries. """
	def __init__(self, op:str, operands:Sequence[Expression]):
		self.op, self.operands = op, list(operands)

class BinaryExpression(Expression):
	def __init__(self, op:str, lhs:Expression, rhs:Expression):
		self.op, self.lhs, self.rhs = op, lhs, rhs

class UnaryExpression(Expression):
	def __init__(self, op:str, arg:Expression):
		self.op, self.arg = op, arg

class Call(Expression):
	def __init__(self, name:str, args:Optional[Sequence[Phrase]]):
		self.name, self.args = name, list(args or ())

class MethodCall(Expression):
	def __init__(self, subject:Expression, name:str, args:Optional[Sequence[Phrase]]):
		self.subject, self.name, self.args = subject, name, list(args or ())

class FieldAccess(Expression):
	def __init__(self, subject:Expression, name:str):
		self.subject, self.name = subject, name

class Index(Expression):
	def __init__(self, subject:Expression, key:Expression):
		self.subject, self.key = subject, key

class NewObject(Expression):
	def __init__(self, class_name:str, args:Optional[Sequence[Phrase]]):
		self.class_name, self.args = class_name, list(args or ())

class ListLiteral(Expression):
	def __init__(self, elements:Optional[Sequence[Phrase]]):
		self.elements = list(elements or ())

class ListAllocation(Expression):
	""" `novo Lista(n)` makes a list of n nulls. """
	def __init__(self, size:Expression):
		self.size = size

class MapLiteral(Expression):
	""" `novo Mapa()` makes an empty map. """
