"""
Turn Plar source text into the node classes of `syntax`.

The grammar lives in Plar.lark beside this file. Most rules build the syntax class
of the corresponding name by default; the handful that need more care have methods below.
"""
import re
from pathlib import Path
from typing import Optional

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedInput, UnexpectedToken, UnexpectedCharacters, VisitError

from . import syntax
from .diagnostics import Report
from .tree_walker.values import Integer, Real, Text, TRUE, FALSE, NULL

GRAMMAR_PATH = Path(__file__).parent / "Plar.lark"

_parser = Lark(
	GRAMMAR_PATH.read_text(encoding="utf-8"),
	parser="lalr",
	propagate_positions=True,
)

_CONSTRUCTOR = {
	"import_decl": "ImportDecl",
	"interface_decl": "InterfaceDecl",
	"signature": "Signature",
	"class_decl": "ClassDecl",
	"function_decl": "FunctionDecl",
	"param": "Param",
	"var_decl": "VarDecl",
	"block": "Block",
	"if_stmt": "IfStatement",
	"while_stmt": "WhileStatement",
	"for_stmt": "ForStatement",
	"do_while_stmt": "DoWhileStatement",
	"break_stmt": "BreakStatement",
	"continue_stmt": "ContinueStatement",
	"return_stmt": "ReturnStatement",
	"try_catch": "TryCatch",
	"expression_stmt": "ExpressionStatement",
	"field_access": "FieldAccess",
	"method_call": "MethodCall",
	"index": "Index",
	"variable": "Variable",
	"call": "Call",
	"list_literal": "ListLiteral",
	"this": "This",
}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\"}

def _unescape(body:str) -> str:
	return re.sub(r'\\(.)', lambda m: _ESCAPES.get(m.group(1), m.group(0)), body)

def _positioned(f, data, children, meta):
	return _locate(f(*children), meta)

def _locate(node, meta):
	if isinstance(node, syntax.Phrase) and node.line is None and not meta.empty:
		width = meta.end_column - meta.column if meta.end_line == meta.line else 1
		node.locate(meta.line, meta.column, width, PlarTransformer.current_path)
	return node

@v_args(wrapper=_positioned)
class PlarTransformer(Transformer):
	""" Bottom-up tree transduction from lark's parse tree to `syntax` nodes. """
	current_path: Optional[Path] = None

	def __default__(self, data, children, meta):
		ctor = getattr(syntax, _CONSTRUCTOR[data])
		return _locate(ctor(*children), meta)

	# Tokens

	@staticmethod
	def ID(token): return str(token)

	@staticmethod
	def STRING(token): return _unescape(token[1:-1])

	# Odds and ends that don't become nodes of their own

	@staticmethod
	def start(*top_levels): return syntax.Program(*top_levels)

	@staticmethod
	def extends(name): return name

	@staticmethod
	def implements(*names): return list(names)

	@staticmethod
	def params(*items): return list(items)

	@staticmethod
	def args(*items): return list(items)

	@staticmethod
	def function_literal(name, params, return_type, body):
		return syntax.FunctionDecl(name, params, return_type, body)

	# Expressions

	@staticmethod
	def assign(target, value):
		if not isinstance(target, (syntax.Variable, syntax.FieldAccess, syntax.Index)):
			raise SyntaxError("Alvo de atribuição inválido")
		return syntax.Assignment(target, value)

	@staticmethod
	def logic_or(*operands): return syntax.LogicalChain("ou", operands)

	@staticmethod
	def logic_and(*operands): return syntax.LogicalChain("e", operands)

	@staticmethod
	def _fold(first, *rest):
		lhs = first
		for i in range(0, len(rest), 2):
			op, rhs = rest[i], rest[i+1]
			lhs = syntax.BinaryExpression(str(op), lhs, rhs).locate(op.line, op.column, len(op), PlarTransformer.current_path)
		return lhs

	equality = comparison = addition = multiplication = _fold

	@staticmethod
	def unary_op(op, arg): return syntax.UnaryExpression(str(op), arg)

	@staticmethod
	def number(token):
		text = str(token)
		return syntax.Literal(Real(float(text)) if "." in text else Integer(int(text)))

	@staticmethod
	def string(text): return syntax.Literal(Text(text))

	@staticmethod
	def true(): return syntax.Literal(TRUE)

	@staticmethod
	def false(): return syntax.Literal(FALSE)

	@staticmethod
	def null(): return syntax.Literal(NULL)

	@staticmethod
	def new_object(class_name, args):
		if class_name == "Lista":
			if not args or len(args) != 1:
				raise SyntaxError("'novo Lista' precisa de exatamente um tamanho")
			return syntax.ListAllocation(args[0])
		if class_name == "Mapa":
			return syntax.MapLiteral()
		return syntax.NewObject(class_name, args)

def parse_text(text:str, path:Optional[Path], report:Report) -> Optional[syntax.Program]:
	""" Submit text to parser; submit the resulting tree to the transducer. """
	report.info("Parsing", path or "<texto>")
	try:
		tree = _parser.parse(text)
	except UnexpectedInput as ex:
		report.generic_parse_error(path, ex.line, ex.column, ex.get_context(text), _best_hint(ex))
		return None
	PlarTransformer.current_path = path
	try:
		program = PlarTransformer().transform(tree)
	except VisitError as ex:
		if not isinstance(ex.orig_exc, SyntaxError): raise
		meta = getattr(ex.obj, "meta", None)
		line, column = (meta.line, meta.column) if meta is not None and not meta.empty else (0, 0)
		report.generic_parse_error(path, line, column, "", str(ex.orig_exc))
		return None
	finally:
		PlarTransformer.current_path = None
	program.locate(1, 1, 1, path)
	return program

def parse_file(path:Path, report:Report) -> Optional[syntax.Program]:
	with open(path, "r", encoding="utf-8") as fh:
		text = fh.read()
	return parse_text(text, path, report)

##########################
#
#  Parse error messages are better with a hint or two.
#  Each hint names the kind of token the parser choked on (or "*" for any)
#  and a terminal the parser would have liked to see instead (or None for any).
#

_HINTS = []

def _hint(lookahead:str, wanted:Optional[str], text:str):
	_HINTS.append((lookahead, wanted, text))

_hint("$END", "RBRACE", "O arquivo terminou com um bloco ainda aberto. Faltou um '}'?")
_hint("$END", None, "O arquivo terminou no meio de uma instrução.")
_hint("*", "SEMICOLON", "Faltou um ';' no fim da instrução anterior?")
_hint("*", "RPAR", "Faltou fechar um ')'?")
_hint("*", "RSQB", "Faltou fechar um ']'?")
_hint("EQUAL", None, "Atribuição só vale para nomes, campos e índices. Para comparar, use '=='.")
_hint("*", "RBRACE", "Faltou um '}'?")

def _best_hint(ex:UnexpectedInput) -> str:
	if isinstance(ex, UnexpectedCharacters):
		return "Não reconheço o caractere %r." % ex.char
	if isinstance(ex, UnexpectedToken):
		lookahead = ex.token.type
		expected = ex.expected or set()
		for kind, wanted, text in _HINTS:
			if kind not in ("*", lookahead): continue
			if wanted is not None and wanted not in expected: continue
			return text
		if expected:
			return "Esperava um de: %s" % ", ".join(sorted(expected))
	return "Não consegui entender esta parte."
