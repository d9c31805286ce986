"""
One function per kind of syntax node. Each `_eval_*` takes an expression and the interpreter;
each `_exec_*` takes a statement and the interpreter. The annotations on the first parameter
are how `attach_evaluation_methods` knows which node-class each function serves.

The heavier object-model operations (calls, instantiation, hierarchy walks)
live on the Interpreter itself; these functions just take the tree apart.
"""
from .. import syntax
from ..errors import SemanticError, PlarTypeError
from .evaluator import (
	evaluate, execute, execute_all, attach_evaluation_methods,
	COMPLETED, BROKE, CONTINUED, Returned,
)
from .operators import UNARY, binary
from .values import PlarValue, Integer, Logic, List, Map, Object, Text, NULL

def _condition(expr:syntax.Expression, run, construct:str) -> bool:
	flag = evaluate(expr, run)
	if not isinstance(flag, Logic):
		raise SemanticError("Condição do '%s' deve ser um valor lógico" % construct)
	return flag.value

def _arguments(args, run) -> list:
	return [evaluate(a, run) for a in args]

###############################################################################
# Expressions

def _eval_literal(expr:syntax.Literal, run):
	return expr.value

def _eval_variable(expr:syntax.Variable, run):
	return run.env.get(expr.name)

def _eval_this(expr:syntax.This, run):
	if run.env.this_object is None:
		raise SemanticError("'este' fora de contexto de objeto")
	return run.env.this_object

def _eval_function_literal(expr:syntax.FunctionDecl, run):
	return run.declare_function(expr)

def _eval_binary_expression(expr:syntax.BinaryExpression, run):
	lhs = evaluate(expr.lhs, run)
	rhs = evaluate(expr.rhs, run)
	return binary(expr.op, lhs, rhs)

def _eval_unary_expression(expr:syntax.UnaryExpression, run):
	return UNARY[expr.op](evaluate(expr.arg, run))

SHORTCUT = {
	"ou": True,
	"e": False,
}

def _eval_logical_chain(expr:syntax.LogicalChain, run):
	decisive = SHORTCUT[expr.op]
	operands = iter(expr.operands)
	acc = evaluate(next(operands), run)
	for operand in operands:
		if isinstance(acc, Logic) and acc.value == decisive:
			return acc
		rhs = evaluate(operand, run)
		if not (isinstance(acc, Logic) and isinstance(rhs, Logic)):
			raise PlarTypeError("Operador '%s' requer valores lógicos" % expr.op)
		acc = rhs
	return acc

def _eval_assignment(expr:syntax.Assignment, run):
	value = evaluate(expr.value, run)
	target = expr.target
	if isinstance(target, syntax.Variable):
		run.env.update_or_define(target.name, value)
	elif isinstance(target, syntax.FieldAccess):
		subject = evaluate(target.subject, run)
		if not isinstance(subject, Object):
			raise SemanticError("Não é possível atribuir a uma propriedade de um não-objeto")
		subject.fields[target.name] = value
	else:
		container = evaluate(target.subject, run)
		key = evaluate(target.key, run)
		if isinstance(container, List):
			_check_index(container, key)
			container.elements[key.value] = value
		elif isinstance(container, Map):
			container.elements[key] = value
		elif isinstance(container, Object) and isinstance(key, Text):
			container.fields[key.value] = value
		else:
			raise SemanticError("Operação de atribuição com índice não suportada para %s" % container.type_string())
	return value

def _check_index(container:List, key:PlarValue):
	if not isinstance(key, Integer):
		raise SemanticError("Índice de lista deve ser um número inteiro")
	if not 0 <= key.value < len(container.elements):
		raise SemanticError("Índice fora dos limites da lista: %d" % key.value)

def _eval_index(expr:syntax.Index, run):
	container = evaluate(expr.subject, run)
	key = evaluate(expr.key, run)
	if isinstance(container, List):
		_check_index(container, key)
		return container.elements[key.value]
	if isinstance(container, Map):
		return container.elements.get(key, NULL)
	if isinstance(container, Object):
		if not isinstance(key, Text):
			raise SemanticError("Chave para acessar campo de objeto deve ser texto")
		return container.fields.get(key.value, NULL)
	raise SemanticError("Operação de acesso com índice não suportada para %s" % container.type_string())

def _eval_field_access(expr:syntax.FieldAccess, run):
	subject = evaluate(expr.subject, run)
	if subject is NULL: return NULL
	if not isinstance(subject, Object):
		raise SemanticError("Tentativa de acessar propriedade de um não-objeto")
	found = run.find_property(subject, expr.name)
	return NULL if found is None else found

def _eval_method_call(expr:syntax.MethodCall, run):
	subject = evaluate(expr.subject, run)
	if subject is NULL: return NULL
	if not isinstance(subject, Object):
		raise SemanticError("Chamada de método '%s' em não-objeto" % expr.name)
	args = _arguments(expr.args, run)
	method = run.find_method(subject, expr.name)
	if method is None:
		raise SemanticError("Metodo nao encontrado: %s em classe %s" % (expr.name, subject.class_name))
	return run.invoke_method(subject, method, args)

def _eval_call(expr:syntax.Call, run):
	return run.call_by_name(expr.name, _arguments(expr.args, run))

def _eval_new_object(expr:syntax.NewObject, run):
	return run.instantiate(expr.class_name, _arguments(expr.args, run))

def _eval_list_literal(expr:syntax.ListLiteral, run):
	return List(_arguments(expr.elements, run))

def _eval_list_allocation(expr:syntax.ListAllocation, run):
	size = evaluate(expr.size, run)
	if not isinstance(size, Integer) or size.value < 0:
		raise SemanticError("Tamanho de lista deve ser um inteiro não-negativo")
	return List([NULL] * size.value, size.value)

def _eval_map_literal(expr:syntax.MapLiteral, run):
	return Map()

###############################################################################
# Statements

def _exec_expression_statement(stmt:syntax.ExpressionStatement, run):
	evaluate(stmt.expr, run)
	return COMPLETED

def _exec_var_decl(stmt:syntax.VarDecl, run):
	run.declare_variable(stmt)
	return COMPLETED

def _exec_function_decl(stmt:syntax.FunctionDecl, run):
	run.declare_function(stmt)
	return COMPLETED

def _exec_block(stmt:syntax.Block, run):
	with run.in_scope(run.env.child()):
		return execute_all(stmt.statements, run)

def _exec_if_statement(stmt:syntax.IfStatement, run):
	if _condition(stmt.condition, run, "se"):
		return execute(stmt.then_part, run)
	elif stmt.else_part is not None:
		return execute(stmt.else_part, run)
	return COMPLETED

def _exec_while_statement(stmt:syntax.WhileStatement, run):
	iterations = 0
	while iterations < run.max_loop:
		if not _condition(stmt.condition, run, "enquanto"):
			return COMPLETED
		iterations += 1
		outcome = execute(stmt.body, run)
		if outcome is BROKE: return COMPLETED
		if isinstance(outcome, Returned): return outcome
	run.report.runaway_loop(stmt, run.max_loop)
	return COMPLETED

def _exec_for_statement(stmt:syntax.ForStatement, run):
	if stmt.initializer is not None:
		if isinstance(stmt.initializer, syntax.VarDecl): run.declare_variable(stmt.initializer)
		else: evaluate(stmt.initializer, run)
	while _condition(stmt.condition, run, "para"):
		outcome = execute(stmt.body, run)
		if outcome is BROKE: break
		if isinstance(outcome, Returned): return outcome
		if stmt.step is not None: evaluate(stmt.step, run)
	return COMPLETED

def _exec_do_while_statement(stmt:syntax.DoWhileStatement, run):
	iterations = 0
	while True:
		outcome = execute(stmt.body, run)
		if outcome is BROKE: break
		if isinstance(outcome, Returned): return outcome
		if not _condition(stmt.condition, run, "enquanto"): break
		iterations += 1
		if iterations >= run.max_do_loop:
			run.report.runaway_loop(stmt, run.max_do_loop)
			break
	return COMPLETED

def _exec_break_statement(stmt:syntax.BreakStatement, run):
	return BROKE

def _exec_continue_statement(stmt:syntax.ContinueStatement, run):
	return CONTINUED

def _exec_return_statement(stmt:syntax.ReturnStatement, run):
	value = NULL if stmt.expr is None else evaluate(stmt.expr, run)
	run.check_return(value)
	return Returned(value)

def _exec_try_catch(stmt:syntax.TryCatch, run):
	try:
		return execute(stmt.body, run)
	except Exception as ex:
		run.report.info("capturado:", ex)
		return execute(stmt.handler, run)

attach_evaluation_methods(globals())
