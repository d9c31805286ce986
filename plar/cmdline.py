"""
Interpretador para a linguagem Plar.

{0}

Por exemplo:

    plar programa.pplus

roda programa.pplus se possível, ou tenta explicar por que não.

    plar -h

explica todos os argumentos.
"""
import sys, argparse
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

parser = argparse.ArgumentParser(
	prog="plar",
	description="Interpretador para a linguagem Plar.",
)
parser.add_argument("program", help="experimente examples/ola.pplus, por exemplo.")
parser.add_argument('-c', "--check", action="store_true", help="Analisa o programa e relata os problemas, mas não o executa.")
parser.add_argument('-v', "--verbose", action="count", help="Conta mais sobre o que está acontecendo. Repita para contar ainda mais.")
parser.add_argument("--max-loop", type=int, default=None, metavar="N", help="Limite de voltas de um 'enquanto' antes do aviso de loop infinito.")
parser.add_argument("--max-do-loop", type=int, default=None, metavar="N", help="Limite de voltas de um 'faca ... enquanto'.")

def run(args):
	from .diagnostics import Report
	from .modularity import Loader
	from .tree_walker.executive import Interpreter, MAX_LOOP, MAX_DO_LOOP
	report = Report(verbose=args.verbose)
	loader = Loader(report)
	program = loader.load_main(Path.cwd() / args.program)
	if program is None:
		report.complain_to_console()
		return 1
	if args.check:
		print("Parece plausível.", file=sys.stderr)
		return
	interpreter = Interpreter(
		report,
		loader=loader,
		max_loop=args.max_loop or MAX_LOOP,
		max_do_loop=args.max_do_loop or MAX_DO_LOOP,
	)
	interpreter.interpret(program)
	if report.sick():
		return 1

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
