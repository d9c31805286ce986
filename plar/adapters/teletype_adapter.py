import sys
from ..primitive import native
from ..tree_walker.values import Text, NULL, coerce_text

class Console:
	@staticmethod
	@native("escrever", "imprimir")
	def echo(args):
		sys.stdout.write(" ".join(map(coerce_text, args)) + "\n")
		sys.stdout.flush()
		return NULL

	@staticmethod
	@native("ler", returns="Texto")
	def read(args):
		line = sys.stdin.readline()
		return Text(line.rstrip("\r\n"))
