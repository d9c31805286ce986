import os
from ..errors import ArquivoError
from ..primitive import native, expect_arity, expect_kind
from ..tree_walker.values import Text, Logic, NULL

class FileSystem:
	@staticmethod
	@native("readFile", returns="Texto")
	def read_file(args):
		expect_arity("readFile", args, 1)
		path = expect_kind("readFile", args[0], Text, "um texto (caminho do arquivo)")
		try:
			with open(path.value, "r", encoding="utf-8") as fh: text = fh.read()
		except OSError as ex:
			raise ArquivoError("Erro ao ler arquivo '%s': %s" % (path.value, ex.strerror or ex)) from ex
		return Text(text)

	@staticmethod
	@native("writeFile")
	def write_file(args):
		expect_arity("writeFile", args, 2, 3)
		path = expect_kind("writeFile", args[0], Text, "do tipo Texto")
		data = expect_kind("writeFile", args[1], Text, "do tipo Texto")
		append = expect_kind("writeFile", args[2], Logic, "do tipo Logico").value if len(args) == 3 else False
		try:
			with open(path.value, "a" if append else "w", encoding="utf-8") as fh: fh.write(data.value)
		except OSError as ex:
			raise ArquivoError("Erro ao escrever arquivo '%s': %s" % (path.value, ex.strerror or ex)) from ex
		return NULL

	@staticmethod
	@native("diretorio_atual", returns="Texto")
	def current_directory(args):
		expect_arity("diretorio_atual", args, 0)
		return Text(os.getcwd())
