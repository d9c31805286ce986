import io
import tempfile
from pathlib import Path
import unittest
from unittest import mock

from plar import diagnostics
from plar.errors import ArquivoError
from plar.modularity import Loader
from plar.tree_walker.executive import Interpreter

class ImportTests(unittest.TestCase):
	def setUp(self):
		self.tmp = tempfile.TemporaryDirectory()
		self.folder = Path(self.tmp.name)
		self.report = diagnostics.Report()
		self.loader = Loader(self.report)

	def tearDown(self):
		self.tmp.cleanup()

	def write(self, name, text) -> Path:
		path = self.folder / name
		path.parent.mkdir(parents=True, exist_ok=True)
		path.write_text(text, encoding="utf-8")
		return path

	def run_main(self, name) -> str:
		program = self.loader.load_main(self.folder / name)
		self.report.assert_no_issues("Main program should have parsed.")
		with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			Interpreter(self.report, loader=self.loader).run(program)
		return out.getvalue()

	def test_declarations_come_across(self):
		self.write("lib.pplus", """
			classe Ponto { var x = 1; }
			interface Forma { funcao area(); }
			funcao dobro(n) { retornar n * 2; }
			var LIMITE = 10;
			escrever("nao roda");
		""")
		self.write("main.pplus", """
			importar "lib";
			classe Quadrado implementa Forma { funcao area() { retornar 4; } }
			escrever(dobro(LIMITE), novo Ponto().x, novo Quadrado().area());
		""")
		self.assertEqual("20 1 4\n", self.run_main("main.pplus"))

	def test_paths_are_relative_to_the_importer(self):
		self.write("sub/a.pplus", 'importar "b.pplus"; funcao de_a() { retornar de_b(); }')
		self.write("sub/b.pplus", 'funcao de_b() { retornar "b"; }')
		self.write("main.pplus", 'importar "sub/a"; escrever(de_a());')
		self.assertEqual("b\n", self.run_main("main.pplus"))

	def test_cycles_load_once(self):
		self.write("a.pplus", 'importar "b"; funcao fa() { retornar 1; }')
		self.write("b.pplus", 'importar "a"; funcao fb() { retornar 2; }')
		self.write("main.pplus", 'importar "a"; importar "b"; escrever(fa() + fb());')
		self.assertEqual("3\n", self.run_main("main.pplus"))
		self.assertEqual(3, len(self.loader.imported))

	def test_importing_the_main_program_is_harmless(self):
		self.write("main.pplus", 'importar "main"; escrever("uma vez");')
		self.assertEqual("uma vez\n", self.run_main("main.pplus"))

	def test_missing_import(self):
		self.write("main.pplus", 'importar "fantasma";')
		with self.assertRaises(ArquivoError) as cm:
			self.run_main("main.pplus")
		self.assertIn("Falha ao processar import", str(cm.exception))

	def test_import_with_syntax_error(self):
		self.write("ruim.pplus", "var = ;")
		self.write("main.pplus", 'importar "ruim";')
		program = self.loader.load_main(self.folder / "main.pplus")
		with self.assertRaises(ArquivoError):
			Interpreter(self.report, loader=self.loader).run(program)
		self.assertTrue(self.report.sick())

	def test_semantic_error_in_import_is_wrapped(self):
		self.write("lib.pplus", "classe A estende Fantasma { }")
		self.write("main.pplus", 'importar "lib";')
		with self.assertRaises(ArquivoError) as cm:
			self.run_main("main.pplus")
		self.assertIn("'lib'", str(cm.exception))

class LoaderTests(unittest.TestCase):
	def test_resolve(self):
		base = Path("/projeto")
		self.assertEqual(Path("/projeto/util.pplus").resolve(), Loader.resolve(base, "util"))
		self.assertEqual(Path("/projeto/util.txt").resolve(), Loader.resolve(base, "util.txt"))
		self.assertEqual(Path("/outro/x.pplus").resolve(), Loader.resolve(base, "/outro/x.pplus"))

	def test_second_load_is_skipped(self):
		with tempfile.TemporaryDirectory() as tmp:
			(Path(tmp) / "a.pplus").write_text("var x = 1;", encoding="utf-8")
			loader = Loader(diagnostics.Report())
			self.assertIsNotNone(loader.load(Path(tmp), "a"))
			self.assertIsNone(loader.load(Path(tmp), "a"))

	def test_missing_main(self):
		report = diagnostics.Report()
		self.assertIsNone(Loader(report).load_main(Path("/nao/existe.pplus")))
		self.assertTrue(report.sick())
		self.assertIn("Não encontrei o arquivo", report.issues[0].description)

if __name__ == '__main__':
	unittest.main()
