import io
import socket
import tempfile
import threading
import time
from pathlib import Path
import unittest
from unittest import mock

from plar.errors import SemanticError, InputError, UserError, ArquivoError, PlarRuntimeError
from plar.primitive import Primitives, install_natives, default_adapters
from plar.adapters.teletype_adapter import Console
from plar.adapters.fs_adapter import FileSystem
from plar.adapters.socket_adapter import Sockets, host_and_port, DEFAULT_HOST, DEFAULT_PORT
from plar.adapters.thread_adapter import Threads
from plar.tree_walker.environment import Environment
from plar.tree_walker.values import Integer, Real, Text, List, Map, Function, TRUE, FALSE, NULL

class RegistryTests(unittest.TestCase):
	def test_everything_gets_installed(self):
		env = Environment()
		install_natives(env, *default_adapters(mock.Mock()))
		for name in [
			"escrever", "imprimir", "ler", "consultar_tipo", "converter_tipo",
			"tamanho", "jogarError", "readFile", "writeFile", "diretorio_atual",
			"ler_socket", "escrever_socket", "executar", "dormir", "aguardar",
		]:
			with self.subTest(name):
				fn = env.get(name)
				self.assertIsInstance(fn, Function)
				self.assertIsNone(fn.declaration)
		self.assertEqual("Texto", env.get("consultar_tipo").return_type)

	def test_natives_are_callable_through_apply(self):
		env = Environment()
		install_natives(env, Primitives())
		self.assertEqual(Text("Real"), env.get("consultar_tipo").apply([Real(1.0)]))

class PrimitiveTests(unittest.TestCase):
	def test_type_of(self):
		self.assertEqual(Text("Inteiro"), Primitives.type_of([Integer(1)]))
		self.assertEqual(Text("Nulo"), Primitives.type_of([NULL]))
		with self.assertRaises(SemanticError):
			Primitives.type_of([])

	def test_conversions(self):
		for target, value, expect in [
			("inteiro", Text(" 42 "), Integer(42)),
			("inteiro", Real(3.9), Integer(3)),
			("inteiro", TRUE, Integer(1)),
			("real", Integer(2), Real(2.0)),
			("real", Text("2.5"), Real(2.5)),
			("texto", TRUE, Text("verdadeiro")),
			("texto", Integer(7), Text("7")),
			("logico", Text("verdadeiro"), TRUE),
			("lógico", Integer(0), FALSE),
			("Logico", Text("false"), FALSE),
		]:
			with self.subTest(target=target, value=value):
				self.assertEqual(expect, Primitives.convert([Text(target), value]))

	def test_integers_survive_a_trip_through_text(self):
		for value in [Integer(0), Integer(42), Integer(-7)]:
			with self.subTest(value=value):
				as_text = Primitives.convert([Text("texto"), value])
				self.assertEqual(value, Primitives.convert([Text("inteiro"), as_text]))

	def test_failed_conversions(self):
		for target, value in [
			("inteiro", Text("abc")),
			("logico", Text("talvez")),
			("inteiro", NULL),
			("lista", Integer(1)),
		]:
			with self.subTest(target=target, value=value):
				with self.assertRaises(InputError):
					Primitives.convert([Text(target), value])

	def test_size(self):
		self.assertEqual(Integer(3), Primitives.size([Text("abc")]))
		self.assertEqual(Integer(2), Primitives.size([List([NULL, NULL])]))
		self.assertEqual(Integer(0), Primitives.size([Map()]))
		with self.assertRaises(InputError):
			Primitives.size([Integer(3)])

	def test_throw(self):
		with self.assertRaises(UserError) as cm:
			Primitives.throw([Text("ops")])
		self.assertEqual("ops", str(cm.exception))
		with self.assertRaises(InputError):
			Primitives.throw([Integer(1)])

class ConsoleTests(unittest.TestCase):
	def test_echo(self):
		with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			self.assertIs(NULL, Console.echo([Text("a"), Integer(1)]))
		self.assertEqual("a 1\n", out.getvalue())

	def test_echo_nothing(self):
		with mock.patch("sys.stdout", new_callable=io.StringIO) as out:
			Console.echo([])
		self.assertEqual("\n", out.getvalue())

	def test_read(self):
		with mock.patch("sys.stdin", io.StringIO("primeira\r\nsegunda\n")):
			self.assertEqual(Text("primeira"), Console.read([]))
			self.assertEqual(Text("segunda"), Console.read([]))

class FileSystemTests(unittest.TestCase):
	def setUp(self):
		self.tmp = tempfile.TemporaryDirectory()
		self.path = Text(str(Path(self.tmp.name) / "saida.txt"))

	def tearDown(self):
		self.tmp.cleanup()

	def test_write_then_append(self):
		FileSystem.write_file([self.path, Text("um")])
		FileSystem.write_file([self.path, Text(" dois"), TRUE])
		self.assertEqual(Text("um dois"), FileSystem.read_file([self.path]))
		FileSystem.write_file([self.path, Text("tres"), FALSE])
		self.assertEqual(Text("tres"), FileSystem.read_file([self.path]))

	def test_missing_file(self):
		with self.assertRaises(ArquivoError):
			FileSystem.read_file([Text(str(Path(self.tmp.name) / "nada.txt"))])

	def test_argument_kinds(self):
		with self.assertRaises(InputError):
			FileSystem.write_file([self.path, Integer(1)])
		with self.assertRaises(SemanticError):
			FileSystem.write_file([self.path])

	def test_current_directory(self):
		with mock.patch("os.getcwd", lambda: "/algum/lugar"):
			self.assertEqual(Text("/algum/lugar"), FileSystem.current_directory([]))

def _free_port() -> int:
	with socket.socket() as s:
		s.bind((DEFAULT_HOST, 0))
		return s.getsockname()[1]

def _connect(port, deadline=5.0):
	give_up = time.monotonic() + deadline
	while True:
		try: return socket.create_connection((DEFAULT_HOST, port), timeout=1)
		except OSError:
			if time.monotonic() > give_up: raise
			time.sleep(0.02)

class SocketTests(unittest.TestCase):
	def test_host_and_port(self):
		self.assertEqual((DEFAULT_HOST, DEFAULT_PORT), host_and_port([]))
		self.assertEqual((DEFAULT_HOST, DEFAULT_PORT), host_and_port([Text("so o texto")]))
		self.assertEqual(("0.0.0.0", 9000), host_and_port([Text("0.0.0.0"), Integer(9000), Text("x")]))
		with self.assertRaises(InputError):
			host_and_port([Integer(1), Integer(2)])

	def test_write_wants_one_or_three_arguments(self):
		with self.assertRaises(InputError):
			Sockets.write_line([])
		with self.assertRaises(InputError):
			Sockets.write_line([Text("h"), Integer(1)])

	def test_setup_failure(self):
		with mock.patch("socket.create_server", side_effect=OSError("ocupado")):
			with self.assertRaises(PlarRuntimeError) as cm:
				Sockets.read_line([])
		self.assertIn("Nao foi possivel configurar o socket", str(cm.exception))

	def test_read_line(self):
		port = _free_port()
		def client():
			with _connect(port) as conn:
				conn.sendall("olá\n".encode("utf-8"))
		peer = threading.Thread(target=client)
		peer.start()
		try:
			self.assertEqual(Text("olá"), Sockets.read_line([Text(DEFAULT_HOST), Integer(port)]))
		finally:
			peer.join()

	def test_write_line(self):
		port = _free_port()
		received = []
		def client():
			with _connect(port) as conn:
				received.append(conn.makefile("r", encoding="utf-8").readline())
		peer = threading.Thread(target=client)
		peer.start()
		try:
			self.assertIs(NULL, Sockets.write_line([Text(DEFAULT_HOST), Integer(port), Integer(42)]))
		finally:
			peer.join()
		self.assertEqual(["42\n"], received)

class ThreadTests(unittest.TestCase):
	def setUp(self):
		self.report = mock.Mock()
		self.threads = Threads(self.report)

	def test_execute_returns_the_result(self):
		seen = []
		def work(args):
			seen.append(threading.current_thread() is threading.main_thread())
			return Integer(len(args))
		fn = Function("conta", implementation=work)
		self.assertEqual(Integer(2), self.threads.execute([fn, NULL, NULL]))
		self.assertEqual([False], seen)

	def test_execute_failure_is_logged(self):
		def work(args): raise UserError("falhou")
		fn = Function("ruim", implementation=work)
		self.assertIs(NULL, self.threads.execute([fn]))
		self.report.thread_failed.assert_called_once()

	def test_execute_wants_a_function(self):
		with self.assertRaises(InputError):
			self.threads.execute([Integer(1)])
		with self.assertRaises(InputError):
			self.threads.execute([])

	@mock.patch("time.sleep")
	def test_sleep(self, sleep):
		self.assertIs(NULL, Threads.sleep([Integer(250)]))
		sleep.assert_called_once_with(0.25)
		with self.assertRaises(InputError):
			Threads.sleep([Real(1.0)])

if __name__ == '__main__':
	unittest.main()
