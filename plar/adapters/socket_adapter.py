"""
Single-shot socket natives: bind, accept one connection, move one line, close.
No retries, no timeouts; the calling program blocks until a peer shows up.
"""
import socket
from ..errors import PlarRuntimeError, InputError
from ..primitive import native, expect_kind
from ..tree_walker.values import Text, Integer, NULL, coerce_text

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

def host_and_port(args):
	""" A leading (host, port) pair is optional; either way you get both. """
	if len(args) >= 2:
		host = expect_kind("socket", args[0], Text, "um texto (host)").value
		port = expect_kind("socket", args[1], Integer, "um inteiro (porta)").value
		return host, port
	return DEFAULT_HOST, DEFAULT_PORT

def _serve_once(host, port, conversation):
	try:
		with socket.create_server((host, port)) as server:
			connection, _ = server.accept()
			with connection, connection.makefile("rw", encoding="utf-8", newline="\n") as stream:
				return conversation(stream)
	except OSError as ex:
		raise PlarRuntimeError("Nao foi possivel configurar o socket: %s" % ex) from ex

class Sockets:
	@staticmethod
	@native("ler_socket", returns="Texto")
	def read_line(args):
		host, port = host_and_port(args)
		line = _serve_once(host, port, lambda stream: stream.readline())
		return Text(line.rstrip("\r\n"))

	@staticmethod
	@native("escrever_socket")
	def write_line(args):
		if len(args) not in (1, 3):
			raise InputError("argumentos invalidos para escrever_socket")
		host, port = host_and_port(args)
		text = coerce_text(args[-1])
		def conversation(stream):
			stream.write(text + "\n")
			stream.flush()
		_serve_once(host, port, conversation)
		return NULL
