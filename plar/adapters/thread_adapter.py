import time
from ..errors import InputError
from ..primitive import native, expect_arity, expect_kind
from ..scheduler import run_and_join
from ..tree_walker.values import Function, Integer, NULL

class Threads:
	def __init__(self, report):
		self._report = report

	@native("executar")
	def execute(self, args):
		if not args or not isinstance(args[0], Function):
			raise InputError("Argumento invalido para a funcao executar.")
		fn, rest = args[0], args[1:]
		job = run_and_join(lambda: fn.apply(rest), name="executar " + fn.name)
		if job.error is not None:
			self._report.thread_failed(job.error)
			return NULL
		return job.result

	@staticmethod
	@native("dormir", "aguardar")
	def sleep(args):
		expect_arity("dormir", args, 1)
		ms = expect_kind("dormir", args[0], Integer, "um número inteiro (milissegundos)")
		time.sleep(max(ms.value, 0) / 1000)
		return NULL
