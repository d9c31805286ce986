"""
Everything the interpreter has to say on stderr goes through a Report.

Problems get filed as illustrated issues and shown all together on request.
Chatter (`info`) only appears in verbose mode; warnings (`warn`) always do.
"""
import sys, random
from functools import lru_cache
from pathlib import Path
from typing import Optional, Sequence

from .syntax import Phrase

_SIGHS = ("Ah", "Ora", "Puxa", "Bem", "")
_EXCLAMATIONS = (
	'Caramba', 'Carambolas', 'Cruzes', 'Credo', 'Droga', 'Eita',
	'Minha Nossa', 'Nossa Senhora', 'Orra', 'Putz', 'Raios',
	'Caracoles', 'Diacho', 'Vixe', 'Xi', 'Poxa vida', 'Ai ai ai',
)
_SHRUGS = (
	'Não dá para continuar.',
	'Perdi o fio da meada.',
	'Não sei qual seria a resposta certa.',
	'Preciso de ajuda.',
	'O caminho à frente sumiu na escuridão.',
)

def _outburst() -> str:
	sigh, oath, shrug = (random.choice(options) for options in (_SIGHS, _EXCLAMATIONS, _SHRUGS))
	lead = sigh + ", " if sigh else ""
	return "%s%s! %s" % (lead, oath, shrug)

class Report:
	""" Collects what went wrong, and tells the console about it when asked. """

	def __init__(self, *, verbose:Optional[int]=0):
		self._verbose = verbose or 0
		self._issues:list["Pic"] = []

	def ok(self) -> bool: return len(self._issues) == 0
	def sick(self) -> bool: return len(self._issues) > 0

	@property
	def issues(self): return tuple(self._issues)

	def issue(self, pic:"Pic"):
		self._issues.append(pic)

	def info(self, *args):
		if self._verbose > 0:
			print(*args, file=sys.stderr)

	@staticmethod
	def warn(*args):
		print(*args, file=sys.stderr, flush=True)

	def complain_to_console(self):
		if self._issues:
			_lament(self._issues)

	def assert_no_issues(self, message:str):
		""" For tests and other places that insist all went well. """
		if self.sick():
			self.complain_to_console()
			raise AssertionError("%s %s" % (_outburst(), message))

	# Filed by the front-end

	def generic_parse_error(self, path:Optional[Path], line, column, context:str, hint:str):
		intro = "Plar se confundiu em %s, linha %s, coluna %s." % (path or "<texto>", line, column)
		self.issue(Pic(intro, [Excerpt(context)] if context else [], [hint]))

	# Filed by the loader

	def no_such_file(self, path:Path, cause:Optional[Phrase]):
		self._file_error("Não encontrei o arquivo", path, cause)

	def broken_file(self, path:Path, cause:Optional[Phrase]):
		self._file_error("Algo deu errado ao ler", path, cause)

	def _file_error(self, what:str, path:Path, cause:Optional[Phrase]):
		pointers = [] if cause is None else [Annotation(cause)]
		self.issue(Pic("%s %s" % (what, path), pointers))

	# Filed by the interpreter

	def runtime_error(self, ex:Exception):
		""" Whatever escaped the program lands here, pointing at the statement it came from. """
		site = getattr(ex, "site", None)
		pointers = [Annotation(site)] if isinstance(site, Phrase) and site.line is not None else []
		self.issue(Pic("%s: %s" % (type(ex).__name__, ex), pointers))

	def runaway_loop(self, site:Phrase, limit:int):
		self.warn("Aviso: Loop infinito detectado! Saindo do loop.")
		self.info("  (depois de %d voltas, em %s)" % (limit, site.where()))

	def thread_failed(self, ex:Exception):
		self.warn("Erro na execucao da thread: %s" % ex)

class Annotation:
	""" Points a row of carets at one phrase of source text. """
	def __init__(self, node:Phrase, caption:str=""):
		self.node = node
		self.path = node.path
		self.caption = caption

	def illustrate(self) -> str:
		node = self.node
		source = _source_lines(self.path)
		if node.line is None or not 0 < node.line <= len(source):
			return "      | (linha %s)" % node.line
		gutter = "%6d |" % node.line
		carets = " " * (len(gutter) + node.column - 1) + "^" * node.width
		if self.caption:
			carets = carets + " " + self.caption
		return gutter + source[node.line - 1].rstrip("\n") + "\n" + carets

class Excerpt:
	""" Context the parser already cut out for us. """
	path = None
	def __init__(self, text:str): self.text = text
	def illustrate(self) -> str: return self.text.rstrip("\n")

class Pic:
	""" One issue: an introduction, some illustrations grouped by file, and maybe a closing remark. """
	def __init__(self, intro:str, anns:Sequence, footer=()):
		self.description = intro
		self._anns = list(anns)
		self._footer = list(footer)

	def as_text(self) -> str:
		out = [self.description, ""]
		current = None
		for ann in self._anns:
			if ann.path is not None and ann.path != current:
				out.append(str(ann.path))
			current = ann.path
			out.append(ann.illustrate())
		return "\n".join(out + self._footer)

@lru_cache(8)
def _source_lines(path) -> list:
	if path is None: return []
	try:
		return Path(path).read_text(encoding="utf-8").splitlines(keepends=True)
	except OSError:
		return []

def _lament(issues):
	print("*" * 60, file=sys.stderr)
	print(_outburst(), file=sys.stderr)
	for pic in issues:
		print("  -" * 20, file=sys.stderr)
		print(pic.as_text(), file=sys.stderr)
	sys.stderr.flush()
