"""
How `importar` finds, parses, and hands over other source files.

`importar "caminho";` names a file relative to the directory of the file doing the importing.
Each file gets loaded at most once per run, which both breaks import cycles
and keeps its declarations from being registered twice.
"""
from pathlib import Path
from typing import Optional

from .diagnostics import Report
from .errors import ArquivoError
from .front_end import parse_text
from .syntax import Program

EXTENSION = ".pplus"

class Loader:
	def __init__(self, report:Report):
		self._report = report
		self.imported:set[Path] = set()

	@staticmethod
	def resolve(base:Path, relative_path:str) -> Path:
		path = Path(relative_path)
		if not path.suffix: path = path.with_suffix(EXTENSION)
		if not path.is_absolute(): path = base / path
		return path.resolve()

	def _read(self, abs_path:Path) -> str:
		self.imported.add(abs_path)
		self._report.info("Loading", abs_path)
		return abs_path.read_text(encoding="utf-8")

	def load(self, base:Path, relative_path:str) -> Optional[Program]:
		"""
		Return the parsed program for an import directive,
		or None if that file has already been seen this run.
		"""
		abs_path = self.resolve(base, relative_path)
		if abs_path in self.imported: return None
		try: text = self._read(abs_path)
		except FileNotFoundError as ex:
			raise ArquivoError("Falha ao processar import: arquivo '%s' não encontrado" % abs_path) from ex
		except OSError as ex:
			raise ArquivoError("Falha ao processar import: %s" % ex) from ex
		program = parse_text(text, abs_path, self._report)
		if program is None:
			raise ArquivoError("Falha ao processar import: erro de sintaxe em '%s'" % abs_path)
		return program

	def load_main(self, path:Path) -> Optional[Program]:
		""" The main program counts as imported, so nothing can drag it in a second time. """
		abs_path = path.resolve()
		try: text = self._read(abs_path)
		except FileNotFoundError:
			self._report.no_such_file(abs_path, None)
			return None
		except OSError:
			self._report.broken_file(abs_path, None)
			return None
		return parse_text(text, abs_path, self._report)
