"""
The only concurrency a Plar program sees: hand a function to a worker thread,
then wait right there until it finishes. Since the caller always joins before
going on, interpreter state is never touched by two threads at once.
"""
from threading import Thread
from typing import Callable

class Job:
	""" Runs one callable on its own thread and keeps whatever came of it. """

	def __init__(self, work:Callable, name:str="plar worker"):
		self._work = work
		self.result = None
		self.error = None
		self._thread = Thread(target=self._proceed, name=name, daemon=True)

	def _proceed(self):
		try: self.result = self._work()
		except BaseException as ex:
			self.error = ex

	def run_and_join(self):
		self._thread.start()
		self._thread.join()
		return self

def run_and_join(work:Callable, name:str="plar worker") -> Job:
	return Job(work, name).run_and_join()
