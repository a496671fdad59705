import sys
from typing import Any
from boozetools.support.failureprone import Issue, Evidence, Severity, SourceText

PHASE_PARSE = "reading the query"

class Report:
	"""
	Collects whatever the query parser had to say about a query,
	and prints progress notes when asked to be verbose.

	Nothing here is fatal: the parser and the search carry on regardless.
	"""
	issues: list[Issue]

	def __init__(self, *, verbose:int=0):
		self._verbose = verbose or 0   # Because None is incomparable.
		self.issues = []

	def ok(self): return not self.issues
	def sick(self): return bool(self.issues)

	def issue(self, it:Issue):
		self.issues.append(it)

	def reset(self):
		self.issues.clear()

	def info(self, *args, level:int=1):
		if self._verbose >= level:
			print(*args, file=sys.stderr)

	def _about(self, severity:Severity, query:str, fragment:str, message:str, caption:str):
		start = query.find(fragment) if fragment else -1
		where = slice(start, start+len(fragment)) if start >= 0 else slice(0, len(query))
		self.issue(Issue(PHASE_PARSE, severity, message, {query: [Evidence(where, caption)]}))

	# Methods the query parser calls:

	def degraded(self, query:str, fragment:str):
		self._about(Severity.NOTICE, query, fragment, "This part did not parse as a type; searching for it by name.", "taken as a plain name")

	def broken_query(self, query:str, ex:Exception):
		self._about(Severity.ERROR, query, "", "Could not make sense of the query (%s: %s)." % (type(ex).__name__, ex), "in here somewhere")

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		for i in self.issues:
			print(i.as_text(_fetch), file=sys.stderr)
		sys.stderr.flush()

def _fetch(key:Any) -> SourceText:
	# Evidence is keyed by the query text itself.
	return SourceText(key)
