"""
Reads what a person types into the search box and makes a type-tree of it.

This is deliberately forgiving. There is no grammar to violate:
whatever does not look like structure becomes a plain named reference.
Either arrow convention works: "A -> B" and "A => B" mean the same.
"""
import re
from typing import Iterator, Optional
from .diagnostics import Report
from .ontology import (
	TypeTree, Function, Generic, Effect, Union, Tuple, Primitive, Reference,
	TypeVariable, Unknown, WILDCARD, EFFECT_TYPES, PRIMITIVE_TYPES,
)

OPENERS, CLOSERS = "<([", ">)]"
SUSPICIOUS = frozenset("<>()[]|,=&")

_haskell_arrow = re.compile(r"\s+->\s+")
_type_variable = re.compile(r"[A-Z]\d?")
_constructor = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*<(.+)>", re.DOTALL)
_type_syntax = re.compile(r"[<>]|=>|->|\||&")
_known_container = re.compile(r"(Effect|Option|Either|Stream|Array|Chunk|Layer|Schedule|Fiber|Ref|Queue|Exit|Cause)", re.IGNORECASE)

def normalize_arrows(query:str) -> str:
	# Only arrows with blanks on both sides. This does not look at brackets.
	return _haskell_arrow.sub(" => ", query)

def is_type_variable(text:str) -> bool:
	return _type_variable.fullmatch(text) is not None

def _top_level(text:str) -> Iterator[tuple[int, str]]:
	"""
	Yield (index, character) for each character outside every bracket.

	Unlike a plain count of closers, the ">" of an arrow "=>" does not close anything.
	Thus "Array<(a: A) => B> => Effect<B>" has its arrow at top level, and
	"Effect<(A) => B, C>" has two arguments rather than one.
	"""
	depth = 0
	prior = ""
	for index, char in enumerate(text):
		if char in OPENERS: depth += 1
		elif char in CLOSERS and prior != "=": depth -= 1
		elif depth == 0: yield index, char
		prior = char

def split_top_level(text:str) -> list[str]:
	""" Split on commas outside of brackets. A trailing empty piece is dropped. """
	pieces, start = [], 0
	for index, char in _top_level(text):
		if char == ",":
			pieces.append(text[start:index].strip())
			start = index + 1
	last = text[start:].strip()
	if last: pieces.append(last)
	return pieces

def find_arrow(text:str) -> int:
	for index, char in _top_level(text):
		if char == "=" and text[index+1:index+2] == ">":
			return index
	return -1

def _matching_paren(text:str) -> int:
	depth = 0
	for index, char in enumerate(text):
		if char == "(": depth += 1
		elif char == ")":
			depth -= 1
			if depth == 0: return index
	return -1


class QueryParser:
	"""
	One instance per query. The rules below are tried in order and the first to apply wins,
	which is what makes "(A) => B" a function rather than anything else.
	"""

	def __init__(self, query:str, report:Optional[Report]=None):
		self.query = query
		self._report = report

	def parse(self) -> TypeTree:
		return self.parse_type(self.query)

	def parse_type(self, text:str) -> TypeTree:
		text = text.strip()
		if not text:
			return Unknown("")
		if text.startswith("("):
			return self.parse_parenthesized(text)
		arrow = find_arrow(text)
		if arrow >= 0:
			param_part, return_part = text[:arrow].strip(), text[arrow+2:]
			if "," in param_part:
				params = [self.parse_type(p) for p in split_top_level(param_part)]
			else:
				params = [self.parse_type(param_part)]
			return Function([*params, self.parse_type(return_part)], text)
		union = self.parse_union(text)
		if union is not None:
			return union
		if text == "*":
			return WILDCARD
		m = _constructor.fullmatch(text)
		if m:
			name = m.group(1)
			args = [self.parse_type(a) for a in split_top_level(m.group(2))]
			return (Effect if name in EFFECT_TYPES else Generic)(name, args, text)
		if text.startswith("[") and text.endswith("]"):
			return Tuple([self.parse_type(e) for e in split_top_level(text[1:-1])], text)
		if is_type_variable(text):
			return TypeVariable(text)
		if text.lower() in PRIMITIVE_TYPES:
			return Primitive(text)
		if self._report is not None and SUSPICIOUS.intersection(text):
			self._report.degraded(self.query, text)
		return Reference(text)

	def parse_parenthesized(self, text:str) -> TypeTree:
		close = _matching_paren(text)
		if close < 0:
			# Never closed: read the rest as though it were.
			return self.parse_type(text[1:])
		inner, rest = text[1:close].strip(), text[close+1:].strip()
		if rest.startswith("=>"):
			params = [self.parse_type(p) for p in split_top_level(inner)] if inner else []
			return Function([*params, self.parse_type(rest[2:])], text)
		return self.parse_type(inner)

	def parse_union(self, text:str) -> Optional[Union]:
		# Only one split: the right-hand side may well be another union.
		for index, char in _top_level(text):
			if char == "|":
				left, right = text[:index].strip(), text[index+1:].strip()
				if left and right:
					return Union([self.parse_type(left), self.parse_type(right)], text)
		return None


def parse_type_query(query:str, report:Optional[Report]=None) -> Optional[TypeTree]:
	"""
	Returns None for a blank query, or if anything goes wrong at all.
	Never raises.
	"""
	query = query.strip()
	if not query:
		return None
	normalized = normalize_arrows(query)
	try:
		return QueryParser(normalized, report).parse()
	except Exception as ex:
		if report is not None:
			report.broken_query(normalized, ex)
		return None

def looks_like_type_query(query:str) -> bool:
	"""
	A hint for the user interface about which search the person probably meant.
	It has no bearing on how matching works.
	"""
	if _type_syntax.search(query): return True
	if _known_container.match(query): return True
	return is_type_variable(query.strip())
