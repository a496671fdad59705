"""
Heuristic unification of a query type against an indexed type.

This is not a type checker. It answers "how much does this look like that?"
with a score between 0 and 100, and keeps track of what each of the query's
type variables got bound to along the way, so that "A => A" prefers targets
whose parameter and result agree.

Binding tables are immutable. Every step receives the table in force and
hands back, inside its result, the table it produced. Exploring alternatives
(as in unions) therefore cannot leak bindings from one attempt into another.
"""
from types import MappingProxyType
from typing import Mapping, NamedTuple, Sequence
from boozetools.support.foundation import Visitor
from .ontology import TypeTree, Function, Generic, Union, Tuple, Reference

MAX_DEPTH = 10

Bindings = Mapping[str, TypeTree]
NO_BINDINGS: Bindings = MappingProxyType({})

class MatchResult(NamedTuple):
	matches: bool
	score: float
	bindings: Bindings
	matched_parts: tuple[str, ...] = ()

NO_MATCH = MatchResult(False, 0, NO_BINDINGS)

def _match(score, bindings:Bindings, parts=()) -> MatchResult:
	return MatchResult(True, score, bindings, tuple(parts))

def _bind(bindings:Bindings, name:str, tree:TypeTree) -> Bindings:
	return MappingProxyType({**bindings, name: tree})

def kinds_compatible(query_kind:str, target_kind:str) -> bool:
	if query_kind == target_kind: return True
	# An effect is just a generic with a famous name.
	return {query_kind, target_kind} == {"generic", "effect"}


class Unifier(Visitor):
	"""
	The rules that do not care much about the shape of the query come first, in `unify`.
	Past those, both sides have compatible kinds and dispatch goes by the query's class.
	"""

	def unify(self, query:TypeTree, target:TypeTree, bindings:Bindings, depth:int) -> MatchResult:
		if depth >= MAX_DEPTH:
			return self.shallow(query, target, bindings)
		if query.is_wildcard:
			return _match(80, bindings, [target.text])
		if query.is_type_variable:
			return self.unify_variable(query, target, bindings)
		if target.is_type_variable:
			# The indexed function is generic here; it will take whatever the query has in mind.
			return _match(85, bindings, [target.text])
		if isinstance(query, Function) and isinstance(target, Function):
			return self.unify_functions(query, target, bindings, depth)
		if not kinds_compatible(query.kind, target.kind):
			return NO_MATCH
		return self.visit(query, target, bindings, depth)

	@staticmethod
	def shallow(query:TypeTree, target:TypeTree, bindings:Bindings) -> MatchResult:
		""" Too deep to keep looking properly. Settle for a glance. """
		if query.text == target.text:
			return _match(60, bindings, [target.text])
		if query.is_type_variable or target.is_type_variable:
			return _match(50, bindings, [target.text])
		return NO_MATCH

	@staticmethod
	def unify_variable(query:TypeTree, target:TypeTree, bindings:Bindings) -> MatchResult:
		existing = bindings.get(query.text)
		if existing is None:
			return _match(90, _bind(bindings, query.text, target), [target.text])
		if existing.text == target.text:
			return _match(90, bindings, [target.text])
		if existing.is_type_variable or target.is_type_variable:
			return _match(85, bindings, [target.text])
		# Same general shape will do; no recursion here.
		if existing.kind != target.kind:
			return NO_MATCH
		if existing.type_name and target.type_name and existing.type_name != target.type_name:
			return NO_MATCH
		return _match(80, bindings, [target.text])

	def unify_functions(self, query:Function, target:Function, bindings:Bindings, depth:int) -> MatchResult:
		# The return type matters most to a searcher, so it goes first and it can veto.
		rtn = self.unify(query.result, target.result, bindings, depth+1)
		if not rtn.matches:
			return NO_MATCH
		if not query.params:
			return _match(rtn.score * 0.9, rtn.bindings, rtn.matched_parts)
		params = self.unify_parameters(query.params, target.params, rtn.bindings, depth)
		score = rtn.score * 0.6 + params.score * 0.4
		return _match(score, params.bindings, rtn.matched_parts + params.matched_parts)

	def unify_parameters(self, query_params:Sequence[TypeTree], target_params:Sequence[TypeTree], bindings:Bindings, depth:int) -> MatchResult:
		"""
		Positional, and forgiving: a parameter that does not match costs points but does not veto.
		Surplus query parameters are ignored.
		"""
		total, compared, all_matched = 0, 0, True
		parts = []
		for q, t in zip(query_params, target_params):
			result = self.unify(q, t, bindings, depth+1)
			compared += 1
			if result.matches:
				total += result.score
				bindings = result.bindings
				parts.extend(result.matched_parts)
			else:
				total += 20
				all_matched = False
		if not compared:
			return _match(50, bindings)
		score = total / compared
		if all_matched and len(query_params) == len(target_params):
			score = min(100, score * 1.1)
		return _match(score, bindings, parts)

	def visit_Generic(self, query:Generic, target:Generic, bindings:Bindings, depth:int) -> MatchResult:
		if query.name.lower() != target.name.lower():
			return NO_MATCH
		if query.args is None or target.args is None:
			# A bare name from the index has no arguments to compare.
			return self.visit_TypeTree(query, target, bindings, depth)
		width = min(len(query.args), len(target.args))
		if not width:
			return _match(100 if len(query.args) == len(target.args) else 60, bindings)
		total, parts = 0, []
		for q, t in zip(query.args, target.args):
			result = self.unify(q, t, bindings, depth+1)
			if not result.matches:
				return NO_MATCH
			total += result.score
			bindings = result.bindings
			parts.extend(result.matched_parts)
		score = total / width
		if len(query.args) != len(target.args):
			score *= 0.8
		return _match(score, bindings, parts)

	@staticmethod
	def visit_Primitive(query:TypeTree, target:TypeTree, bindings:Bindings, depth:int) -> MatchResult:
		if query.text.lower() == target.text.lower():
			return _match(100, bindings, [target.text])
		return NO_MATCH

	@staticmethod
	def visit_Reference(query:Reference, target:Reference, bindings:Bindings, depth:int) -> MatchResult:
		if query.name.lower() == target.name.lower() or query.text.lower() == target.text.lower():
			return _match(100, bindings, [target.text])
		return NO_MATCH

	def visit_Union(self, query:Union, target:Union, bindings:Bindings, depth:int) -> MatchResult:
		"""
		Every member of the query must find some partner in the target.
		Extra members in the target cost nothing.
		"""
		if not (query.members and target.members):
			return NO_MATCH
		total, parts = 0, []
		for q in query.members:
			best = NO_MATCH
			for t in target.members:
				# Each attempt starts from the same table.
				result = self.unify(q, t, bindings, depth+1)
				if result.matches and result.score > best.score:
					best = result
			if not best.matches:
				return NO_MATCH
			total += best.score
			parts.extend(best.matched_parts)
		return _match(total / len(query.members), bindings, parts)

	def visit_Tuple(self, query:Tuple, target:Tuple, bindings:Bindings, depth:int) -> MatchResult:
		if len(query.members) != len(target.members):
			return NO_MATCH
		if not query.members:
			return _match(100, bindings, [target.text])
		total, parts = 0, []
		for q, t in zip(query.members, target.members):
			result = self.unify(q, t, bindings, depth+1)
			if not result.matches:
				return NO_MATCH
			total += result.score
			bindings = result.bindings
			parts.extend(result.matched_parts)
		return _match(total / len(query.members), bindings, parts)

	@staticmethod
	def visit_TypeTree(query:TypeTree, target:TypeTree, bindings:Bindings, depth:int) -> MatchResult:
		# Literals, intersections, unknowns: compare the words.
		if query.text.lower() == target.text.lower():
			return _match(70, bindings, [target.text])
		return NO_MATCH

_unifier = Unifier()

def unify_types(query:TypeTree, target:TypeTree, bindings:Bindings=NO_BINDINGS, depth:int=0) -> MatchResult:
	""" Pure and total: the bindings passed in are never modified. """
	return _unifier.unify(query, target, MappingProxyType(dict(bindings)), depth)
