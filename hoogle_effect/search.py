"""
Search the catalog by type, Hoogle-style.

Each entry gets three chances, in order of how much they say:
	1. the whole signature, as a function type;
	2. just the return type, at a discount;
	3. (for simple queries) any one parameter, at a steeper discount.
"""
from typing import NamedTuple, Optional, Sequence
from boozetools.support.foundation import grade
from .catalog import CatalogEntry, ParsedSignature
from .diagnostics import Report
from .front_end import parse_type_query
from .ontology import TypeTree, Function
from .unification import MatchResult, NO_MATCH, unify_types

COMPLEX_KINDS = frozenset(["generic", "effect", "function"])

COMMON_PATTERNS = [
	"Effect<A, E, R>",
	"Effect<A, never, never>",
	"Option<A>",
	"Either<E, A>",
	"Stream<A, E, R>",
	"A => Effect<B>",
	"Effect<A, E, R> => Effect<B, E, R>",
	"Option<A> => Effect<B>",
	"Array<A> => Effect<Array<B>>",
	"* => Effect<*>",
	"* => Option<*>",
]

class SearchOptions(NamedTuple):
	min_score: float = 30
	return_discount: float = 0.75
	parameter_discount: float = 0.6

DEFAULT_OPTIONS = SearchOptions()

class TypeSearchResult(NamedTuple):
	entry: CatalogEntry
	match: MatchResult

	@property
	def score(self): return self.match.score

def signature_to_tree(sig:ParsedSignature) -> Function:
	return Function([*(p.type for p in sig.parameters), sig.return_type], sig.raw)

def _discounted(result:MatchResult, factor:float) -> MatchResult:
	return result._replace(score=result.score * factor)

def match_signature(query:TypeTree, sig:ParsedSignature, options:SearchOptions=DEFAULT_OPTIONS) -> tuple[MatchResult, str]:
	"""
	Returns the first strategy that works, along with its name for the log.
	"""
	full = unify_types(query, signature_to_tree(sig))
	if full.matches:
		return full, "signature"
	rtn = unify_types(query, sig.return_type)
	if rtn.matches:
		return _discounted(rtn, options.return_discount), "return type"
	# A query like "Effect<A, E, R>" ought not to come up for every function taking a bare type variable.
	if query.kind not in COMPLEX_KINDS:
		for param in sig.parameters:
			result = unify_types(query, param.type)
			if result.matches:
				return _discounted(result, options.parameter_discount), "parameter "+param.name
	return NO_MATCH, ""

def search_by_type(
		query:str, entries:Sequence[CatalogEntry], limit:int=50, *,
		options:SearchOptions=DEFAULT_OPTIONS, report:Optional[Report]=None
) -> list[TypeSearchResult]:
	""" Best first; ties keep catalog order. """
	report = report or Report()
	query_type = parse_type_query(query, report)
	if query_type is None or limit <= 0:
		return []
	report.info("Query %r parsed as %s: %s" % (query, query_type.kind, query_type.text))
	found = []
	for entry in entries:
		if entry.signature_parsed is None:
			continue
		result, how = match_signature(query_type, entry.signature_parsed, options)
		if result.matches and result.score > options.min_score:
			report.info("  %s by %s: %.1f" % (entry.id, how, result.score), level=2)
			found.append(TypeSearchResult(entry, result))
	ranked = [found[i] for i in grade([r.score for r in found], descending=True)[:limit]]
	report.info("%d of %d entries matched; returning %d." % (len(found), len(entries), len(ranked)))
	return ranked

def get_type_suggestions(partial:str) -> list[str]:
	""" Autocomplete fodder. Purely cosmetic. """
	needle = partial.lower()
	return [p for p in COMMON_PATTERNS if needle in p.lower()][:5]
