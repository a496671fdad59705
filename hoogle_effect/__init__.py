"""
Hoogle-style search by type signature over an index of Effect functions.
"""
from .ontology import (
	TypeTree, Function, Generic, Effect, Union, Intersection, Tuple, Literal,
	Primitive, Reference, TypeVariable, Wildcard, Unknown, WILDCARD,
	render, variable, primitive, reference, literal, constructed,
	function_of, union_of, intersection_of, tuple_of,
)
from .catalog import (
	TypeParameter, Parameter, ParsedSignature, CatalogEntry,
	type_from_json, signature_from_json, entry_from_json,
)
from .diagnostics import Report
from .front_end import parse_type_query, looks_like_type_query
from .unification import MatchResult, NO_MATCH, unify_types
from .search import (
	SearchOptions, TypeSearchResult, search_by_type, match_signature,
	signature_to_tree, get_type_suggestions,
)
