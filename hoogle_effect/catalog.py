"""
What the indexer hands over: one entry per documented function,
most of them with a signature already parsed into type-trees.

The decoders here accept the dictionaries found in the index file
(camelCase keys and all). Finding, reading, and caching that file
is somebody else's business.
"""
from typing import NamedTuple, Optional, Sequence, Mapping, Any
from .ontology import (
	TypeTree, Function, Generic, Effect, Union, Intersection, Tuple,
	Reference, TypeVariable, Unknown, WILDCARD, KINDS, EFFECT_TYPES,
)

class TypeParameter(NamedTuple):
	name: str
	constraint: Optional[TypeTree] = None
	default: Optional[TypeTree] = None

class Parameter(NamedTuple):
	name: str
	type: TypeTree
	optional: bool = False

class ParsedSignature(NamedTuple):
	raw: str
	type_parameters: Sequence[TypeParameter]
	parameters: Sequence[Parameter]
	return_type: TypeTree

class CatalogEntry(NamedTuple):
	id: str
	name: str
	module: str
	signature: str
	signature_parsed: Optional[ParsedSignature] = None
	package: str = ""
	description: str = ""
	tags: Sequence[str] = ()

#########################

def type_from_json(record:Mapping[str, Any]) -> TypeTree:
	kind = record.get("kind", "unknown")
	text = record.get("text", "")
	if record.get("isWildcard") or kind == "wildcard":
		return WILDCARD
	if record.get("isTypeVariable") or kind == "typeVariable":
		return TypeVariable(text)
	cls = KINDS.get(kind, Unknown)
	if cls is Function:
		children = [type_from_json(c) for c in record.get("children") or ()]
		return Function(children, text) if children else Unknown(text)
	if cls in (Union, Intersection, Tuple):
		return cls([type_from_json(c) for c in record.get("children") or ()], text)
	if issubclass(cls, Generic):
		name = record.get("typeName") or text
		arguments = record.get("typeArguments")
		args = None if arguments is None else [type_from_json(a) for a in arguments]
		return (Effect if name in EFFECT_TYPES else cls)(name, args, text)
	if cls is Reference:
		return Reference(record.get("typeName") or text, text)
	return cls(text)

def _optional_type(record) -> Optional[TypeTree]:
	return None if record is None else type_from_json(record)

def signature_from_json(record:Mapping[str, Any]) -> ParsedSignature:
	return ParsedSignature(
		raw=record.get("raw", ""),
		type_parameters=tuple(
			TypeParameter(tp["name"], _optional_type(tp.get("constraint")), _optional_type(tp.get("default")))
			for tp in record.get("typeParameters") or ()
		),
		parameters=tuple(
			Parameter(p["name"], type_from_json(p["type"]), bool(p.get("optional")))
			for p in record.get("parameters") or ()
		),
		return_type=type_from_json(record["returnType"]),
	)

def entry_from_json(record:Mapping[str, Any]) -> CatalogEntry:
	parsed = record.get("signatureParsed")
	return CatalogEntry(
		id=record["id"],
		name=record.get("name", ""),
		module=record.get("module", ""),
		signature=record.get("signature", ""),
		signature_parsed=None if parsed is None else signature_from_json(parsed),
		package=record.get("package", ""),
		description=record.get("description", ""),
		tags=tuple(record.get("tags") or ()),
	)
