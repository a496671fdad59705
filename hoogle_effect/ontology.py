"""
The type-tree: what a parsed query and an indexed signature both look like.

There is one class per kind of node. Each class carries exactly the payload
that makes sense for its kind, so there is no way to build a node that is
half a generic and half a tuple.

Nodes are value objects: equality and hashing go by class and payload,
the original text included. Nobody mutates a node once it exists.
"""
from typing import Iterable, Optional, Sequence
from boozetools.support.foundation import Visitor

EFFECT_TYPES = frozenset(["Effect", "Stream", "Layer", "Schedule", "Fiber", "Exit", "Cause"])
PRIMITIVE_TYPES = frozenset([
	"string", "number", "boolean", "void", "never", "unknown", "any", "null", "undefined",
	"bigint", "symbol", "object",
])

class TypeTree:
	kind: str
	is_type_variable = False
	is_wildcard = False

	def __init__(self, text:str, *key):
		assert isinstance(text, str), type(text)
		self.text = text
		self._key = (text, *key)
		self._hash = hash(self._key)
	def __hash__(self): return self._hash
	def __eq__(self, other): return type(self) is type(other) and self._key == other._key
	def __repr__(self): return "<%s %r>" % (type(self).__name__, self.text)

	@property
	def type_name(self) -> Optional[str]:
		""" Constructor name for generics, referenced name for references. """
		return None

	def children(self) -> tuple["TypeTree", ...]:
		return ()

class Function(TypeTree):
	"""
	All children but the last are parameters; the last is the return type.
	"""
	kind = "function"
	def __init__(self, members:Iterable[TypeTree], text:str):
		members = tuple(members)
		if not members:
			raise ValueError("A function type needs at least a return type.")
		self.members = members
		super().__init__(text, members)
	def children(self): return self.members
	@property
	def params(self) -> tuple[TypeTree, ...]: return self.members[:-1]
	@property
	def result(self) -> TypeTree: return self.members[-1]

class Generic(TypeTree):
	"""
	A named type constructor. When the indexer records a bare name like "Chunk"
	it sends no argument list at all, and `args` is then None rather than empty.
	"""
	kind = "generic"
	def __init__(self, name:str, args:Optional[Iterable[TypeTree]], text:str):
		self.name = name
		self.args = None if args is None else tuple(args)
		super().__init__(text, name, self.args)
	@property
	def type_name(self): return self.name
	def children(self): return self.args or ()

class Effect(Generic):
	""" A generic over one of the indexed library's core containers """
	kind = "effect"

class _Compound(TypeTree):
	def __init__(self, members:Iterable[TypeTree], text:str):
		self.members = tuple(members)
		super().__init__(text, self.members)
	def children(self): return self.members

class Union(_Compound):
	kind = "union"

class Intersection(_Compound):
	kind = "intersection"

class Tuple(_Compound):
	kind = "tuple"

class Literal(TypeTree):
	kind = "literal"

class Primitive(TypeTree):
	kind = "primitive"
	def __init__(self, text:str):
		super().__init__(text.lower())

class Reference(TypeTree):
	kind = "reference"
	def __init__(self, name:str, text:str=None):
		self.name = name
		super().__init__(name if text is None else text, name)
	@property
	def type_name(self): return self.name

class TypeVariable(TypeTree):
	kind = "type-variable"
	is_type_variable = True

class Wildcard(TypeTree):
	kind = "wildcard"
	is_wildcard = True
	def __init__(self):
		super().__init__("*")

class Unknown(TypeTree):
	kind = "unknown"

KINDS = {cls.kind: cls for cls in (
	Function, Generic, Effect, Union, Intersection, Tuple, Literal,
	Primitive, Reference, TypeVariable, Wildcard, Unknown,
)}

WILDCARD = Wildcard()

#########################

class Render(Visitor):
	""" Canonical text for a tree, in the same notation the query parser reads. """
	def visit_Function(self, fn:Function):
		params = ", ".join(self.visit(p) for p in fn.params)
		return "(%s) => %s" % (params, self.visit(fn.result))
	def visit_Generic(self, g:Generic):
		if g.args is None: return g.name
		return "%s<%s>" % (g.name, ", ".join(self.visit(a) for a in g.args))
	def visit_Union(self, u:Union):
		return " | ".join(self.visit(m) for m in u.members)
	def visit_Intersection(self, i:Intersection):
		return " & ".join(self.visit(m) for m in i.members)
	def visit_Tuple(self, t:Tuple):
		return "[%s]" % ", ".join(self.visit(e) for e in t.members)
	def visit_TypeTree(self, leaf:TypeTree):
		return leaf.text

_render = Render()

def render(tree:TypeTree) -> str:
	return _render.visit(tree)

#########################
# Convenience constructors, mainly for the indexer side and for tests.

def variable(name:str) -> TypeVariable: return TypeVariable(name)
def primitive(name:str) -> Primitive: return Primitive(name)
def reference(name:str) -> Reference: return Reference(name)
def literal(text:str) -> Literal: return Literal(text)

def constructed(name:str, *args:TypeTree) -> Generic:
	cls = Effect if name in EFFECT_TYPES else Generic
	return cls(name, args, _render.visit(cls(name, args, "")))

def function_of(params:Sequence[TypeTree], result:TypeTree) -> Function:
	members = (*params, result)
	return Function(members, _render.visit(Function(members, "")))

def union_of(*members:TypeTree) -> Union:
	return Union(members, _render.visit(Union(members, "")))

def intersection_of(*members:TypeTree) -> Intersection:
	return Intersection(members, _render.visit(Intersection(members, "")))

def tuple_of(*elements:TypeTree) -> Tuple:
	return Tuple(elements, _render.visit(Tuple(elements, "")))
