import unittest
from unittest import mock

from hoogle_effect import front_end, ontology
from hoogle_effect.diagnostics import Report
from hoogle_effect.front_end import parse_type_query, looks_like_type_query, split_top_level, find_arrow

class ParserTests(unittest.TestCase):

	def test_blank_queries_parse_to_nothing(self):
		for blank in ["", "   ", "\t\n"]:
			with self.subTest(repr(blank)):
				self.assertIsNone(parse_type_query(blank))

	def test_type_variable(self):
		for text in ["A", "E1", "R"]:
			with self.subTest(text):
				tree = parse_type_query(text)
				self.assertIsInstance(tree, ontology.TypeVariable)
				self.assertTrue(tree.is_type_variable)
				self.assertEqual(text, tree.text)

	def test_not_quite_type_variables(self):
		for text in ["AB", "A12", "a"]:
			with self.subTest(text):
				self.assertIsInstance(parse_type_query(text), ontology.Reference)

	def test_primitives_are_lower_cased(self):
		for text, expect in [("string", "string"), ("Number", "number"), ("NEVER", "never"), ("bigint", "bigint")]:
			with self.subTest(text):
				tree = parse_type_query(text)
				self.assertIsInstance(tree, ontology.Primitive)
				self.assertEqual(expect, tree.text)

	def test_option(self):
		tree = parse_type_query("Option<A>")
		self.assertEqual("generic", tree.kind)
		self.assertEqual("Option", tree.name)
		self.assertEqual(1, len(tree.args))
		self.assertEqual(ontology.TypeVariable("A"), tree.args[0])

	def test_effect(self):
		tree = parse_type_query("Effect<A, E, R>")
		self.assertIsInstance(tree, ontology.Effect)
		self.assertEqual("effect", tree.kind)
		self.assertEqual("Effect", tree.type_name)
		self.assertEqual(["A", "E", "R"], [a.text for a in tree.args])

	def test_nested_generics(self):
		tree = parse_type_query("Effect<Option<A>, never, Array<B>>")
		self.assertEqual(3, len(tree.args))
		self.assertEqual("Option<A>", tree.args[0].text)
		self.assertIsInstance(tree.args[1], ontology.Primitive)
		self.assertEqual("Array", tree.args[2].name)

	def test_arrow_conventions_agree(self):
		typescript = parse_type_query("A => Effect<A, E, R>")
		haskell = parse_type_query("A -> Effect<A, E, R>")
		self.assertEqual(typescript, haskell)
		self.assertEqual("function", haskell.kind)
		self.assertEqual(2, len(haskell.members))
		self.assertTrue(haskell.params[0].is_type_variable)
		self.assertEqual("effect", haskell.result.kind)

	def test_parenthesized_function(self):
		tree = parse_type_query("(A, B) => Option<A>")
		self.assertIsInstance(tree, ontology.Function)
		self.assertEqual(["A", "B"], [p.text for p in tree.params])
		self.assertEqual("Option<A>", tree.result.text)

	def test_nullary_function(self):
		tree = parse_type_query("() => Effect<A>")
		self.assertIsInstance(tree, ontology.Function)
		self.assertEqual((), tree.params)
		self.assertEqual("effect", tree.result.kind)

	def test_parentheses_unwrap(self):
		self.assertEqual(parse_type_query("Option<A>"), parse_type_query("( Option<A> )"))

	def test_bare_arrow_with_several_parameters(self):
		tree = parse_type_query("Effect<A, E, R>, (a: A) => B => Effect<B, E, R>")
		self.assertIsInstance(tree, ontology.Function)
		self.assertEqual(3, len(tree.members))
		self.assertEqual("effect", tree.params[0].kind)

	def test_function_parameter_inside_generic(self):
		tree = parse_type_query("Array<(a: A) => B>")
		self.assertEqual("generic", tree.kind)
		self.assertEqual(1, len(tree.args))
		self.assertEqual("function", tree.args[0].kind)

	def test_arrow_inside_brackets_closes_nothing(self):
		tree = parse_type_query("Array<(a: A) => B> => Effect<B>")
		self.assertIsInstance(tree, ontology.Function)
		self.assertEqual(1, len(tree.params))
		self.assertEqual("Array", tree.params[0].name)
		self.assertIsInstance(tree.params[0].args[0], ontology.Function)
		self.assertEqual("Effect<B>", tree.result.text)
		tree = parse_type_query("Effect<(A) => B, C>")
		self.assertEqual(["function", "type-variable"], [a.kind for a in tree.args])

	def test_union(self):
		tree = parse_type_query("Option<A> | Effect<A>")
		self.assertIsInstance(tree, ontology.Union)
		self.assertEqual(["generic", "effect"], [m.kind for m in tree.members])

	def test_union_splits_once(self):
		tree = parse_type_query("A | B | C")
		self.assertEqual(2, len(tree.members))
		self.assertEqual("A", tree.members[0].text)
		self.assertIsInstance(tree.members[1], ontology.Union)

	def test_union_inside_generic_is_not_top_level(self):
		tree = parse_type_query("Option<A | B>")
		self.assertEqual("generic", tree.kind)
		self.assertIsInstance(tree.args[0], ontology.Union)

	def test_wildcard(self):
		tree = parse_type_query("*")
		self.assertTrue(tree.is_wildcard)
		self.assertEqual("wildcard", tree.kind)
		self.assertEqual("* => Effect<*>", parse_type_query("* -> Effect<*>").text)

	def test_tuple(self):
		tree = parse_type_query("[A, Option<B>]")
		self.assertIsInstance(tree, ontology.Tuple)
		self.assertEqual(["type-variable", "generic"], [e.kind for e in tree.members])
		self.assertEqual((), parse_type_query("[]").members)

	def test_reference_fallback(self):
		tree = parse_type_query("NoSuchElementException")
		self.assertIsInstance(tree, ontology.Reference)
		self.assertEqual("NoSuchElementException", tree.name)

	def test_arrow_normalization_ignores_brackets(self):
		# Spaced arrows are rewritten wherever they appear; unspaced ones are left alone.
		self.assertEqual("Option<A => B>", parse_type_query("Option<A -> B>").text)
		self.assertIsInstance(parse_type_query("A->B"), ontology.Reference)

	def test_unclosed_parenthesis_is_forgiven(self):
		self.assertEqual(ontology.TypeVariable("A"), parse_type_query("(A"))

class DiagnosticTests(unittest.TestCase):

	def test_degraded_parts_are_noted(self):
		report = Report()
		tree = parse_type_query("Foo<A>.Bar", report)
		self.assertIsInstance(tree, ontology.Reference)
		self.assertTrue(report.sick())
		issue = report.issues[0]
		self.assertEqual("Notice", issue.severity.value)
		self.assertIn("Foo<A>.Bar", issue.evidence)

	def test_plain_names_are_not_noted(self):
		report = Report()
		parse_type_query("Option<Duration>", report)
		self.assertTrue(report.ok())

	def test_internal_failure_becomes_none(self):
		report = Report()
		report.complain_to_console = mock.Mock()
		with mock.patch.object(front_end.QueryParser, "parse_union", side_effect=RecursionError("too deep")):
			self.assertIsNone(parse_type_query("Option<A>", report))
		self.assertEqual(1, len(report.issues))
		self.assertEqual("Error", report.issues[0].severity.value)
		self.assertIn("RecursionError", report.issues[0].description)
		self.assertEqual(0, report.complain_to_console.call_count)

	def test_internal_failure_without_report(self):
		with mock.patch.object(front_end.QueryParser, "parse", side_effect=ValueError):
			self.assertIsNone(parse_type_query("A => B"))

	def test_complaints_illustrate_the_query(self):
		report = Report()
		parse_type_query("Map<K, V>.Entry", report)
		with mock.patch("sys.stderr") as stderr:
			report.complain_to_console()
		written = "".join(call.args[0] for call in stderr.write.call_args_list)
		self.assertIn("Map<K, V>.Entry", written)
		self.assertIn("^", written)

class HelperTests(unittest.TestCase):

	def test_split_top_level(self):
		self.assertEqual(["A", "Option<B, C>", "(x: X) => Y"], split_top_level("A, Option<B, C>, (x: X) => Y"))
		self.assertEqual(["[A, B]", "C"], split_top_level("[A, B], C"))
		self.assertEqual([], split_top_level("  "))

	def test_find_arrow(self):
		self.assertEqual(2, find_arrow("A => B"))
		self.assertEqual(10, find_arrow("Option<A> => B"))
		self.assertEqual(-1, find_arrow("Option<A => B>"))
		self.assertEqual(-1, find_arrow("(A => B)"))

class LooksLikeTypeQueryTests(unittest.TestCase):

	def test_type_syntax(self):
		for text in ["A => B", "A -> B", "Option<A>", "A | B", "A & B"]:
			with self.subTest(text):
				self.assertTrue(looks_like_type_query(text))

	def test_known_containers(self):
		for text in ["Effect", "option", "STREAM of things"]:
			with self.subTest(text):
				self.assertTrue(looks_like_type_query(text))

	def test_type_variables(self):
		self.assertTrue(looks_like_type_query(" A "))
		self.assertTrue(looks_like_type_query("E1"))

	def test_plain_text(self):
		for text in ["map", "flat map", "retry with backoff"]:
			with self.subTest(text):
				self.assertFalse(looks_like_type_query(text))


if __name__ == '__main__':
	unittest.main()
