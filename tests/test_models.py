import importlib.util
import unittest

from src.extraction import Part, SimpleExtraction, from_match
from src.lemmatizers import LookupLemmatizer, SpacyLemmatizer, relation_lemmas
from src.pattern import DependencyPattern, Match
from tests.conllu_fixtures import JOHN_EATS, graph_from_rows


class TestPart(unittest.TestCase):
    def test_part_is_sorted_and_deduplicated(self):
        graph = graph_from_rows(JOHN_EATS)
        red, apples = graph.node(3), graph.node(4)

        part = Part.of([apples, red, apples])
        self.assertEqual(part.text, "red apples")
        self.assertEqual(len(part.nodes), 2)
        self.assertEqual((part.span.start, part.span.end), (3, 4))


class TestExtractionEquality(unittest.TestCase):
    def setUp(self):
        self.graph = graph_from_rows(JOHN_EATS)
        self.pattern = DependencyPattern.deserialize("{arg1} <nsubj< {rel} >dobj> {arg2}")

    def test_equal_by_text_across_matches(self):
        match = self.pattern.apply(self.graph)[0]
        # то же содержание, другое сопоставление и другой экстрактор
        same = Match(dict(match.node_groups))

        a = from_match(self.graph, match, extractor="a")
        b = from_match(graph_from_rows(JOHN_EATS), same, extractor="b")

        self.assertIsNot(a.match, b.match)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b}), 1)

    def test_simple_equals_detailed(self):
        detailed = from_match(self.graph, self.pattern.apply(self.graph)[0])
        simple = SimpleExtraction("John", "eats", "red apples")

        self.assertEqual(simple, detailed)
        self.assertEqual(hash(simple), hash(detailed))
        self.assertNotEqual(simple, SimpleExtraction("John", "eats", "apples"))

    def test_soft_match(self):
        lemmatizer = LookupLemmatizer({"eats": "eat", "ate": "eat"})
        a = SimpleExtraction("John", "eats", "red apples", lemmatizer=lemmatizer)
        b = SimpleExtraction("John Smith", "ate", "apples", lemmatizer=lemmatizer)
        c = SimpleExtraction("John", "likes", "apples", lemmatizer=lemmatizer)

        self.assertTrue(a.soft_match(b))
        self.assertTrue(b.soft_match(a))
        self.assertNotEqual(a, b)
        self.assertFalse(a.soft_match(c))

    def test_replace_relation_shares_parts(self):
        detailed = from_match(self.graph, self.pattern.apply(self.graph)[0])

        replaced = detailed.replace_relation("consumes")

        self.assertEqual(replaced.rel_text, "consumes")
        self.assertEqual(replaced.rel.nodes, detailed.rel.nodes)
        self.assertIs(replaced.arg1, detailed.arg1)
        self.assertIs(replaced.arg2, detailed.arg2)
        self.assertEqual(replaced.rel_lemmas, frozenset({"consumes"}))
        # исходное извлечение не изменилось
        self.assertEqual(detailed.rel_text, "eats")

    def test_simple_replace_relation(self):
        simple = SimpleExtraction("John", "eats", "apples")
        self.assertEqual(simple.replace_relation("devours").texts, ("John", "devours", "apples"))


class TestRelationLemmas(unittest.TestCase):
    def test_blacklist_and_case(self):
        lemmatizer = LookupLemmatizer({"was": "be", "Born": "bear"})
        self.assertEqual(relation_lemmas("was Born in", lemmatizer), frozenset({"bear"}))

    def test_unknown_tokens_are_lowercased(self):
        self.assertEqual(relation_lemmas("Founded"), frozenset({"founded"}))


@unittest.skipUnless(importlib.util.find_spec("spacy"), "spaCy is not installed")
class TestSpacyLemmatizer(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        try:
            cls.lemmatizer = SpacyLemmatizer()
        except OSError as e:
            raise unittest.SkipTest(f"spaCy model is not available: {e}")

    def test_verb_lemma(self):
        self.assertEqual(relation_lemmas("was eating", self.lemmatizer), frozenset({"eat"}))


if __name__ == '__main__':
    unittest.main()
