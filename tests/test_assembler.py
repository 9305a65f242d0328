import unittest

from src.errors import InvalidMatchError
from src.extraction import adverbial_modifier, clausal_component, from_match
from src.pattern import DependencyPattern, Match
from tests.conllu_fixtures import (
    JOHN_EATS, JOHN_SAID, LEFT_BECAUSE, LEFT_WHEN_BECAUSE, MEAT_AND_CHEESE, TWO_SPEAKERS_SAID,
    WANTS_TO_BUY, WILL_BE_PRESIDENT, graph_from_rows,
)

SUBJECT_OBJECT = DependencyPattern.deserialize("{arg1} <nsubj< {rel} >dobj> {arg2}")


class TestExtractionAssembler(unittest.TestCase):
    def test_end_to_end_john_eats(self):
        graph = graph_from_rows(JOHN_EATS)
        match = Match({"arg1": graph.node(1), "rel": graph.node(2), "arg2": graph.node(4)})

        ex = from_match(graph, match, extractor="subject-object")

        self.assertIsNotNone(ex)
        self.assertEqual(ex.arg1_text, "John")
        self.assertEqual(ex.rel_text, "eats")
        self.assertEqual(ex.arg2_text, "red apples")
        self.assertIsNone(ex.modifier)
        self.assertIsNone(ex.clausal)
        self.assertFalse(ex.arg1.span.intersects(ex.arg2.span))
        self.assertEqual(ex.rel_lemmas, frozenset({"eat"}))
        self.assertEqual(ex.extractor, "subject-object")
        self.assertIs(ex.match, match)
        self.assertEqual(str(ex), "(John; eats; red apples)")

    def test_minimal_mode_uses_head_nodes(self):
        graph = graph_from_rows(JOHN_EATS)
        match = SUBJECT_OBJECT.apply(graph)[0]

        ex = from_match(graph, match, expand=False)
        self.assertEqual(ex.texts, ("John", "eats", "apples"))
        self.assertEqual([e.label for e in ex.edges], ["nsubj", "dobj"])

    def test_missing_arg2_is_fatal(self):
        graph = graph_from_rows(JOHN_SAID)
        match = Match({"arg1": graph.node(1), "rel": graph.node(2)})

        with self.assertRaises(InvalidMatchError) as ctx:
            from_match(graph, match)
        self.assertEqual(ctx.exception.role, "arg2")
        self.assertIn("no arg2", str(ctx.exception))

    def test_missing_roles_are_fatal(self):
        graph = graph_from_rows(JOHN_EATS)
        john, eats, apples = graph.node(1), graph.node(2), graph.node(4)

        cases = {
            "rel": {"arg1": john, "arg2": apples},
            "arg1": {"rel": eats, "arg2": apples},
        }
        for role, groups in cases.items():
            with self.subTest(role=role):
                with self.assertRaises(InvalidMatchError) as ctx:
                    from_match(graph, Match(groups), expand=False)
                self.assertEqual(ctx.exception.role, role)

    def test_overlapping_arguments_are_discarded(self):
        graph = graph_from_rows(JOHN_EATS)
        # arg1 "apples" раскрывается до "red apples" и накрывает arg2 "red"
        match = Match({"arg1": graph.node(4), "rel": graph.node(2), "arg2": graph.node(3)})

        self.assertIsNone(from_match(graph, match))

    def test_multiple_relation_nodes_sorted_by_role(self):
        graph = graph_from_rows(WANTS_TO_BUY)
        match = Match({"rel2": graph.node(4), "arg1": graph.node(1),
                       "rel": graph.node(2), "arg2": graph.node(5)})

        ex = from_match(graph, match)
        self.assertEqual(ex.texts, ("He", "wants to buy", "bread"))
        self.assertEqual(ex.rel_lemmas, frozenset({"want", "buy"}))

    def test_copula_relation(self):
        graph = graph_from_rows(WILL_BE_PRESIDENT)
        match = Match({"arg1": graph.node(1), "rel": graph.node(3), "arg2": graph.node(5)})

        ex = from_match(graph, match)
        self.assertEqual(ex.texts, ("He", "will be", "the president"))
        # "be" в стоп-списке
        self.assertEqual(ex.rel_lemmas, frozenset({"will"}))

    def test_coordinated_object(self):
        graph = graph_from_rows(MEAT_AND_CHEESE)
        match = SUBJECT_OBJECT.apply(graph)[0]

        ex = from_match(graph, match)
        self.assertEqual(ex.arg2_text, "meat and cheese")

    def test_clausal_component_attached(self):
        graph = graph_from_rows(JOHN_SAID)
        match = SUBJECT_OBJECT.apply(graph)[0]

        ex = from_match(graph, match)
        self.assertEqual(ex.texts, ("Mary", "ate", "apples"))
        self.assertIsNotNone(ex.clausal)
        self.assertEqual(ex.clausal.text, "John said")
        self.assertEqual(ex.clausal.arg.text, "John")
        self.assertEqual(ex.clausal.rel.text, "said")

    def test_adverbial_modifier_attached(self):
        graph = graph_from_rows(LEFT_BECAUSE)
        match = SUBJECT_OBJECT.apply(graph)[0]

        ex = from_match(graph, match)
        self.assertEqual(ex.texts, ("He", "left", "the house"))
        self.assertEqual(ex.modifier.text, "because he was tired")

    def test_non_overlap_for_all_fixtures(self):
        for rows in (JOHN_EATS, JOHN_SAID, LEFT_BECAUSE, MEAT_AND_CHEESE):
            graph = graph_from_rows(rows)
            for match in SUBJECT_OBJECT.apply(graph):
                ex = from_match(graph, match)
                if ex is not None:
                    self.assertFalse(ex.arg1.span.intersects(ex.arg2.span))


class TestDetectors(unittest.TestCase):
    def test_clausal_component_requires_single_match(self):
        graph = graph_from_rows(JOHN_EATS)
        self.assertIsNone(clausal_component(graph, graph.node(2), frozenset()))

    def test_clausal_component_ambiguous_subject(self):
        graph = graph_from_rows(TWO_SPEAKERS_SAID)
        ate = graph.node(6)
        self.assertIsNone(clausal_component(graph, ate, frozenset({ate})))

        # извлечение при этом остаётся, но без атрибуции
        ex = from_match(graph, SUBJECT_OBJECT.apply(graph, graph.node(5))[0])
        self.assertEqual(ex.texts, ("Mary", "ate", "apples"))
        self.assertIsNone(ex.clausal)

    def test_clausal_component_with_custom_pattern(self):
        graph = graph_from_rows(JOHN_SAID)
        ate = graph.node(5)

        component = clausal_component(graph, ate, frozenset({ate}), pattern="{old} <ccomp< {rel} >nsubj> {arg}")
        self.assertEqual(component.text, "John said")

        # шаблон, не находящий ничего
        self.assertIsNone(clausal_component(graph, ate, frozenset(), pattern="{old} <advcl< {rel} >nsubj> {arg}"))

    def test_adverbial_modifier_absent(self):
        graph = graph_from_rows(JOHN_EATS)
        self.assertIsNone(adverbial_modifier(graph, graph.node(2)))

    def test_adverbial_modifier_covers_subtree(self):
        graph = graph_from_rows(LEFT_BECAUSE)
        modifier = adverbial_modifier(graph, graph.node(2))
        self.assertEqual([n.text for n in modifier.contents.nodes], ["because", "he", "was", "tired"])

    def test_adverbial_modifier_unites_clauses(self):
        graph = graph_from_rows(LEFT_WHEN_BECAUSE)
        modifier = adverbial_modifier(graph, graph.node(2))
        self.assertEqual(modifier.text, "when it rained because he was tired")


if __name__ == '__main__':
    unittest.main()
