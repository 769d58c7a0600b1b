"""Tests for focus variable naming."""

import unittest

from rdflib import URIRef, Variable

from shape_to_query.variables import FocusVariable, object_variable, target_class_variable


class FocusVariableTests(unittest.TestCase):
    def test_children_are_named_after_root(self) -> None:
        root = FocusVariable.create("node")

        self.assertEqual(Variable("node_0"), root.extend(0).term)
        self.assertEqual(Variable("node_0_3"), root.extend(0).extend(3).term)

    def test_same_parent_and_suffix_give_same_identifier(self) -> None:
        root = FocusVariable.create("person")

        self.assertEqual(root.extend(1), root.extend(1))
        self.assertNotEqual(root.extend(0), root.extend(1))

    def test_prefix_is_inserted_after_root_only(self) -> None:
        root = FocusVariable.create("node")

        child = object_variable(root, 2, prefix="obj")

        self.assertEqual("node_obj_2", child.name)
        self.assertEqual("node_obj_2_0", object_variable(child, 0).name)

    def test_target_class_variable_ignores_prefix(self) -> None:
        self.assertEqual(
            Variable("node_targetClass"), target_class_variable(FocusVariable.create("node")).term
        )

    def test_fixed_focus_keeps_term_and_names_children_resource(self) -> None:
        iri = URIRef("http://example.org/John")
        focus = FocusVariable.for_term(iri)

        self.assertEqual(iri, focus.term)
        self.assertFalse(focus.is_variable)
        self.assertEqual(Variable("resource_0"), focus.extend(0).term)
        self.assertTrue(focus.extend(0).is_variable)


if __name__ == "__main__":
    unittest.main()
