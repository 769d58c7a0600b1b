"""Tests for SPARQL text rendering."""

import pytest
from rdflib import Graph, Namespace, Variable
from rdflib.namespace import FOAF, RDF
from rdflib.plugins.sparql import prepareQuery

from shape_to_query import (
    PropertyConstraint,
    RenderError,
    ShapeNode,
    compile_construct_query,
    compile_where_patterns,
    parse_shapes,
    render_select,
    render_where,
    resolve_shape,
    shape_to_patterns,
)
from shape_to_query.patterns import Block, TriplePattern

SCHEMA = Namespace("http://schema.org/")
EX = Namespace("http://example.org/")
NAMESPACES = {"foaf": str(FOAF), "schema": str(SCHEMA), "ex": str(EX)}

PERSON_SHAPE = ShapeNode(properties=(PropertyConstraint(FOAF.name), PropertyConstraint(FOAF.lastName)))


def test_renders_union_select():
    pattern = compile_where_patterns(PERSON_SHAPE, subject_variable="person")

    query = render_select(pattern, NAMESPACES)

    assert query == "\n".join(
        [
            "PREFIX foaf: <http://xmlns.com/foaf/0.1/>",
            "SELECT * WHERE {",
            "  {",
            "    ?person foaf:name ?person_0 .",
            "  }",
            "  UNION",
            "  {",
            "    ?person foaf:lastName ?person_1 .",
            "  }",
            "}",
        ]
    )
    prepareQuery(query)


def test_single_block_has_no_union_keyword():
    shape = ShapeNode(properties=(PropertyConstraint(FOAF.name),))

    body = render_where(compile_where_patterns(shape, subject_variable="node"))

    assert body == "  ?node <http://xmlns.com/foaf/0.1/name> ?node_0 ."
    assert "UNION" not in body


def test_renders_in_filter_for_multiple_targets():
    shape = ShapeNode(target_classes=(FOAF.Person, SCHEMA.Person))

    query = render_select(compile_where_patterns(shape, subject_variable="node"), NAMESPACES)

    assert "FILTER ( ?node_targetClass IN (foaf:Person, schema:Person) )" in query
    assert f"?node <{RDF.type}> ?node_targetClass ." in query
    prepareQuery(query)


def test_renders_construct_for_fixed_focus():
    query = compile_construct_query(PERSON_SHAPE, focus_node=EX.John).build(NAMESPACES)

    assert query.startswith("PREFIX ex: <http://example.org/>\nPREFIX foaf: <http://xmlns.com/foaf/0.1/>\nCONSTRUCT {")
    assert "  ex:John foaf:name ?resource_0 .\n  ex:John foaf:lastName ?resource_1 .\n} WHERE {" in query
    assert "?resource_0 ." in query.split("WHERE", 1)[1]
    parsed = prepareQuery(query)
    assert parsed.algebra.name == "ConstructQuery"


def test_namespace_manager_from_shapes_graph_is_used():
    graph = parse_shapes(
        """
        @prefix sh: <http://www.w3.org/ns/shacl#> .
        @prefix acme: <http://acme.example/ns#> .
        @prefix ex: <http://example.org/> .
        ex:S a sh:NodeShape ; sh:property [ sh:path acme:name ] .
        """
    )
    patterns = shape_to_patterns(resolve_shape(graph), subject_variable="node")

    assert "?node acme:name ?node_0 ." in patterns.where_clause(graph.namespace_manager)
    assert patterns.select(graph.namespace_manager).startswith("PREFIX acme: <http://acme.example/ns#>")


def test_empty_pattern_renders_empty_group():
    query = render_select(Block())

    assert query == "SELECT * WHERE {\n}"
    prepareQuery(query)


def test_missing_predicate_fails_at_render_time():
    pattern = compile_where_patterns(ShapeNode(properties=(PropertyConstraint(None),)), subject_variable="node")

    with pytest.raises(RenderError):
        render_select(pattern)


def test_rendering_does_not_touch_callers_prefixes():
    graph = Graph(bind_namespaces="none")
    graph.bind("foaf", FOAF)
    before = sorted(graph.namespaces())

    render_where(Block((TriplePattern(Variable("s"), FOAF.name, Variable("o")),)), graph.namespace_manager)

    assert sorted(graph.namespaces()) == before


def test_deep_construct_with_nested_targets_parses():
    graph = parse_shapes(
        """
        @prefix sh: <http://www.w3.org/ns/shacl#> .
        @prefix foaf: <http://xmlns.com/foaf/0.1/> .
        @prefix schema: <http://schema.org/> .
        @prefix ex: <http://example.org/> .
        ex:S a sh:NodeShape ;
          sh:property [
            sh:path foaf:knows ;
            sh:node [
              sh:targetClass foaf:Person, schema:Person ;
              sh:property [ sh:path foaf:name ] ;
              sh:property [
                sh:path schema:address ;
                sh:node [ sh:property [ sh:path schema:addressLocality ] ] ;
              ] ;
            ] ;
          ] .
        """
    )

    query = compile_construct_query(resolve_shape(graph), subject_variable="node").build(NAMESPACES)

    assert "FILTER ( ?node_0_targetClass IN (foaf:Person, schema:Person) )" in query
    assert query.count("UNION") == 3
    parsed = prepareQuery(query)
    assert parsed.algebra.name == "ConstructQuery"
