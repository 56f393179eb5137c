"""Test the export and debug utilities"""

import json
import os
import unittest
from contextlib import closing, redirect_stderr, redirect_stdout
from io import StringIO
from tempfile import TemporaryDirectory
from unittest import mock

from thompson.__main__ import main
from thompson.automatons import NFA
from thompson.syntax import alt, cat, empty, plus, star, text


def is_edge(element):
    return "source" in element["data"]


class TestCytograph(unittest.TestCase):
    def test_cat(self):
        elements = NFA(cat(text("a"), text("b"))).cytograph()
        self.assertEqual(elements, [
            {"data": {"id": 0, "label": 0}},
            {"data": {"source": 0, "target": 1, "label": "a"}},
            {"data": {"id": 1, "label": 1}},
            {"data": {"source": 1, "target": 2, "label": "b"}},
            {"data": {"id": 2, "label": 2}},
        ])

    def test_edges_reference_nodes(self):
        elements = NFA(alt(star(text("a")), plus(text("b")))).cytograph()
        ids = {element["data"]["id"] for element in elements if not is_edge(element)}
        for element in filter(is_edge, elements):
            self.assertIn(element["data"]["source"], ids)
            self.assertIn(element["data"]["target"], ids)

    def test_star_loop(self):
        automaton = NFA(star(text("a")))
        elements = automaton.cytograph()
        nodes = [e["data"]["id"] for e in elements if not is_edge(e)]
        edges = [(e["data"]["source"], e["data"]["target"], e["data"]["label"])
                 for e in elements if is_edge(e)]
        self.assertEqual(nodes, [0, 1, 2, 3])
        self.assertEqual(edges, [
            (0, 1, "ε"),
            (1, 2, "a"),
            (2, 1, "ε"),
            (2, 3, "ε"),
            (0, 3, "ε"),
        ])

    def test_literal_epsilon(self):
        automaton = NFA(alt(text("ε"), empty()))
        labels = [e["data"]["label"] for e in automaton.cytograph() if is_edge(e)]
        self.assertEqual(labels.count("ε"), len(labels))
        self.assertEqual(automaton.state(1).transitions[0].symbol, "ε")
        closure = automaton.enclosure(automaton.state(1))
        self.assertEqual([state.label for state in closure], [1])

    def test_split(self):
        automaton = NFA(plus(cat(text("a"), text("b"))))
        elements = automaton.cytograph()
        graph = automaton.cytograph(split=True)
        self.assertEqual(graph["nodes"], [e for e in elements if not is_edge(e)])
        self.assertEqual(graph["edges"], [e for e in elements if is_edge(e)])
        self.assertEqual(len(graph["nodes"]), len(automaton.states))


class TestPrintMesh(unittest.TestCase):
    def test_print_mesh(self):
        automaton = NFA(star(text("a")))

        with closing(StringIO()) as buffer:
            with redirect_stdout(buffer):
                automaton.print_mesh()
            self.assertEqual(buffer.getvalue().splitlines(), [
                "--> (0)",
                "(0) ε (1)",
                "(1) a (2)",
                "(2) ε (1)",
                "(0) ε (3) -->",
                "(2) ε (3) -->",
            ])

    def test_print_mesh_sorts_numerically(self):
        automaton = NFA(cat(*[text("a")] * 11))

        with closing(StringIO()) as buffer:
            with redirect_stdout(buffer):
                automaton.print_mesh()
            lines = buffer.getvalue().splitlines()
        self.assertEqual(lines[0], "--> (00)")
        self.assertEqual(lines[1:], [
            "({:02d}) a ({:02d})".format(label, label + 1) for label in range(10)
        ] + ["(10) a (11) -->"])

    def test_str(self):
        self.assertEqual(str(NFA(text("a"))), "<NFA on (0) to (1)>")


class TestMain(unittest.TestCase):
    tree = {"type": "cat", "parts": [
        {"type": "text", "text": "a"},
        {"type": "star", "sub": {"type": "text", "text": "b"}},
    ]}

    def setUp(self):
        self.tmpdir = TemporaryDirectory()
        self.addCleanup(self.tmpdir.cleanup)

    def write(self, content):
        path = os.path.join(self.tmpdir.name, "tree.json")
        with open(path, "w") as fd:
            fd.write(content)
        return path

    def run_main(self, *argv):
        with closing(StringIO()) as out, closing(StringIO()) as err:
            with redirect_stdout(out), redirect_stderr(err):
                status = main(list(argv))
            return status, out.getvalue(), err.getvalue()

    def test_export(self):
        status, out, _ = self.run_main(self.write(json.dumps(self.tree)))
        self.assertEqual(status, 0)
        self.assertEqual(json.loads(out), NFA.from_mapping(self.tree).cytograph())

    def test_split(self):
        status, out, _ = self.run_main("--split", self.write(json.dumps(self.tree)))
        self.assertEqual(status, 0)
        self.assertEqual(sorted(json.loads(out)), ["edges", "nodes"])

    def test_closure(self):
        path = self.write(json.dumps(self.tree))
        status, out, _ = self.run_main("-c", "1", path)
        self.assertEqual((status, json.loads(out)), (0, [1, 2, 4]))
        status, out, _ = self.run_main("-c", "0", "--symbol", "a", path)
        self.assertEqual((status, json.loads(out)), (0, [0, 1]))

    def test_unknown_state(self):
        status, _, err = self.run_main("-c", "42", self.write(json.dumps(self.tree)))
        self.assertEqual(status, 1)
        self.assertIn("42", err)

    def test_invalid_tree(self):
        status, _, err = self.run_main(self.write('{"type": "backref"}'))
        self.assertEqual(status, 1)
        self.assertIn("backref", err)

    def test_malformed_fields(self):
        for tree in ('{"type": "or", "parts": 5}', '{"type": "text", "symbol": ["a"]}'):
            status, _, err = self.run_main(self.write(tree))
            self.assertEqual(status, 1)
            self.assertIn("Invalid syntax tree", err)

    def test_stdin_left_open(self):
        stdin = StringIO(json.dumps(self.tree))
        with mock.patch("sys.stdin", stdin):
            status, out, _ = self.run_main()
        self.assertEqual(status, 0)
        self.assertFalse(stdin.closed)
        self.assertEqual(json.loads(out), NFA.from_mapping(self.tree).cytograph())

    def test_invalid_json(self):
        status, _, err = self.run_main(self.write("{"))
        self.assertEqual(status, 1)
        self.assertIn("Invalid syntax tree", err)

    def test_verbose(self):
        with mock.patch("thompson.__main__.logging.basicConfig") as basic_config:
            status, _, err = self.run_main("-v", self.write(json.dumps(self.tree)))
        basic_config.assert_called_once()
        self.assertEqual(status, 0)
        self.assertIn("--> (0)", err)
