"""
A finite automaton is a finite-state machine that accepts or rejects
strings of symbols.
"""


import logging
from contextlib import redirect_stdout
from io import StringIO
from typing import Any, Dict, Iterable, List, Mapping, Tuple, Union

from .char import EPSILON, Symbol, symbol_to_str
from .nodes import State, depth_first
from .syntax import KINDS, StructureError, SyntaxNode, from_mapping

logger = logging.getLogger(__name__)


class FA:
    """Abstract Finite Automaton"""

    def __init__(self, data: Any):
        """Create an automaton out of the given data"""
        self.initial_state, self.accept_state = self.build(data)

    def build(self, data: Any) -> Tuple[State, State]:
        """Create the states, return the initial and accept states"""
        raise NotImplementedError("abstract method")

    @property
    def states(self) -> List[State]:
        """All the states reachable from the initial one, in depth-first order"""
        return [state for state, transition in depth_first([self.initial_state])
                if transition is None]

    def state(self, label: int) -> State:
        """Get a reachable state by its label"""
        for state in self.states:
            if state.label == label:
                return state
        raise KeyError(label)

    def cytograph(self, split: bool = False) -> Union[List[dict], Dict[str, List[dict]]]:
        """
        Export the states and transitions in a Cytoscape-compatible
        format.

        The automaton is walked depth-first from its initial state, a
        node element is emitted the first time a state is discovered and
        an edge element is emitted every time a transition is followed,
        back edges included.

        By default nodes and edges are interleaved in a single list, in
        the order they are met. With ``split`` they are grouped in a
        ``{"nodes": [...], "edges": [...]}`` mapping instead.

        Epsilon transitions are labeled ``ε``, a literal ``ε`` symbol is
        labeled the same way and can only be told apart on the states
        themselves.
        """
        nodes = []
        edges = []
        elements = []
        for state, transition in depth_first([self.initial_state]):
            if transition is None:
                element = {"data": {"id": state.label, "label": state.label}}
                nodes.append(element)
            else:
                element = {"data": {
                    "source": state.label,
                    "target": transition.target.label,
                    "label": symbol_to_str(transition.symbol),
                }}
                edges.append(element)
            elements.append(element)

        if split:
            return {"nodes": nodes, "edges": edges}
        return elements

    def print_mesh(self) -> None:
        """Pretty print the current automaton"""
        buffer_ = StringIO()
        states = self.states
        width = len(str(max(state.label for state in states)))

        # Feed the buffer with the transitions
        with redirect_stdout(buffer_):
            print("-->", self.initial_state.pad(width))
            for state in states:
                state.print_transitions(width)

        # Sort the lines and print the ones reaching the accept state
        # at the end
        accept = " " + self.accept_state.pad(width)
        lines = buffer_.getvalue().splitlines()
        ends = sorted(line + " -->" for line in lines[1:] if line.endswith(accept))
        print(lines[0])
        for line in sorted(line for line in lines[1:] if not line.endswith(accept)):
            print(line)
        for line in ends:
            print(line)

    def __str__(self):
        return "<{} on {} to {}>".format(
            self.__class__.__name__, self.initial_state, self.accept_state)


class BuildContext:
    """Allocate the states of a single build, labeled 0, 1, 2..."""

    def __init__(self):
        self.count = 0

    def allocate(self) -> State:
        state = State(self.count)
        self.count += 1
        return state


class NFA(FA):
    """
    Non Deterministic Finite Automaton

    The states accept both void transitions and same transition symbol
    targeting different states. The automaton is made out of a regexp
    :func:`syntax tree <thompson.syntax.SyntaxNode>` using Thompson's
    construction: every node of the tree is mapped to a small fragment
    attached to the state the previous fragment ended on.
    """

    def build(self, tree: SyntaxNode) -> Tuple[State, State]:
        context = BuildContext()
        initial_state = context.allocate()

        # Each fragment is a generator, it yields the (sub-node, state)
        # pairs it needs to be built and receives the accept state of
        # the corresponding fragment. The stack replaces the recursion
        # on the tree so its depth is not bounded by the interpreter.
        stack = [self._fragment(tree, initial_state, context)]
        accept_state = None
        while stack:
            try:
                sub, sub_initial_state = stack[-1].send(accept_state)
            except StopIteration as stop:
                stack.pop()
                accept_state = stop.value
            else:
                stack.append(self._fragment(sub, sub_initial_state, context))
                accept_state = None

        logger.debug("Built %s states from %s to %s",
                     context.count, initial_state, accept_state)
        return initial_state, accept_state

    @staticmethod
    def _fragment(node: SyntaxNode, initial_state: State, context: BuildContext):
        """Attach the fragment of the given node on initial_state"""
        if node.type not in KINDS:
            raise StructureError("Unrecognized node kind", node.type)

        # (initial_state) --ε--> (accept_state)
        if node.type == "empty":
            accept_state = context.allocate()
            initial_state.add(EPSILON, accept_state)
            return accept_state

        # (initial_state) --a--> (accept_state)
        if node.type == "text":
            if not node.symbol:
                raise StructureError("Missing literal", node.type, "symbol")
            accept_state = context.allocate()
            initial_state.add(node.symbol, accept_state)
            return accept_state

        if node.type in ("or", "cat"):
            if not node.parts:
                raise StructureError("Missing sub-nodes", node.type, "parts")

        #                 /--ε--> (entry) ...(part)... --ε--\
        # (initial_state)                                    (accept_state)
        #                 \--ε--> (entry) ...(part)... --ε--/
        if node.type == "or":
            last_states = []
            for part in node.parts:
                entry_state = context.allocate()
                initial_state.add(EPSILON, entry_state)
                last_states.append((yield part, entry_state))
            accept_state = context.allocate()
            for last_state in last_states:
                last_state.add(EPSILON, accept_state)
            return accept_state

        # (initial_state) ...(part)... ...(part)... (accept_state)
        if node.type == "cat":
            last_state = initial_state
            for part in node.parts:
                last_state = yield part, last_state
            return last_state

        #                            /<--ε-- (star, plus)
        # (initial_state) --ε--> (inner) ...(sub)... --ε--> (accept_state)
        #                 \-----------ε (star, optional)-------->/
        if node.sub is None:
            raise StructureError("Missing sub-node", node.type, "sub")
        inner_state = context.allocate()
        initial_state.add(EPSILON, inner_state)
        inner_accept_state = yield node.sub, inner_state
        if node.type in ("star", "plus"):
            inner_accept_state.add(EPSILON, inner_state)
        accept_state = context.allocate()
        inner_accept_state.add(EPSILON, accept_state)
        if node.type in ("star", "optional"):
            initial_state.add(EPSILON, accept_state)
        return accept_state

    def enclosure(self, states: Union[State, Iterable[State]],
                  symbol: Symbol = EPSILON) -> List[State]:
        """
        Get the states reachable from the given state(s) following only
        transitions labeled with symbol, epsilon by default. The given
        states are part of the result. The states are listed once, in
        the order they are discovered.
        """
        if isinstance(states, State):
            states = [states]
        return [state for state, transition in depth_first(states, symbol)
                if transition is None]

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NFA":
        """Create a NFA out of a syntax tree decoded from JSON"""
        return cls(from_mapping(data))


FiniteAutomaton = FA
NonDeterministicFiniteAutomaton = NFA
