"""Labeled states and transitions of a directed multigraph"""


from typing import Iterable, Iterator, List, Optional, Tuple
from .char import Symbol, symbol_to_str


class Transition:
    """Directed arc toward a state, labeled with a symbol"""

    __slots__ = ("symbol", "target")

    def __init__(self, symbol: Symbol, target: "State"):
        self.symbol = symbol
        self.target = target

    def __repr__(self):
        return "<{} {} {}>".format(
            self.__class__.__name__, symbol_to_str(self.symbol), self.target)


class State:
    """
    Graph vertex

    The label is given by whoever allocates the state, transitions are
    kept in insertion order. Equality and hashing are identity based.
    """

    transitions: List[Transition]

    def __init__(self, label: int):
        self.label = label
        self.transitions = []

    def __str__(self):
        return self.pad(1)

    def __repr__(self):
        return "<{} {} ({})>".format(
            self.__class__.__name__,
            self.label,
            ", ".join(symbol_to_str(t.symbol) for t in self.transitions))

    def add(self, symbol: Symbol, target: "State") -> Transition:
        """Append a new outgoing transition, duplicates are kept"""
        transition = Transition(symbol, target)
        self.transitions.append(transition)
        return transition

    def pad(self, width: int) -> str:
        """Zero-pad the label so the states sort numerically as text"""
        return ("({:0%dd})" % width).format(self.label)

    def print_transitions(self, width: int = 1) -> None:
        for transition in self.transitions:
            print(self.pad(width), symbol_to_str(transition.symbol),
                  transition.target.pad(width))


def depth_first(
    roots: Iterable[State], symbol: Optional[Symbol] = None,
) -> Iterator[Tuple[State, Optional[Transition]]]:
    """
    Walk the graph depth-first from each root in turn

    Yield ``(state, None)`` the first time a state is discovered and
    ``(state, transition)`` for every transition followed out of
    ``state``, including the ones leading to an already discovered
    state. A discovered state is never expanded twice so the walk ends
    on cyclic graphs.

    When ``symbol`` is given, only the transitions labeled with exactly
    that symbol are followed.
    """
    seen = set()
    for root in roots:
        if root in seen:
            continue
        seen.add(root)
        yield root, None

        # Each frame resumes the iteration over its state's transitions
        # where it was suspended by the discovery of a new state.
        stack = [(root, iter(root.transitions))]
        while stack:
            state, transitions = stack[-1]
            for transition in transitions:
                if symbol is not None and transition.symbol != symbol:
                    continue
                yield state, transition
                target = transition.target
                if target not in seen:
                    seen.add(target)
                    yield target, None
                    stack.append((target, iter(target.transitions)))
                    break
            else:
                stack.pop()
