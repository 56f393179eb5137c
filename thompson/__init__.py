"""Thompson's construction of nondeterministic finite automatons."""

import logging

from .automatons import FA, NFA, BuildContext
from .char import EPSILON
from .nodes import State, Transition
from .syntax import StructureError, SyntaxNode, from_mapping

logger = logging.getLogger("thompson")
logger.addHandler(logging.NullHandler())
