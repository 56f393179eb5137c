from typing import NewType

Symbol = NewType("Symbol", str)
EPSILON = Symbol("")

def symbol_to_str(symbol: Symbol) -> str:
    return {EPSILON: "ε"}.get(symbol, symbol)
