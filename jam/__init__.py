# Core type aliases for Jam's data model.
# Runtime values use plain Python ints for Jam integers and small singleton
# classes (see jam.types.values) for booleans and the empty list.
#
# Naming guidance:
# - AST:      Use in reader/evaluator code to denote a parsed program node.
# - JamValue: Use in evaluator/runtime code to denote evaluated values.

from typing import Any, Literal

# Runtime value alias
JamValue = Any
# Parsed program node alias
AST = Any

# Evaluation disciplines understood by the interpreter
Mode = Literal["value", "name", "need"]
