from __future__ import annotations

import logging
from os import PathLike
from typing import TextIO

from jam import AST, JamValue, Mode
from jam.config import get_default_mode, get_recursive_let
from jam.evaluation.evaluator import Evaluator
from jam.evaluation.policy import CALL_BY_NAME, CALL_BY_NEED, CALL_BY_VALUE, EvalPolicy, get_policy
from jam.reader.parser import parse, parse_stream

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Evaluates one parsed Jam program under call-by-value, call-by-name or
    call-by-need. Every evaluation starts from a fresh, empty environment, so
    the same program can be run any number of times under any mode.

    `let` definitions see their own frame unless `recursive_let` is turned
    off (here, through `DefaultRecursiveLet`, or with JAM_RECURSIVE_LET=0).

    Evaluation is recursive on the Python stack. A Jam call costs about five
    Python frames, so at the default recursion limit of 1000 programs nest
    roughly 150 calls deep under value and need. Call-by-name gets less,
    because forcing a variable re-evaluates the chain of argument expressions
    it was bound to. Deeper programs raise RecursionError; callers that need
    more can raise the limit with sys.setrecursionlimit.
    """

    # Class-level defaults; None defers to jam.config (environment variables)
    DefaultMode: Mode | None = None
    DefaultRecursiveLet: bool | None = None

    def __init__(self, prog: AST, *, recursive_let: bool | None = None):
        self.prog = prog
        if recursive_let is None:
            recursive_let = self.DefaultRecursiveLet
        if recursive_let is None:
            recursive_let = get_recursive_let()
        self.recursive_let = recursive_let

    @classmethod
    def from_source(cls, code: str, **kwargs) -> Interpreter:
        prog = parse(code)
        logger.debug("AST: %s", prog)
        return cls(prog, **kwargs)

    @classmethod
    def from_file(cls, path: str | PathLike, **kwargs) -> Interpreter:
        logger.debug("Loading program from %s", path)
        with open(path, encoding="utf-8") as f:
            prog = parse_stream(f)
        logger.debug("AST: %s", prog)
        return cls(prog, **kwargs)

    @classmethod
    def from_stream(cls, reader: TextIO, **kwargs) -> Interpreter:
        prog = parse_stream(reader)
        logger.debug("AST: %s", prog)
        return cls(prog, **kwargs)

    def evaluator(self, policy: EvalPolicy) -> Evaluator:
        """Top-level evaluator: empty environment plus `policy`."""
        return Evaluator(policy, recursive_let=self.recursive_let)

    def call_by_value(self) -> JamValue:
        return self.evaluator(CALL_BY_VALUE).evaluate(self.prog)

    def call_by_name(self) -> JamValue:
        return self.evaluator(CALL_BY_NAME).evaluate(self.prog)

    def call_by_need(self) -> JamValue:
        return self.evaluator(CALL_BY_NEED).evaluate(self.prog)

    def run(self, mode: Mode | None = None) -> JamValue:
        if mode is None:
            mode = self.DefaultMode or get_default_mode()
        logger.debug("Evaluating by %s (recursive let: %s)", mode, self.recursive_let)
        return self.evaluator(get_policy(mode)).evaluate(self.prog)
