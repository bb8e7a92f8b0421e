import pytest

from jam.interpreter import Interpreter

# Tests taking the `mode` fixture run three times, once per evaluation
# discipline: call-by-value ["value"], call-by-name ["name"] and
# call-by-need ["need"]. The `run` fixture parses a program and evaluates
# it under the mode of the current run.


@pytest.fixture(params=["value", "name", "need"])
def mode(request):
    return request.param


@pytest.fixture
def run(mode):
    def _run(source: str, **kwargs):
        return Interpreter.from_source(source, **kwargs).run(mode)
    return _run


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch):
    # Keep the host environment from changing defaults under test
    monkeypatch.delenv("JAM_EVAL_MODE", raising=False)
    monkeypatch.delenv("JAM_RECURSIVE_LET", raising=False)
