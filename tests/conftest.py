import pytest

from llama.builtin import default_environment, json_environment
from llama.evaluation.evaluator import evaluate
from llama.interpreter import Interpreter
from llama.reader.parser import parse


@pytest.fixture(autouse=True)
def _no_depth_budget(monkeypatch):
    # Tests that want a budget set it themselves.
    monkeypatch.delenv("LLAMA_MAX_DEPTH", raising=False)


@pytest.fixture
def env():
    return default_environment


@pytest.fixture
def interp():
    return Interpreter()


@pytest.fixture
def json_interp():
    return Interpreter(json_environment)


@pytest.fixture
def run(env):
    """Parse one form from source text and evaluate it in the default environment."""
    def _run(source, environment=None):
        return evaluate(parse(source), environment if environment is not None else env)
    return _run
