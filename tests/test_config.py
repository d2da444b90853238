import pytest

from llama.config import MAX_DEPTH_VAR, get_max_depth, int_from_env
from llama.types.errors import LlamaTypeError


def test_max_depth_unset():
    assert get_max_depth() is None


@pytest.mark.parametrize("raw", ["", "   "])
def test_max_depth_blank(monkeypatch, raw):
    monkeypatch.setenv(MAX_DEPTH_VAR, raw)
    assert get_max_depth() is None


def test_max_depth_set(monkeypatch):
    monkeypatch.setenv(MAX_DEPTH_VAR, " 250 ")
    assert get_max_depth() == 250


@pytest.mark.parametrize("raw,message", [("many", "must be an integer"), ("0", "must be positive"), ("-3", "must be positive")])
def test_max_depth_invalid(monkeypatch, raw, message):
    monkeypatch.setenv(MAX_DEPTH_VAR, raw)
    with pytest.raises(LlamaTypeError, match=message):
        get_max_depth()


def test_int_from_env_default(monkeypatch):
    monkeypatch.delenv("LLAMA_SOMETHING_ELSE", raising=False)
    assert int_from_env("LLAMA_SOMETHING_ELSE", 7) == 7
