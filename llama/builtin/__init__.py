"""Prepopulated environments.

`default_environment` holds the five builtins. Further builtins are added by
building a child of it, never by changing it; `json_environment` is one.
"""

from llama.builtin import env_builtin, json_builtin, macro_builtin
from llama.types.environment import Environment


def default_bindings() -> dict:
    bindings: dict = {}
    env_builtin.register(bindings)
    macro_builtin.register(bindings)
    return bindings


def json_bindings() -> dict:
    bindings: dict = {}
    json_builtin.register(bindings)
    return bindings


default_environment = Environment(default_bindings())
json_environment = default_environment.child(json_bindings())

__all__ = ["default_environment", "json_environment"]
