from llama.types.symbol import Symbol
from llama.types.datum import (
    String,
    Number,
    Quote,
    List,
    Splice,
    Macro,
    Procedure,
    ELLIPSIS,
    variant_name,
)
from llama.types.procedure import UserProcedure
from llama.types.environment import Environment, EMPTY_ENVIRONMENT

__all__ = [
    "Symbol",
    "String",
    "Number",
    "Quote",
    "List",
    "Splice",
    "Macro",
    "Procedure",
    "ELLIPSIS",
    "variant_name",
    "UserProcedure",
    "Environment",
    "EMPTY_ENVIRONMENT",
]
