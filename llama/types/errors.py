

class LlamaError(Exception):
    """ Base class for all Llama errors"""
    pass

class LlamaMalformedPattern(LlamaError):
    """ Raised when "..." is used anywhere but the end of a pattern list"""
    pass

class LlamaPatternMismatch(LlamaError):
    """ Raised when a subject does not match a procedure's pattern"""

class LlamaArityError(LlamaError):
    """ Raised when the number of arguments passed to a builtin is incorrect"""

class LlamaTypeError(LlamaError):
    """ Raised when the types of arguments passed to a builtin are incorrect"""

class LlamaSyntaxError(LlamaError):
    """ Raised when source text cannot be tokenized or parsed"""

class LlamaRenderError(LlamaError):
    """ Raised when an evaluated tree cannot be rendered as XML or JSON"""

class LlamaRecursionError(LlamaError):
    """ Raised when evaluation exceeds the configured depth budget"""


class LlamaAssertionFailure(AssertionError):
    """ Internal consistency check failed. This is an engine bug, so it is
    not a LlamaError and is not caught by `except LlamaError`."""
