
class MacroEvalError(Exception):
    """ Base class for all macroeval errors"""
    pass

class MacroStructureError(MacroEvalError):
    """ Raised when node navigation finds a sequence where a single node was expected, or vice versa"""
    pass

class DeferredValueError(MacroEvalError):
    """ Raised when the value of a runtime-deferred placeholder is read"""

class LiteralEncodingError(MacroEvalError):
    """ Raised when a resolved value cannot be re-encoded as a literal"""

class MacroUsageError(MacroEvalError):
    """ Raised when a macro is called with arguments that are not statically known"""

class MacroTypeError(MacroEvalError):
    """ Raised when a lazily computed value reads a property of null or undefined"""

class MacroSyntaxError(MacroEvalError):
    """ Raised when source text does not parse cleanly"""
