class JamError(Exception):
    """ Base class for all Jam errors"""
    pass

class JamSyntaxError(JamError):
    """ Raised when program text cannot be tokenized or parsed"""

class JamEvalError(JamError):
    """ Base class for failures raised while evaluating a program"""

class JamUnboundVariable(JamEvalError):
    """ Raised when a variable is looked up in an environment that does not bind it"""

class JamTypeError(JamEvalError):
    """ Raised when an operator or function receives a value of the wrong kind"""

class JamArityError(JamEvalError):
    """ Raised when the number of arguments passed to a function is incorrect"""

class JamArithmeticError(JamEvalError):
    """ Raised on integer division by zero"""

class JamSelfReferenceError(JamEvalError):
    """ Raised when a call-by-need binding is forced while it is being computed"""
