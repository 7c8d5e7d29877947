class LispError(Exception):
    """ Base class for all tinylisp errors"""
    pass

class LispTypeError(LispError):
    """ Raised when a value of one variant is used where another is required"""
    pass

class LispInvalidSymbol(LispTypeError):
    """ Raised when a non-symbol is used where a symbol name is required"""
    pass

class LispUnboundSymbol(LispError):
    """ Raised when a symbol is evaluated before it is bound"""

    def __init__(self, symbol):
        super().__init__(f"unbound symbol: {symbol}")
        self.symbol = symbol

class LispNotAProcedure(LispError):
    """ Raised when a non-procedure is used in operator position"""

class LispArityError(LispError):
    """ Raised when the number of arguments passed to a procedure or form is incorrect"""

class LispOverflowError(LispError):
    """ Raised when an integer does not fit the fixed-width number representation"""

class LispRecursionError(LispError):
    """ Raised when evaluation exhausts the host call stack"""

class LispSyntaxError(LispError):
    """ Raised by the reader on malformed input; carries the token start position"""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        if line is not None:
            message = f"{message} (line {line}, column {column})"
        super().__init__(message)
        self.line = line
        self.column = column


class EndOfInput(Exception):
    """ Signalled by the reader when the character source is exhausted.

    Not a LispError: the driver decides whether running out of input ends the session.
    """
