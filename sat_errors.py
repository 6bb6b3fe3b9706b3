"""
Exceptions raised by the SAT art modules
"""


class SATArtException(Exception):
    """Base class for SAT art exceptions"""

    pass


class DimacsParseError(SATArtException, ValueError):
    """Raised when a DIMACS (.cnf) line cannot be turned into a clause."""

    def __init__(self, line_no: int, line: str, msg: str = "empty clause"):
        self.line_no = line_no
        self.line = line
        super().__init__(f"Invalid DIMACS file ({msg}):\n{line_no}: {line}")


class ResourceLimitError(SATArtException):
    """Raised before an allocation or generation that cannot be served."""

    pass


class ArithmeticDomainError(SATArtException, ValueError):
    """Raised for arithmetic requests with no defined integer result."""

    pass
