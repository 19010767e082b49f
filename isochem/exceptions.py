"""isochem custom exceptions."""

from typing import Optional


class UnknownElement(ValueError):
    """Exception raised when an element symbol is not in the periodic table."""

    def __init__(self, symbol: str):
        super().__init__("{} is not a valid element symbol.".format(symbol))
        self.symbol = symbol


class InvalidFormula(ValueError):
    """Exception raised when a formula string or composition cannot be parsed."""

    def __init__(
        self,
        msg: str,
        token: Optional[str] = None,
        formula: Optional[str] = None
    ):
        super().__init__(msg)
        self.token = token
        self.formula = formula


class InvalidModification(ValueError):
    """Exception raised when a modification cannot be applied to a formula."""

    def __init__(
        self,
        msg: str,
        symbol: Optional[str] = None,
        name: Optional[str] = None
    ):
        super().__init__(msg)
        self.symbol = symbol
        self.name = name
