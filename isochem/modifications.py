"""
Chemical modifications applied to adducts.

Objects
-------
- ChemicalModification
- SimpleAddition
- SimpleSubtraction

Functions
---------
- modification_from_str

"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional
from .exceptions import InvalidFormula, InvalidModification
from .formula import ChemicalFormula, _as_formula

if TYPE_CHECKING:  # pragma: no cover
    from .adducts import Adduct


class ChemicalModification(ABC):
    """
    Base class for transformations applied to the formula of an adduct.

    Subclasses are immutable. Applying a modification replaces the adduct
    formula and appends the modification to the adduct history.

    Attributes
    ----------
    symbol : str
        Short label used in ion type strings, e.g. ``+H``.
    name : str
        Human-readable description, e.g. ``Addition of H``.

    """

    symbol: str
    name: str

    @abstractmethod
    def can_perform(self, adduct: "Adduct") -> bool:
        """Checks if the modification can be applied. Does not modify the adduct."""
        ...

    @abstractmethod
    def perform(self, adduct: "Adduct"):
        """
        Applies the modification to the adduct.

        Raises
        ------
        InvalidModification
            If the modification cannot be applied. In this case the adduct is
            not modified.

        """
        ...


@dataclass(frozen=True)
class SimpleAddition(ChemicalModification):
    """
    Adds a fixed formula to the adduct. Always feasible.

    Examples
    --------
    >>> SimpleAddition("H").symbol
    '+H'

    """

    formula: ChemicalFormula
    symbol: Optional[str] = field(default=None)
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        formula = _as_formula(self.formula)
        object.__setattr__(self, "formula", formula)
        if self.symbol is None:
            object.__setattr__(self, "symbol", "+{}".format(formula))
        if self.name is None:
            object.__setattr__(self, "name", "Addition of {}".format(formula))

    def can_perform(self, adduct: "Adduct") -> bool:
        return True

    def perform(self, adduct: "Adduct"):
        new_formula = adduct.formula.with_addition(self.formula)
        adduct.add_modification(self, new_formula)


@dataclass(frozen=True)
class SimpleSubtraction(ChemicalModification):
    """
    Removes a fixed formula from the adduct.

    Feasible only if the adduct has at least as many atoms of each element as
    the subtracted formula.

    Examples
    --------
    >>> SimpleSubtraction("H2O").name
    'Subtraction of H2O'

    """

    formula: ChemicalFormula
    symbol: Optional[str] = field(default=None)
    name: Optional[str] = field(default=None, compare=False)

    def __post_init__(self):
        formula = _as_formula(self.formula)
        object.__setattr__(self, "formula", formula)
        if self.symbol is None:
            object.__setattr__(self, "symbol", "-{}".format(formula))
        if self.name is None:
            object.__setattr__(self, "name", "Subtraction of {}".format(formula))

    def can_perform(self, adduct: "Adduct") -> bool:
        try:
            adduct.formula.with_subtraction(self.formula)
        except InvalidModification:
            return False
        return True

    def perform(self, adduct: "Adduct"):
        try:
            new_formula = adduct.formula.with_subtraction(self.formula)
        except InvalidModification as e:
            msg = "Can't perform modification {} on {}: {}".format(
                self.symbol, adduct.compound.name, e
            )
            raise InvalidModification(msg, symbol=self.symbol, name=adduct.compound.name) from e
        adduct.add_modification(self, new_formula)


def modification_from_str(mod_str: str) -> ChemicalModification:
    """
    Creates a simple modification from its symbol.

    Parameters
    ----------
    mod_str : str
        A formula preceded by ``+`` (addition) or ``-`` (subtraction).

    Raises
    ------
    ValueError
        If the sign is missing or the formula is invalid.

    Examples
    --------
    >>> modification_from_str("+Na")
    SimpleAddition(formula=ChemicalFormula(Na), symbol='+Na', name='Addition of Na')
    >>> modification_from_str("-H2O").name
    'Subtraction of H2O'

    """
    if len(mod_str) < 2 or mod_str[0] not in "+-":
        msg = "Modification string must be a formula preceded by + or -, got {!r}."
        raise ValueError(msg.format(mod_str))
    sign, formula_str = mod_str[0], mod_str[1:]
    try:
        formula = ChemicalFormula(formula_str)
    except InvalidFormula as e:
        msg = "Invalid modification {}: {}".format(mod_str, e)
        raise ValueError(msg) from e
    if sign == "+":
        return SimpleAddition(formula)
    return SimpleSubtraction(formula)
