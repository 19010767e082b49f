"""
Compounds and adducts.

An adduct is a compound after applying an ordered sequence of chemical
modifications (e.g. protonation or water loss), used to model the ions
observed in a mass spectrum.

Objects
-------
- ChemicalCompound
- Adduct

Functions
---------
- make_formula_adduct_map

"""

import logging
import numpy as np
from typing import Dict, List, Optional, Sequence, Tuple, Union
from ._constants import DEFAULT_N_PEAKS
from .exceptions import InvalidModification
from .formula import ChemicalFormula, _as_formula
from .modifications import ChemicalModification


logger = logging.getLogger(__name__)


class ChemicalCompound:
    """
    A named chemical compound.

    Attributes
    ----------
    name : str
    formula : ChemicalFormula
    compound_class : str or None
        Optional compound class, e.g. a lipid class.

    """

    def __init__(
        self,
        name: str,
        formula: Union[str, ChemicalFormula],
        compound_class: Optional[str] = None,
        n_peaks: int = 0,
    ):
        if not isinstance(formula, ChemicalFormula):
            formula = ChemicalFormula(formula)
        self.name = name
        self.formula = formula
        self.compound_class = compound_class
        if n_peaks > 0:
            formula.get_isotopic_envelope(n_peaks)

    def __repr__(self):
        return "ChemicalCompound({}, {})".format(self.name, self.formula)

    def __str__(self):
        return "Compound: {}, formula={}".format(self.name, self.formula)

    def get_monoisotopic_mass(self) -> float:
        return self.formula.get_monoisotopic_mass()

    def with_addition(
        self, formula: Union[str, ChemicalFormula], name: str
    ) -> "ChemicalCompound":
        """Creates a new compound adding `formula` to this compound's formula."""
        formula = _as_formula(formula)
        return ChemicalCompound(name, self.formula.with_addition(formula))

    def with_subtraction(
        self, formula: Union[str, ChemicalFormula], name: str
    ) -> "ChemicalCompound":
        """
        Creates a new compound removing `formula` from this compound's formula.

        Raises
        ------
        InvalidModification
            If the compound doesn't have enough atoms of an element.

        """
        formula = _as_formula(formula)
        return ChemicalCompound(name, self.formula.with_subtraction(formula))


class Adduct:
    """
    A compound with a sequence of chemical modifications applied in order.

    Creating an adduct is all-or-nothing: if any modification cannot be
    performed an InvalidModification is raised and no adduct is created.

    Attributes
    ----------
    compound : ChemicalCompound
        The unmodified compound.
    formula : ChemicalFormula
        Formula after applying the modifications.
    modifications : Tuple[ChemicalModification, ...]
        Modifications applied, in order.

    Examples
    --------
    >>> glucose = ChemicalCompound("Glucose", "C6H12O6")
    >>> adduct = Adduct(glucose, [SimpleAddition("H"), SimpleSubtraction("H2O")])
    >>> adduct.get_ion_type_str()
    '[M +H -H2O]'
    >>> adduct.formula
    ChemicalFormula(C6H11O5)

    """

    def __init__(
        self,
        compound: ChemicalCompound,
        modifications: Optional[Sequence[ChemicalModification]] = None,
    ):
        self.compound = compound
        self.formula = compound.formula.copy()
        self._modifications: List[ChemicalModification] = list()
        if modifications is not None:
            for mod in modifications:
                if not mod.can_perform(self):
                    msg = "Can't perform modification {} on {}".format(mod.symbol, compound.name)
                    raise InvalidModification(msg, symbol=mod.symbol, name=compound.name)
                mod.perform(self)
        logger.debug("Created adduct %s.", self.get_compound_and_ion_type_str())

    @property
    def modifications(self) -> Tuple[ChemicalModification, ...]:
        return tuple(self._modifications)

    def add_modification(self, modification: ChemicalModification, formula: ChemicalFormula):
        """
        Replaces the adduct formula and appends `modification` to the history.

        Used by :py:meth:`ChemicalModification.perform`.

        """
        self.formula = formula
        self._modifications.append(modification)

    def copy(self) -> "Adduct":
        """Copies the adduct without applying the modifications again."""
        new = Adduct(self.compound)
        new.formula = self.formula
        new._modifications = list(self._modifications)
        return new

    def get_monoisotopic_mass(self) -> float:
        return self.formula.get_monoisotopic_mass()

    def get_peak_masses(self, n_peaks: int = DEFAULT_N_PEAKS) -> np.ndarray:
        return self.formula.get_peak_masses(n_peaks)

    def get_peak_probabilities(self, n_peaks: int = DEFAULT_N_PEAKS) -> np.ndarray:
        return self.formula.get_peak_probabilities(n_peaks)

    def get_ion_type_str(self) -> str:
        """
        Describes the modifications applied to the compound, e.g. ``[M +H]``.

        """
        return "[M{}]".format("".join(" " + x.symbol for x in self._modifications))

    def get_compound_and_ion_type_str(self) -> str:
        return "{}:{}".format(self.compound.name, self.get_ion_type_str())

    def __repr__(self):
        return "Adduct({})".format(self.get_compound_and_ion_type_str())

    def __str__(self):
        return "{}\t{}\t{}".format(self.compound.name, self.formula, self.get_ion_type_str())


def make_formula_adduct_map(
    compounds: Sequence[ChemicalCompound],
    modifications: Sequence[ChemicalModification],
    include_unmodified: bool = True,
) -> Dict[ChemicalFormula, List[Adduct]]:
    """
    Creates adducts for a list of compounds and groups them by formula.

    Each compound produces one adduct for each modification that can be
    performed on it and, optionally, the unmodified adduct.

    Parameters
    ----------
    compounds : Sequence[ChemicalCompound]
    modifications : Sequence[ChemicalModification]
        Each modification is applied alone to each compound.
    include_unmodified : bool, default=True
        If ``True``, includes the adduct without modifications, ``[M]``.

    Returns
    -------
    Dict[ChemicalFormula, List[Adduct]]
        Mapping from adduct formulas to adducts with that formula.

    """
    formula_to_adducts = dict()
    for compound in compounds:
        adducts = list()
        if include_unmodified:
            adducts.append(Adduct(compound))
        for mod in modifications:
            try:
                adducts.append(Adduct(compound, [mod]))
            except InvalidModification:
                logger.debug("Skipping modification %s for %s.", mod.symbol, compound.name)
        for adduct in adducts:
            formula_to_adducts.setdefault(adduct.formula, list()).append(adduct)
    return formula_to_adducts
