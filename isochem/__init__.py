"""
isochem
=======

Chemical formulas and isotopic envelopes for mass spectrometry.

Provides:

1. A PeriodicTable with element and isotope information.
2. A ChemicalFormula object to compute the monoisotopic mass and isotopic
   envelope of molecular formulas.
3. Chemical modifications and Adduct objects to model ions formed from a
   compound.
4. Batch computation of isotopic envelopes and conversion from and to
   compound tables.

Objects
-------
- PeriodicTable
- ChemicalFormula
- ChemicalCompound
- Adduct
- SimpleAddition
- SimpleSubtraction

Constants
---------
- DEFAULT_N_PEAKS : default number of peaks in isotopic envelopes

"""

__version__ = "0.1.0"

from ._constants import DEFAULT_N_PEAKS
from .atoms import Element, Isotope, PeriodicTable
from .exceptions import InvalidFormula, InvalidModification, UnknownElement
from .formula import ChemicalFormula, parse_formula
from .modifications import (
    ChemicalModification,
    SimpleAddition,
    SimpleSubtraction,
    modification_from_str,
)
from .adducts import Adduct, ChemicalCompound, make_formula_adduct_map
from .batch import compute_envelopes
from .tables import adducts_to_table, compounds_from_table
