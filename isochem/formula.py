"""
Tools for working with chemical formulas

Objects
-------

- ChemicalFormula

Functions
---------

- parse_formula

Exceptions
----------

- InvalidFormula

"""


import numpy as np
import string
from typing import Dict, Mapping, Optional, Tuple, Union
from ._constants import DEFAULT_N_PEAKS
from ._isotope_distributions import find_formula_envelope
from .atoms import PeriodicTable
from .exceptions import InvalidFormula, InvalidModification
from .validation import validate_envelope_params


class ChemicalFormula:
    """
    Represents a chemical formula as a mapping from element symbols to atom
    counts.

    ChemicalFormula objects are values: arithmetic operations return new
    objects. The monoisotopic mass is computed on creation. The isotopic
    envelope is computed on demand and cached.

    Attributes
    ----------
    formula_str : str or None
        The text used to create the formula, if any. Used for display only,
        the element counts define the formula.

    Methods
    -------
    get_monoisotopic_mass()
    get_nominal_mass()
    get_peak_masses()
    get_peak_probabilities()
    get_isotopic_envelope()
    with_addition()
    with_subtraction()

    Examples
    --------
    >>> ChemicalFormula("H2O")
    ChemicalFormula(H2O)
    >>> ChemicalFormula({"C": 6, "H": 12, "O": 6})
    ChemicalFormula(C6H12O6)

    """

    def __init__(self, formula: Union[str, Mapping[str, int]]):
        if isinstance(formula, str):
            self.formula_str = formula
            counts = parse_formula(formula)
        elif isinstance(formula, Mapping):
            self.formula_str = None
            counts = _validate_counts(formula)
        else:
            msg = "formula must be a formula string or a mapping from element symbols to counts."
            raise TypeError(msg)
        self._counts = counts
        self._monoisotopic_mass = _compute_monoisotopic_mass(counts)
        self._envelope = _EnvelopeCache()

    @property
    def composition(self) -> Dict[str, int]:
        """A copy of the mapping from element symbols to atom counts."""
        return dict(self._counts)

    def copy(self) -> "ChemicalFormula":
        """Creates a new formula with the same counts and text, without envelope."""
        new = ChemicalFormula(self._counts)
        new.formula_str = self.formula_str
        return new

    def get_monoisotopic_mass(self) -> float:
        """
        Mass of the formula using the most abundant isotope of each element.

        Examples
        --------
        >>> f = ChemicalFormula("H2O")
        >>> f.get_monoisotopic_mass()
        18.010564684

        """
        return self._monoisotopic_mass

    def get_nominal_mass(self) -> int:
        """Number of nucleons, using the most abundant isotope of each element."""
        ptable = PeriodicTable()
        return sum(ptable.get_element(k).nominal_mass * v for k, v in self._counts.items())

    def get_mass_defect(self) -> float:
        """Difference between the monoisotopic mass and the nominal mass."""
        return self._monoisotopic_mass - self.get_nominal_mass()

    def get_unit_mass_defect(self) -> float:
        """Mass defect divided by the nominal mass."""
        return self.get_mass_defect() / self.get_nominal_mass()

    def get_average_mass(self) -> float:
        ptable = PeriodicTable()
        return sum(ptable.get_element(k).average_mass * v for k, v in self._counts.items())

    def get_isotopic_envelope(
        self, n_peaks: int = DEFAULT_N_PEAKS
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Computes the isotopic envelope of the formula.

        The envelope is cached. Requests for `n_peaks` lower or equal than
        the cached size reuse the cache. Larger requests compute the envelope
        again and replace the cache.

        Parameters
        ----------
        n_peaks : int, default=3
            Number of peaks in the envelope.

        Returns
        -------
        M : numpy.ndarray
            Exact mass of each peak.
        p : numpy.ndarray
            Abundance of each peak. Abundance of peaks beyond `n_peaks` is
            discarded, so the sum may be lower than one.

        """
        validate_envelope_params({"n_peaks": n_peaks})
        cached = self._envelope.get(n_peaks)
        if cached is None:
            M, p = find_formula_envelope(self._counts, n_peaks)
            self._envelope.store(M, p)
            cached = M, p
        M, p = cached
        return M[:n_peaks].copy(), p[:n_peaks].copy()

    def get_peak_masses(self, n_peaks: int = DEFAULT_N_PEAKS) -> np.ndarray:
        M, _ = self.get_isotopic_envelope(n_peaks)
        return M

    def get_peak_probabilities(self, n_peaks: int = DEFAULT_N_PEAKS) -> np.ndarray:
        _, p = self.get_isotopic_envelope(n_peaks)
        return p

    def with_addition(
        self, other: Union["ChemicalFormula", Mapping[str, int]]
    ) -> "ChemicalFormula":
        """
        Creates a new formula adding the counts from `other`.

        """
        counts = dict(self._counts)
        for symbol, count in _as_counts(other).items():
            counts[symbol] = counts.get(symbol, 0) + count
        return ChemicalFormula(counts)

    def with_subtraction(
        self, other: Union["ChemicalFormula", Mapping[str, int]]
    ) -> "ChemicalFormula":
        """
        Creates a new formula removing the counts from `other`.

        Elements with a resulting count equal to zero are removed.

        Raises
        ------
        InvalidModification
            If an element in `other` is not in the formula or if a resulting
            count is negative.

        """
        counts = dict(self._counts)
        for symbol, count in _as_counts(other).items():
            if symbol not in counts:
                msg = "Can't remove non present element {} from {}".format(symbol, self)
                raise InvalidModification(msg)
            new_count = counts[symbol] - count
            if new_count < 0:
                msg = "Can't remove {} of element {} from {}, only {} present".format(
                    count, symbol, self, counts[symbol]
                )
                raise InvalidModification(msg)
            elif new_count == 0:
                counts.pop(symbol)
            else:
                counts[symbol] = new_count
        return ChemicalFormula(counts)

    def get_formula_str(self) -> str:
        """
        Canonical string representation. C and H are placed first and the
        rest of the elements are sorted alphabetically.

        """
        return _get_formula_str(self._counts)

    def describe(self) -> str:
        """
        Formula string and monoisotopic mass, followed by the cached peaks, if
        computed.

        """
        desc = "{}, monoisotopic mass={}".format(self, self._monoisotopic_mass)
        cached = self._envelope.get(1)
        if cached is not None:
            M, p = cached
            peaks = ", ".join("{} ({})".format(Mk, pk) for Mk, pk in zip(M, p))
            desc += ", all masses (frequencies): {}".format(peaks)
        return desc

    def __add__(self, other: "ChemicalFormula") -> "ChemicalFormula":
        if not isinstance(other, ChemicalFormula):
            return NotImplemented
        return self.with_addition(other)

    def __sub__(self, other: "ChemicalFormula") -> "ChemicalFormula":
        if not isinstance(other, ChemicalFormula):
            return NotImplemented
        return self.with_subtraction(other)

    def __eq__(self, other):
        if not isinstance(other, ChemicalFormula):
            return NotImplemented
        return self._counts == other._counts

    def __hash__(self):
        return hash(frozenset(self._counts.items()))

    def __repr__(self):
        return "ChemicalFormula({})".format(str(self))

    def __str__(self):
        if self.formula_str is None:
            return self.get_formula_str()
        return self.formula_str


class _EnvelopeCache:
    """
    Stores the last envelope computed for a formula.

    The masses and abundances are stored together so readers never see a
    mass array from one computation and an abundance array from another.

    """

    __slots__ = ("_data",)

    def __init__(self):
        self._data: Optional[Tuple[np.ndarray, np.ndarray]] = None

    def get(self, n_peaks: int) -> Optional[Tuple[np.ndarray, np.ndarray]]:
        data = self._data
        if (data is None) or (data[0].size < n_peaks):
            return None
        return data

    def store(self, M: np.ndarray, p: np.ndarray):
        self._data = M, p


def parse_formula(formula: str) -> Dict[str, int]:
    """
    Parse a formula string into a dictionary that maps element symbols to
    atom counts.

    A formula is a sequence of tokens without separators. Each token is an
    element symbol followed by an optional coefficient. If the coefficient is
    missing, it is assumed to be 1. If an element appears more than once, the
    last coefficient is used.

    Raises
    ------
    InvalidFormula
        If the formula is empty, contains an unknown element symbol, an
        invalid character or a zero coefficient.

    Examples
    --------
    >>> parse_formula("C6H12O6")
    {'C': 6, 'H': 12, 'O': 6}

    """
    if not formula:
        raise InvalidFormula("Empty formula string.", formula=formula)
    ind = 0
    n = len(formula)
    composition = dict()
    while ind < n:
        if formula[ind] not in string.ascii_uppercase:
            msg = "Bad formula {}: invalid character {!r} at position {}.".format(
                formula, formula[ind], ind
            )
            raise InvalidFormula(msg, token=formula[ind], formula=formula)
        symbol, coefficient, ind = _tokenize_element(formula, ind)
        composition[symbol] = coefficient
    return composition


def _tokenize_element(formula: str, ind: int) -> Tuple[str, int, int]:
    """
    Converts the token starting at `ind` into an element symbol and a
    coefficient.

    Returns
    -------
    symbol, coefficient, new_ind

    """
    length = len(formula)
    if (ind < length - 1) and (formula[ind + 1] in string.ascii_lowercase):
        end = ind + 2
    else:
        end = ind + 1
    symbol = formula[ind:end]
    coefficient, new_ind = _get_coefficient(formula, end)
    token = formula[ind:new_ind]
    if symbol not in PeriodicTable():
        msg = "Bad formula {} contains unknown element {}".format(formula, token)
        raise InvalidFormula(msg, token=token, formula=formula)
    if coefficient < 1:
        msg = "Bad formula {}: coefficients must be positive, got {}".format(formula, token)
        raise InvalidFormula(msg, token=token, formula=formula)
    return symbol, coefficient, new_ind


def _get_coefficient(formula: str, ind: int) -> Tuple[int, int]:
    """
    traverses a formula string to compute a coefficient. ind is a position
    after an element.

    Returns
    -------
    coefficient : int
    new_ind : int, new index to continue parsing the formula
    """
    length = len(formula)
    if (ind >= length) or (formula[ind] not in string.digits):
        coefficient = 1
        new_ind = ind
    else:
        end = ind + 1
        while (end < length) and (formula[end] in string.digits):
            end += 1
        coefficient = int(formula[ind:end])
        new_ind = end
    return coefficient, new_ind


def _validate_counts(counts: Mapping[str, int]) -> Dict[str, int]:
    ptable = PeriodicTable()
    validated = dict()
    for symbol, count in counts.items():
        if symbol not in ptable:
            msg = "Composition contains unknown element {}".format(symbol)
            raise InvalidFormula(msg, token=symbol)
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or (count < 1):
            msg = "Formula coefficients must be positive integers, got {} for {}".format(
                count, symbol
            )
            raise InvalidFormula(msg, token=symbol)
        validated[symbol] = int(count)
    return validated


def _as_counts(other: Union[ChemicalFormula, Mapping[str, int]]) -> Dict[str, int]:
    if isinstance(other, ChemicalFormula):
        return other.composition
    elif isinstance(other, Mapping):
        return _validate_counts(other)
    else:
        msg = "Expected a ChemicalFormula or a mapping from element symbols to counts."
        raise TypeError(msg)


def _compute_monoisotopic_mass(counts: Mapping[str, int]) -> float:
    ptable = PeriodicTable()
    return float(sum(ptable.get_element(k).monoisotopic_mass * v for k, v in counts.items()))


def _get_formula_str(counts: Mapping[str, int]) -> str:
    symbols = [x for x in ("C", "H") if x in counts]
    symbols.extend(sorted(x for x in counts if x not in ("C", "H")))
    f_str = ""
    for symbol in symbols:
        coeff = counts[symbol]
        coeff_str = str(coeff) if coeff > 1 else ""
        f_str += "{}{}".format(symbol, coeff_str)
    return f_str


def _as_formula(formula: Union[str, ChemicalFormula]) -> ChemicalFormula:
    if isinstance(formula, ChemicalFormula):
        return formula
    return ChemicalFormula(formula)
