"""
Tools for working with Isotopes and Elements.

Objects
-------
- Element
- Isotope
- PeriodicTable

Exceptions
----------
- UnknownElement

"""
import json
import logging
import numpy as np
import os.path
from typing import Dict, Optional, Tuple, Union
from ._constants import LOGGED_ELEMENTS
from .exceptions import UnknownElement


logger = logging.getLogger(__name__)


class Isotope:
    """
    Representation of an Isotope.

    Attributes
    ----------
    z: int
        Atomic number
    n: int
        Neutron number
    a: int
        Mass number
    m: float
        Exact mass.
    defect: float
        Difference between the exact mass and mass number.
    abundance: float
        Relative abundance of the isotope.

    """

    __slots__ = ("z", "n", "a", "m", "defect", "abundance")

    def __init__(self, z: int, a: int, m: float, abundance: float):
        self.z = z
        self.n = a - z
        self.a = a
        self.m = m
        self.defect = m - a
        self.abundance = abundance

    def __str__(self):
        return "{}{}".format(self.a, self.get_symbol())

    def __repr__(self):
        return "Isotope({})".format(str(self))

    def get_element(self) -> "Element":
        return PeriodicTable().get_element(self.z)

    def get_symbol(self) -> str:
        return self.get_element().symbol


class Element(object):
    """
    Representation of a chemical element.

    Attributes
    ----------
    name : str
        Element name.
    symbol : str
        Element symbol
    isotopes : Dict[int, Isotope]
        Mapping from mass number to an isotope, sorted by mass number.
    z : int
        Atomic number.
    nominal_mass : int
        Mass number of the most abundant isotope
    monoisotopic_mass : float
        Exact mass of the most abundant isotope.
    mass_defect : float
        Difference between the monoisotopic mass and the nominal mass.
    average_mass : float
        Abundance-weighted mean of the isotope masses.

    """

    def __init__(self, symbol: str, name: str, isotopes: Dict[int, Isotope]):
        self.name = name
        self.symbol = symbol
        self.isotopes = {a: isotopes[a] for a in sorted(isotopes)}
        monoisotope = self.get_monoisotope()
        self.z = monoisotope.z
        self.nominal_mass = monoisotope.a
        self.monoisotopic_mass = monoisotope.m
        self.mass_defect = self.monoisotopic_mass - self.nominal_mass
        _, M, p = self.get_abundances()
        self.average_mass = float(np.sum(M * p) / np.sum(p))

    def __repr__(self):
        return "Element({})".format(self.symbol)

    def __str__(self):
        M, p = self.get_isotope_distribution()
        peaks = ", ".join("{} ({})".format(Mk, pk) for Mk, pk in zip(M, p))
        return "Element: {}, anumber={}, monomass={}, avemass={} all masses (frequencies): {}".format(
            self.symbol, self.z, self.monoisotopic_mass, self.average_mass, peaks
        )

    def get_abundances(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Returns the Mass number, exact mass and abundance of each Isotope.

        Returns
        -------
        m: array[int]
            Mass number of each isotope.
        M: array[float]
            Exact mass of each isotope.
        p: array[float]
            Abundance of each isotope.

        """
        isotopes = list(self.isotopes.values())
        m = np.array([x.a for x in isotopes], dtype=int)
        M = np.array([x.m for x in isotopes])
        p = np.array([x.abundance for x in isotopes])
        return m, M, p

    def get_isotope_distribution(
        self, max_length: Optional[int] = None
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Returns the exact mass and abundance of the isotopes, indexed by
        nucleon count.

        The element at index ``i`` is the isotope with mass number
        ``a_min + i``, where ``a_min`` is the mass number of the lightest
        isotope. Mass numbers without a stable isotope (e.g. M + 1 in Cl) are
        filled with zeros.

        Parameters
        ----------
        max_length : int or None, default=None
            Length of the arrays. The distribution is truncated or padded with
            zeros. If ``None``, the length spans every isotope.

        Returns
        -------
        M : array[float]
            Exact mass of each slot.
        p : array[float]
            Abundance of each slot.

        Examples
        --------
        >>> import isochem
        >>> cl = isochem.PeriodicTable().get_element("Cl")
        >>> cl.get_isotope_distribution(4)
        (array([34.96885268,  0.        , 36.96590259,  0.        ]),
         array([0.7578, 0.    , 0.2422, 0.    ]))

        """
        m, M, p = self.get_abundances()
        rel_m = m - m[0]
        if max_length is None:
            max_length = int(rel_m[-1]) + 1
        M_filled = np.zeros(max_length, dtype=float)
        p_filled = np.zeros(max_length, dtype=float)
        for k, rel_m_k in enumerate(rel_m):
            if rel_m_k < max_length:
                M_filled[rel_m_k] = M[k]
                p_filled[rel_m_k] = p[k]
            else:
                break
        return M_filled, p_filled

    def get_mmi(self) -> Isotope:
        """
        Returns the isotope with the lowest atomic mass.

        """
        return min(self.isotopes.values(), key=lambda x: x.a)

    def get_monoisotope(self) -> Isotope:
        """
        Returns the most abundant isotope.

        """
        return max(self.isotopes.values(), key=lambda x: x.abundance)


def PeriodicTable():
    """
    Reference the PeriodicTable object.

    The table is created once and is read-only afterwards, so it can be
    shared between threads.

    Examples
    --------
    >>> import isochem
    >>> ptable = isochem.PeriodicTable()

    """
    if _PeriodicTable.instance is None:
        _PeriodicTable.instance = _PeriodicTable()
    return _PeriodicTable.instance


class _PeriodicTable:
    """
    Periodic Table representation. Contains element and isotope information.

    Methods
    -------
    get_element
    find_element

    """

    instance = None

    def __init__(self):
        self._symbol_to_element = _make_periodic_table()
        self._z_to_element = {v.z: v for v in self._symbol_to_element.values()}
        if logger.isEnabledFor(logging.DEBUG):
            for symbol in LOGGED_ELEMENTS:
                logger.debug(str(self._symbol_to_element[symbol]))

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._symbol_to_element

    def get_element(self, element: Union[str, int]) -> Element:
        """
        Returns an Element object using its symbol or atomic number.

        Parameters
        ----------
        element : str or int
            element symbol or atomic number.

        Returns
        -------
        Element

        Raises
        ------
        UnknownElement
            If the element is not in the table.

        Examples
        --------
        >>> import isochem
        >>> ptable = isochem.PeriodicTable()
        >>> h = ptable.get_element("H")
        >>> c = ptable.get_element(6)

        """
        try:
            if isinstance(element, int):
                return self._z_to_element[element]
            return self._symbol_to_element[element]
        except KeyError:
            raise UnknownElement(str(element))

    def find_element(self, symbol: str) -> Optional[Element]:
        """
        Returns the Element with the given symbol or ``None`` if the symbol is
        not in the table.

        """
        return self._symbol_to_element.get(symbol)


def _make_periodic_table() -> Dict[str, Element]:
    this_dir, _ = os.path.split(__file__)
    elements_path = os.path.join(this_dir, "elements.json")
    with open(elements_path, "r") as fin:
        element_data = json.load(fin)

    isotopes_path = os.path.join(this_dir, "isotopes.json")
    with open(isotopes_path, "r") as fin:
        isotope_data = json.load(fin)

    periodic_table = dict()
    for element in isotope_data:
        element_isotopes = isotope_data[element]
        isotopes = {x["a"]: Isotope(**x) for x in element_isotopes}
        name = element_data[element]
        periodic_table[element] = Element(element, name, isotopes)
    return periodic_table
