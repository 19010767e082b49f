from isochem import atoms
from isochem.exceptions import UnknownElement
import numpy as np
import pytest


def test_PeriodicTable_get_element_from_symbol():
    ptable = atoms.PeriodicTable()
    c = ptable.get_element("C")
    assert c.z == 6
    assert c.symbol == "C"
    assert c.name == "Carbon"


def test_PeriodicTable_get_element_from_z():
    ptable = atoms.PeriodicTable()
    p = ptable.get_element(15)
    assert p.symbol == "P"
    assert p.z == 15


def test_PeriodicTable_is_a_singleton():
    assert atoms.PeriodicTable() is atoms.PeriodicTable()


@pytest.mark.parametrize("element", ["Xx", "c", "", 0, 200])
def test_PeriodicTable_get_element_unknown_element(element):
    ptable = atoms.PeriodicTable()
    with pytest.raises(UnknownElement):
        ptable.get_element(element)


def test_PeriodicTable_find_element():
    ptable = atoms.PeriodicTable()
    assert ptable.find_element("Na").symbol == "Na"
    assert ptable.find_element("Xx") is None


def test_PeriodicTable_contains():
    ptable = atoms.PeriodicTable()
    assert "Cl" in ptable
    assert "CL" not in ptable


@pytest.mark.parametrize(
    "symbol",
    ["C", "H", "O", "N", "P", "S", "Cl", "Br", "Na", "K", "Fe", "Se", "U", "Tc"]
)
def test_PeriodicTable_contains_common_elements(symbol):
    assert symbol in atoms.PeriodicTable()


@pytest.mark.parametrize(
    "z,a,m,abundance,expected_symbol",
    [
        [6, 12, 12.0, 0.9, "C"],    # Carbon. Dummy abundances and exact mass are used.
        [1, 1, 1.0078, 0.9, "H"],   # Hydrogen
        [15, 31, 30.099, 1.0, "P"]  # Phosphorus
    ]
)
def test_Isotope_get_symbol(z, a, m, abundance, expected_symbol):
    isotope = atoms.Isotope(z, a, m, abundance)
    assert isotope.get_symbol() == expected_symbol


def test_Isotope_str():
    isotope = atoms.Isotope(17, 37, 36.96590259, 0.2422)
    assert str(isotope) == "37Cl"
    assert isotope.n == 20


def test_Element_get_monoisotope():
    element = atoms.PeriodicTable().get_element("B")
    monoisotope = element.get_monoisotope()
    assert monoisotope.a == 11


def test_Element_get_mmi():
    element = atoms.PeriodicTable().get_element("B")
    mmi = element.get_mmi()
    assert mmi.a == 10


def test_Element_monoisotopic_mass_uses_most_abundant_isotope():
    b = atoms.PeriodicTable().get_element("B")
    assert b.monoisotopic_mass == b.get_monoisotope().m
    assert b.nominal_mass == 11


def test_Element_average_mass():
    c = atoms.PeriodicTable().get_element("C")
    expected = 12.0 * 0.9893 + 13.00335484 * 0.0107
    assert np.isclose(c.average_mass, expected)


def test_Element_mass_defect():
    c = atoms.PeriodicTable().get_element("C")
    assert c.mass_defect == 0.0
    h = atoms.PeriodicTable().get_element("H")
    assert np.isclose(h.mass_defect, 0.007825032)


def test_Element_get_abundances():
    o = atoms.PeriodicTable().get_element("O")
    m, M, p = o.get_abundances()
    assert np.array_equal(m, [16, 17, 18])
    assert np.allclose(M, [15.99491462, 16.9991317, 17.999161])
    assert np.isclose(p.sum(), 1.0)


def test_Element_get_isotope_distribution_fills_missing_mass_numbers():
    cl = atoms.PeriodicTable().get_element("Cl")
    M, p = cl.get_isotope_distribution(4)
    assert np.allclose(M, [34.96885268, 0.0, 36.96590259, 0.0])
    assert np.allclose(p, [0.7578, 0.0, 0.2422, 0.0])


def test_Element_get_isotope_distribution_default_length():
    s = atoms.PeriodicTable().get_element("S")
    M, p = s.get_isotope_distribution()
    # 32S, 33S, 34S, no 35S, 36S
    assert M.size == 5
    assert p[3] == 0.0
    assert M[3] == 0.0


@pytest.mark.parametrize("max_length", [1, 2, 3, 10])
def test_Element_get_isotope_distribution_length(max_length):
    o = atoms.PeriodicTable().get_element("O")
    M, p = o.get_isotope_distribution(max_length)
    assert M.size == max_length
    assert p.size == max_length
    assert M[0] == 15.99491462


def test_Element_get_isotope_distribution_single_isotope():
    na = atoms.PeriodicTable().get_element("Na")
    M, p = na.get_isotope_distribution(3)
    assert np.array_equal(M, [22.98976928, 0.0, 0.0])
    assert np.array_equal(p, [1.0, 0.0, 0.0])


def test_Element_str():
    c = atoms.PeriodicTable().get_element("C")
    c_str = str(c)
    assert c_str.startswith("Element: C, anumber=6, monomass=12.0, avemass=")
    assert "all masses (frequencies): 12.0 (0.9893), 13.00335484 (0.0107)" in c_str
