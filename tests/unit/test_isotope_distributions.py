import pytest
import numpy as np
from isochem import _isotope_distributions as ids
from isochem import ChemicalFormula, PeriodicTable


@pytest.mark.parametrize("n_peaks", [1, 2, 3, 5])
def test_find_formula_envelope_single_atom(n_peaks):
    M, p = ids.find_formula_envelope({"C": 1}, n_peaks)
    M_expected, p_expected = PeriodicTable().get_element("C").get_isotope_distribution(n_peaks)
    assert np.array_equal(M, M_expected)
    assert np.array_equal(p, p_expected)


def test_find_formula_envelope_single_atom_values():
    M, p = ids.find_formula_envelope({"C": 1}, 3)
    assert np.array_equal(M, [12.0, 13.00335484, 0.0])
    assert np.array_equal(p, [0.9893, 0.0107, 0.0])


def test_find_formula_envelope_two_atoms():
    a, b = 0.999885, 1.15e-4
    m1, m2 = 1.007825032, 2.014101778
    M, p = ids.find_formula_envelope({"H": 2}, 3)
    assert np.allclose(p, [a * a, 2 * a * b, b * b])
    assert np.allclose(M, [2 * m1, m1 + m2, 2 * m2])


def test_find_formula_envelope_zero_abundance_peaks_have_zero_mass():
    M, p = ids.find_formula_envelope({"Na": 1, "Cl": 1}, 3)
    na, cl35, cl37 = 22.98976928, 34.96885268, 36.96590259
    assert np.allclose(p, [0.7578, 0.0, 0.2422])
    assert p[1] == 0.0
    assert M[1] == 0.0
    assert np.isclose(M[0], na + cl35)
    assert np.isclose(M[2], na + cl37)


@pytest.mark.parametrize(
    "composition,order1,order2",
    [
        ({"Na": 1, "Cl": 1}, ["Na", "Cl"], ["Cl", "Na"]),
        ({"C": 6, "H": 12, "O": 6}, ["C", "H", "O"], ["O", "H", "C"]),
        ({"C": 10, "H": 16, "N": 5, "O": 13, "P": 3}, ["P", "O", "N", "H", "C"], ["C", "N", "P", "H", "O"]),
    ]
)
def test_find_formula_envelope_order_independence(composition, order1, order2):
    M1, p1 = ids.find_formula_envelope(composition, 5, order=order1)
    M2, p2 = ids.find_formula_envelope(composition, 5, order=order2)
    assert np.allclose(p1, p2, rtol=0.0, atol=1e-9)
    assert np.allclose(M1, M2, rtol=1e-9)


@pytest.mark.parametrize(
    "formula_str,n_peaks",
    [
        ("C6H12O6", 1),
        ("C6H12O6", 3),
        ("C6H12O6", 10),
        ("C27H46O", 5),
        ("C100", 2),
        ("NaCl", 3),
        ("C2H6S4Cl2Br2", 8),
    ]
)
def test_find_formula_envelope_abundance_sum_not_greater_than_one(formula_str, n_peaks):
    composition = ChemicalFormula(formula_str).composition
    M, p = ids.find_formula_envelope(composition, n_peaks)
    assert M.size == n_peaks
    assert p.size == n_peaks
    assert p.sum() <= 1.0 + 1e-12
    assert np.all(p >= 0.0)


def test_find_formula_envelope_truncation():
    M, p = ids.find_formula_envelope({"C": 100}, 1)
    assert np.isclose(p[0], 0.9893 ** 100)
    assert np.isclose(M[0], 1200.0)


def test_find_formula_envelope_first_peak_is_monoisotopic_mass():
    f = ChemicalFormula("C27H46O")
    M, _ = ids.find_formula_envelope(f.composition, 3)
    assert abs(M[0] - f.get_monoisotopic_mass()) < 1e-6


def test_find_formula_envelope_empty_composition():
    with pytest.raises(ValueError):
        ids.find_formula_envelope(dict(), 3)


@pytest.mark.parametrize("composition", [{"C": 0}, {"C": 2, "H": -1}])
def test_find_formula_envelope_non_positive_count(composition):
    with pytest.raises(ValueError):
        ids.find_formula_envelope(composition, 3)


@pytest.mark.parametrize("n_peaks", [0, -2, 2.5, None])
def test_find_formula_envelope_invalid_n_peaks(n_peaks):
    with pytest.raises(ValueError):
        ids.find_formula_envelope({"C": 2}, n_peaks)


@pytest.mark.parametrize("order", [["C"], ["C", "H", "O"], ["C", "C"]])
def test_find_formula_envelope_invalid_order(order):
    with pytest.raises(ValueError):
        ids.find_formula_envelope({"C": 2, "H": 4}, 3, order=order)


def test_combine_envelopes_with_identity():
    M_identity = np.zeros(3)
    p_identity = np.array([1.0, 0.0, 0.0])
    M_cl, p_cl = PeriodicTable().get_element("Cl").get_isotope_distribution(3)
    M, p = ids.combine_envelopes(M_identity, p_identity, M_cl, p_cl)
    assert np.allclose(M, M_cl)
    assert np.allclose(p, p_cl)


def test_combine_envelopes_size():
    M_c, p_c = PeriodicTable().get_element("C").get_isotope_distribution(4)
    M_o, p_o = PeriodicTable().get_element("O").get_isotope_distribution(4)
    M, p = ids.combine_envelopes(M_c, p_c, M_o, p_o)
    assert M.size == 4
    assert p.size == 4
    assert np.isclose(p[0], 0.9893 * 0.99757)
    assert np.isclose(p[1], 0.9893 * 0.00038 + 0.0107 * 0.99757)


def test_get_atom_envelope_is_read_only():
    M, p = ids._get_atom_envelope("C", 3)
    assert not M.flags.writeable
    assert not p.flags.writeable
    with pytest.raises(ValueError):
        M[0] = 1.0


def test_find_formula_envelope_result_is_writable():
    M, p = ids.find_formula_envelope({"C": 1}, 3)
    M[0] = 1.0
    p[0] = 1.0
    M_new, p_new = ids.find_formula_envelope({"C": 1}, 3)
    assert M_new[0] == 12.0
    assert p_new[0] == 0.9893
