# -*- coding: utf-8 -*-
"""
Isotopic envelope computation.

The envelope of a formula is built one atom at a time, as described in:

    Rockwood, A. L. & Haimi, P. Efficient Calculation of Accurate Masses of
    Isotopic Peaks. J Am Soc Mass Spectrom 17, 415-419 (2006).

The first atom is used as the initial "super-atom". Each remaining atom is
combined with the super-atom, and the result becomes the new super-atom.
Abundance beyond the requested number of peaks is discarded on each step, so
the envelope abundances may add up to less than one.

"""

import numpy as np
from functools import cache
from typing import Mapping, Optional, Sequence, Tuple
from .atoms import PeriodicTable
from .validation import validate_envelope_params


def find_formula_envelope(
    composition: Mapping[str, int],
    n_peaks: int,
    order: Optional[Sequence[str]] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Computes the isotopic envelope of a composition.

    Parameters
    ----------
    composition : Mapping[str, int]
        Mapping from element symbols to positive atom counts.
    n_peaks : int
        Number of peaks in the envelope.
    order : Sequence[str] or None, default=None
        Order in which elements are combined. If ``None``, elements are
        processed in alphabetical order. The result does not depend on the
        order except for floating point rounding.

    Returns
    -------
    M : array[float]
        Exact mass of each peak. Peaks with zero abundance have mass 0.
    p : array[float]
        Abundance of each peak.

    Raises
    ------
    ValueError
        If the composition is empty, if `n_peaks` is not a positive integer or
        if `order` does not contain exactly the composition elements.

    """
    if not composition:
        msg = "Cannot compute the isotopic envelope of an empty composition."
        raise ValueError(msg)
    if min(composition.values()) < 1:
        msg = "Atom counts must be positive integers."
        raise ValueError(msg)
    validate_envelope_params({"n_peaks": n_peaks})

    if order is None:
        order = sorted(composition)
    elif sorted(order) != sorted(composition):
        msg = "`order` must contain each element in the composition once."
        raise ValueError(msg)

    M, p = None, None
    for symbol in order:
        Ma, pa = _get_atom_envelope(symbol, n_peaks)
        for _ in range(composition[symbol]):
            if M is None:
                M, p = Ma.copy(), pa.copy()
            else:
                M, p = combine_envelopes(M, p, Ma, pa)
    return M, p


def combine_envelopes(
    M1: np.ndarray,
    p1: np.ndarray,
    M2: np.ndarray,
    p2: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Combines exact mass and abundance of two envelopes.

    All arrays must be 1-dimensional and have the same size. The size of the
    result is the same as the size of the inputs. The mass of peaks with zero
    abundance is set to zero.

    """
    size = M1.size
    M = np.zeros(size, dtype=float)
    p = np.zeros(size, dtype=float)
    # Ignore zero division errors when normalizing by pk
    with np.errstate(divide="ignore", invalid="ignore"):
        for k in range(size):
            pk_terms = p1[: k + 1] * p2[k::-1]
            pk = pk_terms.sum()
            Mk = (pk_terms * (M1[: k + 1] + M2[k::-1])).sum()
            M[k] = Mk / pk
            p[k] = pk
    np.nan_to_num(M, copy=False)
    return M, p


@cache
def _get_atom_envelope(symbol: str, n_peaks: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Envelope of a single atom. The arrays returned are shared and must not be
    modified.

    """
    element = PeriodicTable().get_element(symbol)
    M, p = element.get_isotope_distribution(n_peaks)
    M.setflags(write=False)
    p.setflags(write=False)
    return M, p
