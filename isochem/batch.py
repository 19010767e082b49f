"""
Isotopic envelopes of many formulas.

Envelopes are pure functions of the formula composition, so each formula is
processed independently and the work is distributed with joblib.

"""

import logging
import numpy as np
from joblib import Parallel, delayed
from tqdm import tqdm
from typing import Iterable, List, Optional, Tuple, Union
from ._constants import DEFAULT_N_PEAKS
from ._isotope_distributions import find_formula_envelope
from .formula import ChemicalFormula, _as_formula
from .validation import validate_batch_params


logger = logging.getLogger(__name__)


def compute_envelopes(
    formulas: Iterable[Union[str, ChemicalFormula]],
    n_peaks: int = DEFAULT_N_PEAKS,
    n_jobs: Optional[int] = None,
    verbose: bool = False,
) -> List[Tuple[np.ndarray, np.ndarray]]:
    """
    Computes the isotopic envelope of each formula.

    Parameters
    ----------
    formulas : Iterable[str or ChemicalFormula]
    n_peaks : int, default=3
        Number of peaks in each envelope.
    n_jobs: int or None, default=None
        Number of jobs to run in parallel. ``None`` means 1 unless in a
        :obj:`joblib.parallel_backend` context. ``-1`` means using all
        processors.
    verbose : bool, default=False
        If ``True``, displays a progress bar.

    Returns
    -------
    List[Tuple[array, array]]
        Exact mass and abundance of each formula, in the same order as
        `formulas`.

    Raises
    ------
    InvalidFormula
        If a formula string is not valid.

    """
    validate_batch_params({"n_peaks": n_peaks, "n_jobs": n_jobs, "verbose": verbose})
    compositions = [_as_formula(x).composition for x in formulas]
    logger.info("Computing isotopic envelopes of %d formulas.", len(compositions))
    iterator = compositions
    if verbose:
        iterator = tqdm(iterator, total=len(compositions), desc="isotopic envelopes")
    worker = delayed(find_formula_envelope)
    return Parallel(n_jobs=n_jobs)(worker(x, n_peaks) for x in iterator)
