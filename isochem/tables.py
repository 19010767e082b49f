"""
Conversion between compound tables and compound or adduct objects.

Reading the tables from files is left to the caller, e.g. with
``pandas.read_csv(path, sep="\\t")``.

"""

import logging
import pandas as pd
from typing import List, Optional, Sequence
from . import _constants as c
from .adducts import Adduct, ChemicalCompound
from .exceptions import InvalidFormula
from .validation import validate_compound_table_params


logger = logging.getLogger(__name__)


def compounds_from_table(
    df: pd.DataFrame,
    name_col: str = c.NAME,
    formula_col: str = c.FORMULA,
    class_col: Optional[str] = c.CLASS,
    n_peaks: int = 0,
) -> List[ChemicalCompound]:
    """
    Creates a list of compounds from a table.

    Rows with invalid formulas are skipped.

    Parameters
    ----------
    df : pandas.DataFrame
        Table with one compound per row.
    name_col : str, default="name"
        Column with compound names.
    formula_col : str, default="formula"
        Column with formula strings.
    class_col : str or None, default="class"
        Column with compound classes. If ``None`` or not in the table,
        compound classes are not set.
    n_peaks : int, default=0
        Number of isotopic peaks computed for each compound. If 0, envelopes
        are computed on demand.

    Returns
    -------
    List[ChemicalCompound]

    Raises
    ------
    ValueError
        If the name or formula columns are not in the table.

    """
    params = {
        "name_col": name_col,
        "formula_col": formula_col,
        "class_col": class_col,
        "n_peaks": n_peaks,
    }
    validate_compound_table_params(params, df.columns)
    has_class = (class_col is not None) and (class_col in df.columns)

    n_rows = df.shape[0]
    logger.debug("Loading %d compounds...", n_rows)
    compounds = list()
    for k, (_, row) in enumerate(df.iterrows()):
        if k % c.LOG_EVERY_N_ROWS == 0:
            logger.debug("Loaded %d of %d compounds", k, n_rows)
        name = row[name_col]
        compound_class = None
        if has_class and not pd.isna(row[class_col]):
            compound_class = str(row[class_col])
        try:
            compound = ChemicalCompound(
                name, str(row[formula_col]), compound_class=compound_class, n_peaks=n_peaks
            )
        except InvalidFormula as e:
            logger.warning("Skipping bad compound %s: %s", name, e)
            continue
        compounds.append(compound)
    logger.debug("Loaded %d compounds.", len(compounds))
    return compounds


def adducts_to_table(adducts: Sequence[Adduct]) -> pd.DataFrame:
    """
    Creates a table with the name, formula, ion type and monoisotopic mass of
    each adduct.

    """
    data = {
        c.NAME: [x.compound.name for x in adducts],
        c.FORMULA: [str(x.formula) for x in adducts],
        c.ION_TYPE: [x.get_ion_type_str() for x in adducts],
        c.MASS: [x.get_monoisotopic_mass() for x in adducts],
    }
    return pd.DataFrame(data, columns=[c.NAME, c.FORMULA, c.ION_TYPE, c.MASS])
