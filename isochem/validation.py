"""
Validation functions for envelope, batch and compound table parameters.

"""

import cerberus
from typing import Sequence


def validate(params: dict, validator: cerberus.Validator) -> dict:
    """
    Function used to validate parameters.

    Parameters
    ----------
    params: dict
    validator: cerberus.Validator

    Returns
    -------
    dict: Validated and normalized parameters

    Raises
    ------
    ValueError: if any of the parameters are invalid.
    """
    normalized = validator.normalized(params)
    if not validator.validate(normalized):
        msg = ""
        for field, e_msgs in validator.errors.items():
            for e_msg in e_msgs:
                msg += "{}: {}\n".format(field, e_msg)
        raise ValueError(msg)
    return normalized


def _n_peaks_rule() -> dict:
    return {"type": "integer", "min": 1, "required": True}


def validate_envelope_params(params: dict) -> dict:
    schema = {"n_peaks": _n_peaks_rule()}
    validator = cerberus.Validator(schema)
    return validate(params, validator)


def validate_batch_params(params: dict) -> dict:
    schema = {
        "n_peaks": _n_peaks_rule(),
        "n_jobs": {"type": "integer", "nullable": True},
        "verbose": {"type": "boolean"}
    }
    validator = cerberus.Validator(schema)
    return validate(params, validator)


def validate_compound_table_params(params: dict, columns: Sequence[str]) -> dict:
    """
    Checks that the column names passed to build compounds exist in the table.

    Parameters
    ----------
    params : dict
        column names and number of peaks to compute for each compound.
    columns : Sequence[str]
        Columns of the compound table.

    """
    columns = list(columns)
    schema = {
        "name_col": {"type": "string", "allowed": columns},
        "formula_col": {"type": "string", "allowed": columns},
        "class_col": {"type": "string", "nullable": True},
        "n_peaks": {"type": "integer", "min": 0}
    }
    validator = cerberus.Validator(schema)
    return validate(params, validator)
