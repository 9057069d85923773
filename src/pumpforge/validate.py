import json
import os

from jsonschema import Draft7Validator
from jsonschema.exceptions import best_match
from loguru import logger

from ._schema import load_case_schema


def _location(error):
    return "/".join(str(p) for p in error.absolute_path) or "<case>"


def validate_case(case_or_path, schema=None):
    """
    Checks a pump case against the bundled schema, including the
    parameters required by the selected pump model.
    Args:
        case_or_path (dict | str | os.PathLike): Case dictionary or path to a case JSON file.
        schema (dict, optional): Schema to use instead of the bundled one.
    Returns:
        dict: The case dictionary.
    Raises:
        jsonschema.ValidationError: The most relevant error when the case is invalid.
    """
    if schema is None:
        schema = load_case_schema()

    if isinstance(case_or_path, dict):
        case, source = case_or_path, "<dict>"
    else:
        source = os.fspath(case_or_path)
        with open(source, "r") as f:
            case = json.load(f)

    errors = sorted(Draft7Validator(schema).iter_errors(case), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        for err in errors:
            logger.error(f"{source}: {_location(err)}: {err.message}")
        raise best_match(errors)

    logger.info(f"Pump case '{source}' validated successfully.")
    return case
