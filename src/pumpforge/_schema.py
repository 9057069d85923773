"""Access to the JSON schemas shipped in pumpforge.schemas."""

import json
from functools import lru_cache
from importlib.resources import files

CASE_SCHEMA_FILE = "pump_case_schema.json"


@lru_cache(maxsize=None)
def _read_schema(name):
    return files("pumpforge.schemas").joinpath(name).read_text(encoding="utf-8")


def load_case_schema() -> dict:
    """Return a fresh copy of the pump case schema."""
    return json.loads(_read_schema(CASE_SCHEMA_FILE))
