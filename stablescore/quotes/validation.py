from __future__ import annotations
from typing import Any, Dict, List

from jsonschema import Draft7Validator

_NUMBER_OR_TEXT = {"type": ["number", "string", "null"]}

_PREMIUM = {"type": "number", "minimum": 0}

_RATE_INCREASES = {
    "type": "array",
    "items": {
        "anyOf": [
            {"type": "number"},
            {
                "type": "object",
                "properties": {
                    "increase": _NUMBER_OR_TEXT,
                    "rate_increase": _NUMBER_OR_TEXT,
                    "date": {"type": ["string", "null"]},
                },
            },
        ]
    },
}


def _one_of_spellings(*names: str) -> Dict[str, Any]:
    return {"anyOf": [{"required": [n]} for n in names]}


QUOTE_RECORD_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Quote record",
    "type": "object",
    "required": ["rating"],
    # camelCase from the quoting API, snake_case from internal callers
    "allOf": [
        _one_of_spellings("monthlyPremium", "monthly_premium"),
        _one_of_spellings("rateIncreases", "rate_increases"),
    ],
    "properties": {
        "carrierName": {"type": "string"},
        "planName": {"type": "string"},
        "carrier_name": {"type": "string"},
        "plan_name": {"type": "string"},
        "naic": {"type": ["string", "integer", "null"]},
        "rating": {"type": "string"},
        "monthlyPremium": _PREMIUM,
        "monthly_premium": _PREMIUM,
        "rateIncreases": _RATE_INCREASES,
        "rate_increases": _RATE_INCREASES,
        "premiums": {"type": ["number", "null"]},
        "claims": {"type": ["number", "null"]},
        "discounts": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["type", "value"],
                "properties": {
                    "type": {"type": "string"},
                    "value": {"type": "number"},
                    "category": {"type": ["string", "null"]},
                },
            },
        },
        "discountCategory": {"type": ["string", "null"]},
        "viewType": {"type": "array", "items": {"type": "string"}},
        "view_type": {"type": "array", "items": {"type": "string"}},
    },
}

_validator = Draft7Validator(QUOTE_RECORD_SCHEMA)


def record_errors(record: Any) -> List[str]:
    return [
        f"{'.'.join([str(p) for p in e.path]) or '$'}: {e.message}"
        for e in _validator.iter_errors(record)
    ]


def validate_quote_records(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """
    Returns a list of error dicts: {"index": i, "errors": [str, ...]}.
    A record with errors is unusable and must not be scored.
    """
    problems = []
    for i, rec in enumerate(records or []):
        errs = record_errors(rec)
        if errs:
            problems.append({"index": i, "errors": errs})
    return problems
