import json
from dataclasses import asdict
from datetime import datetime, date
from enum import Enum
from typing import Any, Dict, List, Mapping, Tuple

from ..contracts.base import ErrorCode, InvalidInputError, Timestamp
from ..contracts.relations import Relation
from ..contracts.results import AnalysisResult


class ISMJSONEncoder(json.JSONEncoder):
    """
    JSON Encoder for analysis results.

    RULES:
    1. Dates MUST be ISO 8601 strings (UTC).
    2. Enums MUST use their .value.
    3. Sets -> Lists (sorted for determinism).
    4. Tuples are written as lists (json default).
    """

    def default(self, obj: Any) -> Any:
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, Timestamp):
            return obj.to_iso()
        if isinstance(obj, Enum):
            return obj.value
        if isinstance(obj, (set, frozenset)):
            return sorted(list(obj))
        if hasattr(obj, "to_dict"):
            return obj.to_dict()
        if hasattr(obj, "__dataclass_fields__"):
            return asdict(obj)

        return super().default(obj)


def result_to_json(result: AnalysisResult, indent: int = 2, **extra: Any) -> str:
    payload = result.to_dict()
    payload.update(extra)
    return json.dumps(payload, cls=ISMJSONEncoder, indent=indent)


def _malformed(message: str) -> InvalidInputError:
    return InvalidInputError.of(ErrorCode.MALFORMED_DOCUMENT, message)


def load_ssim_document(data: Mapping[str, Any]) -> Tuple[List[str], Dict[str, Dict[str, Relation]], List[str]]:
    """
    Validate an SSIM document and return (ids, ssim, names).

    Expected shape:

        {
          "factors": [{"id": "f1", "name": "Funding"}, "f2", ...],
          "relations": {"f1": {"f2": "V"}, ...}
        }

    A factor given as a bare string is its own id and name. Every relation
    value is parsed eagerly so a bad judgment fails here, not mid-run.
    """
    if not isinstance(data, Mapping):
        raise _malformed("SSIM document must be a JSON object")

    factors = data.get("factors")
    if not isinstance(factors, list):
        raise _malformed("'factors' must be a list")

    ids: List[str] = []
    names: List[str] = []
    for position, factor in enumerate(factors):
        if isinstance(factor, str):
            factor_id, name = factor, factor
        elif isinstance(factor, Mapping) and isinstance(factor.get("id"), str):
            factor_id = factor["id"]
            name = factor.get("name") or factor_id
        else:
            raise _malformed(f"Factor at position {position} needs a string 'id'")
        if factor_id in ids:
            raise _malformed(f"Duplicate factor id {factor_id!r}")
        ids.append(factor_id)
        names.append(str(name))

    raw_relations = data.get("relations", {})
    if not isinstance(raw_relations, Mapping):
        raise _malformed("'relations' must be an object keyed by factor id")

    ssim: Dict[str, Dict[str, Relation]] = {}
    for source, row in raw_relations.items():
        if not isinstance(row, Mapping):
            raise _malformed(f"Relations for {source!r} must be an object")
        ssim[source] = {target: Relation.parse(value) for target, value in row.items()}

    return ids, ssim, names
