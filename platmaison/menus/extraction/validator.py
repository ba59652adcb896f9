"""Validation of recipe JSON returned by a text-generation model.

`validate` turns raw model output into either `Accepted` or `Rejected`.
It never touches the catalog or the store. Steps run in order and stop at
the first failure:

1. find the first balanced ``{...}`` span in the text
2. parse it as JSON
3. check the required fields and their shapes
4. check that the ingredients are mentioned in the instructions

Step 4 is a heuristic screen for a recipe assembled from the wrong source
(ingredients of one page, instructions of another). Passing it does not mean
the recipe is correct; the threshold and the token rule are settings.
"""

from __future__ import annotations

import enum
import json
import math
from dataclasses import dataclass, field
from typing import Any, Callable

DEFAULT_MATCH_THRESHOLD = 0.75
_MAX_EXACT_INT = 2**53

REQUIRED_FIELDS = ("name", "instructions", "servingQuantity", "dishType", "ingredients")


class RejectionReason(enum.Enum):
    NO_STRUCTURED_DATA = "no_structured_data"
    MALFORMED_DATA = "malformed_data"
    MISSING_FIELD = "missing_field"
    SEMANTIC_MISMATCH = "semantic_mismatch"


@dataclass(frozen=True)
class CandidateIngredient:
    name: str
    amount: float


@dataclass(frozen=True)
class ExtractionCandidate:
    name: str
    instructions: str
    serving_quantity: int
    dish_type: str
    ingredients: tuple[CandidateIngredient, ...]


@dataclass(frozen=True)
class Accepted:
    candidate: ExtractionCandidate
    match_ratio: float

    accepted = True


@dataclass(frozen=True)
class Rejected:
    reason: RejectionReason
    detail: str = ""
    field_name: str | None = None
    match_ratio: float | None = None

    accepted = False

    @property
    def message(self) -> str:
        match self.reason:
            case RejectionReason.NO_STRUCTURED_DATA:
                return "No JSON object found in the model response."
            case RejectionReason.MALFORMED_DATA:
                return f"The model response is not valid JSON: {self.detail}"
            case RejectionReason.MISSING_FIELD:
                return f"Missing or invalid field {self.field_name!r}: {self.detail}"
            case RejectionReason.SEMANTIC_MISMATCH:
                return (
                    f"Only {self.match_ratio:.0%} of ingredients are mentioned in "
                    f"the instructions. The instructions and ingredients may "
                    f"not match."
                )
        return self.detail

    def to_dict(self) -> dict:
        return {
            "accepted": False,
            "reason": self.reason.value,
            "field": self.field_name,
            "match_ratio": self.match_ratio,
            "message": self.message,
        }


ValidationResult = Accepted | Rejected


def last_word(name: str) -> str:
    """Core token of an ingredient name: its last word, lowercased."""
    words = name.split()
    return words[-1].lower() if words else ""


@dataclass(frozen=True)
class ValidatorSettings:
    """Tunable parameters of the ingredient/instruction cross-check."""

    match_threshold: float = DEFAULT_MATCH_THRESHOLD
    core_token: Callable[[str], str] = field(default=last_word)


class _FieldError(Exception):
    def __init__(self, field_path: str, detail: str) -> None:
        super().__init__(detail)
        self.field_path = field_path
        self.detail = detail


def find_json_object(text: str) -> str | None:
    """Return the first balanced ``{...}`` span of `text`, or None.

    Braces inside JSON string literals do not count towards the balance.
    If an opening brace is never closed, the earliest later brace that is
    closed wins. The text is scanned once.
    """
    start = text.find("{")
    if start == -1:
        return None

    opens: list[int] = []
    best: tuple[int, int] | None = None
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            opens.append(i)
        elif ch == "}" and opens:
            begin = opens.pop()
            if not opens:
                return text[begin : i + 1]
            if best is None or begin < best[0]:
                best = (begin, i)
    if best is None:
        return None
    return text[best[0] : best[1] + 1]


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    # Big JSON integers do not fit a float; reject them instead of overflowing
    return isinstance(value, int) and abs(value) <= _MAX_EXACT_INT


def _require_text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        raise _FieldError(key, "field is missing")
    if not isinstance(value, str) or not value.strip():
        raise _FieldError(key, "expected a non-empty string")
    return value


def _require_serving_quantity(data: dict) -> int:
    value = data.get("servingQuantity")
    if value is None:
        raise _FieldError("servingQuantity", "field is missing")
    if not _is_number(value) or value != int(value) or value <= 0:
        raise _FieldError("servingQuantity", "expected a positive integer")
    return int(value)


def _require_ingredients(data: dict) -> tuple[CandidateIngredient, ...]:
    value = data.get("ingredients")
    if value is None:
        raise _FieldError("ingredients", "field is missing")
    if not isinstance(value, list) or not value:
        raise _FieldError("ingredients", "expected a non-empty list")

    result: list[CandidateIngredient] = []
    for i, entry in enumerate(value):
        path = f"ingredients[{i}]"
        if not isinstance(entry, dict):
            raise _FieldError(path, "expected an object with name and amount")
        name = entry.get("name")
        if not isinstance(name, str) or not name.strip():
            raise _FieldError(f"{path}.name", "expected a non-empty string")
        amount = entry.get("amount")
        if not _is_number(amount) or amount < 0:
            raise _FieldError(f"{path}.amount", "expected a non-negative number")
        result.append(CandidateIngredient(name=name.strip(), amount=float(amount)))
    return tuple(result)


def _build_candidate(data: dict) -> ExtractionCandidate:
    # Field order matches REQUIRED_FIELDS so the first missing one is reported
    name = _require_text(data, "name")
    instructions = _require_text(data, "instructions")
    serving_quantity = _require_serving_quantity(data)
    dish_type = _require_text(data, "dishType")
    ingredients = _require_ingredients(data)
    return ExtractionCandidate(
        name=name.strip(),
        instructions=instructions,
        serving_quantity=serving_quantity,
        dish_type=dish_type.strip(),
        ingredients=ingredients,
    )


def match_ratio(
    candidate: ExtractionCandidate,
    core_token: Callable[[str], str] = last_word,
) -> float:
    """Fraction of ingredients whose core token appears in the instructions."""
    instructions = candidate.instructions.lower()
    matched = 0
    for ing in candidate.ingredients:
        token = core_token(ing.name)
        if token and token in instructions:
            matched += 1
    return matched / len(candidate.ingredients)


def validate(
    raw_text: str,
    settings: ValidatorSettings | None = None,
) -> ValidationResult:
    """Validate raw model output and return Accepted or Rejected."""
    settings = settings or ValidatorSettings()

    span = find_json_object(raw_text)
    if span is None:
        return Rejected(RejectionReason.NO_STRUCTURED_DATA)

    # ValueError also covers integers past the int-to-str digit limit
    try:
        data = json.loads(span)
    except (ValueError, RecursionError) as e:
        return Rejected(RejectionReason.MALFORMED_DATA, detail=str(e))

    try:
        candidate = _build_candidate(data)
    except _FieldError as e:
        return Rejected(
            RejectionReason.MISSING_FIELD, detail=e.detail, field_name=e.field_path
        )

    ratio = match_ratio(candidate, settings.core_token)
    if ratio < settings.match_threshold:
        return Rejected(
            RejectionReason.SEMANTIC_MISMATCH,
            detail=f"match ratio {ratio:.2f} below {settings.match_threshold:.2f}",
            match_ratio=ratio,
        )

    return Accepted(candidate=candidate, match_ratio=ratio)
