"""
Cocktail API — Drink Payload Validation
=========================================

What:  Checks the body of POST /drinks and PATCH /drinks/{id}.
Why:   Clients should see every problem with a payload in one round trip, so
       violations are collected rather than raised on the first failure.
How:   `validate_drink_payload()` is a pure function returning a list of
       messages. `validated_drink_payload` is the route guard: it reads the
       JSON body, raises ValidationError if the list is non-empty and otherwise
       hands the handler a parsed DrinkPayload.

Rules:
    - name, category, glass, instructions: required non-empty strings
    - alcoholic: one of "Alcoholic", "Non alcoholic", "Optional alcohol"
    - ingredients: non-empty list; each entry needs a non-empty string name;
      measure, if given, must be a string
    - image, if given, must be a string
    - name <= 100 characters, instructions <= 1000 characters
"""

import logging
from typing import Any, List

from fastapi import Request

from cocktail_api.exceptions import ValidationError
from cocktail_api.schemas.drink import ALCOHOLIC_VALUES, DrinkPayload

logger = logging.getLogger(__name__)

MAX_NAME_LENGTH = 100
MAX_INSTRUCTIONS_LENGTH = 1000

_REQUIRED_TEXT_FIELDS = (
    ("name", "Name is required and must be a non-empty string"),
    ("category", "Category is required and must be a non-empty string"),
    ("glass", "Glass type is required and must be a non-empty string"),
    ("instructions", "Instructions are required and must be a non-empty string"),
)


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def validate_drink_payload(payload: Any) -> List[str]:
    """Return every violation in `payload`; an empty list means it is valid."""
    if not isinstance(payload, dict):
        return ["Request body must be a JSON object"]

    errors: List[str] = []

    for field, message in _REQUIRED_TEXT_FIELDS:
        if not _is_non_empty_string(payload.get(field)):
            errors.append(message)

    if payload.get("alcoholic") not in ALCOHOLIC_VALUES:
        choices = ", ".join(f'"{value}"' for value in ALCOHOLIC_VALUES)
        errors.append(f"Alcoholic must be one of: {choices}")

    ingredients = payload.get("ingredients")
    if not isinstance(ingredients, list) or not ingredients:
        errors.append("Ingredients are required and must be a non-empty array")
    else:
        for position, ingredient in enumerate(ingredients, start=1):
            if not isinstance(ingredient, dict) or not _is_non_empty_string(ingredient.get("name")):
                errors.append(f"Ingredient {position}: name is required and must be a non-empty string")
                continue
            measure = ingredient.get("measure")
            if measure is not None and not isinstance(measure, str):
                errors.append(f"Ingredient {position}: measure must be a string if provided")

    image = payload.get("image")
    if image is not None and not isinstance(image, str):
        errors.append("Image must be a string if provided")

    name = payload.get("name")
    if isinstance(name, str) and len(name) > MAX_NAME_LENGTH:
        errors.append(f"Name must be {MAX_NAME_LENGTH} characters or less")

    instructions = payload.get("instructions")
    if isinstance(instructions, str) and len(instructions) > MAX_INSTRUCTIONS_LENGTH:
        errors.append(f"Instructions must be {MAX_INSTRUCTIONS_LENGTH} characters or less")

    return errors


async def validated_drink_payload(request: Request) -> DrinkPayload:
    """Route guard: parse and validate the JSON body, or raise ValidationError."""
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError(details=["Request body must be valid JSON"])

    errors = validate_drink_payload(payload)
    if errors:
        logger.warning("Drink payload rejected with %d violation(s)", len(errors))
        raise ValidationError(details=errors)

    return DrinkPayload.model_validate(payload)
