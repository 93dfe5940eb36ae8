"""
Cocktail API — Drink Mutation Service (mock)
==============================================

What:  Create, update and delete for drink records, without storage.
Why:   The API exposes the write contract; nothing behind it persists yet.
How:   create/update build a DrinkMutationResult from the trimmed payload, with
       a fabricated id (create) or the path id (update) and the current time.
       delete acknowledges any id without checking that it exists.

Identifiers:
    drink_<epoch ms>_<9 random base-36 chars>
    Built from the process clock and the `secrets` RNG only, so concurrent
    requests never share state while generating them.
"""

import asyncio
import logging
import secrets
import string
import time
from datetime import datetime, timezone
from typing import Optional

from cocktail_api.schemas.drink import DrinkMutationResult, DrinkPayload, Ingredient

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase
_ID_SUFFIX_LENGTH = 9


def generate_drink_id(now: Optional[float] = None) -> str:
    millis = int((time.time() if now is None else now) * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(_ID_SUFFIX_LENGTH))
    return f"drink_{millis}_{suffix}"


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """ISO-8601 UTC with millisecond precision, e.g. 2024-01-15T12:00:00.000Z."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return value.strip() or None


def build_result(drink_id: str, payload: DrinkPayload, created_at: str) -> DrinkMutationResult:
    """Trim every string field and keep ingredient order."""
    return DrinkMutationResult(
        id=drink_id,
        name=payload.name.strip(),
        category=payload.category.strip(),
        alcoholic=payload.alcoholic,
        glass=payload.glass.strip(),
        instructions=payload.instructions.strip(),
        ingredients=[
            Ingredient(name=item.name.strip(), measure=_optional_text(item.measure))
            for item in payload.ingredients
        ],
        image=_optional_text(payload.image),
        created_at=created_at,
    )


class DrinkService:
    """
    Mock drink mutations.

    Args:
        latency_seconds: Artificial delay before each operation completes.
    """

    def __init__(self, latency_seconds: float = 0.0):
        self.latency_seconds = latency_seconds

    async def _simulate_latency(self) -> None:
        if self.latency_seconds > 0:
            await asyncio.sleep(self.latency_seconds)

    async def create_drink(self, payload: DrinkPayload) -> DrinkMutationResult:
        drink_id = generate_drink_id()
        created_at = utc_timestamp()
        await self._simulate_latency()

        result = build_result(drink_id, payload, created_at)
        logger.info("Mock drink created: id=%s name=%r at %s", result.id, result.name, created_at)
        return result

    async def update_drink(self, drink_id: str, payload: DrinkPayload) -> DrinkMutationResult:
        await self._simulate_latency()

        # No store to read the original createdAt from
        result = build_result(drink_id, payload, utc_timestamp())
        logger.info("Mock drink updated: id=%s name=%r", result.id, result.name)
        return result

    async def delete_drink(self, drink_id: str) -> str:
        await self._simulate_latency()

        logger.info("Mock drink deleted: id=%s", drink_id)
        return f"Drink with ID {drink_id} deleted successfully"
