"""
Onboarding persistence.

`infrastructure_data` is a jsonb column. asyncpg does not encode or decode
json/jsonb on its own, so documents go in as JSON text cast to jsonb and come
back out as text that is decoded here.
"""

from __future__ import annotations

import json
from typing import Any

from core import db

from calculations.schemas import Status


def _json_arg(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False)


def _json_value(raw: Any) -> Any:
    if isinstance(raw, (str, bytes)):
        return json.loads(raw)
    return raw


async def insert_onboarding(*, kunde_id: int, mitarbeiter_id: int, infrastructure_data: Any) -> int:
    async with db.transaction() as conn:
        row = await db.fetch_in(
            conn,
            """
            INSERT INTO onboarding (datum, status, mitarbeiter_id, kunde_id, infrastructure_data)
            VALUES (CURRENT_DATE, $1, $2, $3, $4::jsonb)
            RETURNING onboarding_id
            """,
            Status.NEW.value,
            mitarbeiter_id,
            kunde_id,
            _json_arg(infrastructure_data),
        )
        if row is None or "onboarding_id" not in row:
            raise RuntimeError("Failed to insert onboarding.")
        return int(row["onboarding_id"])


async def get_onboarding(onboarding_id: int) -> dict[str, Any] | None:
    row = await db.fetch_one(
        """
        SELECT onboarding_id, datum, status, mitarbeiter_id, kunde_id, infrastructure_data
        FROM onboarding
        WHERE onboarding_id = $1
        """,
        onboarding_id,
    )
    if row is None:
        return None
    row["infrastructure_data"] = _json_value(row.get("infrastructure_data"))
    return row
