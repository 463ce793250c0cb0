#!/usr/bin/env python
"""
demo.py
=======
A FastAPI demo that:

1. Reads Redis settings from ``NEDIS_*`` env vars (or a ``.env`` file).
2. Registers a ``dogs`` table validated by a pydantic model.
3. Exposes a ``/`` endpoint that inserts, lists, updates and deletes dogs,
   then cleans up and returns every intermediate state as JSON.
"""

import logging
from typing import Any, Dict

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel

import nedis

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("nedis.demo")


# ── 1. the table's shape ─────────────────────────────────────────────────────
class Dog(BaseModel):
    id: str
    name: str
    paws: int

    model_config = {"extra": "forbid"}


DOGS = nedis.SchemaDefinition(name="dogs", pk="id", validator=Dog)

app = FastAPI()


# -----------------------------------------------------------------------------
# 2.  Whole flow exposed via HTTP
# -----------------------------------------------------------------------------
@app.get("/")
async def demo_flow() -> Dict[str, Any]:
    client = nedis.NedisClient(nedis.NedisConfig.from_env())
    client.register_schema(DOGS)
    log.info('"dogs" schema registered')

    trace: Dict[str, Any] = {}
    try:
        trace["inserted"] = [
            await client.insert("dogs", {"id": "1", "name": "ralph", "paws": "4"}),
            await client.insert("dogs", {"id": "2", "name": "jessey", "paws": "3"}),
            await client.insert("dogs", {"id": "3", "name": "barry", "paws": "6"}),
        ]
        trace["all_dogs"] = await client.get_all("dogs")

        trace["updated_ralph"] = await client.update("dogs", "1", {"paws": "2"})
        trace["after_update"] = await client.get_all("dogs")

        trace["deleted_ralph"] = await client.delete("dogs", "1")
        trace["after_delete"] = await client.get_all("dogs")
    finally:
        await client.drop_table("dogs")
        await client.close()

    return trace


# -----------------------------------------------------------------------------
# 3.  Run UVicorn (only in script mode)
# -----------------------------------------------------------------------------
if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8002, reload=False)
