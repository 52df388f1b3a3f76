# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "etagware[fastapi]",
#     "httpx",
# ]
#
# [tool.uv.sources]
# etagware = { path = "../", editable = true }
# ///


import asyncio

import httpx
from fastapi import FastAPI

from etagware import CacheControlBuilder, CacheOptions
from etagware.asgi import ASGIConditionalCacheMiddleware
from etagware.fastapi import cache

app = FastAPI()

processed_requests = 0


@app.get("/items/", dependencies=[cache(public=True, max_age=5)])
async def read_item():
    global processed_requests
    processed_requests += 1
    return {"items": ["apple", "banana"]}


async def main():
    middleware = ASGIConditionalCacheMiddleware(
        app,
        options=CacheOptions(cache_control=CacheControlBuilder.create().public().max_age(60)),
    )
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=middleware)) as client:
        etag = None
        for _ in range(3):
            headers = {"If-None-Match": etag} if etag else {}
            response = await client.get("http://testserver/items/", headers=headers)
            etag = response.headers["etag"]
            print(
                f"Response: status={response.status_code}, etag={etag}, "
                f"bytes={len(response.content)}, processed_requests={processed_requests}"
            )


if __name__ == "__main__":
    asyncio.run(main())
