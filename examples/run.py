"""Launch the demo server with an async authenticator.

Usage (from the project root):
    python examples/run.py

Then test with curl:
    curl http://localhost:8000/health                          # 200 (exempt)
    curl -i http://localhost:8000/whoami                       # 401 + WWW-Authenticate
    curl -u alice:s3cret http://localhost:8000/whoami          # 200
    curl -H "Authorization: Basic !!!" localhost:8000/whoami   # 401 (reject_malformed)
"""

import asyncio
import logging

from apcore import Identity

from basicauth_asgi import serve

USERS = {
    "alice": ("s3cret", ("admin",)),
    "bob": ("hunter2", ("reader",)),
}


async def authenticate(username: str, password: str) -> Identity | None:
    # Stand-in for a remote credential check
    await asyncio.sleep(0.05)
    entry = USERS.get(username)
    if entry is None or entry[0] != password:
        return None
    return Identity(id=username, type="user", roles=entry[1])


logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")

serve(
    authenticate,
    host="127.0.0.1",
    port=8000,
    realm="basicauth-asgi demo",
    reject_malformed=True,
)
