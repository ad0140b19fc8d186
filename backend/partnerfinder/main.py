"""FastAPI application entrypoint."""

from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI

from partnerfinder import __version__
from partnerfinder.api import contacts, ops, partners
from partnerfinder.api.errors import install_error_handlers
from partnerfinder.infra import postgres
from partnerfinder.obs import init as obs_init


@asynccontextmanager
async def lifespan(app: FastAPI):
	await postgres.init_pool()
	try:
		yield
	finally:
		await postgres.close_pool()


app = FastAPI(title="Partner Finder", version=__version__, lifespan=lifespan)
install_error_handlers(app)
obs_init(app)

app.include_router(partners.router, tags=["partners"])
app.include_router(contacts.router, tags=["contacts"])
app.include_router(ops.router)
