"""Liveness and build version endpoints."""

from __future__ import annotations

import os

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field

from blog_engine.common.logging import setup_logging

logger = setup_logging(module_name="blog_engine.webserver.health")

MISSING_VERSION = "MISSING VERSION INFO"
MISSING_GIT_COMMIT = "MISSING GIT COMMIT"
MISSING_BUILD_TIME = "MISSING BUILD TIME"

router = APIRouter()


class VersionInfo(BaseModel):
    """Build metadata, stamped into the image through the environment."""
    version: str
    git_commit: str = Field(serialization_alias="gitCommit")
    build_time: str = Field(serialization_alias="buildTime")


def version_info() -> VersionInfo:
    return VersionInfo(
        version=os.getenv("VERSION") or MISSING_VERSION,
        git_commit=os.getenv("GIT_COMMIT") or MISSING_GIT_COMMIT,
        build_time=os.getenv("BUILD_DATE") or MISSING_BUILD_TIME,
    )


@router.get("/healthz", response_class=PlainTextResponse)
async def healthz() -> str:
    return "ok"


@router.get("/version")
async def version() -> dict:
    logger.info("VersionHandler")
    return version_info().model_dump(by_alias=True)
