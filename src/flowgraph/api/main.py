import sys

import uvicorn
from fastapi import FastAPI
from loguru import logger
from starlette.middleware.cors import CORSMiddleware

from src.flowgraph import VERSION
from src.flowgraph.api import patch_record, settings
from src.flowgraph.api.routes.v1.flow_graph import flow_graph_router

logger.remove()
if settings.LOG_FILE:
    logger.add(
        settings.LOG_FILE,
        rotation="500 MB",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level} | {message}",
        filter=patch_record
    )

logger.add(
    sys.stdout,
    format="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level}</level> | <blue>{message}</blue> | {extra}",
    level=settings.LOG_LEVEL,
    filter=patch_record
)

app = FastAPI(
    title="Flow Graph API",
    description="Maps stream and pool snapshots into diagram nodes and edges",
    version=VERSION
)

app.include_router(flow_graph_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

if __name__ == "__main__":
    uvicorn.run("src.flowgraph.api.main:app", host="0.0.0.0", port=settings.PORT, workers=settings.WORKERS)
