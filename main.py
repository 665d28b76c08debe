from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from pixelstash.services.lsb_stego.main import router as stego_router
from pixelstash.services.lsb_stego.api.routes import get_output_dir
from pixelstash.utility.constants_manager import ConstantsManager

# Configure logging
constants = ConstantsManager()
logging.basicConfig(level=constants.get_log_level())
logger = logging.getLogger(__name__)


app = FastAPI(title="PixelStash", version="1.0.0")

app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(stego_router)
app.mount("/files", StaticFiles(directory=get_output_dir()), name="stego")


@app.get("/health")
async def health():
    return {"status": "ok"}
