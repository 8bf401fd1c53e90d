# ============================================================
# 📦 src/waste_hotspots/api/hotspot_api.py
# ============================================================

import json

import numpy as np
import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from waste_hotspots import __version__
from waste_hotspots.api.routes import router as hotspot_router
from waste_hotspots.config.settings import API_PORT

# ============================================================
# 🚀 App
# ============================================================

app = FastAPI(
    title="Waste Hotspots API",
    description="Detecção de hotspots e pesos de heat layer para relatos de resíduos",
    version=__version__,
    openapi_url="/openapi.json",
    docs_url="/docs",
)

# ============================================================
# 🌍 CORS
# ============================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ============================================================
# 🧹 Middleware: sanitizar JSON (NaN / Infinity)
# ============================================================

@app.middleware("http")
async def sanitize_json_response(request: Request, call_next):
    response = await call_next(request)

    content_type = response.headers.get("content-type", "")
    if "application/json" not in content_type:
        return response

    raw_body = b"".join([chunk async for chunk in response.body_iterator])
    try:
        content = json.loads(raw_body)
    except ValueError:
        return Response(
            content=raw_body,
            status_code=response.status_code,
            media_type=content_type,
        )

    def clean(obj):
        if isinstance(obj, dict):
            return {k: clean(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [clean(i) for i in obj]
        if isinstance(obj, float):
            if np.isnan(obj) or np.isinf(obj):
                return None
            return obj
        return obj

    return JSONResponse(content=clean(content), status_code=response.status_code)

# ============================================================
# 🔀 ROTAS
# ============================================================

app.include_router(
    hotspot_router,
    prefix="/hotspots",
    tags=["Hotspots"]
)

# ============================================================
# 🩺 Health local
# ============================================================

@app.get("/")
def root():
    return {"status": "Waste Hotspots API online 🚀"}

# ============================================================
# 🚀 Execução standalone (dev)
# ============================================================

if __name__ == "__main__":
    uvicorn.run(
        "waste_hotspots.api.hotspot_api:app",
        host="0.0.0.0",
        port=API_PORT,
        reload=True
    )
