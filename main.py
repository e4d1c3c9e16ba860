# main.py
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import CORS_ORIGINS, HOST, LOG_LEVEL, PORT

logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# =========================
# Crear app
# =========================
app = FastAPI(
    title="VietPhoto AI",
    version="1.0",
    description="Portrait + Vietnamese destination + traditional costume composites"
)

# =========================
# Middleware CORS
# =========================
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =========================
# Routers
# =========================
from routers.photo_web import router as photo_web_router
from routers.generate_photo import router as generate_photo_router

app.include_router(photo_web_router)
app.include_router(generate_photo_router, prefix="/api")

# =========================
# Health check
# =========================
@app.get("/health")
def health():
    return {"status": "ok", "message": "Backend running"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=HOST, port=PORT)
