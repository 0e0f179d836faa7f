from fastapi import FastAPI
from src.app.pizza_routes import router as pizza_router
from src.app.combo_routes import router as combo_router
from src.app.dashboard.base import router as admin_router
from src.infra.logs import setup_logging

setup_logging()
app = FastAPI(title="Pizzeria pricing engine")

@app.get("/")
def read_root():
    return {"status": "ok", "message": "pizza pricing backend running"}

@app.get("/healthz")
def health():
    return {"ok": True}

app.include_router(pizza_router)
app.include_router(combo_router)
app.include_router(admin_router)
