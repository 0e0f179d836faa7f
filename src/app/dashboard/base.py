from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
import secrets

from src.infra.logs import get_events, recent_records
from src.infra.settings import settings

router = APIRouter()
security = HTTPBasic()


def require_admin(credentials: HTTPBasicCredentials = Depends(security)):
    ok_user = secrets.compare_digest(credentials.username, settings.ADMIN_USER)
    ok_pass = secrets.compare_digest(credentials.password, settings.ADMIN_PASS)
    if not (settings.ADMIN_PASS and ok_user and ok_pass):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Basic"},
        )


@router.get("/dashboard", dependencies=[Depends(require_admin)])
def dashboard_root():
    return {
        "message": "pricing dashboard",
        "routes": {
            "Priced customizations": "/dashboard/records",
            "Logging": "/dashboard/logs",
        },
    }


@router.get("/dashboard/records", dependencies=[Depends(require_admin)])
def dashboard_records(limit: int = 50):
    return {"records": recent_records(limit=limit)}


@router.get("/dashboard/logs", dependencies=[Depends(require_admin)])
def dashboard_logs(limit: int = 300, level: str | None = None, q: str | None = None, offset: int = 0):
    return {"events": get_events(limit=limit, level=level, q=q, offset=offset)}
