import json
import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import text
from .db import engine, init_db
from .settings import settings

# ---------- DB logging handler ----------

class DBHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        msg = self.format(record)
        lvl = record.levelname
        try:
            with engine.begin() as conn:
                conn.execute(
                    text("INSERT INTO logs (level, msg) VALUES (:lvl, :msg)"),
                    {"lvl": lvl, "msg": msg},
                )
        except Exception:
            # stay quiet when the DB hiccups
            pass


def setup_logging() -> None:
    init_db()
    root = logging.getLogger()
    root.setLevel(settings.LOG_LEVEL.upper())
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        root.addHandler(logging.StreamHandler())
    if not any(isinstance(h, DBHandler) for h in root.handlers):
        dbh = DBHandler()
        dbh.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        root.addHandler(dbh)

# ---------- Queries ----------

def get_events(
    limit: int = 300,
    level: Optional[str] = None,
    q: Optional[str] = None,
    offset: int = 0,
) -> List[Dict[str, Any]]:
    sql = "SELECT ts, level, msg FROM logs"
    conds: List[str] = []
    params: Dict[str, Any] = {}
    if level in ("INFO", "WARNING", "ERROR"):
        conds.append("level = :lvl")
        params["lvl"] = level
    if q:
        conds.append("msg LIKE :q")
        params["q"] = f"%{q}%"
    if conds:
        sql += " WHERE " + " AND ".join(conds)
    sql += " ORDER BY id DESC"
    sql += f" LIMIT {int(limit)} OFFSET {int(max(0, offset))}"
    with engine.connect() as conn:
        rows = conn.execute(text(sql), params).mappings().all()
    return [dict(r) for r in rows]

# ---------- Customization records ----------

def _jsonable(data: Any) -> str:
    try:
        return json.dumps(data)
    except (TypeError, ValueError):
        return json.dumps({"_repr": str(data)})


def save_record(pizza: str, size: str, payload: Dict[str, Any]) -> None:
    with engine.begin() as conn:
        conn.execute(
            text("""
            INSERT INTO customization_records
                (pizza, size, half_and_half, price, payload_json)
            VALUES
                (:pizza, :size, :hh, :price, :data)
            """),
            {
                "pizza": pizza,
                "size": size,
                "hh": bool(payload.get("isHalfAndHalf")),
                "price": float(payload.get("calculatedPrice") or 0.0),
                "data": _jsonable(payload),
            },
        )


def recent_records(limit: int = 50) -> List[Dict[str, Any]]:
    sql = f"""
    SELECT id, ts, pizza, size, half_and_half, price, payload_json
      FROM customization_records
     ORDER BY id DESC
     LIMIT {int(limit)}
    """
    with engine.connect() as conn:
        rows = conn.execute(text(sql)).mappings().all()
    out = []
    for r in rows:
        d = dict(r)
        d["payload"] = json.loads(d.pop("payload_json"))
        out.append(d)
    return out
