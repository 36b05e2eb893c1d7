# core/logging.py
# Логгер 'carriers': консоль (stderr) + необязательный файл JSON-lines.
import json
import logging
import os
import sys
from datetime import datetime, timezone

ROOT = "carriers"
_configured = False


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        out = {
            "ts": datetime.now(timezone.utc).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("resource", "mode", "error_type"):
            if hasattr(record, key):
                out[key] = getattr(record, key)
        if record.exc_info:
            out["traceback"] = self.formatException(record.exc_info)
        return json.dumps(out, ensure_ascii=False, default=str)


def _level_from_env() -> str:
    if os.environ.get("CARRIERS_DEBUG", "").strip() in ("1", "true", "yes"):
        return "DEBUG"
    return os.environ.get("CARRIERS_LOG_LEVEL", "INFO")


def configure_logging(*, level=None, json_file=None) -> None:
    """Повторный вызов заменяет обработчики."""
    global _configured
    numeric = getattr(logging, str(level or _level_from_env()).upper(), logging.INFO)

    logger = logging.getLogger(ROOT)
    logger.setLevel(numeric)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
        h.close()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter("[%(asctime)s] %(levelname)-8s [%(name)s] %(message)s",
                                           "%Y-%m-%d %H:%M:%S"))
    logger.addHandler(console)

    if json_file:
        try:
            fh = logging.FileHandler(json_file, mode="a", encoding="utf-8")
        except OSError as e:
            logger.warning("не удалось открыть лог %s: %s", json_file, e)
        else:
            fh.setFormatter(JSONFormatter())
            logger.addHandler(fh)

    logger.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    if not _configured:
        configure_logging()
    if name == "__main__":
        name = "main"
    if not name.startswith(ROOT):
        name = f"{ROOT}.{name}"
    return logging.getLogger(name)
