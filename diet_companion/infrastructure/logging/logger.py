import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from diet_companion.config.settings import settings


REDACT_LIMIT = 64


def _redact(value):
    if isinstance(value, str) and len(value) > REDACT_LIMIT:
        return value[:REDACT_LIMIT] + "..."
    return value


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        redact = settings.log_redact_content
        msg = record.getMessage()
        if redact:
            msg = _redact(msg or "")
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            # 脱敏时截断所有字符串字段（用户消息、食物描述、图片 prompt 等）
            payload.update({k: _redact(v) if redact else v for k, v in extra.items()})
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("diet_companion")
    logger.setLevel(settings.log_level.upper())
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "diet_companion.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
