import json
import logging
from pathlib import Path
from datetime import datetime, timezone
from relay_core.config.settings import settings


REDACT_LIMIT = 64


def _clip(value):
    return value[:REDACT_LIMIT] if isinstance(value, str) else value


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        redact = settings.log_redact_content
        msg = record.getMessage()
        if redact:
            msg = _clip(msg or "")
        payload = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "name": record.name,
            "msg": msg,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            # 上游错误正文 (detail) 等字符串字段同样可能带出用户内容
            payload.update({k: _clip(v) for k, v in extra.items()} if redact else extra)
        if record.exc_info:
            exc = self.formatException(record.exc_info)
            payload["exc"] = _clip(exc) if redact else exc
        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger() -> logging.Logger:
    logger = logging.getLogger("relay_core")
    logger.setLevel(logging.INFO)
    if logger.handlers:
        return logger
    log_dir = Path(settings.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(log_dir / "relay.log", encoding="utf-8")
    fh.setLevel(logging.INFO)
    fh.setFormatter(JsonFormatter())
    logger.addHandler(fh)
    return logger


logger = setup_logger()
