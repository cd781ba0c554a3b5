# app/core/logging.py
import json as _json
import logging
import sys


class JsonFormatter(logging.Formatter):
    """单行 JSON：ts / level / logger / msg（异常附带 exc）"""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "ts": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)
        return _json.dumps(payload, ensure_ascii=False)


def setup_logging(level: str = "INFO", json: bool = False) -> None:
    """
    统一日志：
    - 根 logger 设级别
    - 单一 stdout handler，避免重复输出
    - json=True 时输出单行 JSON
    """
    root = logging.getLogger()
    root.setLevel(level.upper())

    # 清已有 handlers，避免重复
    for h in list(root.handlers):
        root.removeHandler(h)

    handler = logging.StreamHandler(sys.stdout)
    if json:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    root.addHandler(handler)

    # 静音过于啰嗦的第三方
    logging.getLogger("uvicorn.access").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if level.upper() == "DEBUG" else logging.WARNING
    )
