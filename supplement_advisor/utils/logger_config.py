import logging
import os
from pprint import pformat
from typing import Any, Dict, Optional
from datetime import datetime

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DIR_ENV = 'SUPPLEMENT_ADVISOR_LOG_DIR'
LOG_LEVEL_ENV = 'SUPPLEMENT_ADVISOR_LOG_LEVEL'


def _log_dir() -> str:
    """로그 디렉토리 (기본값: 실행 위치의 logs/)"""
    log_dir = os.getenv(LOG_DIR_ENV) or os.path.join(os.getcwd(), 'logs')
    os.makedirs(log_dir, exist_ok=True)
    return log_dir


def _log_level() -> int:
    level = logging.getLevelName(os.getenv(LOG_LEVEL_ENV, 'INFO').upper())
    return level if isinstance(level, int) else logging.INFO


def setup_logger(name: str) -> logging.Logger:
    """컴포넌트별 로거 (콘솔 + logs/<name>.log)"""
    logger = logging.getLogger(name)
    logger.setLevel(_log_level())

    # 모듈 재임포트 시 핸들러 중복 방지
    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT)
    handlers = [
        logging.StreamHandler(),
        logging.FileHandler(os.path.join(_log_dir(), f"{name}.log"), encoding='utf-8'),
    ]
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.propagate = False
    return logger


class PrettyLogger:
    """단계(step) 정보가 붙은 구조화 로그를 남기는 래퍼

    앱 시작/종료처럼 흐름을 따라가야 하는 곳에서 사용합니다.
    """

    def __init__(self, name: str, max_lines: int = 5):
        self.logger = setup_logger(name)
        self.max_lines = max_lines

    def _format(self, entry: Dict[str, Any], max_length: int = 200) -> str:
        formatted = pformat(entry, indent=2, width=80)
        if len(formatted) > max_length:
            lines = formatted.split('\n')
            if len(lines) > self.max_lines:
                return '\n'.join(lines[:self.max_lines]) + '\n... [truncated]'
        return formatted

    def _log(self, level: int, message: str, data: Any = None, **extra):
        if not self.logger.isEnabledFor(level):
            return
        entry = {'timestamp': datetime.now().isoformat(), 'message': message}
        entry.update({k: v for k, v in extra.items() if v is not None})
        if data is not None:
            entry['data'] = data
        self.logger.log(level, '\n' + self._format(entry))

    def info(self, message: str, data: Any = None, step: Optional[str] = None):
        self._log(logging.INFO, message, data, step=step)

    def warning(self, message: str, data: Any = None, step: Optional[str] = None):
        self._log(logging.WARNING, message, data, step=step)

    def error(self, message: str, error: Optional[Exception] = None, data: Any = None):
        # 예외 메시지는 URL/키를 포함할 수 있어 타입만 기록
        self._log(logging.ERROR, message, data, error_type=type(error).__name__ if error else None)
