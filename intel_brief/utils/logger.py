# intel_brief/utils/logger.py
"""
日志配置

应用入口调用一次 setup_logging；各模块通过 logging.getLogger('intel_brief.<area>')
取得子 logger，继承这里配置的 handlers。
"""
import logging
import os
import sys
from logging.handlers import TimedRotatingFileHandler
from typing import Iterable, Optional, Union

project_root = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
default_log_dir = os.path.join(project_root, 'logs')

LOGGER_NAME = "intel_brief"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL_ENV = "INTEL_BRIEF_LOG_LEVEL"

# HTTP 层和 Gemini SDK 在 DEBUG/INFO 下会逐请求打印，默认压到 WARNING
NOISY_LOGGERS = ("urllib3", "httpx", "httpcore", "google_genai")


def resolve_log_level(value: Union[str, int, None], default: int = logging.INFO) -> int:
    """'debug' / 'WARNING' / '10' / 20 -> logging level; unknown values fall back to default."""
    if isinstance(value, int):
        return value
    text = (value or "").strip()
    if not text:
        return default
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    return level if isinstance(level, int) else default


def quiet_loggers(names: Iterable[str] = NOISY_LOGGERS, level: int = logging.WARNING) -> None:
    for name in names:
        logging.getLogger(name).setLevel(level)


def setup_logging(log_level: Union[str, int, None] = None, log_dir: Optional[str] = None,
                  backup_count: int = 7, when: str = 'D', interval: int = 1,
                  console: bool = True) -> logging.Logger:
    """
    配置 intel_brief 日志记录器：按时间轮转的文件日志，可选的控制台输出。

    Args:
        log_level: 日志级别；为 None 时读取环境变量 INTEL_BRIEF_LOG_LEVEL，默认 INFO。
        log_dir: 日志目录，默认为项目根目录下的 logs/。
        backup_count: 保留的轮转文件数量。
        when / interval: 传给 TimedRotatingFileHandler 的轮转参数。
        console: 是否同时输出到 stdout。
    """
    level = resolve_log_level(log_level if log_level is not None else os.getenv(LOG_LEVEL_ENV))
    log_dir = log_dir or default_log_dir
    os.makedirs(log_dir, exist_ok=True)
    log_file = os.path.join(log_dir, f'{LOGGER_NAME}.log')

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    # 重复调用时替换而不是叠加 handlers
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)
    file_handler = TimedRotatingFileHandler(log_file, when=when, interval=interval,
                                            backupCount=backup_count, encoding='utf-8')
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if console:
        stream_handler = logging.StreamHandler(sys.stdout)
        stream_handler.setFormatter(formatter)
        logger.addHandler(stream_handler)

    quiet_loggers()
    logger.info(f"日志系统已初始化。级别: {logging.getLevelName(level)}, 文件: {log_file}")
    return logger


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    return logging.getLogger(name)
