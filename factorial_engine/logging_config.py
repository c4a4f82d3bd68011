import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(service_name: str,
                  log_dir: Optional[Union[str, Path]] = None,
                  level: int = logging.INFO) -> logging.Logger:
    """
    Настраивает логирование для указанного сервиса.

    Логи всегда идут в консоль (stderr). Если передан log_dir, дополнительно
    пишется ротируемый файл {log_dir}/{service_name}.log.

    :param service_name: Имя сервиса (строка), оно же имя логгера
    :param log_dir: Папка для файла логов или None
    :param level: Уровень логирования
    :return: Логгер для сервиса
    """
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    logger = logging.getLogger(service_name)
    logger.setLevel(level)

    # Очищаем существующие хендлеры, чтобы повторный вызов не дублировал вывод
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True, mode=0o755)
        file_handler = RotatingFileHandler(
            str(log_path / f'{service_name}.log'),
            maxBytes=10*1024*1024,  # 10 MB
            backupCount=5,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger
