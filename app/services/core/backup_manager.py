# app/services/core/backup_manager.py

import os
import logging
from datetime import datetime, timedelta
import re
import shutil
from typing import Optional

from config import Config


log = logging.getLogger(__name__)

_BACKUP_DATE_PATTERN = re.compile(r'_(\d{4}-\d{2}-\d{2}_\d{2}-\d{2}-\d{2}(?:-\d{6})?)\.bak$')


def _parse_backup_date(filename: str) -> Optional[datetime]:
    match = _BACKUP_DATE_PATTERN.search(filename)
    if not match:
        return None
    date_str = match.group(1)
    fmt = '%Y-%m-%d_%H-%M-%S-%f' if date_str.count('-') == 5 else '%Y-%m-%d_%H-%M-%S'
    return datetime.strptime(date_str, fmt)


def backup_dir_for(file_path: str) -> str:
    return os.path.join(os.path.dirname(file_path), 'backups')


def create_backup(file_to_backup_path: str) -> Optional[str]:
    """
    Копирует файл хранилища уроков в папку backups рядом с ним.
    Возвращает путь к бэкапу или None, если копировать нечего.
    """
    if not os.path.exists(file_to_backup_path):
        log.info(f"Файл для бэкапа не существует: '{file_to_backup_path}'. Бэкап не требуется.")
        return None

    backup_dir = backup_dir_for(file_to_backup_path)
    os.makedirs(backup_dir, exist_ok=True)

    timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S-%f')
    file_name = os.path.basename(file_to_backup_path)
    backup_path = os.path.join(backup_dir, f"{file_name}_{timestamp}.bak")

    shutil.copy2(file_to_backup_path, backup_path)
    log.info(f"Создан бэкап '{file_name}' -> '{backup_path}'")
    return backup_path


def clean_old_backups(file_path: str, keep_days: int = None, now: datetime = None) -> int:
    """
    Удаляет бэкапы старше keep_days дней. Возвращает число удаленных файлов.
    """
    if keep_days is None:
        keep_days = Config.BACKUP_RETENTION_DAYS

    backup_dir = backup_dir_for(file_path)
    if not os.path.exists(backup_dir):
        log.info(f"Директория бэкапов не существует: {backup_dir}. Пропуск очистки.")
        return 0

    cutoff_date = (now or datetime.now()) - timedelta(days=keep_days)
    log.info(f"Начинаю очистку бэкапов в '{backup_dir}'. Удаляю файлы старше {keep_days} дней.")

    removed = 0
    for filename in os.listdir(backup_dir):

        if not filename.endswith(".bak"):
            continue

        backup_path = os.path.join(backup_dir, filename)
        if os.path.isfile(backup_path):
            try:
                file_date = _parse_backup_date(filename)
                if file_date is None:
                    log.warning(f"Не удалось найти паттерн даты в имени файла бэкапа: {filename}. Пропущен.")
                    continue
                if file_date < cutoff_date:
                    os.remove(backup_path)
                    removed += 1
                    log.info(f"Удален старый бэкап: {filename}")
            except (ValueError, OSError) as e:
                log.warning(f"Ошибка при обработке или удалении файла бэкапа {filename}: {e}.")
    return removed
