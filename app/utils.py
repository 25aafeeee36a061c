# app/utils.py

from datetime import datetime, time as time_obj
from dataclasses import is_dataclass, asdict
from enum import Enum


def make_json_serializable(data):
    """
    Рекурсивно преобразует объекты, которые не сериализуются в JSON,
    в подходящий формат (строки, словари, списки).
    """
    # Дата-классы первыми: превращаем в словарь и обрабатываем вложенные значения
    if is_dataclass(data) and not isinstance(data, type):
        return make_json_serializable(asdict(data))

    if isinstance(data, dict):
        return {k: make_json_serializable(v) for k, v in data.items()}
    if isinstance(data, (list, tuple)):
        return [make_json_serializable(i) for i in data]
    # У уроков значима только часть времени, дата всегда опорная
    if isinstance(data, (datetime, time_obj)):
        return data.strftime('%H:%M')
    if isinstance(data, Enum):
        return data.value

    return data
