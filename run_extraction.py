import argparse
import logging
import sys

from config import Config
from app.services.core.errors import ExtractionError
from app.services.core.extraction import extract_file
from app.services.core.lesson_store import JsonLessonStore


log = logging.getLogger(__name__)


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Извлечь уроки из Excel-расписания и сохранить их.")
    parser.add_argument("path", nargs="?", default=Config.SOURCE_FILE_PATH, help="путь к .xlsx файлу")
    parser.add_argument("--store", default=Config.LESSONS_STORE_PATH, help="куда сохранить уроки (JSON)")
    parser.add_argument("--dry-run", action="store_true", help="только разобрать, ничего не сохранять")
    args = parser.parse_args(argv)

    sink = None if args.dry_run else JsonLessonStore(args.store)
    try:
        report = extract_file(args.path, sink=sink)
    except ExtractionError as e:
        log.error(f"Извлечение не удалось: {e}")
        print(f"no lessons updated, see error: {e}")
        return 1

    print(report.summary())
    return 0


if __name__ == '__main__':
    logging.basicConfig(level=Config.LOG_LEVEL, stream=sys.stdout)
    sys.exit(main())
