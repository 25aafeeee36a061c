# app/api_routes.py

import logging
from flask import Blueprint, current_app, jsonify, request

from .utils import make_json_serializable
from .services.core.errors import PersistenceError, StructuralError
from .services.core.extraction import extract_file
from .services.core.lesson_store import JsonLessonStore
from .services.core import view_filter
from .services.utils.data_validator import parse_grade_number


bp = Blueprint('api', __name__, url_prefix='/api')
log = logging.getLogger(__name__)


def _store() -> JsonLessonStore:
    return JsonLessonStore(current_app.config['LESSONS_STORE_PATH'],
                           keep_backup_days=current_app.config.get('BACKUP_RETENTION_DAYS'))


@bp.route('/extract', methods=['POST'])
def run_extraction():
    """Разбирает настроенный Excel-файл и заменяет сохраненные уроки."""
    source = current_app.config['SOURCE_FILE_PATH']
    log.info(f"API request: извлечение уроков из '{source}'")

    try:
        report = extract_file(source, sink=_store())
    except StructuralError as e:
        return jsonify({"error": f"no lessons updated, see error: {e}"}), 422
    except PersistenceError as e:
        return jsonify({"error": f"no lessons updated, see error: {e}"}), 503

    return jsonify({
        "message": report.summary(),
        "lessons": len(report.lessons),
        "skipped": report.skipped,
        "invalid": report.invalid,
        "per_sheet": report.per_sheet_counts,
        "diagnostics": make_json_serializable([d for d in report.diagnostics if d.is_invalid]),
    })


@bp.route('/lessons')
def get_lessons():
    """Отдает сохраненные уроки в JSON."""
    try:
        lessons = _store().load_lessons()
    except PersistenceError as e:
        log.error(f"API: {e}")
        return jsonify({"error": "Failed to read lessons"}), 500

    log.info(f"API: отправлено уроков: {len(lessons)}.")
    return jsonify(make_json_serializable(lessons))


@bp.route('/lessons/filter')
def get_lessons_for_class():
    """
    Расписание класса по дням: ?grade=12&letter=А&q=Английский:№1&q=Информатика:№2
    """
    grade_str = request.args.get('grade', '')
    letter = request.args.get('letter', '')
    if not grade_str or not letter:
        return jsonify({"error": "Missing grade or letter"}), 400

    grade = parse_grade_number(grade_str)
    if grade is None:
        return jsonify({"error": "Invalid grade"}), 400

    selections = view_filter.parse_group_selections(request.args.getlist('q'))
    try:
        lessons = _store().load_lessons()
    except PersistenceError as e:
        log.error(f"API: {e}")
        return jsonify({"error": "Failed to fetch lessons"}), 500

    filtered = view_filter.filter_lessons_for_class(lessons, grade, letter, selections)
    by_day = view_filter.group_lessons_by_day(filtered)
    log.info(f"API: класс {grade}{letter}, подгрупп {len(selections)}, уроков {len(filtered)}.")
    return jsonify({str(day): make_json_serializable(day_lessons) for day, day_lessons in by_day.items()})
