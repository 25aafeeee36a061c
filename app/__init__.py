import os
from flask import Flask
import logging
from logging.handlers import RotatingFileHandler
from config import BASE_DIR


def create_app(test_config: dict = None):
    app = Flask(__name__)
    app.config.from_object('config.Config')
    if test_config:
        app.config.update(test_config)

    if not app.debug and not app.testing:
        logs_dir = os.path.join(BASE_DIR, 'logs')
        log_file = os.path.join(logs_dir, 'app.log')
        os.makedirs(logs_dir, exist_ok=True)

        file_handler = RotatingFileHandler(log_file, maxBytes=10240, backupCount=10)
        file_handler.setFormatter(logging.Formatter(
            '%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]'
        ))
        file_handler.setLevel(logging.INFO)
        app.logger.addHandler(file_handler)

        app.logger.setLevel(app.config.get('LOG_LEVEL', logging.INFO))
        app.logger.info('Сервис извлечения расписания запущен')

    from . import api_routes
    app.register_blueprint(api_routes.bp)

    return app
