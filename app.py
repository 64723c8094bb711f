from flask import Flask, request, jsonify, g
import os
import sys
import time
import click
from dotenv import load_dotenv
from werkzeug.middleware.proxy_fix import ProxyFix

load_dotenv()

from config import config as config_map
from database import DatabaseManager, create_storage, StorageError
from utils.payment_gateway import create_gateway
from api import (
    auth_bp,
    users_bp,
    events_bp,
    submissions_bp,
    payments_bp,
    registrations_bp,
    results_bp,
    queries_bp,
)


def create_app(config_name=None, storage=None, config_overrides=None):
    """应用工厂

    Args:
        config_name: 配置名，默认读取 APP_ENV
        storage: 注入的存储后端，默认按 STORAGE_BACKEND 创建
        config_overrides: 在初始化前覆盖的配置项
    """
    app = Flask(__name__)
    env_name = (config_name or os.environ.get('APP_ENV', 'default')).lower()
    config_cls = config_map.get(env_name, config_map['default'])
    app.config.from_object(config_cls)
    if config_overrides:
        app.config.update(config_overrides)

    if env_name == 'production' and not app.config.get('SECRET_KEY'):
        raise RuntimeError('SECRET_KEY environment variable is required in production')

    config_cls.init_app(app)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1)

    @app.before_request
    def start_request_timer():
        g.request_start_time = time.perf_counter()

    @app.after_request
    def log_request_time(response):
        start_time = getattr(g, 'request_start_time', None)
        if start_time is not None:
            duration_ms = (time.perf_counter() - start_time) * 1000
            app.logger.info(
                "Request %s %s took %.2fms, status %d",
                request.method,
                request.path,
                duration_ms,
                response.status_code,
            )
        return response

    db_manager = DatabaseManager(storage if storage is not None else create_storage(app.config))
    app.extensions['db_manager'] = db_manager
    app.extensions['payment_gateway'] = create_gateway(app.config)

    # 启动时建表；失败只记录日志，不阻止应用启动
    try:
        db_manager.init_storage()
        app.logger.info("存储初始化成功")
    except StorageError as e:
        app.logger.error(f"存储初始化失败: {e}")

    app.register_blueprint(auth_bp, url_prefix='/api/auth')
    app.register_blueprint(users_bp, url_prefix='/api/users')
    app.register_blueprint(events_bp, url_prefix='/api/events')
    app.register_blueprint(submissions_bp, url_prefix='/api/submissions')
    app.register_blueprint(payments_bp, url_prefix='/api/payments')
    app.register_blueprint(registrations_bp, url_prefix='/api/registrations')
    app.register_blueprint(results_bp, url_prefix='/api/results')
    app.register_blueprint(queries_bp, url_prefix='/api/queries')

    @app.route('/api/health')
    def health():
        return jsonify({
            'success': True,
            'system': app.config.get('SYSTEM_NAME'),
            'version': app.config.get('SYSTEM_VERSION'),
        })

    @app.errorhandler(404)
    def not_found_error(error):
        return jsonify({'success': False, 'message': 'Not found'}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({'success': False, 'message': 'Method not allowed'}), 405

    @app.errorhandler(413)
    def request_too_large(error):
        return jsonify({'success': False, 'message': 'Uploaded file is too large'}), 413

    @app.errorhandler(500)
    def internal_error(error):
        return jsonify({'success': False, 'message': 'Internal server error'}), 500

    @app.cli.command('init-storage')
    def init_storage_command():
        """创建存储表"""
        db_manager.init_storage()
        click.echo('存储初始化完成')

    @app.cli.command('clear-storage')
    @click.confirmation_option(prompt='确定要清空全部数据吗?')
    def clear_storage_command():
        """清空全部存储键"""
        db_manager.storage.clear()
        click.echo('存储已清空')

    return app


if __name__ == '__main__':
    app = create_app()
    try:
        app.run(
            host=app.config.get('HOST', '0.0.0.0'),
            port=app.config.get('PORT', 5000),
            debug=app.config.get('DEBUG', True)
        )
    except KeyboardInterrupt:
        sys.exit(0)
