#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 装饰器（鉴权、参数校验、日志等）
"""

import time
from functools import wraps
from flask import jsonify, request, current_app, g
import logging

from database import db_manager, StorageError

logger = logging.getLogger(__name__)


def _bearer_token():
    header = request.headers.get('Authorization', '')
    if header.lower().startswith('bearer '):
        return header[7:].strip()
    return None


def get_authenticated_user():
    """按 Bearer 令牌取当前登录用户，令牌缺失或不匹配返回 None"""
    token = _bearer_token()
    if not token:
        return None
    # 只与唯一的当前登录令牌比对，其他客户端重新登录后旧令牌即失效
    session_token = db_manager.get_session_token()
    if not session_token or token != session_token:
        return None
    return db_manager.get_current_user()


def login_required(f):
    """登录验证装饰器：Authorization: Bearer <token> 必须与当前登录令牌一致"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not _bearer_token():
            return jsonify({'success': False, 'message': 'Please sign in first', 'code': 401}), 401

        user = get_authenticated_user()
        if user is None:
            logger.warning("令牌无效或会话已结束")
            return jsonify({'success': False, 'message': 'Invalid or expired token', 'code': 401}), 401

        g.current_user = user
        return f(*args, **kwargs)
    return decorated_function


def admin_required(f):
    """管理接口密钥验证装饰器"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        api_key = request.headers.get('X-Admin-Key')

        if not api_key:
            return jsonify({'success': False, 'message': 'Missing admin key', 'code': 401}), 401

        valid_api_keys = current_app.config.get('ADMIN_API_KEYS', [])

        if api_key not in valid_api_keys:
            logger.warning(f"管理密钥无效: {request.path}")
            return jsonify({'success': False, 'message': 'Invalid admin key', 'code': 403}), 403

        return f(*args, **kwargs)
    return decorated_function


def validate_json(required_fields=None):
    """JSON数据验证装饰器

    Args:
        required_fields: 必需的字段列表
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            if not request.is_json:
                return jsonify({'success': False, 'message': 'Request body must be JSON', 'code': 400}), 400

            data = request.get_json(silent=True)
            if not data or not isinstance(data, dict):
                return jsonify({'success': False, 'message': 'Request body is empty', 'code': 400}), 400

            if required_fields:
                missing_fields = []
                invalid_fields = []
                for field in required_fields:
                    value = data.get(field)
                    if value is None or (isinstance(value, str) and not value.strip()):
                        missing_fields.append(field)
                    elif not isinstance(value, str):
                        invalid_fields.append(field)

                if missing_fields:
                    return jsonify({
                        'success': False,
                        'message': f'Please fill in: {", ".join(missing_fields)}',
                        'code': 400
                    }), 400

                # 必填字段只接受字符串
                if invalid_fields:
                    return jsonify({
                        'success': False,
                        'message': f'Must be text: {", ".join(invalid_fields)}',
                        'code': 400
                    }), 400

            return f(*args, **kwargs)
        return decorated_function
    return decorator


def log_action(action_name):
    """操作日志装饰器

    Args:
        action_name: 操作名称
    """
    def decorator(f):
        @wraps(f)
        def decorated_function(*args, **kwargs):
            start_time = time.perf_counter()
            logger.info(f"开始执行操作: {action_name} ({request.method} {request.path})")

            try:
                result = f(*args, **kwargs)

                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.info(f"完成操作: {action_name}, 耗时: {duration_ms:.1f} ms")

                return result

            except Exception as e:
                duration_ms = (time.perf_counter() - start_time) * 1000
                logger.error(f"执行操作失败: {action_name}, 耗时: {duration_ms:.1f} ms, 错误: {str(e)}")
                raise

        return decorated_function
    return decorator


def handle_storage_errors(f):
    """存储错误处理装饰器"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        try:
            return f(*args, **kwargs)
        except StorageError as e:
            logger.error(f"存储操作错误: {str(e)}")
            return jsonify({
                'success': False,
                'message': 'Storage is unavailable, please try again later',
                'code': 500
            }), 500
        except Exception as e:
            logger.exception(f"未处理的错误: {str(e)}")
            return jsonify({
                'success': False,
                'message': 'Something went wrong, please try again later',
                'code': 500
            }), 500

    return decorated_function
