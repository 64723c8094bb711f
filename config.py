#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 配置文件
"""

import os
from datetime import timedelta
from dotenv import load_dotenv

# 加载环境变量
load_dotenv()


def _split_env_list(name):
    raw = os.environ.get(name) or ''
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    """应用配置类"""

    # Flask 基础配置
    SECRET_KEY = os.environ.get('SECRET_KEY')

    # 存储后端: mysql / memory
    STORAGE_BACKEND = (os.environ.get('STORAGE_BACKEND') or 'mysql').lower()

    # 数据库配置
    DB_HOST = os.environ.get('DB_HOST') or 'localhost'
    DB_PORT = int(os.environ.get('DB_PORT') or 3306)
    DB_USER = os.environ.get('DB_USER') or 'kalakriti'
    DB_PASSWORD = os.environ.get('DB_PASSWORD') or ''
    DB_NAME = os.environ.get('DB_NAME') or 'kalakriti_hub'
    DB_POOL_NAME = os.environ.get('DB_POOL_NAME') or 'kalakriti_pool'
    DB_POOL_SIZE = int(os.environ.get('DB_POOL_SIZE') or 5)
    SLOW_QUERY_THRESHOLD_MS = int(os.environ.get('SLOW_QUERY_THRESHOLD_MS') or 50)

    # 服务器配置
    HOST = os.environ.get('HOST') or '0.0.0.0'
    PORT = int(os.environ.get('PORT') or 5000)
    DEBUG = os.environ.get('DEBUG', 'False').lower() == 'true'

    # 文件上传配置
    UPLOAD_FOLDER = os.environ.get('UPLOAD_FOLDER') or os.path.join(
        os.path.dirname(os.path.abspath(__file__)), 'uploads'
    )
    MAX_SUBMISSION_SIZE = 50 * 1024 * 1024  # 50MB
    # 单次请求可包含多件作品
    MAX_CONTENT_LENGTH = 4 * MAX_SUBMISSION_SIZE
    ALLOWED_RESULT_EXTENSIONS = {'xlsx', 'xls'}
    ALLOWED_SUBMISSION_EXTENSIONS = {
        'jpg', 'jpeg', 'png', 'gif', 'webp',
        'mp4', 'mov', 'avi', 'webm',
        'mp3', 'wav', 'm4a',
        'pdf',
    }

    # 参赛编号
    SEASON_TOKEN = os.environ.get('SEASON_TOKEN') or 'S1'
    YEAR_TOKEN = os.environ.get('YEAR_TOKEN') or '25'
    RESULT_SEASONS = ['2024', '2023', '2022', '2021']

    # 支付配置
    RAZORPAY_KEY_ID = os.environ.get('RAZORPAY_KEY_ID')
    RAZORPAY_KEY_SECRET = os.environ.get('RAZORPAY_KEY_SECRET')
    PAYMENT_CURRENCY = os.environ.get('PAYMENT_CURRENCY') or 'INR'
    # 未配置 Razorpay 时用于模拟网关签名
    MOCK_PAYMENT_SECRET = os.environ.get('MOCK_PAYMENT_SECRET') or 'kalakriti-mock-secret'

    # 管理接口密钥
    ADMIN_API_KEYS = _split_env_list('ADMIN_API_KEYS')

    # 日志配置
    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'
    LOG_FILE = os.environ.get('LOG_FILE') or 'kalakriti_hub.log'

    # Session 配置
    PERMANENT_SESSION_LIFETIME = timedelta(hours=24)

    # 系统配置
    SYSTEM_NAME = 'Kalakriti Hub'
    SYSTEM_VERSION = '1.0.0'

    @staticmethod
    def init_app(app):
        """初始化应用配置"""
        os.makedirs(app.config['UPLOAD_FOLDER'], exist_ok=True)

        import logging
        handlers = [logging.StreamHandler()]
        log_file = app.config.get('LOG_FILE')
        if log_file:
            handlers.append(logging.FileHandler(log_file, encoding='utf-8'))
        logging.basicConfig(
            level=getattr(logging, app.config.get('LOG_LEVEL', 'INFO')),
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            handlers=handlers
        )


class DevelopmentConfig(Config):
    """开发环境配置"""
    DEBUG = True
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'kalakriti-hub-dev-secret-key'
    DB_NAME = os.environ.get('DB_NAME') or 'kalakriti_hub_dev'
    ADMIN_API_KEYS = _split_env_list('ADMIN_API_KEYS') or ['kalakriti-dev-admin']


class ProductionConfig(Config):
    """生产环境配置"""
    DEBUG = False
    SECRET_KEY = os.environ.get('SECRET_KEY')

    DB_HOST = os.environ.get('PROD_DB_HOST') or 'localhost'
    DB_USER = os.environ.get('PROD_DB_USER') or 'kalakriti_user'
    DB_PASSWORD = os.environ.get('PROD_DB_PASSWORD') or ''
    DB_NAME = os.environ.get('PROD_DB_NAME') or 'kalakriti_hub_prod'


class TestingConfig(Config):
    """测试环境配置"""
    TESTING = True
    SECRET_KEY = 'kalakriti-testing-secret'
    STORAGE_BACKEND = 'memory'
    LOG_FILE = None
    RAZORPAY_KEY_ID = None
    RAZORPAY_KEY_SECRET = None
    MOCK_PAYMENT_SECRET = 'testing-payment-secret'
    ADMIN_API_KEYS = ['test-admin-key']


# 配置映射
config = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
