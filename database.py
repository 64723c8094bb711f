#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 键值存储与数据访问

存储后端只认字符串键值（与浏览器 localStorage 同构），由 DatabaseManager
负责 JSON 编解码，并通过各业务 mixin 提供带类型的读写接口。
"""

import json
import logging
import threading
import time
from contextlib import contextmanager

import mysql.connector
from flask import current_app
from mysql.connector import Error, pooling
from werkzeug.local import LocalProxy

from models import STORAGE_SCHEMA
from db_modules.db_users import UserDbMixin
from db_modules.db_participants import ParticipantDbMixin
from db_modules.db_submissions import SubmissionDbMixin
from db_modules.db_results import ResultDbMixin
from db_modules.db_queries import QueryDbMixin
from db_modules.db_payments import PaymentDbMixin

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """存储后端读写失败"""


class MemoryStorage:
    """内存存储，用于测试和本地演示"""

    def __init__(self, initial=None):
        self._items = dict(initial or {})

    def init_storage(self):
        pass

    def get_item(self, key):
        return self._items.get(key)

    def set_item(self, key, value):
        self._items[key] = value

    def remove_item(self, key):
        self._items.pop(key, None)

    def update_item(self, key, fn, initial=None):
        """读出原值交给 fn，写回 fn 的返回值；并发由调用方加锁"""
        raw = self.get_item(key)
        self.set_item(key, fn(raw if raw is not None else initial))

    def clear(self):
        self._items.clear()

    def keys(self):
        return list(self._items.keys())


class TimedCursorWrapper:
    def __init__(self, cursor, slow_threshold_ms=50):
        self._cursor = cursor
        self._slow_threshold_ms = slow_threshold_ms

    def execute(self, operation, params=None, multi=False):
        start = time.perf_counter()
        try:
            return self._cursor.execute(operation, params, multi)
        finally:
            duration_ms = (time.perf_counter() - start) * 1000
            if duration_ms >= self._slow_threshold_ms:
                logger.warning(
                    "Slow query took %.1f ms: %s; params=%s",
                    duration_ms,
                    operation,
                    params,
                )

    def __getattr__(self, item):
        return getattr(self._cursor, item)


class MySQLStorage:
    """基于 MySQL kv_store 表的存储后端"""

    def __init__(self, host, port, user, password, database,
                 pool_name='kalakriti_pool', pool_size=5, slow_threshold_ms=50):
        self.config = {
            'host': host,
            'port': port,
            'user': user,
            'password': password,
            'database': database,
            'charset': 'utf8mb4',
            'collation': 'utf8mb4_unicode_ci',
            'autocommit': False,
            'raise_on_warnings': False,
            'connection_timeout': 30,
        }
        self.pool_name = pool_name
        self.pool_size = pool_size
        self.slow_threshold_ms = slow_threshold_ms
        self._pool = None

    @classmethod
    def from_config(cls, config):
        return cls(
            host=config['DB_HOST'],
            port=config['DB_PORT'],
            user=config['DB_USER'],
            password=config['DB_PASSWORD'],
            database=config['DB_NAME'],
            pool_name=config.get('DB_POOL_NAME', 'kalakriti_pool'),
            pool_size=config.get('DB_POOL_SIZE', 5),
            slow_threshold_ms=config.get('SLOW_QUERY_THRESHOLD_MS', 50),
        )

    def _get_pool(self):
        """延迟创建连接池，失败时回退到直连"""
        if self._pool is None:
            try:
                self._pool = pooling.MySQLConnectionPool(
                    pool_name=self.pool_name,
                    pool_size=self.pool_size,
                    pool_reset_session=True,
                    **self.config
                )
                logger.info(f"数据库连接池创建成功，池大小: {self.pool_size}")
            except Error as e:
                logger.error(f"创建数据库连接池失败，将回退到直连模式: {e}")
                self._pool = None
        return self._pool

    @contextmanager
    def get_connection(self):
        """获取数据库连接的上下文管理器"""
        connection = None
        try:
            pool = self._get_pool()
            if pool:
                connection = pool.get_connection()
            else:
                connection = mysql.connector.connect(**self.config)

            original_cursor = connection.cursor

            def timed_cursor(*args, **kwargs):
                base_cursor = original_cursor(*args, **kwargs)
                return TimedCursorWrapper(base_cursor, slow_threshold_ms=self.slow_threshold_ms)

            connection.cursor = timed_cursor
            yield connection
        except Error as e:
            logger.error(f"数据库连接错误: {e}")
            if connection:
                connection.rollback()
            raise StorageError(str(e)) from e
        finally:
            if connection and connection.is_connected():
                connection.close()

    def init_storage(self):
        """创建数据库和 kv_store 表（已存在则跳过）"""
        temp_config = self.config.copy()
        temp_config.pop('database', None)
        try:
            with mysql.connector.connect(**temp_config) as connection:
                cursor = connection.cursor()
                cursor.execute(
                    f"CREATE DATABASE IF NOT EXISTS {self.config['database']} "
                    "CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
                )
        except Error as e:
            raise StorageError(f"创建数据库失败: {e}") from e

        with self.get_connection() as connection:
            cursor = connection.cursor()
            for table_name, schema in STORAGE_SCHEMA.items():
                cursor.execute(schema)
                logger.info(f"检查表 {table_name} 完成")
            connection.commit()

    def get_item(self, key):
        with self.get_connection() as connection:
            cursor = connection.cursor()
            cursor.execute("SELECT payload FROM kv_store WHERE storage_key = %s", (key,))
            row = cursor.fetchone()
            return row[0] if row else None

    def set_item(self, key, value):
        with self.get_connection() as connection:
            cursor = connection.cursor()
            cursor.execute(
                """
                INSERT INTO kv_store (storage_key, payload)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE payload = VALUES(payload)
                """,
                (key, value),
            )
            connection.commit()

    def remove_item(self, key):
        with self.get_connection() as connection:
            cursor = connection.cursor()
            cursor.execute("DELETE FROM kv_store WHERE storage_key = %s", (key,))
            connection.commit()

    def update_item(self, key, fn, initial=None):
        """在同一事务内 SELECT ... FOR UPDATE 读出原值，写回 fn 的返回值

        先 INSERT IGNORE 占位，保证行存在后再加行锁，多进程并发追加不会互相覆盖。
        """
        with self.get_connection() as connection:
            cursor = connection.cursor()
            try:
                cursor.execute(
                    "INSERT IGNORE INTO kv_store (storage_key, payload) VALUES (%s, %s)",
                    (key, initial),
                )
                cursor.execute(
                    "SELECT payload FROM kv_store WHERE storage_key = %s FOR UPDATE",
                    (key,),
                )
                row = cursor.fetchone()
                raw = row[0] if row and row[0] is not None else initial
                cursor.execute(
                    "UPDATE kv_store SET payload = %s WHERE storage_key = %s",
                    (fn(raw), key),
                )
                connection.commit()
            except Exception:
                connection.rollback()
                raise

    def clear(self):
        with self.get_connection() as connection:
            cursor = connection.cursor()
            cursor.execute("DELETE FROM kv_store")
            connection.commit()

    def keys(self):
        with self.get_connection() as connection:
            cursor = connection.cursor()
            cursor.execute("SELECT storage_key FROM kv_store")
            return [row[0] for row in cursor.fetchall()]


def create_storage(config):
    """根据配置创建存储后端"""
    backend = (config.get('STORAGE_BACKEND') or 'mysql').lower()
    if backend == 'memory':
        return MemoryStorage()
    if backend == 'mysql':
        return MySQLStorage.from_config(config)
    raise ValueError(f"未知的存储后端: {backend}")


class DatabaseManager(
    UserDbMixin,
    ParticipantDbMixin,
    SubmissionDbMixin,
    ResultDbMixin,
    QueryDbMixin,
    PaymentDbMixin,
):
    """数据访问管理器

    列表型键的追加和修改统一走 update_list / update_records，读改写在
    写锁内完成，避免并发请求互相覆盖。
    """

    def __init__(self, storage):
        self.storage = storage
        self._write_lock = threading.Lock()

    def init_storage(self):
        self.storage.init_storage()

    @staticmethod
    def _decode(key, raw, default):
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except (TypeError, ValueError) as e:
            logger.error(f"存储键 {key} 内容不是合法 JSON，按空值处理: {e}")
            return default

    @staticmethod
    def _as_list(key, value):
        if not isinstance(value, list):
            logger.error(f"存储键 {key} 应为列表，实际为 {type(value).__name__}，按空列表处理")
            return []
        return value

    def get_json(self, key, default=None):
        """读取 JSON 值；键不存在或内容损坏时返回 default"""
        try:
            raw = self.storage.get_item(key)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"读取 {key} 失败: {e}") from e
        return self._decode(key, raw, default)

    def set_json(self, key, value):
        payload = json.dumps(value, ensure_ascii=False)
        try:
            self.storage.set_item(key, payload)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"写入 {key} 失败: {e}") from e

    def remove(self, key):
        try:
            self.storage.remove_item(key)
        except StorageError:
            raise
        except Exception as e:
            raise StorageError(f"删除 {key} 失败: {e}") from e

    def get_list(self, key):
        """读取列表型键，非列表内容按空列表处理"""
        return self._as_list(key, self.get_json(key, []))

    def update_list(self, key, fn):
        """原子地修改列表型键

        fn 接收当前列表并就地修改，其返回值作为本方法的返回值。
        """
        outcome = []

        def apply(raw):
            items = self._as_list(key, self._decode(key, raw, []))
            outcome.append(fn(items))
            return json.dumps(items, ensure_ascii=False)

        with self._write_lock:
            self.storage.update_item(key, apply, '[]')
        return outcome[0]

    def _parse_records(self, key, items, model_cls):
        records = []
        for index, item in enumerate(items):
            try:
                records.append(model_cls.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.warning(f"跳过 {key} 中第 {index} 条无效记录: {e}")
        return records

    def load_records(self, key, model_cls):
        """读取列表并转换为模型对象，跳过无法解析的记录"""
        return self._parse_records(key, self.get_list(key), model_cls)

    def update_records(self, key, model_cls, fn, dump=None):
        """在写锁内加载模型列表交给 fn 修改后写回，返回 fn 的返回值"""
        dump = dump or (lambda record: record.to_dict())

        def apply(items):
            records = self._parse_records(key, items, model_cls)
            value = fn(records)
            items[:] = [dump(record) for record in records]
            return value

        return self.update_list(key, apply)


def get_db_manager():
    return current_app.extensions['db_manager']


# 蓝图中按模块级名字引用，实际对象随应用注入
db_manager = LocalProxy(get_db_manager)
