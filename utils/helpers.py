#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 辅助函数
"""

import os
import re
import uuid
import random
import hashlib
from datetime import datetime
from werkzeug.utils import secure_filename

from utils.event_catalog import get_event_code

EMAIL_PATTERN = re.compile(r'[^\s@]+@[^\s@]+\.[^\s@]+')
PHONE_PATTERN = re.compile(r'[0-9]{10}')


def generate_unique_filename(filename):
    """生成唯一的文件名"""
    if filename:
        ext = os.path.splitext(filename)[1]
        unique_id = uuid.uuid4().hex
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        return f"{timestamp}_{unique_id}{ext}"
    return None


def allowed_file(filename, allowed_extensions):
    """检查文件类型是否允许"""
    return bool(filename) and '.' in filename and \
        filename.rsplit('.', 1)[1].lower() in allowed_extensions


def get_file_size(file):
    """获取上传文件大小（字节），读取后复位指针"""
    stream = file.stream
    position = stream.tell()
    stream.seek(0, os.SEEK_END)
    size = stream.tell()
    stream.seek(position)
    return size


def save_uploaded_file(file, upload_folder, allowed_extensions, subfolder=''):
    """保存上传的文件"""
    if file and allowed_file(file.filename, allowed_extensions):
        original_filename = secure_filename(file.filename)
        unique_filename = generate_unique_filename(original_filename)

        if subfolder:
            upload_folder = os.path.join(upload_folder, subfolder)
        os.makedirs(upload_folder, exist_ok=True)

        file_path = os.path.join(upload_folder, unique_filename)
        file.save(file_path)

        return {
            'success': True,
            'filename': unique_filename,
            'original_filename': file.filename,
            'file_path': file_path,
            'relative_path': os.path.join(subfolder, unique_filename) if subfolder else unique_filename
        }

    return {'success': False, 'error': 'Unsupported file type'}


def validate_email(email):
    """验证邮箱格式"""
    if not email:
        return False
    return EMAIL_PATTERN.fullmatch(email) is not None


def validate_phone(phone):
    """验证手机号格式（10 位数字）"""
    if not phone:
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None


def generate_participant_id(event_type, season_token='S1', year_token='25', rng=None):
    """生成参赛编号

    格式: {赛季}{赛事字母}{年份}{3位随机数}，例如 S1D25042；不检查重复。
    """
    event_code = get_event_code(event_type)
    if not event_code:
        raise ValueError(f'Unknown event type: {event_type}')
    rng = rng or random
    number = rng.randint(1, 999)
    return f"{season_token}{event_code}{year_token}{number:03d}"


def generate_contestant_id():
    """生成账号级参赛者编号 KH + 时间戳后 6 位 + 4 位随机数"""
    timestamp = str(int(datetime.now().timestamp() * 1000))[-6:]
    number = random.randint(0, 9999)
    return f"KH{timestamp}{number:04d}"


def generate_record_id(prefix):
    """生成记录编号，如 Q1A2B3C4D"""
    return f"{prefix}{uuid.uuid4().hex[:8].upper()}"


def generate_password_hash(password, salt_length=16):
    """生成密码哈希，返回 salt+hash 的十六进制字符串"""
    salt = os.urandom(salt_length)
    password_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, 100000)
    return (salt + password_hash).hex()


def verify_password(password, password_hash):
    """验证密码"""
    if not password_hash or not isinstance(password_hash, str):
        return False
    try:
        raw = bytes.fromhex(password_hash)
    except ValueError:
        return False

    # 至少应包含 16 字节盐 + 32 字节哈希
    if len(raw) < 16 + 32:
        return False

    salt = raw[:16]
    stored_hash = raw[16:]
    computed_hash = hashlib.pbkdf2_hmac('sha256', password.encode('utf-8'), salt, 100000)
    return computed_hash == stored_hash


def get_ordinal(position):
    """1 -> 1st, 2 -> 2nd, 11 -> 11th"""
    position = int(position)
    if 10 <= position % 100 <= 20:
        suffix = 'th'
    else:
        suffix = {1: 'st', 2: 'nd', 3: 'rd'}.get(position % 10, 'th')
    return f"{position}{suffix}"


def get_position_text(position, is_top100=False):
    """名次展示文字"""
    if is_top100:
        return f"#{position}"
    return f"{get_ordinal(position)} Place"


def parse_datetime(date_str):
    """解析 ISO 日期时间字符串，失败返回 None"""
    if not date_str:
        return None
    try:
        return datetime.fromisoformat(date_str.replace('Z', '+00:00'))
    except (ValueError, AttributeError):
        return None
