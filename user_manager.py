#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 用户管理模块
"""

import logging
import secrets

from models import User
from database import db_manager
from utils.helpers import (
    generate_password_hash,
    verify_password,
    validate_email,
    validate_phone,
    generate_contestant_id,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
DUPLICATE_EMAIL_MESSAGE = 'An account with this email already exists'

PROFILE_FIELDS = {
    'fullName': 'full_name',
    'firstName': 'first_name',
    'lastName': 'last_name',
    'phoneNumber': 'phone_number',
    'address': 'address',
    'city': 'city',
    'state': 'state',
}


class UserManager:
    """用户管理器"""

    def __init__(self, manager=None):
        # 默认使用当前应用注入的数据管理器
        self.db_manager = manager if manager is not None else db_manager

    def validate_signup(self, data):
        """校验注册表单，返回 (是否通过, 错误信息)"""
        required = ('fullName', 'email', 'phoneNumber', 'password', 'confirmPassword')
        if any(data.get(field) is not None and not isinstance(data[field], str) for field in required):
            return False, 'All fields must be text'
        if any(not (data.get(field) or '').strip() for field in required):
            return False, 'Please fill in all fields'

        if not validate_email(data['email'].strip()):
            return False, 'Please enter a valid email address'

        if not validate_phone(data['phoneNumber'].strip()):
            return False, 'Please enter a valid 10-digit phone number'

        if len(data['password']) < MIN_PASSWORD_LENGTH:
            return False, f'Password must be at least {MIN_PASSWORD_LENGTH} characters long'

        if data['password'] != data['confirmPassword']:
            return False, 'Passwords do not match'

        return True, None

    def register_user(self, data):
        """注册新用户并直接登录

        Returns:
            (user, token, message)，失败时 user 与 token 为 None
        """
        ok, message = self.validate_signup(data)
        if not ok:
            return None, None, message

        email = data['email'].strip()
        if self.db_manager.get_user_by_email(email):
            return None, None, DUPLICATE_EMAIL_MESSAGE

        user = User(
            full_name=data['fullName'].strip(),
            email=email,
            phone_number=data['phoneNumber'].strip(),
            password_hash=generate_password_hash(data['password']),
        )
        if self.db_manager.create_user(user) is None:
            return None, None, DUPLICATE_EMAIL_MESSAGE

        token = self._start_session(user)
        logger.info(f"用户注册成功: {email}")
        return user, token, 'Account created successfully!'

    def authenticate_user(self, email, password):
        """验证邮箱和密码，返回 (user, message)"""
        user = self.db_manager.get_user_by_email(email)
        if user is None:
            return None, 'Invalid email or password'
        if not verify_password(password, user.password_hash):
            return None, 'Invalid email or password'
        return user, None

    def login(self, email, password):
        """登录，返回 (user, token, message)"""
        user, message = self.authenticate_user(email.strip(), password)
        if user is None:
            logger.warning(f"登录失败: {email}")
            return None, None, message

        token = self._start_session(user)
        logger.info(f"用户登录成功: {user.email}")
        return user, token, 'Login successful'

    def logout(self):
        self.db_manager.end_session()

    def _start_session(self, user):
        token = secrets.token_hex(32)
        self.db_manager.start_session(user, token)
        return token

    def update_profile(self, user, data):
        """更新个人资料；邮箱不可修改"""
        if any(data.get(key) is not None and not isinstance(data[key], str) for key in PROFILE_FIELDS):
            return None, 'All fields must be text'

        if 'phoneNumber' in data and data['phoneNumber'] and not validate_phone(data['phoneNumber'].strip()):
            return None, 'Please enter a valid 10-digit phone number'

        for key, attr in PROFILE_FIELDS.items():
            if key in data:
                value = data[key]
                setattr(user, attr, value.strip() if isinstance(value, str) else value)

        if ('firstName' in data or 'lastName' in data) and 'fullName' not in data:
            full_name = ' '.join(p for p in (user.first_name, user.last_name) if p)
            user.full_name = full_name or user.full_name

        self.db_manager.update_user(user)
        logger.info(f"用户资料已更新: {user.email}")
        return user, 'Profile updated successfully'

    def mark_participated(self, user):
        """支付成功后标记参赛，没有参赛者编号时分配一个"""
        user.has_participated = True
        if not user.contestant_id:
            user.contestant_id = generate_contestant_id()
            logger.info(f"为用户 {user.email} 分配参赛者编号 {user.contestant_id}")
        self.db_manager.update_user(user)
        return user


# 全局用户管理器实例
user_manager = UserManager()
