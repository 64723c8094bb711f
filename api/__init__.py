#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - API接口模块
"""

from .account import auth_bp, users_bp
from .events import events_bp
from .submissions import submissions_bp
from .payments import payments_bp
from .registrations import registrations_bp
from .results import results_bp
from .queries import queries_bp

__version__ = '1.0.0'

# 导出所有蓝图
__all__ = [
    'auth_bp',
    'users_bp',
    'events_bp',
    'submissions_bp',
    'payments_bp',
    'registrations_bp',
    'results_bp',
    'queries_bp',
]
