#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 数据模型定义

所有记录都以 JSON 形式存放在键值存储中，字段名沿用前端的 camelCase 写法。
from_dict 在存储边界做类型校验，非法的枚举值直接抛出 ValueError。
"""

from datetime import datetime
from enum import Enum


class AgeCategory(Enum):
    """年龄组枚举"""
    ADULT = 'adult'
    CHILDREN = 'children'
    PRESCHOOL = 'preschool'

    @property
    def display_name(self):
        return AGE_CATEGORY_NAMES[self]


AGE_CATEGORY_NAMES = {
    AgeCategory.ADULT: 'Adult (16yr-80yr)',
    AgeCategory.CHILDREN: 'Children (7yr-15yr)',
    AgeCategory.PRESCHOOL: 'Pre-school (2yr-6yr)',
}

TOP100_CATEGORY_NAME = 'Top 100'


class SubmissionStatus(Enum):
    """作品状态枚举"""
    SUBMITTED = 'submitted'
    UNDER_REVIEW = 'under_review'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'


class PaymentStatus(Enum):
    """支付状态枚举"""
    PENDING = 'pending'
    COMPLETED = 'completed'
    FAILED = 'failed'


class RegistrationStatus(Enum):
    """报名状态枚举"""
    REGISTERED = 'registered'
    CANCELLED = 'cancelled'


class QueryStatus(Enum):
    """咨询状态枚举"""
    PENDING = 'pending'
    RESOLVED = 'resolved'


def _now_iso():
    return datetime.now().isoformat()


def _to_enum(enum_cls, value, default=None):
    if isinstance(value, enum_cls):
        return value
    if value is None or value == '':
        if default is None:
            raise ValueError(f'{enum_cls.__name__} is required')
        return default
    return enum_cls(value)


def _to_float(value, default=0.0):
    if value is None or value == '':
        return default
    return float(value)


class ResultEntry:
    """单条成绩"""
    def __init__(self, participant_id, name, age_category, position,
                 score=0.0, remarks=''):
        self.participant_id = str(participant_id)
        self.name = str(name)
        self.age_category = _to_enum(AgeCategory, age_category)
        self.position = int(position)
        self.score = _to_float(score)
        self.remarks = remarks or ''

    def matches(self, text):
        """participantId 或 name 包含 text（忽略大小写）"""
        needle = text.lower()
        return needle in self.participant_id.lower() or needle in self.name.lower()

    def to_dict(self):
        return {
            'participantId': self.participant_id,
            'name': self.name,
            'ageCategory': self.age_category.value,
            'position': self.position,
            'score': self.score,
            'remarks': self.remarks,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('result entry must be an object')
        return cls(
            participant_id=data['participantId'],
            name=data['name'],
            age_category=data['ageCategory'],
            position=data['position'],
            score=data.get('score', 0),
            remarks=data.get('remarks', ''),
        )


class EventResult:
    """某项赛事某一赛季的成绩单

    列表顺序即名次顺序；(event_type, season) 不要求唯一。
    """
    def __init__(self, event_type, season, top_positions=None, top100=None,
                 published_date=None, is_published=False):
        self.event_type = event_type
        self.season = str(season)
        top_positions = top_positions or {}
        self.top_positions = {
            category: list(top_positions.get(category, []))
            for category in AgeCategory
        }
        self.top100 = list(top100 or [])
        self.published_date = published_date
        self.is_published = bool(is_published)

    def iter_buckets(self):
        """按 adult/children/preschool/top100 的顺序遍历 (bucket, entries)"""
        for category in AgeCategory:
            yield category, self.top_positions[category]
        yield 'top100', self.top100

    def to_dict(self):
        return {
            'eventType': self.event_type,
            'season': self.season,
            'topPositions': {
                category.value: [entry.to_dict() for entry in entries]
                for category, entries in self.top_positions.items()
            },
            'top100': [entry.to_dict() for entry in self.top100],
            'publishedDate': self.published_date,
            'isPublished': self.is_published,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('event result must be an object')
        if not data.get('eventType'):
            raise ValueError('eventType is required')
        if not data.get('season'):
            raise ValueError('season is required')
        raw_positions = data.get('topPositions') or {}
        if not isinstance(raw_positions, dict):
            raise ValueError('topPositions must be an object')
        raw_top100 = data.get('top100') or []
        if not isinstance(raw_top100, list):
            raise ValueError('top100 must be a list')
        top_positions = {}
        for category in AgeCategory:
            top_positions[category] = [
                ResultEntry.from_dict(item) for item in raw_positions.get(category.value, [])
            ]
        return cls(
            event_type=data['eventType'],
            season=data['season'],
            top_positions=top_positions,
            top100=[ResultEntry.from_dict(item) for item in raw_top100],
            published_date=data.get('publishedDate'),
            is_published=data.get('isPublished', False),
        )


class User:
    """用户模型"""
    def __init__(self, full_name=None, email=None, phone_number=None,
                 first_name=None, last_name=None, address=None, city=None,
                 state=None, contestant_id=None, signed_up_at=None,
                 has_participated=False, password_hash=None):
        self.full_name = full_name or ' '.join(p for p in (first_name, last_name) if p) or None
        self.first_name = first_name
        self.last_name = last_name
        self.email = email
        self.phone_number = phone_number
        self.address = address
        self.city = city
        self.state = state
        self.contestant_id = contestant_id
        self.signed_up_at = signed_up_at or _now_iso()
        self.has_participated = bool(has_participated)
        self.password_hash = password_hash

    @property
    def is_participant(self):
        return bool(self.contestant_id) or self.has_participated

    def to_dict(self, include_secret=False):
        data = {
            'fullName': self.full_name,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'phoneNumber': self.phone_number,
            'address': self.address,
            'city': self.city,
            'state': self.state,
            'contestantId': self.contestant_id,
            'signedUpAt': self.signed_up_at,
            'hasParticipated': self.has_participated,
        }
        if include_secret:
            data['passwordHash'] = self.password_hash
        return data

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('user must be an object')
        if not data.get('email'):
            raise ValueError('email is required')
        return cls(
            full_name=data.get('fullName'),
            email=data['email'],
            # 早期记录使用 phone 字段
            phone_number=data.get('phoneNumber') or data.get('phone'),
            first_name=data.get('firstName'),
            last_name=data.get('lastName'),
            address=data.get('address'),
            city=data.get('city'),
            state=data.get('state'),
            contestant_id=data.get('contestantId'),
            signed_up_at=data.get('signedUpAt'),
            has_participated=data.get('hasParticipated', False),
            password_hash=data.get('passwordHash'),
        )


class Participant:
    """报名记录"""
    def __init__(self, participant_id, event_type, full_name, email, phone,
                 event_name=None, address=None, age=None, city=None, state=None,
                 participant_category='individual', previous_experience='',
                 submission_file_name='', registration_date=None,
                 status=RegistrationStatus.REGISTERED,
                 payment_status=PaymentStatus.PENDING,
                 order_id=None, payment_id=None):
        self.participant_id = participant_id
        self.event_type = event_type
        self.event_name = event_name
        self.full_name = full_name
        self.email = email
        self.phone = phone
        self.address = address
        self.age = age
        self.city = city
        self.state = state
        self.participant_category = participant_category or 'individual'
        self.previous_experience = previous_experience or ''
        self.submission_file_name = submission_file_name or ''
        self.registration_date = registration_date or _now_iso()
        self.status = _to_enum(RegistrationStatus, status, RegistrationStatus.REGISTERED)
        self.payment_status = _to_enum(PaymentStatus, payment_status, PaymentStatus.PENDING)
        self.order_id = order_id
        self.payment_id = payment_id

    def to_dict(self):
        return {
            'participantId': self.participant_id,
            'eventType': self.event_type,
            'eventName': self.event_name,
            'fullName': self.full_name,
            'email': self.email,
            'phone': self.phone,
            'address': self.address,
            'age': self.age,
            'city': self.city,
            'state': self.state,
            'participantCategory': self.participant_category,
            'previousExperience': self.previous_experience,
            'submissionFileName': self.submission_file_name,
            'registrationDate': self.registration_date,
            'status': self.status.value,
            'paymentStatus': self.payment_status.value,
            'orderId': self.order_id,
            'paymentId': self.payment_id,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('participant must be an object')
        return cls(
            participant_id=data['participantId'],
            event_type=data['eventType'],
            full_name=data.get('fullName'),
            email=data.get('email'),
            phone=data.get('phone'),
            event_name=data.get('eventName'),
            address=data.get('address'),
            age=data.get('age'),
            city=data.get('city'),
            state=data.get('state'),
            participant_category=data.get('participantCategory'),
            previous_experience=data.get('previousExperience'),
            submission_file_name=data.get('submissionFileName'),
            registration_date=data.get('registrationDate'),
            status=data.get('status'),
            payment_status=data.get('paymentStatus'),
            order_id=data.get('orderId'),
            payment_id=data.get('paymentId'),
        )


class Submission:
    """作品提交"""
    def __init__(self, submission_id, event_type, title, description='',
                 files=None, payment_id=None, order_id=None,
                 status=SubmissionStatus.SUBMITTED, email=None,
                 contestant_id=None, created_at=None, result=None):
        self.submission_id = submission_id
        self.event_type = event_type
        self.title = title
        self.description = description or ''
        self.files = list(files or [])
        self.payment_id = payment_id
        self.order_id = order_id
        self.status = _to_enum(SubmissionStatus, status, SubmissionStatus.SUBMITTED)
        self.email = email
        self.contestant_id = contestant_id
        self.created_at = created_at or _now_iso()
        self.result = result

    def belongs_to(self, user):
        """按邮箱或参赛编号归属到用户"""
        if user is None:
            return False
        if user.email and self.email and self.email.lower() == user.email.lower():
            return True
        return bool(user.contestant_id) and self.contestant_id == user.contestant_id

    def to_dict(self):
        return {
            'submissionId': self.submission_id,
            'eventType': self.event_type,
            'title': self.title,
            'description': self.description,
            'files': self.files,
            'paymentId': self.payment_id,
            'orderId': self.order_id,
            'status': self.status.value,
            'email': self.email,
            'contestantId': self.contestant_id,
            'createdAt': self.created_at,
            'result': self.result,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('submission must be an object')
        return cls(
            submission_id=data['submissionId'],
            event_type=data['eventType'],
            title=data.get('title') or '',
            description=data.get('description'),
            files=data.get('files'),
            payment_id=data.get('paymentId'),
            order_id=data.get('orderId'),
            status=data.get('status'),
            email=data.get('email'),
            contestant_id=data.get('contestantId'),
            created_at=data.get('createdAt'),
            result=data.get('result'),
        )


class ContactQuery:
    """联系表单咨询"""
    def __init__(self, query_id, name, email, subject, message, phone='',
                 submitted_at=None, status=QueryStatus.PENDING):
        self.query_id = query_id
        self.name = name
        self.email = email
        self.phone = phone or ''
        self.subject = subject
        self.message = message
        self.submitted_at = submitted_at or _now_iso()
        self.status = _to_enum(QueryStatus, status, QueryStatus.PENDING)

    def matches(self, text):
        needle = text.lower()
        return any(needle in (value or '').lower()
                   for value in (self.name, self.email, self.subject, self.query_id))

    def to_dict(self):
        return {
            'id': self.query_id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'subject': self.subject,
            'message': self.message,
            'submittedAt': self.submitted_at,
            'status': self.status.value,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('query must be an object')
        return cls(
            query_id=data['id'],
            name=data.get('name') or '',
            email=data.get('email') or '',
            subject=data.get('subject') or '',
            message=data.get('message') or '',
            phone=data.get('phone'),
            submitted_at=data.get('submittedAt'),
            status=data.get('status'),
        )


class PaymentIntent:
    """未登录时暂存的支付意向"""
    def __init__(self, event_type, number_of_artworks=1, created_at=None):
        self.event_type = event_type
        self.number_of_artworks = int(number_of_artworks)
        self.created_at = created_at or _now_iso()

    def to_dict(self):
        return {
            'eventType': self.event_type,
            'numberOfArtworks': self.number_of_artworks,
            'createdAt': self.created_at,
        }

    @classmethod
    def from_dict(cls, data):
        if not isinstance(data, dict):
            raise ValueError('payment intent must be an object')
        return cls(
            event_type=data['eventType'],
            number_of_artworks=data.get('numberOfArtworks', 1),
            created_at=data.get('createdAt'),
        )


# 键值存储表结构
STORAGE_SCHEMA = {
    'kv_store': '''
        CREATE TABLE IF NOT EXISTS kv_store (
            storage_key VARCHAR(100) PRIMARY KEY,
            payload LONGTEXT NOT NULL,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP
        ) ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci COMMENT='JSON 键值存储';
    ''',
}


# 固定的存储键
USER_KEY = 'kalakriti-user'
USERS_KEY = 'kalakriti-users'
TOKEN_KEY = 'kalakriti-token'
PARTICIPANTS_KEY = 'kalakriti-participants'
SUBMISSIONS_KEY = 'kalakriti-submissions'
EVENT_RESULTS_KEY = 'kalakriti-event-results'
QUERIES_KEY = 'kalakriti-queries'
PAYMENT_INTENT_KEY = 'kalakriti-payment-intent'
