#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Kalakriti Hub - 报名向导

个人信息 -> 上传作品 -> 支付，三步线性推进，只能向前。
"""

import logging
from enum import Enum

from models import Participant, PaymentStatus, RegistrationStatus
from utils.event_catalog import get_event_details
from utils.helpers import generate_participant_id, validate_email, validate_phone

logger = logging.getLogger(__name__)

MAX_SUBMISSION_SIZE = 50 * 1024 * 1024

PERSONAL_FIELDS = ('fullName', 'email', 'phone', 'address', 'age', 'city', 'state')


class WizardStep(Enum):
    PERSONAL_INFO = 1
    UPLOAD = 2
    PAYMENT = 3


class RegistrationError(Exception):
    """报名向导校验失败"""


class RegistrationWizard:
    """单次报名流程的状态"""

    def __init__(self, event_type, max_file_size=MAX_SUBMISSION_SIZE):
        event = get_event_details(event_type)
        if event is None:
            raise RegistrationError(f'Unknown event type: {event_type}')
        self.event_type = event_type
        self.event = event
        self.max_file_size = max_file_size
        self.step = WizardStep.PERSONAL_INFO
        self.form = {field: '' for field in PERSONAL_FIELDS}
        self.form['participantCategory'] = 'individual'
        self.form['previousExperience'] = ''
        self.submission_file_name = None
        self.submission_size = None

    def update_personal_info(self, data):
        for field in PERSONAL_FIELDS + ('participantCategory', 'previousExperience'):
            if field in data and data[field] is not None:
                self.form[field] = str(data[field]).strip()

    def attach_submission(self, filename, size):
        """附加作品文件；超过上限直接拒绝，原附件保持不变"""
        if size > self.max_file_size:
            limit_mb = self.max_file_size // (1024 * 1024)
            raise RegistrationError(f'File size must be less than {limit_mb}MB')
        self.submission_file_name = filename
        self.submission_size = size

    def validate_personal_info(self):
        if any(not self.form.get(field) for field in PERSONAL_FIELDS):
            return False, 'Please fill all required fields'
        if not validate_email(self.form['email']):
            return False, 'Please enter a valid email address'
        if not validate_phone(self.form['phone']):
            return False, 'Please enter a valid 10-digit phone number'
        return True, None

    def validate_upload(self):
        if not self.submission_file_name:
            return False, 'Please upload your submission file'
        return True, None

    def next_step(self):
        """通过当前步骤校验后前进一步，返回 (是否前进, 错误信息)"""
        if self.step == WizardStep.PERSONAL_INFO:
            ok, message = self.validate_personal_info()
            if ok:
                self.step = WizardStep.UPLOAD
            return ok, message
        if self.step == WizardStep.UPLOAD:
            ok, message = self.validate_upload()
            if ok:
                self.step = WizardStep.PAYMENT
            return ok, message
        return False, 'Already at the payment step'

    def complete_payment(self, gateway, db_manager, season_token='S1', year_token='25'):
        """收取报名费，生成参赛编号并追加报名记录"""
        if self.step != WizardStep.PAYMENT:
            raise RegistrationError('Complete the previous steps first')

        fee = self.event['registrationFee']
        payment = gateway.collect_fee(
            fee,
            notes={'eventType': self.event_type, 'email': self.form['email']},
        )

        participant = Participant(
            participant_id=generate_participant_id(self.event_type, season_token, year_token),
            event_type=self.event_type,
            event_name=self.event['registrationName'],
            full_name=self.form['fullName'],
            email=self.form['email'],
            phone=self.form['phone'],
            address=self.form['address'],
            age=self.form['age'],
            city=self.form['city'],
            state=self.form['state'],
            participant_category=self.form['participantCategory'],
            previous_experience=self.form['previousExperience'],
            submission_file_name=self.submission_file_name,
            status=RegistrationStatus.REGISTERED,
            payment_status=PaymentStatus.COMPLETED if payment['captured'] else PaymentStatus.PENDING,
            order_id=payment['order_id'],
            payment_id=payment['payment_id'],
        )
        db_manager.add_participant(participant)
        logger.info(f"报名完成: {participant.participant_id} {participant.full_name} ({self.event_type})")
        return participant
