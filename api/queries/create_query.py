from flask import request, jsonify

from models import ContactQuery
from utils.decorators import validate_json, log_action, handle_storage_errors
from utils.helpers import validate_email, validate_phone, generate_record_id

from . import queries_bp, db_manager


@queries_bp.route('', methods=['POST'])
@validate_json(['name', 'email', 'subject', 'message'])
@log_action('提交咨询')
@handle_storage_errors
def create_query():
    """联系表单，无需登录"""
    data = request.get_json()

    email = data['email'].strip()
    if not validate_email(email):
        return jsonify({'success': False, 'message': 'Please enter a valid email address'}), 400

    phone = data.get('phone') or ''
    if not isinstance(phone, str):
        return jsonify({'success': False, 'message': 'Must be text: phone'}), 400
    phone = phone.strip()
    if phone and not validate_phone(phone):
        return jsonify({'success': False, 'message': 'Please enter a valid 10-digit phone number'}), 400

    query = ContactQuery(
        query_id=generate_record_id('Q'),
        name=data['name'].strip(),
        email=email,
        phone=phone,
        subject=data['subject'].strip(),
        message=data['message'].strip(),
    )
    db_manager.create_query(query)

    return jsonify({
        'success': True,
        'message': 'Thank you! We will get back to you soon.',
        'data': query.to_dict(),
    }), 201
