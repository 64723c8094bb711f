import os

from flask import request, jsonify, current_app

from registration_wizard import RegistrationWizard, RegistrationError
from utils.decorators import log_action, handle_storage_errors
from utils.helpers import allowed_file, get_file_size, save_uploaded_file
from utils.payment_gateway import get_payment_gateway

from . import registrations_bp, db_manager, logger


@registrations_bp.route('/<event_type>', methods=['POST'])
@log_action('赛事报名')
@handle_storage_errors
def register_participant(event_type):
    """赛事报名（multipart/form-data）

    依次执行报名向导的三个步骤：个人信息、上传作品、支付报名费。
    任何一步未通过都返回 400，不写入报名记录。
    """
    try:
        wizard = RegistrationWizard(event_type, current_app.config['MAX_SUBMISSION_SIZE'])
    except RegistrationError as e:
        return jsonify({'success': False, 'message': str(e)}), 404

    wizard.update_personal_info(request.form)
    ok, message = wizard.next_step()
    if not ok:
        return jsonify({'success': False, 'message': message, 'step': 1}), 400

    file = request.files.get('submission')
    allowed_extensions = current_app.config['ALLOWED_SUBMISSION_EXTENSIONS']
    if file and file.filename:
        if not allowed_file(file.filename, allowed_extensions):
            return jsonify({'success': False, 'message': 'Unsupported file type', 'step': 2}), 400
        try:
            wizard.attach_submission(file.filename, get_file_size(file))
        except RegistrationError as e:
            return jsonify({'success': False, 'message': str(e), 'step': 2}), 400

    ok, message = wizard.next_step()
    if not ok:
        return jsonify({'success': False, 'message': message, 'step': 2}), 400

    participant = wizard.complete_payment(
        get_payment_gateway(),
        db_manager,
        season_token=current_app.config['SEASON_TOKEN'],
        year_token=current_app.config['YEAR_TOKEN'],
    )

    # 报名费收取成功后才保存文件
    save_uploaded_file(
        file,
        current_app.config['UPLOAD_FOLDER'],
        allowed_extensions,
        subfolder=os.path.join('registrations', event_type),
    )
    logger.info(f"{participant.full_name} 报名 {event_type} 成功，编号 {participant.participant_id}")

    return jsonify({
        'success': True,
        'message': 'Registration completed successfully!',
        'participantId': participant.participant_id,
        'data': participant.to_dict(),
    }), 201
