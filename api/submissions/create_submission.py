import os

from flask import request, jsonify, current_app, g

from models import Submission, SubmissionStatus
from utils.decorators import login_required, log_action, handle_storage_errors
from utils.event_catalog import get_event_details
from utils.helpers import allowed_file, get_file_size, save_uploaded_file, generate_record_id

from . import submissions_bp, db_manager, logger


@submissions_bp.route('', methods=['POST'])
@login_required
@log_action('提交作品')
@handle_storage_errors
def create_submission():
    """提交作品（multipart/form-data）

    表单字段: eventType, title, description, paymentId, orderId；文件字段: files（可多个）
    """
    user = g.current_user
    form = request.form

    event_type = (form.get('eventType') or '').strip()
    if get_event_details(event_type) is None:
        return jsonify({'success': False, 'message': 'Event not found'}), 404

    title = (form.get('title') or '').strip()
    if not title:
        return jsonify({'success': False, 'message': 'Please enter a title for your submission'}), 400

    files = [f for f in request.files.getlist('files') if f and f.filename]
    if not files:
        return jsonify({'success': False, 'message': 'Please upload at least one file'}), 400

    allowed_extensions = current_app.config['ALLOWED_SUBMISSION_EXTENSIONS']
    max_size = current_app.config['MAX_SUBMISSION_SIZE']
    for file in files:
        if not allowed_file(file.filename, allowed_extensions):
            return jsonify({'success': False, 'message': f'Unsupported file type: {file.filename}'}), 400
        if get_file_size(file) > max_size:
            return jsonify({
                'success': False,
                'message': f'File size must be less than {max_size // (1024 * 1024)}MB'
            }), 400

    saved_files = []
    for file in files:
        size = get_file_size(file)
        saved = save_uploaded_file(
            file,
            current_app.config['UPLOAD_FOLDER'],
            allowed_extensions,
            subfolder=os.path.join('submissions', event_type),
        )
        saved_files.append({
            'name': saved['original_filename'],
            'path': saved['relative_path'],
            'size': size,
        })

    submission = Submission(
        submission_id=generate_record_id('SUB'),
        event_type=event_type,
        title=title,
        description=(form.get('description') or '').strip(),
        files=saved_files,
        payment_id=form.get('paymentId'),
        order_id=form.get('orderId'),
        status=SubmissionStatus.SUBMITTED,
        email=user.email,
        contestant_id=user.contestant_id,
    )
    db_manager.create_submission(submission)
    logger.info(f"用户 {user.email} 提交作品 {submission.submission_id}，共 {len(saved_files)} 个文件")

    return jsonify({
        'success': True,
        'message': 'Submission received',
        'data': submission.to_dict(),
    }), 201
