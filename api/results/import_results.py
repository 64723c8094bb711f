from flask import request, jsonify, current_app

from utils.decorators import admin_required, log_action, handle_storage_errors
from utils.event_catalog import get_event_details
from utils.excel_handler import excel_handler
from utils.helpers import allowed_file

from . import results_bp, logger


@results_bp.route('/import', methods=['POST'])
@admin_required
@log_action('导入成绩表')
@handle_storage_errors
def import_results():
    """解析上传的成绩 Excel，返回预览，不写入存储"""
    event_type = (request.form.get('eventType') or '').strip()
    season = (request.form.get('season') or '').strip()

    if get_event_details(event_type) is None:
        return jsonify({'success': False, 'message': 'Please select a valid event'}), 400
    if not season:
        return jsonify({'success': False, 'message': 'Please select a season'}), 400

    file = request.files.get('file')
    if not file or not file.filename:
        return jsonify({'success': False, 'message': 'Please upload an Excel file'}), 400

    if not allowed_file(file.filename, current_app.config['ALLOWED_RESULT_EXTENSIONS']):
        return jsonify({'success': False, 'message': 'Please upload a valid Excel file (.xlsx or .xls)'}), 400

    parsed = excel_handler.parse_results_workbook(file.read(), event_type, season, file.filename)
    if not parsed['success']:
        return jsonify({'success': False, 'message': parsed['error']}), 400

    logger.info(f"成绩表解析完成: {event_type} {season}，共 {parsed['count']} 条")
    return jsonify({
        'success': True,
        'message': 'Excel file processed successfully!',
        'data': parsed['data'].to_dict(),
        'count': parsed['count'],
    })
