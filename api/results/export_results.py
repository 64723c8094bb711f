from io import BytesIO

from flask import request, jsonify, send_file

from utils.decorators import admin_required, log_action, handle_storage_errors
from utils.excel_handler import excel_handler

from . import results_bp, db_manager, XLSX_MIMETYPE


@results_bp.route('/export', methods=['GET'])
@admin_required
@log_action('导出成绩')
@handle_storage_errors
def export_results():
    """导出某赛事某赛季第一份已保存的成绩单"""
    event_type = request.args.get('eventType', '').strip()
    season = request.args.get('season', '').strip()
    if not event_type or not season:
        return jsonify({'success': False, 'message': 'eventType and season are required'}), 400

    result = db_manager.get_event_result(event_type, season)
    if result is None:
        return jsonify({'success': False, 'message': 'Results not found'}), 404

    return send_file(
        BytesIO(excel_handler.export_event_result(result)),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"{event_type}_{season}_results.xlsx"
    )
