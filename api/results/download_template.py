from io import BytesIO

from flask import request, jsonify, send_file

from utils.decorators import admin_required, log_action
from utils.event_catalog import get_event_details
from utils.excel_handler import excel_handler

from . import results_bp, XLSX_MIMETYPE


@results_bp.route('/template', methods=['GET'])
@admin_required
@log_action('下载成绩模板')
def download_template():
    event_type = request.args.get('eventType', '').strip()
    if get_event_details(event_type) is None:
        return jsonify({'success': False, 'message': 'Please select a valid event'}), 400

    content = excel_handler.generate_results_template(event_type)
    return send_file(
        BytesIO(content),
        mimetype=XLSX_MIMETYPE,
        as_attachment=True,
        download_name=f"{event_type}_results_template.xlsx"
    )
