from io import BytesIO

from flask import jsonify, send_file, g

from utils.certificate import certificate_generator
from utils.decorators import login_required, log_action, handle_storage_errors

from . import users_bp, db_manager


@users_bp.route('/certificate', methods=['GET'])
@login_required
@log_action('下载证书')
@handle_storage_errors
def download_certificate():
    user = g.current_user
    if not user.contestant_id:
        return jsonify({
            'success': False,
            'message': 'Participate in an event to get your Contestant ID first'
        }), 400

    pdf_bytes = certificate_generator.generate_for_user(db_manager, user)
    if pdf_bytes is None:
        return jsonify({
            'success': False,
            'message': 'No results found for your Contestant ID yet'
        }), 404

    return send_file(
        BytesIO(pdf_bytes),
        mimetype='application/pdf',
        as_attachment=True,
        download_name=f"Kalakriti_Certificate_{user.contestant_id}.pdf"
    )
