from flask import jsonify

from utils.decorators import admin_required, log_action, handle_storage_errors

from . import queries_bp, db_manager, logger


@queries_bp.route('/<query_id>/resolve', methods=['PUT'])
@admin_required
@log_action('处理咨询')
@handle_storage_errors
def resolve_query(query_id):
    query = db_manager.resolve_query(query_id)
    if query is None:
        return jsonify({'success': False, 'message': 'Query not found'}), 404

    logger.info(f"咨询 {query_id} 已标记为已处理")
    return jsonify({
        'success': True,
        'message': 'Query marked as resolved',
        'data': query.to_dict(),
    })
