from flask import request, jsonify

from utils.decorators import admin_required, log_action, handle_storage_errors

from . import queries_bp, db_manager


@queries_bp.route('', methods=['GET'])
@admin_required
@log_action('获取咨询列表')
@handle_storage_errors
def get_queries():
    """咨询列表（新到旧），search 参数做子串过滤；统计数始终基于全部咨询"""
    search = request.args.get('search', '').strip() or None
    queries = db_manager.get_queries(search)
    return jsonify({
        'success': True,
        'data': [q.to_dict() for q in queries],
        'counts': db_manager.get_query_counts(),
    })
