from flask import request, jsonify

from utils.decorators import log_action, handle_storage_errors
from utils.helpers import get_position_text

from . import results_bp, db_manager, logger


@results_bp.route('/search', methods=['GET'])
@log_action('搜索成绩')
@handle_storage_errors
def search_results():
    """按参赛编号或姓名搜索成绩（忽略大小写的子串匹配）"""
    query = request.args.get('q', '').strip()
    if not query:
        return jsonify({
            'success': False,
            'message': 'Please enter a Participant ID or Name'
        }), 400

    hits = db_manager.find_results_by_query(query)
    for hit in hits:
        hit['positionText'] = get_position_text(hit['position'], hit['isTop100'])

    logger.info(f"成绩搜索 '{query}' 命中 {len(hits)} 条")
    return jsonify({
        'success': True,
        'data': hits,
        'total': len(hits),
        'message': None if hits else 'No results found'
    })
