from flask import jsonify, g

from utils.decorators import login_required, log_action, handle_storage_errors
from utils.helpers import get_position_text

from . import users_bp, db_manager


@users_bp.route('/dashboard', methods=['GET'])
@login_required
@log_action('个人面板')
@handle_storage_errors
def user_dashboard():
    """当前用户面板：参赛状态、作品和成绩"""
    user = g.current_user

    submissions = db_manager.get_submissions_for_user(user)

    results = []
    if user.contestant_id:
        # 面板只展示参赛编号完全一致的成绩
        for hit in db_manager.find_results_by_query(user.contestant_id):
            if hit['participantId'] == user.contestant_id:
                hit['positionText'] = get_position_text(hit['position'], hit['isTop100'])
                results.append(hit)

    return jsonify({
        'success': True,
        'data': {
            'user': user.to_dict(),
            'hasParticipated': user.is_participant,
            'submissions': [s.to_dict() for s in submissions],
            'results': results,
            'certificateAvailable': bool(results),
        }
    })
