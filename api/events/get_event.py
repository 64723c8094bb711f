from flask import jsonify

from utils.decorators import log_action
from utils.event_catalog import get_event_details

from . import events_bp, logger


@events_bp.route('/<event_type>', methods=['GET'])
@log_action('获取赛事详情')
def get_event(event_type):
    """获取赛事详情：介绍、价格档位、投稿须知"""
    event = get_event_details(event_type)

    if not event:
        logger.info(f"未知赛事类型: {event_type}")
        return jsonify({
            'success': False,
            'message': 'Event not found'
        }), 404

    return jsonify({
        'success': True,
        'data': event,
    })
