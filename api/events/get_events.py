from flask import jsonify

from utils.decorators import log_action
from utils.event_catalog import list_events, REGISTRATION_FEE

from . import events_bp


@events_bp.route('', methods=['GET'])
@log_action('获取赛事列表')
def get_events():
    """赛事目录"""
    events = list_events()
    return jsonify({
        'success': True,
        'data': events,
        'registrationFee': REGISTRATION_FEE,
        'total': len(events),
    })
