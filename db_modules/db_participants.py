import logging

from models import Participant, PARTICIPANTS_KEY


logger = logging.getLogger(__name__)


class ParticipantDbMixin:
    """报名记录相关操作 mixin。"""

    def get_participants(self, event_type=None):
        participants = self.load_records(PARTICIPANTS_KEY, Participant)
        if event_type:
            participants = [p for p in participants if p.event_type == event_type]
        return participants

    def get_participant_by_id(self, participant_id):
        for participant in self.get_participants():
            if participant.participant_id == participant_id:
                return participant
        return None

    def add_participant(self, participant):
        """追加报名记录；参赛编号不做查重"""
        self.update_records(PARTICIPANTS_KEY, Participant, lambda records: records.append(participant))
        logger.info(f"新增报名记录: {participant.participant_id} ({participant.event_type})")
        return participant
