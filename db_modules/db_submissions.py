import logging

from models import Submission, SubmissionStatus, SUBMISSIONS_KEY


logger = logging.getLogger(__name__)


class SubmissionDbMixin:
    """作品提交相关操作 mixin。"""

    def get_submissions(self):
        return self.load_records(SUBMISSIONS_KEY, Submission)

    def get_submissions_for_user(self, user):
        """按邮箱或参赛编号筛选用户的作品"""
        return [s for s in self.get_submissions() if s.belongs_to(user)]

    def create_submission(self, submission):
        self.update_records(SUBMISSIONS_KEY, Submission, lambda records: records.append(submission))
        logger.info(f"新增作品: {submission.submission_id} ({submission.event_type})")
        return submission

    def update_submission_status(self, submission_id, status, result=None):
        """更新作品状态，返回更新后的作品；不存在返回 None"""
        status = status if isinstance(status, SubmissionStatus) else SubmissionStatus(status)

        def apply(submissions):
            for submission in submissions:
                if submission.submission_id == submission_id:
                    submission.status = status
                    if result is not None:
                        submission.result = result
                    return submission
            return None

        return self.update_records(SUBMISSIONS_KEY, Submission, apply)
