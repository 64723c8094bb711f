import logging
from datetime import datetime

from models import (
    EventResult,
    EVENT_RESULTS_KEY,
    TOP100_CATEGORY_NAME,
)
from utils.event_catalog import get_event_title


logger = logging.getLogger(__name__)


class ResultDbMixin:
    """成绩发布与查询 mixin。

    依赖宿主类提供:
    - self.load_records(key, model_cls) / self.update_records(key, model_cls, fn)

    成绩以追加方式保存：同一 (eventType, season) 多次发布会保留多份，
    不做去重也不按键覆盖。
    """

    # ==================== 成绩相关操作 ====================

    def get_event_results(self):
        """获取全部已保存的成绩单（键不存在时为空列表）"""
        return self.load_records(EVENT_RESULTS_KEY, EventResult)

    def get_event_result(self, event_type, season):
        """按赛事和赛季取第一份成绩单"""
        for result in self.get_event_results():
            if result.event_type == event_type and result.season == str(season):
                return result
        return None

    def publish_event_result(self, result):
        """发布成绩单：标记已发布并追加到列表末尾"""
        result.is_published = True
        result.published_date = datetime.now().isoformat()

        def append(results):
            results.append(result)
            return len(results)

        total = self.update_records(EVENT_RESULTS_KEY, EventResult, append)

        logger.info(
            f"成绩已发布: {result.event_type} {result.season}，当前共 {total} 份成绩单"
        )
        return result

    def find_results_by_query(self, text):
        """按参赛编号或姓名（忽略大小写的子串）查找成绩

        依次扫描每份成绩单的 adult/children/preschool 三个年龄组和 top100，
        每命中一次返回一条带赛事信息的记录；同一人在多个列表中出现会返回多条。
        """
        hits = []
        for result in self.get_event_results():
            event_name = get_event_title(result.event_type)
            for bucket, entries in result.iter_buckets():
                is_top100 = bucket == 'top100'
                for entry in entries:
                    if not entry.matches(text):
                        continue
                    hit = entry.to_dict()
                    hit.update({
                        'eventType': result.event_type,
                        'season': result.season,
                        'eventName': event_name,
                        'categoryName': TOP100_CATEGORY_NAME if is_top100 else entry.age_category.display_name,
                        'isTop100': is_top100,
                    })
                    hits.append(hit)
        return hits

    def find_entry_for_contestant(self, contestant_id):
        """按参赛编号精确查找第一条成绩，年龄组优先于 top100

        返回 (EventResult, ResultEntry, is_top100)，未找到返回 None。
        """
        if not contestant_id:
            return None

        results = self.get_event_results()
        for result in results:
            for category_entries in result.top_positions.values():
                for entry in category_entries:
                    if entry.participant_id == contestant_id:
                        return result, entry, False
        for result in results:
            for entry in result.top100:
                if entry.participant_id == contestant_id:
                    return result, entry, True
        return None
