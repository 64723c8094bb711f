import logging

from models import ContactQuery, QueryStatus, QUERIES_KEY


logger = logging.getLogger(__name__)


class QueryDbMixin:
    """联系表单咨询相关操作 mixin。"""

    def get_queries(self, search=None):
        """按提交时间倒序返回咨询，search 对姓名/邮箱/主题/编号做子串匹配"""
        queries = self.load_records(QUERIES_KEY, ContactQuery)
        queries.sort(key=lambda q: q.submitted_at or '', reverse=True)
        if search:
            queries = [q for q in queries if q.matches(search)]
        return queries

    def create_query(self, query):
        self.update_records(QUERIES_KEY, ContactQuery, lambda records: records.append(query))
        logger.info(f"收到咨询: {query.query_id}")
        return query

    def resolve_query(self, query_id):
        def resolve(queries):
            for query in queries:
                if query.query_id == query_id:
                    query.status = QueryStatus.RESOLVED
                    return query
            return None

        return self.update_records(QUERIES_KEY, ContactQuery, resolve)

    def get_query_counts(self):
        queries = self.load_records(QUERIES_KEY, ContactQuery)
        pending = sum(1 for q in queries if q.status == QueryStatus.PENDING)
        return {
            'total': len(queries),
            'pending': pending,
            'resolved': len(queries) - pending,
        }
