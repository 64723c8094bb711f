import logging

from models import User, USER_KEY, USERS_KEY, TOKEN_KEY


logger = logging.getLogger(__name__)


def _dump_user(user):
    return user.to_dict(include_secret=True)


class UserDbMixin:
    """用户与登录态相关操作 mixin。

    kalakriti-users 保存全部账号；kalakriti-user / kalakriti-token 保存当前
    登录用户及其令牌，与客户端本地存储一致。
    """

    # ==================== 账号列表 ====================

    def get_all_users(self):
        return self.load_records(USERS_KEY, User)

    def get_user_by_email(self, email):
        if not email:
            return None
        email = email.strip().lower()
        for user in self.get_all_users():
            if user.email and user.email.lower() == email:
                return user
        return None

    def create_user(self, user):
        """追加新账号；邮箱已存在时不写入并返回 None"""
        email = user.email.lower()

        def append(users):
            if any(u.email and u.email.lower() == email for u in users):
                return None
            users.append(user)
            return user

        created = self.update_records(USERS_KEY, User, append, dump=_dump_user)
        if created is not None:
            logger.info(f"新增用户: {user.email}")
        return created

    def update_user(self, user):
        """按邮箱覆盖账号记录，不存在则追加"""
        def replace(users):
            for index, existing in enumerate(users):
                if existing.email and existing.email.lower() == user.email.lower():
                    users[index] = user
                    return
            users.append(user)

        self.update_records(USERS_KEY, User, replace, dump=_dump_user)

        # 同步当前登录用户，避免两个键内容不一致
        current = self.get_current_user()
        if current and current.email.lower() == user.email.lower():
            self.set_json(USER_KEY, _dump_user(user))
        return user

    # ==================== 登录态 ====================

    def get_current_user(self):
        data = self.get_json(USER_KEY)
        if not data:
            return None
        try:
            return User.from_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"当前用户记录无效，按未登录处理: {e}")
            return None

    def get_session_token(self):
        token = self.get_json(TOKEN_KEY)
        return token if isinstance(token, str) and token else None

    def start_session(self, user, token):
        # 全站只有一个登录槽位：新的登录会顶掉之前所有客户端持有的令牌
        self.set_json(TOKEN_KEY, token)
        self.set_json(USER_KEY, _dump_user(user))

    def end_session(self):
        self.remove(TOKEN_KEY)
        self.remove(USER_KEY)
