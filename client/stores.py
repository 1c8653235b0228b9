"""
클라이언트 상태 저장소

화면(view)이 읽는 상태를 담는 명시적 객체. 생성 시 API 클라이언트와
저장소를 주입받으며, 모듈 전역 인스턴스는 두지 않는다.
"""

import logging
from typing import List, Optional

from client.http_client import ApiError, GradeApiClient
from client.storage import TokenStorage

logger = logging.getLogger(__name__)

_EMPTY_USER = {"id": None, "username": "", "name": "", "role": ""}


class UserStore:
    def __init__(self, api: GradeApiClient, storage: TokenStorage):
        self.api = api
        self.storage = storage
        self.token: str = storage.token or ""
        self.user_info: dict = dict(_EMPTY_USER)

    @property
    def is_logged_in(self) -> bool:
        return bool(self.token) and self.user_info.get("id") is not None

    @property
    def role(self) -> str:
        return self.user_info.get("role", "")

    def login(self, username: str, password: str, role: str) -> dict:
        res = self.api.login(username, password, role)
        self.token = res["data"]["token"]
        self.user_info = res["data"]["user"]
        self.storage.set("token", self.token)
        self.storage.set("userInfo", self.user_info)
        return res

    def logout(self) -> None:
        if self.token:
            try:
                self.api.logout()
            except ApiError as e:
                # 서버 응답과 무관하게 로컬 세션은 정리
                logger.info(f"Logout request failed: {e}")
        self.token = ""
        self.user_info = dict(_EMPTY_USER)
        self.storage.remove("token")
        self.storage.remove("userInfo")

    def init(self) -> None:
        """저장소에서 로그인 상태 복원"""
        saved_token = self.storage.get("token")
        saved_user = self.storage.get("userInfo")
        if saved_token and saved_user:
            if isinstance(saved_user, dict) and saved_user.get("id") is not None:
                self.token = saved_token
                self.user_info = saved_user
            else:
                self.logout()

    def fetch_user_info(self) -> dict:
        try:
            res = self.api.get_user_info()
        except ApiError as e:
            self.logout()
            raise ApiError(e.code, "Failed to load user info") from e
        self.user_info = res["data"]
        self.storage.set("userInfo", self.user_info)
        return res["data"]


class GradeStore:
    def __init__(self, api: GradeApiClient):
        self.api = api
        self.courses: List[dict] = []
        self.classes: List[dict] = []
        self.students: List[dict] = []
        self.grades: List[dict] = []

    def _load(self, attr: str, call, *args, **kwargs) -> List[dict]:
        try:
            data = call(*args, **kwargs).get("data") or []
        except ApiError as e:
            logger.warning(f"Failed to load {attr}: {e}")
            return []
        setattr(self, attr, data)
        return data

    def load_courses(self) -> List[dict]:
        return self._load("courses", self.api.get_courses)

    def load_classes(self) -> List[dict]:
        return self._load("classes", self.api.get_classes)

    def load_students(self, class_id: Optional[int] = None) -> List[dict]:
        return self._load("students", self.api.get_students, class_id)

    def load_grades(self, **filters) -> List[dict]:
        return self._load("grades", self.api.get_grades, **filters)

    # 쓰기 작업은 실패를 그대로 전달
    def add_grades(self, course_id: int, semester: str, grades: list) -> dict:
        return self.api.create_grades(course_id, semester, grades)

    def update_grade(self, grade_id: int, score: float) -> dict:
        return self.api.update_grade(grade_id, score)

    def delete_grade(self, grade_id: int) -> dict:
        return self.api.delete_grade(grade_id)

    def get_course_stats(self, course_id: int) -> Optional[dict]:
        try:
            return self.api.get_course_stats(course_id).get("data")
        except ApiError as e:
            logger.warning(f"Failed to load stats for course {course_id}: {e}")
            return None

    def get_failed_students(self, course_id: Optional[int] = None, pass_score: Optional[float] = None) -> List[dict]:
        try:
            return self.api.get_failed_students(course_id, pass_score).get("data") or []
        except ApiError as e:
            logger.warning(f"Failed to load failed students: {e}")
            return []
