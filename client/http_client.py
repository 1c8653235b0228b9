import logging
from typing import Optional

import httpx

from client.storage import TokenStorage

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """응답 봉투의 code 가 200 이 아니거나 HTTP 오류인 경우"""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class SessionExpired(ApiError):
    """로그인 외 요청에서 401: 저장된 세션을 지우고 재로그인 필요"""


class GradeApiClient:
    """
    성적 관리 REST API 클라이언트
    - 요청마다 저장된 토큰을 Authorization: Bearer 로 첨부
    - code != 200 이면 ApiError
    """

    def __init__(self, storage: TokenStorage, base_url: str = "http://localhost:3000",
                 api_prefix: str = "/api", timeout: float = 10.0, http: Optional[httpx.Client] = None):
        self.storage = storage
        self.prefix = api_prefix.rstrip("/")
        self.http = http or httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout)

    def close(self):
        self.http.close()

    def request(self, method: str, path: str, **kwargs) -> dict:
        headers = kwargs.pop("headers", {}) or {}
        token = self.storage.token
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            r = self.http.request(method, f"{self.prefix}{path}", headers=headers, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Network error: {method} {path}: {e}")
            raise ApiError(0, "Network error, please try again later") from e

        try:
            body = r.json()
        except ValueError:
            body = {}
        message = body.get("message") or "Request failed"

        if r.status_code == 401 and not path.startswith("/auth/login"):
            # 로그인 요청의 401 은 자격 증명 오류, 그 외는 세션 만료
            self.storage.remove("token")
            self.storage.remove("userInfo")
            raise SessionExpired(401, "Session expired, please log in again")
        if r.is_error:
            raise ApiError(r.status_code, message)

        code = body.get("code", 200)
        if code != 200:
            raise ApiError(code, message)
        return body

    @staticmethod
    def _params(**params) -> dict:
        return {k: v for k, v in params.items() if v is not None and v != ""}

    # ==========================================================
    # auth
    # ==========================================================
    def login(self, username: str, password: str, role: str) -> dict:
        return self.request("POST", "/auth/login", json={"username": username, "password": password, "role": role})

    def get_user_info(self) -> dict:
        return self.request("GET", "/auth/info")

    def logout(self) -> dict:
        return self.request("POST", "/auth/logout")

    # ==========================================================
    # 과목 / 학급 / 학생
    # ==========================================================
    def get_courses(self) -> dict:
        return self.request("GET", "/courses")

    def get_classes(self) -> dict:
        return self.request("GET", "/classes")

    def get_students(self, class_id: Optional[int] = None) -> dict:
        return self.request("GET", "/students", params=self._params(class_id=class_id))

    # ==========================================================
    # 성적
    # ==========================================================
    def get_grades(self, keyword: Optional[str] = None, course_id: Optional[int] = None,
                   class_id: Optional[int] = None, semester: Optional[str] = None) -> dict:
        params = self._params(keyword=keyword, course_id=course_id, class_id=class_id, semester=semester)
        return self.request("GET", "/grades", params=params)

    def create_grades(self, course_id: int, semester: str, grades: list) -> dict:
        return self.request("POST", "/grades", json={"course_id": course_id, "semester": semester, "grades": grades})

    def update_grade(self, grade_id: int, score: float) -> dict:
        return self.request("PUT", f"/grades/{grade_id}", json={"score": score})

    def delete_grade(self, grade_id: int) -> dict:
        return self.request("DELETE", f"/grades/{grade_id}")

    def get_course_stats(self, course_id: int) -> dict:
        return self.request("GET", f"/grades/stats/{course_id}")

    def get_failed_students(self, course_id: Optional[int] = None, pass_score: Optional[float] = None) -> dict:
        return self.request("GET", "/grades/failed", params=self._params(course_id=course_id, pass_score=pass_score))

    # ==========================================================
    # 계정
    # ==========================================================
    def get_users(self, keyword: Optional[str] = None, role: Optional[str] = None) -> dict:
        return self.request("GET", "/users", params=self._params(keyword=keyword, role=role))

    def create_user(self, data: dict) -> dict:
        return self.request("POST", "/users", json=data)

    def update_user(self, user_id: int, data: dict) -> dict:
        return self.request("PUT", f"/users/{user_id}", json=data)

    def delete_user(self, user_id: int) -> dict:
        return self.request("DELETE", f"/users/{user_id}")

    def change_password(self, old_password: str, new_password: str) -> dict:
        return self.request("PUT", "/users/password",
                            json={"old_password": old_password, "new_password": new_password})
