import logging

import jwt
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select

from database.db import Database
from models.users import User, STATUS_ACTIVE
from models.students import Student
from models.classes import Class
from schemas.auth import CurrentUser, LoginResult, UserProfile
from utils.errors import InvalidCredentials, AccountDisabled, InvalidToken, NotFoundError
from utils.security import hash_password, verify_password, create_access_token, decode_access_token

logger = logging.getLogger(__name__)


class AuthService:
    """로그인 / 토큰 발급·검증 / 내 정보 조회"""

    def __init__(self, db: Database, secret: str, algorithm: str = "HS256",
                 expire_minutes: int = 60 * 24 * 7, bcrypt_rounds: int = 10):
        self.db = db
        self.secret = secret
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        # 존재하지 않는 계정도 같은 비용으로 비교하기 위한 더미 해시
        self._dummy_hash = hash_password("not-a-real-password", bcrypt_rounds)

    # ==========================================================
    # 로그인
    # ==========================================================
    def login(self, username: str, password: str, role: str) -> LoginResult:
        with self.db.session() as session:
            user = session.execute(
                select(User).where(User.username == username, User.role == role)
            ).scalar_one_or_none()

        if user is None:
            verify_password(password, self._dummy_hash)
            logger.warning(f"Login failed: unknown account username={username} role={role}")
            raise InvalidCredentials()

        if not verify_password(password, user.password):
            logger.warning(f"Login failed: wrong password username={username}")
            raise InvalidCredentials()

        if user.status != STATUS_ACTIVE:
            logger.warning(f"Login rejected: disabled account username={username}")
            raise AccountDisabled()

        identity = CurrentUser(id=user.id, username=user.username, name=user.name, role=user.role)
        token = self.issue_token(identity)
        logger.info(f"Login success: id={user.id} role={user.role}")
        return LoginResult(token=token, user=identity)

    def issue_token(self, identity: CurrentUser, now=None) -> str:
        return create_access_token(
            identity.model_dump(), self.secret, self.algorithm, self.expire_minutes, now=now
        )

    # ==========================================================
    # 토큰 검증 (미들웨어에서 사용)
    # ==========================================================
    def verify_token(self, token: str) -> CurrentUser:
        try:
            claims = decode_access_token(token, self.secret, self.algorithm)
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token has expired")
        except jwt.InvalidTokenError:
            raise InvalidToken()

        try:
            return CurrentUser.model_validate(claims)
        except PydanticValidationError:
            raise InvalidToken("Token payload is malformed")

    # ==========================================================
    # 내 정보
    # ==========================================================
    def get_current_user(self, user_id: int) -> UserProfile:
        with self.db.session() as session:
            user = session.get(User, user_id)
            if user is None:
                raise NotFoundError("User not found")

            profile = UserProfile(
                id=user.id,
                username=user.username,
                name=user.name,
                role=user.role,
                status=user.status,
                created_at=user.created_at,
            )

            # 학생이면 학번/반/전공 추가
            if user.role == "student":
                row = session.execute(
                    select(Student.student_code, Class.name.label("class_name"), Class.major)
                    .outerjoin(Class, Student.class_id == Class.id)
                    .where(Student.user_id == user_id)
                ).first()
                if row is not None:
                    profile.student_code = row.student_code
                    profile.class_name = row.class_name
                    profile.major = row.major

        return profile
