"""
安全工具模块 (Security Tools Module)

提供密码哈希加密、JWT 令牌生成与解析等安全功能。
使用 bcrypt 算法进行密码加密，JWT 进行用户认证。

Provides password hashing and JWT token generation/parsing. Uses the bcrypt
algorithm for password hashing and JWT for user authentication.
"""
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.core.config import settings

# 密码哈希上下文，使用 bcrypt 算法 (Password Hash Context using bcrypt algorithm)
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    对明文密码进行哈希加密 (Hash plain text password)

    生成的哈希值包含盐值，每次哈希同一密码都会产生不同的结果。

    Args:
        password (str): 用户输入的明文密码 (User's plain text password)

    Returns:
        str: bcrypt 哈希后的密码字符串 (bcrypt hashed password string)
    """
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """
    验证明文密码是否与哈希值匹配 (Verify if plain text password matches hash)

    Returns:
        bool: 密码匹配返回 True，否则返回 False (True if password matches, False otherwise)
    """
    return pwd_context.verify(plain, hashed)


def create_access_token(subject: str, kind: str = "user") -> str:
    """
    生成访问令牌 (Generate access token)

    Args:
        subject (str): 账户标识 (Account identifier)
        kind (str): 账户类型 user / business (Account kind)

    Returns:
        str: JWT 访问令牌字符串 (JWT access token string)
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_access_token_expire_minutes)
    return jwt.encode(
        {"sub": subject, "exp": expire, "type": "access", "kind": kind},
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm
    )


def decode_token(token: str) -> dict | None:
    """
    解析 JWT 令牌，失败返回 None (Decode JWT token, return None on failure)

    令牌格式错误、签名无效或已过期时返回 None。
    """
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
