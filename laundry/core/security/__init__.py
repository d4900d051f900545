from laundry.core.security.password_hasher import PasswordHasher
from laundry.core.security.jwt_handler import JWTManager

__all__ = ["PasswordHasher", "JWTManager"]
