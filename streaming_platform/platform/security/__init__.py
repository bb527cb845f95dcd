from streaming_platform.platform.security.auth import get_current_account, get_optional_account
from streaming_platform.platform.security.jwt import create_access_token
from streaming_platform.platform.security.passwords import hash_password, verify_password

__all__ = ["create_access_token", "get_current_account", "get_optional_account", "hash_password", "verify_password"]
