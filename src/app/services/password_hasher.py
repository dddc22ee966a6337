import bcrypt


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a plaintext password with bcrypt"""
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds)).decode()


def check_password(password_hash: str, password: str) -> bool:
    """Constant-time bcrypt comparison; malformed hashes never match"""
    try:
        return bcrypt.checkpw(password.encode(), password_hash.encode())
    except ValueError:
        return False
