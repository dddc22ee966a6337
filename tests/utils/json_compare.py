from typing import Dict, Iterable

# Server-generated fields that differ on every run
GENERATED_USER_KEYS = {"id", "created_at"}


def exclude_keys(data: Dict, keys: Iterable[str] = GENERATED_USER_KEYS) -> Dict:
    keys = set(keys)
    return {k: v for k, v in data.items() if k not in keys}
