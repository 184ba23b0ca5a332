DEFAULT_LIMIT = 10
MAX_LIMIT = 100


def _as_int(raw, default: int, name: str) -> int:
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise ValueError(f'{name} must be int') from None


def normalize_pagination(limit_raw, offset_raw, default_limit: int = DEFAULT_LIMIT):
    """Return (limit, offset) with limit clamped to 1..MAX_LIMIT and offset >= 0."""
    limit = _as_int(limit_raw, default_limit, 'limit')
    offset = _as_int(offset_raw, 0, 'offset')
    return max(1, min(limit, MAX_LIMIT)), max(0, offset)


def paginate(items: list, limit: int, offset: int):
    """Slice an in-memory listing; returns (page, total)."""
    return items[offset:offset + limit], len(items)


def build_list_payload(rows: list, total: int, limit: int, offset: int):
    return {
        'data': rows,
        'pagination': {
            'total': total,
            'limit': limit,
            'offset': offset,
            'returned': len(rows),
        },
    }
