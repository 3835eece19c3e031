LIKE_ESCAPE = "\\"


def like_pattern(query: str) -> str:
    """Contains-pattern for ``ilike`` with LIKE wildcards in ``query`` escaped."""
    escaped = (
        query.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
