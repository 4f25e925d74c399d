def make_log_tag(file, resource, method, ip, subject_id=None, role=None, **kwargs):
    log_tag = (
        f"[{file}]"
        f"[{resource}]"
        f"[{method}]"
        f"[ip:{ip}]"
        f"[subject:{subject_id}]"
        f"[role:{role}]"
    )

    # extra context fields
    for key, value in kwargs.items():
        log_tag += f"[{key}:{value}]"

    return log_tag


def normalize_label(value):
    """Trim and lower-case an account or day label. Non-strings pass through untouched."""
    if isinstance(value, str):
        return value.strip().lower()
    return value
