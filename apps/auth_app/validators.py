import re


def validate_display_name(value: str, field_name: str = "name") -> None:
    value = (value or "").strip()

    if len(value) < 1 or len(value) > 100:
        raise ValueError(f"{field_name.capitalize()} must contain from 1 to 100 characters.")

    if re.search(r"[<>{}\[\]\\|\x00-\x1f]", value):
        raise ValueError(f"{field_name.capitalize()} contains invalid characters.")


def normalize_subjects(value) -> list:
    if value is None:
        return []

    if not isinstance(value, (list, tuple)):
        raise ValueError("Subjects must be a list of strings.")

    subjects = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("Subjects must be a list of strings.")
        item = item.strip()
        if item and item not in subjects:
            subjects.append(item)
    return subjects
