from typing import List

def csv_to_list(v: str | List[str] | None) -> List[str]:
    if v is None:
        return []
    if isinstance(v, (list, tuple, set)):
        return [str(s).strip() for s in v if s and str(s).strip()]
    return [s.strip() for s in str(v).split(",") if s.strip()]


def normalize_exts(v: str | List[str] | None) -> List[str]:
    """Lowercase extensions with a single leading dot: "MP4" -> ".mp4"."""
    return ["." + s.lower().lstrip(".") for s in csv_to_list(v)]
