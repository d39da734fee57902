import re


def regex_str(cls) -> str:
    """Anchored pattern matching exactly one declared name."""
    return "^(?:" + "|".join(re.escape(name) for name in cls.ordinals()) + ")$"


def regex_pattern(cls, flags=0) -> "re.Pattern":
    return re.compile(regex_str(cls), flags)
