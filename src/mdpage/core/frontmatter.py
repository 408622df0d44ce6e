"""Leading `key: value` metadata block extraction"""

import re


FRONTMATTER_RE = re.compile(r'^---\n(.*?)\n---\n(.*)$', re.DOTALL)


def extract_frontmatter(text: str) -> tuple[dict[str, str], str]:
    """Return (meta, body) with the delimited header removed.

    Only an exact `---` / lines / `---` / newline prefix is recognized; anything
    else yields ({}, text). Lines split on the first colon, so values may contain
    colons. Lines without a colon are ignored and the first occurrence of a key wins.
    """
    m = FRONTMATTER_RE.match(text)
    if not m:
        return {}, text

    meta: dict[str, str] = {}
    for line in m.group(1).split('\n'):
        key, sep, value = line.partition(':')
        key = key.strip()
        if not sep or not key:
            continue
        meta.setdefault(key, value.strip())
    return meta, m.group(2)
