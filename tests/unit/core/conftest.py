"""Shared fixtures for core unit tests"""

import pytest

from mdpage.core.blocks import parse_blocks


SAMPLE_MD = """\
# Heading 1

A paragraph with **bold** text
that continues here.

## Heading 2

- item one
- [x] done
- [ ] todo

```python
print("hello")
```

> quoted line
> second line

| A | B |
|:--|--:|
| 1 | 2 |

---

Footer paragraph.
"""

SAMPLE_FM_MD = """\
---
title: Test Doc
subtitle: A short test
author: Ada
date: 2024-05-01
---

# Test Doc

Body content.
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_fm_md")
def sample_fm_md_fixture():
    return SAMPLE_FM_MD


@pytest.fixture(name="sample_result")
def sample_result_fixture():
    return parse_blocks(SAMPLE_MD)
