"""Helpers for pulling values out of rendered inventory pages."""

import re

_CSRF_RE = re.compile(r'name="csrf" value="([^"]+)"')
_ROW_RE = re.compile(r'data-product-id="(\d+)"')


def csrf_from(html: str) -> str:
    match = _CSRF_RE.search(html)
    assert match, "page did not render a CSRF token"
    return match.group(1)


def product_ids_from(html: str) -> list[int]:
    return [int(pid) for pid in _ROW_RE.findall(html)]
