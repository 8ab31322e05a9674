"""Slug generation for heading anchors and new post identifiers"""

import re


_FROM = 'àáäâãåăæçèéëêǵḧìíïîḿńǹñòóöôœøṕŕßśșțùúüûǘẃẍÿź·/_,:;'
_TO   = 'aaaaaaaaceeeeghiiiimnnnooooooprssstuuuuuwxyz------'
_TRANSLITERATE = str.maketrans(_FROM, _TO)


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug."""
    text = str(text).lower()
    text = re.sub(r'\s+', '-', text)
    text = text.translate(_TRANSLITERATE)
    text = text.replace('&', '-and-')
    text = re.sub(r'[^\w-]+', '', text, flags=re.ASCII)
    text = re.sub(r'-{2,}', '-', text)
    return text.strip('-')
