import json

import pytest

from render_localized_html.translations import parse_translation_table

SOURCE_HTML = """<!DOCTYPE html>
<html lang="en">
<head><title id="title">Title</title></head>
<body>
<h1 id="heading">Heading</h1>
<span id="greeting">placeholder</span>
<p class="intro">Untouched text</p>
</body>
</html>
"""

TABLE = {
    "defaultCulture": "en-US",
    "ids": {
        "greeting": {"en-US": "Hello", "ja-JP": "こんにちは"},
    },
}


@pytest.fixture
def table():
    return parse_translation_table(json.dumps(TABLE))


@pytest.fixture
def workspace(tmp_path):
    (tmp_path / "site").mkdir()
    (tmp_path / "site" / "index.html").write_text(SOURCE_HTML, encoding="utf-8")
    (tmp_path / "translation.json").write_text(
        json.dumps(TABLE, ensure_ascii=False), encoding="utf-8")
    return tmp_path
