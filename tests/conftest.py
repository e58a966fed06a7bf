"""Root test configuration: session cleanup and a sample site source tree"""

import json
from pathlib import Path

import pytest


_PROJECT_ROOT = Path(__file__).parent.parent

_CLEANUP_FILES = ["blockpub.db", "test.db"]


HELLO_POST = """\
type::post
post.metadata:json
+++
{"author_name": "Jane", "published_date": "2024-01-01", "content_name": "hello", "directory": "posts"}
+++

post.title:markdown
+++
Hello
+++

post.content:markdown->html
+++
Some *body* text.
"""

INDEX_PAGE = """\
type::page
page.metadata:json
+++
{"author_name": "Jane", "published_date": "2024-01-02"}
+++
page.title:markdown
+++
Home
+++
page.content:html
+++
<a href="{{ posts.hello }}">Hello</a>
+++
"""

POST_TMPL = "<title>{{ site.site_title }} | {{ post.title }}</title>\n<main>{{ content }}</main>\n"
CONTENT_TMPL = "<title>{{ site.site_title }}</title>\n<main>{{ content }}</main>\n"


@pytest.fixture(scope="session", autouse=True)
def cleanup_artifacts():
    """Remove DB files created during the test session."""
    yield
    for name in _CLEANUP_FILES:
        p = _PROJECT_ROOT / name
        if p.exists():
            p.unlink()


@pytest.fixture(name="site_dir")
def site_dir_fixture(tmp_path):
    """A minimal source tree: one post, one index page, templates, css, and config.json."""
    site = tmp_path / "site"
    (site / "content" / "posts").mkdir(parents=True)
    (site / "css").mkdir()
    (site / "templates").mkdir()
    (site / "content" / "posts" / "hello.post").write_text(HELLO_POST)
    (site / "content" / "index.page").write_text(INDEX_PAGE)
    (site / "css" / "style.css").write_text("body { margin: 0; }\n")
    (site / "templates" / "post.tmpl").write_text(POST_TMPL)
    (site / "templates" / "content.tmpl").write_text(CONTENT_TMPL)
    (site / "config.json").write_text(json.dumps({
        "site_title": "My Site",
        "language_code": "en",
        "sections": [{"name": "Home", "site_path": ".", "index_content": "index.page"}],
    }))
    return site
