"""Unit tests for core/pipeline.py"""

import pytest

from blockpub.core.blocks.transform import default_converters
from blockpub.core.models import Page, Post
from blockpub.core.pipeline import load_content, resolve_layout, run_build


# --- resolve_layout ---

def test_resolve_layout_creates_output_dirs(site_dir, tmp_path):
    layout = resolve_layout(str(site_dir), str(tmp_path / "dist"))
    assert layout.site_config == site_dir / "config.json"
    assert layout.permalink_dir.is_dir()


def test_resolve_layout_explicit_site_config(site_dir, tmp_path):
    alt = tmp_path / "alt.json"
    alt.write_text((site_dir / "config.json").read_text())
    layout = resolve_layout(str(site_dir), str(tmp_path / "dist"), str(alt))
    assert layout.site_config == alt


def test_resolve_layout_missing_css(site_dir, tmp_path):
    (site_dir / "css" / "style.css").unlink()
    (site_dir / "css").rmdir()
    with pytest.raises(NotADirectoryError, match="css"):
        resolve_layout(str(site_dir), str(tmp_path / "dist"))


# --- load_content ---

def test_load_content_splits_posts_and_pages(site_dir):
    posts, pages = load_content(site_dir / "content", default_converters())
    assert list(posts) == ["posts/hello.post"]
    assert list(pages) == ["index.page"]
    assert isinstance(posts["posts/hello.post"], Post)
    assert isinstance(pages["index.page"], Page)


def test_load_content_wraps_errors_with_file(site_dir):
    """A bad content file aborts loading with the offending path in the message."""
    (site_dir / "content" / "bad.post").write_text("type::post\npost..title:markdown\n+++\nx\n")
    with pytest.raises(RuntimeError, match="bad.post"):
        load_content(site_dir / "content", default_converters())


# --- run_build ---

def test_run_build_writes_site(site_dir, tmp_path):
    """Posts, section index pages, permalinks, and css all land in the destination."""
    dist = tmp_path / "dist"
    results = run_build(str(site_dir), str(dist))

    assert len(results) == 2
    post_html = (dist / "posts" / "hello.html").read_text()
    assert "<title>My Site | Hello</title>" in post_html
    assert "<p>Some <em>body</em> text.</p>" in post_html

    index_html = (dist / "index.html").read_text()
    assert '<a href="posts/hello.html">Hello</a>' in index_html

    assert (dist / "css" / "style.css").exists()
    permalinks = list((dist / "permalink").glob("*.html"))
    assert len(permalinks) == 1
    assert permalinks[0].read_text() == post_html


def test_run_build_missing_index_page(site_dir, tmp_path):
    (site_dir / "content" / "index.page").unlink()
    with pytest.raises(RuntimeError, match="Missing index page 'index.page' for section 'Home'"):
        run_build(str(site_dir), str(tmp_path / "dist"))


def test_run_build_duplicate_content_name(site_dir, tmp_path):
    """Two posts resolving to the same content name would overwrite each other's URL."""
    hello = site_dir / "content" / "posts" / "hello.post"
    (site_dir / "content" / "archive").mkdir()
    (site_dir / "content" / "archive" / "old.post").write_text(
        hello.read_text().replace('"directory": "posts"', '"directory": "archive"')
    )
    with pytest.raises(RuntimeError, match="share the content name 'hello'"):
        run_build(str(site_dir), str(tmp_path / "dist"))


def test_run_build_post_name_defaults_to_file_stem(site_dir, tmp_path):
    """Without metadata.content_name the output file is named after the content file."""
    post = site_dir / "content" / "posts" / "hello.post"
    post.write_text(post.read_text().replace(', "content_name": "hello"', ""))
    # the index page links posts.hello, which the stem fallback still provides
    dist = tmp_path / "dist"
    run_build(str(site_dir), str(dist))
    assert (dist / "posts" / "hello.html").exists()
