from pathlib import Path

from wisp import utils


def test_slugify_and_titleize():
    assert utils.slugify("Hello World") == "hello-world"
    assert utils.slugify("mixed-case-slug") == "mixed-case-slug"
    assert utils.slugify("!!!") == "index"
    assert utils.titleize("getting-started.md") == "Getting Started"
    assert utils.titleize("about_us") == "About Us"
    assert utils.titleize("") == "Untitled"


def test_url_join():
    assert utils.url_join("category", "news") == "/category/news"
    assert utils.url_join("/tag/", "/python/") == "/tag/python"
    assert utils.url_join("/", "tag", "") == "/tag"
    assert utils.url_join("") == "/"


def test_output_file():
    out = Path("public")
    assert utils.output_file(out, "/") == out / "index.html"
    assert utils.output_file(out, "/post/hello") == out / "post" / "hello" / "index.html"
    assert utils.output_file(out, "/posts/page/2/") == out / "posts" / "page" / "2" / "index.html"


def test_ensure_clean_dir(tmp_path):
    target = tmp_path / "build"
    (target / "nested").mkdir(parents=True)
    (target / "old.txt").write_text("old", encoding="utf-8")
    (target / "nested" / "deep.txt").write_text("deep", encoding="utf-8")
    utils.ensure_clean_dir(target)
    assert target.is_dir()
    assert list(target.iterdir()) == []

    fresh = tmp_path / "fresh" / "dir"
    utils.ensure_clean_dir(fresh)
    assert fresh.is_dir()
