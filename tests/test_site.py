import io
import re
from datetime import datetime
from pathlib import Path

import pytest

from wisp.config import ConfigError, SiteConfig
from wisp.content import Group, Page, Post
from wisp.pagination import ListKind
from wisp.site import SiteRenderer
from wisp.templates import TemplateHelpers
from wisp.themes import TemplateMissingError

BASE = "<title>{{ content_title }} | {{ website_title }}</title>{% block body %}{% endblock %}"

LIST = (
    '{% extends "_base.html" %}{% block body %}'
    "<h1>{{ path }}</h1>"
    "<p class=page>{{ current_page }}/{{ max_page }}</p>"
    "<ul>{% for post in posts %}<li>{{ post.title }}</li>{% endfor %}</ul>"
    "{% if current_page < max_page %}<a rel=next href=\"{{ path }}/page/{{ add(current_page, 1) }}\">next</a>{% endif %}"
    "{% for c in categories %}<span class=cat>{{ c.path }}</span>{% endfor %}"
    "{% for t in tags %}<span class=tag>{{ t.path }}</span>{% endfor %}"
    "<nav>{% for p in pages %}<a href=\"{{ p.url }}\">{{ p.title }}</a>{% endfor %}</nav>"
    "{% endblock %}"
)

FRONTPAGE = '{% extends "_base.html" %}{% block body %}<main class=front>{% for post in posts %}{{ post.title }};{% endfor %}</main>{% endblock %}'

PAGE = (
    '{% extends "_base.html" %}{% block body %}'
    "<article data-author=\"{{ content_author }}\" data-desc=\"{{ content_desc }}\">{{ html }}</article>"
    "<img src=\"{{ thumbnail }}\">"
    "{% endblock %}"
)

POST = (
    '{% extends "_base.html" %}{% block body %}'
    "<article data-author=\"{{ content_author }}\">{{ html }}</article>"
    "<span class=category data-path=\"{{ category.path }}\">{{ category.name }}</span>"
    "{% for tag in tags %}<a class=tag href=\"{{ tag.path }}\">{{ tag.name }}</a>{% endfor %}"
    "<time>{{ created_at | format_time }}</time><time>{{ updated_at | format_time('%Y-%m-%d') }}</time>"
    "{% if older %}<a class=older href=\"{{ older.url }}\">{{ older.title }}</a>{% endif %}"
    "{% if newer %}<a class=newer href=\"{{ newer.url }}\">{{ newer.title }}</a>{% endif %}"
    "{% endblock %}"
)


def create_theme(root: Path, frontpage: bool = False, **overrides) -> Path:
    theme = root / "theme" / "plain"
    theme.mkdir(parents=True, exist_ok=True)
    files = {"_base.html": BASE, "list.html": LIST, "page.html": PAGE, "post.html": POST}
    if frontpage:
        files["frontpage.html"] = FRONTPAGE
    files.update(overrides)
    for name, text in files.items():
        if text is None:
            continue
        (theme / name).write_text(text, encoding="utf-8")
    return theme


def make_post(root: Path, slug: str, body: str = "Body", **fields) -> Post:
    path = root / "post" / slug / "index.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    fields.setdefault("title", slug.upper())
    fields.setdefault("created_at", datetime(2024, 1, 1))
    fields.setdefault("updated_at", datetime(2024, 1, 2))
    return Post(path=path, slug=slug, **fields)


def make_config(**overrides) -> SiteConfig:
    values = dict(theme="plain", title="My Site", owner="Owner", description="About the site", pagination=2)
    values.update(overrides)
    return SiteConfig(**values)


def render_list(renderer, kind, name, number):
    out = io.BytesIO()
    result = renderer.render_list(kind, name, number, out)
    return result, out.getvalue().decode("utf-8")


def titles(html: str) -> list[str]:
    return re.findall(r"<li>(.*?)</li>", html)


@pytest.fixture
def site(tmp_path):
    create_theme(tmp_path)
    posts = [
        make_post(tmp_path, "a", category="news", tags=("web", "python")),
        make_post(tmp_path, "b", tags=("python",)),
        make_post(tmp_path, "c", category="news"),
    ]
    about = tmp_path / "page" / "about" / "index.md"
    about.parent.mkdir(parents=True)
    about.write_text("---\ntitle: ignored\n---\n# About me\n", encoding="utf-8")
    pages = [Page(path=about, title="About", excerpt="Who", thumbnail="me.png", slug="about")]
    renderer = SiteRenderer(make_config(), pages=pages, posts=posts, root_dir=tmp_path)
    return renderer


# --- Config validation ---


def test_every_entry_point_requires_a_theme(tmp_path):
    create_theme(tmp_path)
    post = make_post(tmp_path, "a")
    renderer = SiteRenderer(make_config(theme=""), posts=[post], root_dir=tmp_path)
    out = io.BytesIO()
    with pytest.raises(ConfigError):
        renderer.render_front_page(out)
    with pytest.raises(ConfigError):
        renderer.render_list(ListKind.DEFAULT, "", 1, out)
    with pytest.raises(ConfigError):
        renderer.render_page(Page(path=post.path, title="P"), out)
    with pytest.raises(ConfigError):
        renderer.render_post(post, None, None, out)
    assert out.getvalue() == b""


# --- Lists ---


def test_list_pagination_example(site):
    count, html = render_list(site, ListKind.DEFAULT, "", 1)
    assert count == 3
    assert titles(html) == ["A", "B"]
    assert "<p class=page>1/2</p>" in html
    assert '<a rel=next href="/posts/page/2">next</a>' in html
    assert "<h1>/posts</h1>" in html
    assert "<title>My Site | My Site</title>" in html

    count, html = render_list(site, ListKind.DEFAULT, "", 2)
    assert count == 3
    assert titles(html) == ["C"]
    assert "<p class=page>2/2</p>" in html
    assert "rel=next" not in html


def test_list_beyond_last_page_is_absent(site):
    result, html = render_list(site, ListKind.DEFAULT, "", 3)
    assert result is None
    assert html == ""


def test_list_page_below_one_is_first_page(site):
    for number in (0, -3):
        count, html = render_list(site, ListKind.DEFAULT, "", number)
        assert count == 3
        assert titles(html) == ["A", "B"]
        assert "<p class=page>1/2</p>" in html


def test_category_list(site):
    count, html = render_list(site, ListKind.CATEGORY, "news", 1)
    assert count == 2
    assert titles(html) == ["A", "C"]
    assert "<h1>/category/news</h1>" in html
    assert "<title>news | My Site</title>" in html


def test_uncategorized_list(site):
    count, html = render_list(site, ListKind.CATEGORY, "uncategorized", 1)
    assert count == 1
    assert titles(html) == ["B"]
    assert "<h1>/category/uncategorized</h1>" in html


def test_tag_list(site):
    count, html = render_list(site, ListKind.TAG, "python", 1)
    assert count == 2
    assert titles(html) == ["A", "B"]
    assert "<h1>/tag/python</h1>" in html

    result, html = render_list(site, ListKind.TAG, "missing", 1)
    assert result is None
    assert html == ""


def test_list_includes_groups_and_navigation(site):
    _, html = render_list(site, ListKind.DEFAULT, "", 1)
    assert re.findall(r"<span class=cat>(.*?)</span>", html) == [
        "/category/uncategorized",
        "/category/news",
    ]
    assert re.findall(r"<span class=tag>(.*?)</span>", html) == ["/tag/python", "/tag/web"]
    assert '<a href="/about">About</a>' in html


def test_explicit_groups_override_derived(tmp_path):
    create_theme(tmp_path)
    post = make_post(tmp_path, "a", tags=("x",))
    renderer = SiteRenderer(
        make_config(),
        posts=[post],
        tags=[Group("custom", "/tag/custom")],
        categories=[],
        root_dir=tmp_path,
    )
    _, html = render_list(renderer, ListKind.DEFAULT, "", 1)
    assert re.findall(r"<span class=tag>(.*?)</span>", html) == ["/tag/custom"]
    assert "class=cat" not in html


def test_list_requires_list_template(tmp_path):
    create_theme(tmp_path, frontpage=True, **{"list.html": None})
    renderer = SiteRenderer(make_config(), posts=[make_post(tmp_path, "a")], root_dir=tmp_path)
    with pytest.raises(TemplateMissingError):
        renderer.render_list(ListKind.DEFAULT, "", 1, io.BytesIO())


# --- Front page ---


def test_front_page_uses_frontpage_template(tmp_path):
    create_theme(tmp_path, frontpage=True)
    posts = [make_post(tmp_path, s) for s in ("a", "b", "c")]
    renderer = SiteRenderer(make_config(), posts=posts, root_dir=tmp_path)
    out = io.BytesIO()
    renderer.render_front_page(out)
    assert out.getvalue().decode("utf-8") == (
        "<title>My Site | My Site</title><main class=front>A;B;</main>"
    )


def test_front_page_falls_back_to_list(site):
    out = io.BytesIO()
    site.render_front_page(out)
    html = out.getvalue().decode("utf-8")
    assert titles(html) == ["A", "B"]
    assert "<p class=page>1/2</p>" in html
    assert "<h1>/posts</h1>" in html


def test_front_page_without_posts(tmp_path):
    create_theme(tmp_path)
    renderer = SiteRenderer(make_config(), root_dir=tmp_path)
    out = io.BytesIO()
    renderer.render_front_page(out)
    html = out.getvalue().decode("utf-8")
    assert "<p class=page>1/0</p>" in html
    assert titles(html) == []


def test_front_page_fails_without_templates(tmp_path):
    create_theme(tmp_path, **{"list.html": None})
    renderer = SiteRenderer(make_config(), root_dir=tmp_path)
    with pytest.raises(TemplateMissingError):
        renderer.render_front_page(io.BytesIO())


# --- Pages ---


def test_render_page(site):
    out = io.BytesIO()
    site.render_page(site.pages[0], out)
    html = out.getvalue().decode("utf-8")
    assert "<title>About | My Site</title>" in html
    assert '<h1 id="about-me">About me</h1>' in html
    assert "ignored" not in html
    assert 'data-desc="Who"' in html
    assert 'data-author="Owner"' in html
    assert '<img src="me.png">' in html


def test_render_page_missing_body(tmp_path):
    create_theme(tmp_path)
    renderer = SiteRenderer(make_config(), root_dir=tmp_path)
    out = io.BytesIO()
    with pytest.raises(FileNotFoundError):
        renderer.render_page(Page(path=tmp_path / "nope.md", title="Nope"), out)
    assert out.getvalue() == b""


def test_render_page_requires_page_template(tmp_path):
    create_theme(tmp_path, **{"page.html": None})
    renderer = SiteRenderer(make_config(), root_dir=tmp_path)
    with pytest.raises(TemplateMissingError):
        renderer.render_page(Page(path=tmp_path / "x.md", title="X"), io.BytesIO())


# --- Posts ---


def test_render_post(tmp_path):
    create_theme(tmp_path)
    post = make_post(
        tmp_path,
        "hello",
        body="---\ntitle: x\n---\nHello **world**\n",
        title="Hello",
        author="Alice",
        category="news",
        tags=("web", "api", "python"),
        created_at=datetime(2024, 3, 5, 9, 0),
        updated_at=datetime(2024, 3, 6, 9, 0),
    )
    older = make_post(tmp_path, "older", title="Older")
    newer = make_post(tmp_path, "newer", title="Newer")
    renderer = SiteRenderer(make_config(), posts=[newer, post, older], root_dir=tmp_path)

    out = io.BytesIO()
    renderer.render_post(post, older, newer, out)
    html = out.getvalue().decode("utf-8")
    assert "<title>Hello | My Site</title>" in html
    assert "<strong>world</strong>" in html
    assert 'data-author="Alice"' in html
    assert '<span class=category data-path="/category/news">news</span>' in html
    assert re.findall(r"<a class=tag href=\"(.*?)\">(.*?)</a>", html) == [
        ("/tag/api", "api"),
        ("/tag/python", "python"),
        ("/tag/web", "web"),
    ]
    assert "<time>05 March 2024</time><time>2024-03-06</time>" in html
    assert '<a class=older href="/post/older">Older</a>' in html
    assert '<a class=newer href="/post/newer">Newer</a>' in html


def test_render_post_uncategorized_without_author(tmp_path):
    create_theme(tmp_path)
    post = make_post(tmp_path, "plain", category="", author="")
    renderer = SiteRenderer(make_config(), posts=[post], root_dir=tmp_path)

    out = io.BytesIO()
    renderer.render_post(post, None, None, out)
    html = out.getvalue().decode("utf-8")
    assert '<span class=category data-path="/category/uncategorized"></span>' in html
    assert 'data-author="Owner"' in html
    assert "class=older" not in html
    assert "class=newer" not in html
    # the content record itself is left untouched
    assert post.author == ""


def test_render_post_requires_post_template(tmp_path):
    create_theme(tmp_path, **{"post.html": None})
    post = make_post(tmp_path, "a")
    renderer = SiteRenderer(make_config(), posts=[post], root_dir=tmp_path)
    with pytest.raises(TemplateMissingError):
        renderer.render_post(post, None, None, io.BytesIO())


# --- Output ---


def test_rendering_twice_is_byte_identical(site):
    first, second = io.BytesIO(), io.BytesIO()
    post = site.posts[0]
    site.render_post(post, site.posts[1], None, first)
    site.render_post(post, site.posts[1], None, second)
    assert first.getvalue() == second.getvalue()


def test_minified_output_keeps_structure(tmp_path):
    document = (
        "<!DOCTYPE html>\n<html>\n<head>\n  <title>{{ content_title }}</title>\n</head>\n"
        "<body>\n  <!-- posts -->\n  <ul>\n  {% for post in posts %}  <li>{{ post.title }}</li>\n  {% endfor %}</ul>\n</body>\n</html>\n"
    )
    create_theme(tmp_path, **{"list.html": document})
    posts = [make_post(tmp_path, s) for s in ("a", "b")]
    plain = SiteRenderer(make_config(), posts=posts, root_dir=tmp_path)
    minified = SiteRenderer(make_config(), posts=posts, minify=True, root_dir=tmp_path)

    plain_out, min_out = io.BytesIO(), io.BytesIO()
    plain.render_list(ListKind.DEFAULT, "", 1, plain_out)
    minified.render_list(ListKind.DEFAULT, "", 1, min_out)

    small = min_out.getvalue()
    assert len(small) < len(plain_out.getvalue())
    assert b"<!-- posts -->" not in small
    assert small.count(b"</li>") == 2
    assert small.index(b"<li>A</li>") < small.index(b"<li>B</li>")
    assert b"<html>" in small and b"</html>" in small


def test_custom_helpers_reach_templates(tmp_path):
    create_theme(tmp_path, **{"page.html": "{{ shout(content_title) }}"})
    helpers = TemplateHelpers()
    helpers.register("shout", lambda s: s.upper() + "!")
    body = tmp_path / "body.md"
    body.write_text("x", encoding="utf-8")
    renderer = SiteRenderer(make_config(), root_dir=tmp_path, helpers=helpers)
    out = io.BytesIO()
    renderer.render_page(Page(path=body, title="quiet"), out)
    assert out.getvalue() == b"QUIET!"
