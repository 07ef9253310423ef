from markupsafe import Markup

from wisp.protocols import BodyTransformer
from wisp.renderers import MarkdownRenderer, _generate_heading_id


def test_generate_heading_id():
    assert _generate_heading_id("Hello World!") == "hello-world"
    assert _generate_heading_id("Using <code>pip</code> today") == "using-pip-today"
    assert _generate_heading_id("???") == "section"


def test_markdown_renderer_returns_markup():
    html = MarkdownRenderer().render("# Hello\n\nWorld")
    assert isinstance(html, Markup)
    assert '<h1 id="hello">Hello</h1>' in html
    assert "<p>World</p>" in html


def test_markdown_strips_frontmatter():
    html = MarkdownRenderer().render("---\ntitle: Secret\n---\nVisible body")
    assert "Secret" not in html
    assert "Visible body" in html


def test_markdown_strips_toml_frontmatter():
    html = MarkdownRenderer().render('+++\ntitle = "Secret"\n+++\nVisible')
    assert "Secret" not in html
    assert "+++" not in html
    assert "<p>Visible</p>" in html


def test_duplicate_heading_ids():
    html = MarkdownRenderer().render("## Intro\n\n## Intro\n\n## Intro")
    assert 'id="intro"' in html
    assert 'id="intro-1"' in html
    assert 'id="intro-2"' in html


def test_footnotes():
    html = MarkdownRenderer().render("Claim[^1]\n\n[^1]: Source\n")
    assert 'class="footnotes"' in html
    assert "Source" in html


def test_code_block_highlighting():
    html = MarkdownRenderer().render("```python\ndef main():\n    pass\n```\n")
    assert 'class="highlight"' in html
    assert '<span class="k">def</span>' in html


def test_code_block_unknown_language_is_escaped():
    html = MarkdownRenderer().render("```nosuchlang\nx < y\n```\n")
    assert 'class="language-nosuchlang"' in html
    assert "x &lt; y" in html


def test_code_block_without_language():
    html = MarkdownRenderer().render("```\n<b>raw</b>\n```\n")
    assert "<pre><code>&lt;b&gt;raw&lt;/b&gt;" in html


def test_transform_file(tmp_path):
    body = tmp_path / "index.md"
    body.write_text("---\ntitle: T\n---\n*emphasis*\n", encoding="utf-8")
    html = MarkdownRenderer().transform_file(body)
    assert "<em>emphasis</em>" in html


def test_markdown_renderer_implements_protocol():
    assert isinstance(MarkdownRenderer(), BodyTransformer)
