"""Wisp static site generator.

This package renders pages and timestamped posts into HTML documents using a
themeable set of Jinja2 templates, with pagination and category/tag listings.

The rendering core lives in ``wisp.site`` (``SiteRenderer``). Around it the
package ships a configuration loader, a content loader, a site builder and a
command line interface.

Module layout:
- renderers: Markdown to HTML conversion with front matter stripping.
- pagination: Post filtering and page window arithmetic.
- themes: Theme directory and template resolution.
- viewmodels: Data structures handed to templates.
- templates: Template execution, helpers and minification.
- site: One render entry point per content kind.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
