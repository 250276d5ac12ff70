from __future__ import annotations

import markdown as md

from colecto.core.sanitize import sanitize_rendered_html


class MarkdownRenderer:
    """Editor text -> sanitized HTML for the read-only preview pane."""

    extensions = ["fenced_code", "tables", "sane_lists"]

    def render_body(self, text: str) -> str:
        rendered = md.markdown(text or "", extensions=self.extensions)
        return sanitize_rendered_html(rendered)

    def render_page(self, text: str, *, dark: bool = True) -> str:
        fg, bg, code_bg = ("#e6e6e6", "#0a0a0a", "#1e1e1e") if dark else ("#1a1a1a", "#ffffff", "#f5f5f5")
        return f"""\
<html>
<head>
  <meta charset="utf-8"/>
  <style>
    body {{ font-family: sans-serif; color: {fg}; background: {bg}; line-height: 1.5; }}
    code, pre {{ background: {code_bg}; }}
    a {{ text-decoration: none; }}
  </style>
</head>
<body>{self.render_body(text)}</body>
</html>
"""
