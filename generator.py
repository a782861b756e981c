# generator.py

import json
import os
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from jinja2 import Environment, FileSystemLoader
from pygments.formatters import HtmlFormatter

import config
from builder import ConfigTree, HeadConfig
from head_meta import resolve_meta

# --- Jinja2 环境配置 ---
TEMPLATE_DIR = os.path.join(os.path.dirname(__file__), 'templates')
env = Environment(
    loader=FileSystemLoader(TEMPLATE_DIR),
    autoescape=True,
    trim_blocks=True,
    lstrip_blocks=True
)


def render_head(head: HeadConfig) -> str:
    """
    渲染 <head> 片段。
    meta 先经过 resolve_meta：同 hid 只输出最后声明的那一个，没有 hid 的全部保留。
    """
    template = env.get_template('head.html')
    return template.render(head=head, meta=resolve_meta(head.meta))


def render_page(head: HeadConfig, content_html: str, toc_html: str = '') -> str:
    """生成内容页的最小 HTML 外壳 (head + 正文)。"""
    template = env.get_template('page.html')
    return template.render(
        head=head,
        meta=resolve_meta(head.meta),
        content_html=content_html,
        toc_html=toc_html,
        assets_dir=config.ASSETS_DIR_NAME,
        highlight_css=config.HIGHLIGHT_CSS_FILE,
    )


def render_config_json(tree: ConfigTree) -> str:
    """配置树 -> nuxt.config.json (保留原始的 meta 顺序，不去重)。"""
    return json.dumps(tree.to_dict(), ensure_ascii=False, indent=2) + '\n'


def render_tailwind_config(tailwind: Optional[Dict[str, Any]] = None) -> str:
    tailwind = config.TAILWIND_CONFIG if tailwind is None else tailwind
    return f"module.exports = {json.dumps(tailwind, ensure_ascii=False, indent=2)}\n"


def render_highlight_css(style: Optional[str] = None) -> str:
    """Pygments 代码高亮样式，选择器与 codehilite 的 css_class 一致。"""
    formatter = HtmlFormatter(style=style or config.PYGMENTS_STYLE)
    return formatter.get_style_defs(f".{config.CODE_HIGHLIGHT_CLASS}") + '\n'


def generate_sitemap(base_url: str, pages: Iterable[Dict[str, Any]]) -> str:
    """生成 sitemap.xml；pages 中每项需要 url，可选 date。"""
    urls: List[str] = [
        f"<url><loc>{base_url.rstrip('/')}/</loc><priority>1.0</priority></url>"
    ]
    for page in pages:
        lastmod = ''
        if isinstance(page.get('date'), date):
            lastmod = f"<lastmod>{page['date'].strftime('%Y-%m-%d')}</lastmod>"
        urls.append(f"<url><loc>{page['url']}</loc>{lastmod}<priority>0.6</priority></url>")

    return f'<?xml version="1.0" encoding="UTF-8"?><urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">{"".join(urls)}</urlset>'
