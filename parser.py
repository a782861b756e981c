# parser.py

import os
import re
import unicodedata
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import markdown
import yaml
from bs4 import BeautifulSoup

import config
from head_meta import MetadataError, SiteMetadataEntry
from site_meta import absolute_url


# 辅助函数 - 将日期时间对象标准化为日期对象
def standardize_date(dt_obj: Any) -> Optional[date]:
    """将 datetime / date / ISO 字符串标准化为 date；无法识别时返回 None。"""
    if isinstance(dt_obj, datetime):
        return dt_obj.date()
    if isinstance(dt_obj, date):
        return dt_obj
    if isinstance(dt_obj, str):
        try:
            return date.fromisoformat(dt_obj.strip())
        except ValueError:
            return None
    return None


def my_custom_slugify(s: str, separator: str) -> str:
    """TOC 锚点用的 slugify，保留中文等 Unicode 字符。"""
    s = str(s).lower().strip()
    s = unicodedata.normalize('NFKD', s)
    s = re.sub(r'[^\w\s-]', '', s)
    s = re.sub(r'[\s-]+', separator, s).strip(separator)
    return s


def to_slug(name: str) -> str:
    """页面 / 标签名 -> URL 友好的 slug。"""
    return my_custom_slugify(name, '-')


def slug_from_filename(md_file_path: str) -> str:
    """2021-05-01-hello-world.md -> hello-world"""
    base_name = os.path.splitext(os.path.basename(md_file_path))[0]
    slug_match = re.match(r'^(\d{4}-\d{2}-\d{2}-)?(.*)$', base_name)
    if slug_match and slug_match.group(2):
        return to_slug(slug_match.group(2))
    return to_slug(base_name)


def split_front_matter(content: str, source: str = '<string>') -> Tuple[Dict[str, Any], str]:
    """分离 YAML front matter 与正文。解析失败时打印错误并返回空元数据。"""
    match = re.match(r'---\s*\n(.*?)\n---\s*\n', content, re.DOTALL)
    if not match:
        return {}, content

    body = content[len(match.group(0)):]
    try:
        metadata = yaml.safe_load(match.group(1)) or {}
    except yaml.YAMLError as exc:
        print(f"Error parsing YAML frontmatter in {source}: {exc}")
        return {}, body

    if not isinstance(metadata, dict):
        print(f"Error: frontmatter in {source} is not a mapping, ignored.")
        return {}, body
    return metadata, body


def render_markdown(content_markdown: str) -> Tuple[str, str]:
    """Markdown -> (content_html, toc_html)"""
    extension_configs = {k: dict(v) for k, v in config.MARKDOWN_EXTENSION_CONFIGS.items()}
    if 'toc' in extension_configs:
        extension_configs['toc']['slugify'] = my_custom_slugify

    md = markdown.Markdown(
        extensions=config.MARKDOWN_EXTENSIONS,
        extension_configs=extension_configs,
        output_format='html5',
    )
    content_html = md.convert(content_markdown)

    # 图片懒加载
    if '<img' in content_html:
        soup = BeautifulSoup(content_html, 'html.parser')
        for img in soup.find_all('img'):
            if not img.get('loading'):
                img['loading'] = 'lazy'
        content_html = str(soup)

    toc_html = getattr(md, 'toc', '')
    return content_html, toc_html


def get_metadata_and_content(md_file_path: str) -> Tuple[Dict[str, Any], str, str, str]:
    """
    从 Markdown 文件中读取 Frontmatter 元数据和内容。
    返回: (metadata, content_markdown, content_html, toc_html)
    """
    try:
        with open(md_file_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except OSError as e:
        print(f"Error reading file {md_file_path}: {e}")
        return {}, "", "", ""

    metadata, content_markdown = split_front_matter(content, md_file_path)

    # 1. slug (清洗后为空时回退到文件名)
    slug = to_slug(str(metadata['slug'])) if metadata.get('slug') else ''
    metadata['slug'] = slug or slug_from_filename(md_file_path)

    # 2. title
    if not metadata.get('title'):
        metadata['title'] = metadata['slug'].replace('-', ' ').title()

    # 3. date
    metadata['date'] = standardize_date(metadata.get('date'))

    # 4. tags
    tags_list = metadata.get('tags') or []
    if isinstance(tags_list, str):
        tags_list = [t.strip() for t in tags_list.split(',')]
    elif not isinstance(tags_list, (list, tuple)):
        tags_list = [tags_list]
    metadata['tags'] = [str(t) for t in tags_list if t]

    # 5. description
    metadata['description'] = metadata.get('description') or metadata.get('summary') or ''

    content_html, toc_html = render_markdown(content_markdown)
    return metadata, content_markdown, content_html, toc_html


def is_page_hidden(metadata: Dict[str, Any]) -> bool:
    return str(metadata.get('status', 'published')).lower() == 'draft' or metadata.get('hidden') is True


def page_url(metadata: Dict[str, Any], base_url: Optional[str]) -> str:
    return absolute_url(base_url or config.SITE_URL, f"{metadata['slug']}/")


def page_meta(metadata: Dict[str, Any], base_url: Optional[str]) -> Dict[str, Any]:
    """front matter -> get_site_meta 使用的页面描述"""
    meta = {
        'type': 'article',
        'url': page_url(metadata, base_url),
        'title': metadata.get('title'),
        'description': metadata.get('description'),
    }
    if metadata.get('image'):
        meta['mainImage'] = metadata['image']
    return meta


def get_head_overrides(metadata: Dict[str, Any], source: str = '<string>') -> List[SiteMetadataEntry]:
    """
    页面自己的 <meta>：front matter 中的 head 列表，外加每个标签一个 article:tag。
    无法识别的条目打印后跳过。
    """
    entries = []
    for tag in metadata.get('head') or []:
        if not isinstance(tag, dict):
            print(f"   -> [WARNING] {source}: head entry {tag!r} is not a mapping, skipped.")
            continue
        try:
            entries.append(SiteMetadataEntry.from_tag(tag))
        except MetadataError as e:
            print(f"   -> [WARNING] {source}: {e}")

    if metadata.get('date'):
        entries.append(SiteMetadataEntry.of_property(
            'article:published_time', metadata['date'].isoformat(), hid='article:published_time'))
    for tag_name in metadata.get('tags', []):
        # 没有 hid，允许多个
        entries.append(SiteMetadataEntry.of_property('article:tag', tag_name))
    return entries
