# site_meta.py

from typing import Any, List, Mapping, Optional

import config
from head_meta import SiteMetadataEntry


def absolute_url(base: str, path: str) -> str:
    """把站内相对路径拼接到 base 上；已经是绝对地址的保持不变。"""
    if not path or path.startswith(('http://', 'https://', '//')):
        return path
    return f"{base.rstrip('/')}/{path.lstrip('/')}"


def get_site_meta(meta: Optional[Mapping[str, Any]] = None,
                  base_url: Optional[str] = None) -> List[SiteMetadataEntry]:
    """
    生成描述页面的社交卡片 <meta> 列表 (Open Graph + Twitter)。
    meta 可提供 type / url / title / description / mainImage，缺失的字段使用
    config.SITE_META_DEFAULTS；url 默认为 base_url，没有 base_url 时为 config.SITE_URL。
    每个条目都带 hid，以便后面的同名条目覆盖。
    """
    meta = meta or {}
    defaults = config.SITE_META_DEFAULTS
    site_url = base_url or config.SITE_URL

    def pick(key: str, fallback: str) -> str:
        value = meta.get(key)
        return str(value) if value else fallback

    page_type = pick('type', defaults['type'])
    url = pick('url', site_url)
    title = pick('title', defaults['title'])
    description = pick('description', defaults['description'])
    image = absolute_url(site_url, pick('mainImage', defaults['mainImage']))

    return [
        SiteMetadataEntry.of_name('description', description, hid='description'),
        SiteMetadataEntry.of_property('og:type', page_type, hid='og:type'),
        SiteMetadataEntry.of_property('og:url', url, hid='og:url'),
        SiteMetadataEntry.of_property('og:title', title, hid='og:title'),
        SiteMetadataEntry.of_property('og:description', description, hid='og:description'),
        SiteMetadataEntry.of_property('og:image', image, hid='og:image'),
        SiteMetadataEntry.of_name('twitter:url', url, hid='twitter:url'),
        SiteMetadataEntry.of_name('twitter:title', title, hid='twitter:title'),
        SiteMetadataEntry.of_name('twitter:description', description, hid='twitter:description'),
        SiteMetadataEntry.of_name('twitter:image', image, hid='twitter:image'),
    ]
