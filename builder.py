# builder.py

import os
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

import config
from head_meta import SiteMetadataEntry, entries_from_tags, merge_meta
from site_meta import get_site_meta


# --- 辅助函数：冻结 / 解冻嵌套结构 ---

def freeze(value: Any) -> Any:
    """dict -> 只读映射，list/tuple -> tuple，递归处理。"""
    if isinstance(value, Mapping):
        return MappingProxyType({k: freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(v) for v in value)
    return value


def thaw(value: Any) -> Any:
    """freeze 的逆操作，得到可以 json.dump 的普通 dict / list。"""
    if isinstance(value, Mapping):
        return {k: thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [thaw(v) for v in value]
    return value


# --- 环境变量 ---

@dataclass(frozen=True)
class SiteEnvironment:
    """构建时读取的环境值。缺失即为 None，这里不做校验也不设默认值。"""
    host: Optional[str] = None
    port: Optional[str] = None
    base_url: Optional[str] = None

    @classmethod
    def from_environ(cls, environ: Optional[Mapping[str, str]] = None) -> 'SiteEnvironment':
        environ = os.environ if environ is None else environ
        return cls(
            host=environ.get(config.ENV_HOST),
            port=environ.get(config.ENV_PORT),
            base_url=environ.get(config.ENV_BASE_URL),
        )


# --- 配置树 ---

@dataclass(frozen=True)
class RenderMode:
    ssr: bool
    target: str


@dataclass(frozen=True)
class ServerConfig:
    host: Optional[str]
    port: Optional[str]


@dataclass(frozen=True)
class HeadConfig:
    title: str
    meta: Tuple[SiteMetadataEntry, ...]
    links: Tuple[Mapping[str, Any], ...]
    scripts: Tuple[Mapping[str, Any], ...]
    html_attrs: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'script': thaw(self.scripts),
            'htmlAttrs': thaw(self.html_attrs),
            'title': self.title,
            'meta': [entry.to_tag() for entry in self.meta],
            'link': thaw(self.links),
        }


@dataclass(frozen=True)
class BuildConfig:
    postcss_plugins: Mapping[str, Mapping[str, Any]]

    def to_dict(self) -> Dict[str, Any]:
        return {'postcss': {'plugins': thaw(self.postcss_plugins)}}


@dataclass(frozen=True)
class ConfigTree:
    render_mode: RenderMode
    server: ServerConfig
    head: HeadConfig
    css: Tuple[str, ...]
    plugins: Tuple[str, ...]
    components: bool
    build_modules: Tuple[str, ...]
    modules: Tuple[str, ...]
    module_options: Mapping[str, Mapping[str, Any]]
    build: BuildConfig
    base_url: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        """按框架自己的键名输出 (nuxt.config 的形状)。"""
        tree = {
            'ssr': self.render_mode.ssr,
            'target': self.render_mode.target,
            'server': {'host': self.server.host, 'port': self.server.port},
            'head': self.head.to_dict(),
            'css': list(self.css),
            'plugins': list(self.plugins),
            'components': self.components,
            'buildModules': list(self.build_modules),
            'modules': list(self.modules),
        }
        # 模块配置以模块的配置名作为顶层键 (axios / content)
        tree.update(thaw(self.module_options))
        tree['build'] = self.build.to_dict()
        tree['baseUrl'] = self.base_url
        return tree


# --- 构建器 ---

class SiteConfigBuilder:
    """
    把动态生成的 <meta> 列表与 config.py 中的静态声明合并为一个只读的配置树。
    dynamic_meta 为 None 时调用 get_site_meta(base_url=env.base_url)。
    """

    def __init__(self, env: SiteEnvironment,
                 dynamic_meta: Optional[Iterable[SiteMetadataEntry]] = None,
                 static_meta: Optional[Iterable[SiteMetadataEntry]] = None):
        self.env = env
        if dynamic_meta is None:
            dynamic_meta = get_site_meta(base_url=env.base_url)
        if static_meta is None:
            static_meta = entries_from_tags(config.STATIC_META)
        self.dynamic_meta = tuple(dynamic_meta)
        self.static_meta = tuple(static_meta)

    def links(self) -> Tuple[Mapping[str, Any], ...]:
        canonical = {
            'hid': config.CANONICAL_HID,
            'rel': 'canonical',
            'href': self.env.base_url,
        }
        return freeze([canonical, *config.STATIC_LINKS])

    def head(self) -> HeadConfig:
        return HeadConfig(
            title=config.SITE_TITLE,
            meta=merge_meta(self.dynamic_meta, self.static_meta),
            links=self.links(),
            scripts=freeze(config.SCRIPTS),
            html_attrs=freeze(config.HTML_ATTRS),
        )

    def page_head(self, title: str, url: str,
                  page_meta: Iterable[SiteMetadataEntry],
                  overrides: Iterable[SiteMetadataEntry] = ()) -> HeadConfig:
        """单个内容页的 head：静态 meta + 页面 meta + 页面自己的覆盖项 (后者覆盖前者)，canonical 指向页面地址。"""
        meta = merge_meta(merge_meta(self.static_meta, page_meta), overrides)
        canonical = {'hid': config.CANONICAL_HID, 'rel': 'canonical', 'href': url}
        return replace(
            self.head(),
            title=f"{title} - {config.SITE_NAME}",
            meta=meta,
            links=freeze([canonical, *config.STATIC_LINKS]),
        )

    def build(self) -> ConfigTree:
        return ConfigTree(
            render_mode=RenderMode(ssr=config.SSR, target=config.TARGET),
            server=ServerConfig(host=self.env.host, port=self.env.port),
            head=self.head(),
            css=tuple(config.CSS),
            plugins=tuple(config.PLUGINS),
            components=config.COMPONENTS,
            build_modules=tuple(config.BUILD_MODULES),
            modules=tuple(config.MODULES),
            module_options=freeze(config.MODULE_OPTIONS),
            build=BuildConfig(postcss_plugins=freeze(config.POSTCSS_PLUGINS)),
            base_url=self.env.base_url,
        )


def build_config(env: Optional[SiteEnvironment] = None,
                 dynamic_meta: Optional[Iterable[SiteMetadataEntry]] = None) -> ConfigTree:
    """构建一次配置树。env 需要显式传入；不传时所有环境值都视为缺失。"""
    return SiteConfigBuilder(env or SiteEnvironment(), dynamic_meta).build()
