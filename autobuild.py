# autobuild.py - 生成站点配置与内容页，未变化的输出文件不重写

import glob
import hashlib
import json
import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

import config
import generator
from builder import SiteConfigBuilder, SiteEnvironment
from parser import (get_head_overrides, get_metadata_and_content, is_page_hidden,
                    page_meta, page_url)
from site_meta import get_site_meta


# --- Manifest 辅助函数 (增量构建所需) ---
def load_manifest(manifest_path: str) -> Dict[str, Any]:
    """加载上一次的构建清单文件。"""
    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            manifest = json.load(f)
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return manifest if isinstance(manifest, dict) else {}


def save_manifest(manifest_path: str, manifest: Dict[str, Any]):
    """保存当前的构建清单文件。"""
    try:
        with open(manifest_path, 'w', encoding='utf-8') as f:
            json.dump(manifest, f, ensure_ascii=False, indent=4)
    except OSError as e:
        print(f"警告：无法写入构建清单文件 {manifest_path}: {e}")


def content_hash(content: str) -> str:
    return hashlib.sha256(content.encode('utf-8')).hexdigest()


class OutputWriter:
    """按清单中的哈希决定是否重写输出文件，并记录本次构建产生的全部文件。"""

    def __init__(self, build_dir: str, old_manifest: Dict[str, Any]):
        self.build_dir = build_dir
        self.old_outputs = old_manifest.get('outputs', {})
        self.outputs: Dict[str, str] = {}
        self.written: List[str] = []
        self.skipped: List[str] = []

    def write(self, relative_path: str, content: str):
        relative_path = relative_path.replace('\\', '/')
        digest = content_hash(content)
        self.outputs[relative_path] = digest
        full_path = os.path.join(self.build_dir, *relative_path.split('/'))

        if self.old_outputs.get(relative_path) == digest and os.path.exists(full_path):
            self.skipped.append(relative_path)
            print(f"   -> [SKIPPED] {relative_path}")
            return

        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, 'w', encoding='utf-8') as f:
            f.write(content)
        self.written.append(relative_path)
        print(f"   -> [WRITTEN] {relative_path}")

    def remove_stale(self) -> List[str]:
        """删除上一次构建生成、本次不再生成的文件。"""
        removed = []
        for relative_path in sorted(set(self.old_outputs) - set(self.outputs)):
            full_path = os.path.join(self.build_dir, *relative_path.split('/'))
            try:
                os.remove(full_path)
            except FileNotFoundError:
                pass
            except OSError as e:
                print(f"   -> [WARNING] Failed to clean up {full_path}: {e}")
                continue
            removed.append(relative_path)
            print(f"   -> [CLEANUP] {relative_path}")
            self._remove_empty_parent(full_path)
        return removed

    def _remove_empty_parent(self, full_path: str):
        """<slug>/ 目录在最后一个文件被删除后一并删除；不删除 build_dir 本身。"""
        parent = os.path.dirname(full_path)
        if os.path.normpath(parent) == os.path.normpath(self.build_dir):
            return
        try:
            if os.path.isdir(parent) and not os.listdir(parent):
                os.rmdir(parent)
                print(f"   -> [CLEANUP] {os.path.relpath(parent, self.build_dir)}/")
        except OSError as e:
            print(f"   -> [WARNING] Failed to remove directory {parent}: {e}")


def build_pages(builder: SiteConfigBuilder, content_dir: str, writer: OutputWriter) -> List[Dict[str, Any]]:
    """把 content_dir 下的 Markdown 生成为 <slug>/index.html 与 <slug>/head.html。"""
    base_url = builder.env.base_url
    md_files = sorted(glob.glob(os.path.join(content_dir, '*.md')))
    pages = []
    seen_slugs = set()

    for md_file in md_files:
        metadata, _, content_html, toc_html = get_metadata_and_content(md_file)
        if not metadata:
            continue
        if is_page_hidden(metadata):
            print(f"   -> [HIDDEN] {os.path.basename(md_file)}")
            continue

        slug = metadata['slug']
        if not slug:
            print(f"   -> [WARNING] {os.path.basename(md_file)} has no usable slug, skipped.")
            continue
        if slug in seen_slugs:
            print(f"   -> [WARNING] Duplicate slug '{slug}' in {os.path.basename(md_file)}, skipped.")
            continue
        seen_slugs.add(slug)

        url = page_url(metadata, base_url)
        head = builder.page_head(
            metadata['title'],
            url,
            get_site_meta(page_meta(metadata, base_url), base_url=base_url),
            get_head_overrides(metadata, md_file),
        )
        writer.write(f"{slug}/{config.HEAD_FILE}", generator.render_head(head))
        writer.write(f"{slug}/index.html", generator.render_page(head, content_html, toc_html))
        pages.append({'slug': slug, 'url': url, 'date': metadata.get('date')})

    return pages


def build_site(env: Optional[SiteEnvironment] = None,
               build_dir: Optional[str] = None,
               content_dir: Optional[str] = None) -> Dict[str, List[str]]:
    env = env or SiteEnvironment()
    build_dir = build_dir or config.BUILD_DIR
    content_dir = content_dir or config.CONTENT_DIR

    print("\n" + "=" * 40)
    print("   STARTING BUILD PROCESS")
    print("=" * 40 + "\n")

    # [1/4] 准备
    print("[1/4] Preparing build directory and loading manifest...")
    os.makedirs(build_dir, exist_ok=True)
    manifest_path = os.path.join(build_dir, config.MANIFEST_FILE)
    writer = OutputWriter(build_dir, load_manifest(manifest_path))
    for name, value in (('HOST', env.host), ('PORT', env.port), ('BASE_URL', env.base_url)):
        print(f"   -> {name} = {value if value is not None else '(unset)'}")

    # [2/4] 站点配置
    print("\n[2/4] Building site configuration...")
    builder = SiteConfigBuilder(env)
    tree = builder.build()
    writer.write(config.CONFIG_FILE, generator.render_config_json(tree))
    writer.write(config.HEAD_FILE, generator.render_head(tree.head))
    writer.write(config.TAILWIND_FILE, generator.render_tailwind_config())
    writer.write(f"{config.ASSETS_DIR_NAME}/{config.HIGHLIGHT_CSS_FILE}", generator.render_highlight_css())

    # [3/4] 内容页
    print("\n[3/4] Parsing Markdown content...")
    if os.path.isdir(content_dir):
        pages = build_pages(builder, content_dir, writer)
    else:
        print(f"   -> WARNING: content directory '{content_dir}' not found.")
        pages = []
    print(f"   -> {len(pages)} pages.")

    # [4/4] sitemap & 清单
    print("\n[4/4] Writing sitemap and manifest...")
    if env.base_url:
        writer.write(config.SITEMAP_FILE, generator.generate_sitemap(env.base_url, pages))
    else:
        print("   -> [SKIPPED] sitemap (BASE_URL unset)")
    removed = writer.remove_stale()
    save_manifest(manifest_path, {'outputs': writer.outputs})

    print(f"\n✅ BUILD COMPLETE ({len(writer.written)} written, {len(writer.skipped)} unchanged)")
    return {'written': writer.written, 'skipped': writer.skipped, 'removed': removed}


def main():
    load_dotenv()
    build_site(SiteEnvironment.from_environ())


if __name__ == '__main__':
    main()
