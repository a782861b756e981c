"""
Tests for the build entry point and the output manifest.
"""

import json
import os

import config
from autobuild import OutputWriter, build_site, load_manifest
from builder import SiteEnvironment


POST = """---
title: Hello World
tags: [python]
---
Hello.
"""

DRAFT = """---
title: Draft
status: draft
---
Not yet.
"""


def make_content(tmp_path):
    content_dir = tmp_path / 'content'
    content_dir.mkdir()
    (content_dir / 'hello-world.md').write_text(POST, encoding='utf-8')
    (content_dir / 'draft.md').write_text(DRAFT, encoding='utf-8')
    return content_dir


class TestBuildSite:

    def test_outputs(self, tmp_path):
        content_dir = make_content(tmp_path)
        build_dir = tmp_path / '_site'

        result = build_site(SiteEnvironment(base_url='https://example.com'), str(build_dir), str(content_dir))

        for name in (config.CONFIG_FILE, config.HEAD_FILE, config.TAILWIND_FILE, config.SITEMAP_FILE,
                     'assets/highlight.css', 'hello-world/index.html', 'hello-world/head.html'):
            assert (build_dir / name).exists(), name
        assert not (build_dir / 'draft').exists()
        assert 'hello-world/index.html' in result['written']

        tree = json.loads((build_dir / config.CONFIG_FILE).read_text(encoding='utf-8'))
        assert tree['baseUrl'] == 'https://example.com'

        head = (build_dir / 'hello-world' / 'head.html').read_text(encoding='utf-8')
        assert '<link rel="canonical" href="https://example.com/hello-world/">' in head
        assert 'property="article:tag" content="python"' in head
        assert 'data-hid="og:type" property="og:type" content="article"' in head

    def test_second_build_skips_unchanged(self, tmp_path):
        content_dir = make_content(tmp_path)
        build_dir = tmp_path / '_site'
        env = SiteEnvironment(base_url='https://example.com')

        build_site(env, str(build_dir), str(content_dir))
        result = build_site(env, str(build_dir), str(content_dir))

        assert result['written'] == []
        assert 'hello-world/index.html' in result['skipped']

    def test_removed_page_is_cleaned_up(self, tmp_path):
        content_dir = make_content(tmp_path)
        build_dir = tmp_path / '_site'

        build_site(SiteEnvironment(), str(build_dir), str(content_dir))
        (content_dir / 'hello-world.md').unlink()
        result = build_site(SiteEnvironment(), str(build_dir), str(content_dir))

        assert 'hello-world/index.html' in result['removed']
        assert not (build_dir / 'hello-world' / 'index.html').exists()
        assert not (build_dir / 'hello-world').exists()
        assert (build_dir / config.HEAD_FILE).exists()

    def test_without_base_url(self, tmp_path):
        build_dir = tmp_path / '_site'

        build_site(SiteEnvironment(), str(build_dir), str(tmp_path / 'no-content'))

        assert not (build_dir / config.SITEMAP_FILE).exists()
        tree = json.loads((build_dir / config.CONFIG_FILE).read_text(encoding='utf-8'))
        assert tree['baseUrl'] is None
        assert tree['server'] == {'host': None, 'port': None}

    def test_manifest_written(self, tmp_path):
        build_dir = tmp_path / '_site'

        build_site(SiteEnvironment(), str(build_dir), str(tmp_path / 'no-content'))

        manifest = load_manifest(os.path.join(str(build_dir), config.MANIFEST_FILE))
        assert config.CONFIG_FILE in manifest['outputs']


class TestOutputWriter:

    def test_rewrites_missing_file(self, tmp_path):
        writer = OutputWriter(str(tmp_path), {})
        writer.write('a/b.txt', 'x')
        digest = writer.outputs['a/b.txt']
        (tmp_path / 'a' / 'b.txt').unlink()

        again = OutputWriter(str(tmp_path), {'outputs': {'a/b.txt': digest}})
        again.write('a/b.txt', 'x')

        assert again.written == ['a/b.txt']
        assert (tmp_path / 'a' / 'b.txt').read_text(encoding='utf-8') == 'x'

    def test_corrupt_manifest(self, tmp_path):
        path = tmp_path / 'manifest.json'
        path.write_text('{not json', encoding='utf-8')

        assert load_manifest(str(path)) == {}


class TestPageHeads:

    def test_front_matter_description_in_head(self, tmp_path):
        content_dir = tmp_path / 'content'
        content_dir.mkdir()
        (content_dir / 'post.md').write_text("---\ntitle: Post\ndescription: Page specific\n---\nBody\n",
                                             encoding='utf-8')
        build_dir = tmp_path / '_site'

        build_site(SiteEnvironment(base_url='https://example.com'), str(build_dir), str(content_dir))

        head = (build_dir / 'post' / 'head.html').read_text(encoding='utf-8')
        assert 'data-hid="description" name="description" content="Page specific"' in head
        assert head.count('name="description"') == 1
        assert 'Coding and application' not in head

    def test_empty_front_matter_slug_falls_back_to_filename(self, tmp_path):
        content_dir = tmp_path / 'content'
        content_dir.mkdir()
        (content_dir / 'bang.md').write_text("---\nslug: '!!!'\ntitle: Bang\n---\nBody\n", encoding='utf-8')
        build_dir = tmp_path / '_site'

        build_site(SiteEnvironment(), str(build_dir), str(content_dir))

        assert (build_dir / 'bang' / 'head.html').exists()
        root_head = (build_dir / config.HEAD_FILE).read_text(encoding='utf-8')
        assert f"<title>{config.SITE_TITLE}</title>" in root_head
        assert not (build_dir / 'index.html').exists()

    def test_page_without_usable_slug_is_skipped(self, tmp_path, capsys):
        content_dir = tmp_path / 'content'
        content_dir.mkdir()
        (content_dir / '!!!.md').write_text("---\ntitle: Bang\n---\nBody\n", encoding='utf-8')
        build_dir = tmp_path / '_site'

        build_site(SiteEnvironment(), str(build_dir), str(content_dir))

        root_head = (build_dir / config.HEAD_FILE).read_text(encoding='utf-8')
        assert 'Bang' not in root_head
        assert not (build_dir / 'index.html').exists()
        assert 'no usable slug' in capsys.readouterr().out
