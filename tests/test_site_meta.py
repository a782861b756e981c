"""
Tests for get_site_meta.
"""

import config
from site_meta import absolute_url, get_site_meta


def _by_hid(entries):
    return {e.hid: e.value for e in entries}


class TestGetSiteMeta:

    def test_defaults(self):
        values = _by_hid(get_site_meta())

        assert values['og:type'] == 'website'
        assert values['og:url'] == config.SITE_URL
        assert values['og:title'] == config.SITE_TITLE
        assert values['description'] == config.SITE_META_DEFAULTS['description']
        assert values['og:image'] == f"{config.SITE_URL}/preview.png"

    def test_every_entry_has_hid(self):
        entries = get_site_meta()

        assert len(entries) == 10
        assert all(e.hid == e.key for e in entries)

    def test_base_url_is_default_url(self):
        values = _by_hid(get_site_meta(base_url='https://example.com'))

        assert values['og:url'] == 'https://example.com'
        assert values['twitter:url'] == 'https://example.com'
        assert values['og:image'] == 'https://example.com/preview.png'

    def test_page_values(self):
        meta = {
            'type': 'article',
            'url': 'https://example.com/post/',
            'title': 'Post',
            'description': 'About the post',
            'mainImage': 'https://cdn.example.com/cover.png',
        }

        values = _by_hid(get_site_meta(meta, base_url='https://example.com'))

        assert values['og:type'] == 'article'
        assert values['og:url'] == 'https://example.com/post/'
        assert values['twitter:title'] == 'Post'
        assert values['og:description'] == 'About the post'
        assert values['twitter:image'] == 'https://cdn.example.com/cover.png'

    def test_empty_values_fall_back(self):
        values = _by_hid(get_site_meta({'title': '', 'description': None}))

        assert values['og:title'] == config.SITE_TITLE
        assert values['og:description'] == config.SITE_META_DEFAULTS['description']

    def test_pure(self):
        assert get_site_meta({'title': 'x'}) == get_site_meta({'title': 'x'})


class TestAbsoluteUrl:

    def test_relative(self):
        assert absolute_url('https://example.com/', '/img/a.png') == 'https://example.com/img/a.png'

    def test_absolute_untouched(self):
        assert absolute_url('https://example.com', '//cdn.example.com/a.png') == '//cdn.example.com/a.png'
