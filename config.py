# config.py

# --- 站点配置 ---
SITE_NAME = "Chelewani"
SITE_TITLE = "Chelewani - We spread the solutions [...]"
# 没有 BASE_URL 时 get_site_meta 使用的回退地址
SITE_URL = "https://chelewani.com"
HTML_ATTRS = {'lang': 'en-US'}

# 渲染模式
SSR = True
TARGET = 'static'

# 读取的环境变量名称 (不设默认值)
ENV_HOST = 'HOST'
ENV_PORT = 'PORT'
ENV_BASE_URL = 'BASE_URL'

# --- get_site_meta 的默认值 ---
SITE_META_DEFAULTS = {
    'type': 'website',
    'title': SITE_TITLE,
    'description': 'Coding and application architectural solutions. We spread the solutions like [...]. ',
    'mainImage': '/preview.png',
}

# --- 静态 <meta> 列表 (排在动态列表之后，同 hid 后者覆盖前者) ---
STATIC_META = [
    {'charset': 'utf-8'},
    {'name': 'HandheldFriendly', 'content': 'True'},
    {'name': 'viewport', 'content': 'width=device-width, initial-scale=1'},
    {'property': 'og:site_name', 'content': SITE_NAME},
    {'hid': 'description', 'name': 'description', 'content': ''},
    {'name': 'format-detection', 'content': 'telephone=no'},
    {
        'hid': 'description',
        'name': 'description',
        'content': 'Coding and application architectural solutions. We spread the solutions like [...]. ',
    },
    {'property': 'og:image:width', 'content': '740'},
    {'property': 'og:image:height', 'content': '300'},
    {'name': 'twitter:site', 'content': '@kamlfuz'},
    {'name': 'twitter:card', 'content': 'summary_large_image'},
]

# --- <script> / <link> ---
ANALYTICS_SRC = 'https://www.googletagmanager.com/gtag/js?id=G-2RQQZS4PHL'
SCRIPTS = [
    {'src': ANALYTICS_SRC, 'async': True},
]

FONT_STYLESHEET = (
    'https://fonts.googleapis.com/css2?family=Merriweather:wght@300;400'
    '&display=swap&family=DM+Mono&display=swap'
)
FAVICON = {'rel': 'icon', 'type': 'image/x-icon', 'href': '/favicon.ico'}
# canonical 链接的 href 来自 BASE_URL，在 builder.py 中插入到最前面
CANONICAL_HID = 'canonical'
STATIC_LINKS = [
    FAVICON,
    {'rel': 'stylesheet', 'href': FONT_STYLESHEET},
]

# --- 全局 CSS ---
CSS = [
    '@/assets/css/main.css',
]

# --- 模块 ---
PLUGINS = []
COMPONENTS = True
BUILD_MODULES = [
    '@nuxt/postcss8',
    '@nuxtjs/moment',
]
MODULES = [
    '@nuxtjs/axios',
    '@nuxt/content',
]

# 每个模块的配置 (键为模块的配置名)
PRISM_THEME = 'prism-themes/themes/prism-atom-dark.css'
MODULE_OPTIONS = {
    'axios': {},
    'content': {
        'markdown': {
            'prism': {
                'theme': PRISM_THEME,
            },
        },
    },
}

# --- PostCSS 插件链 (顺序即执行顺序) ---
POSTCSS_PLUGINS = {
    'tailwindcss': {},
    'autoprefixer': {},
}

# --- Tailwind 配置 ---
TAILWIND_CONFIG = {
    'content': [
        './components/**/*.{js,vue,ts}',
        './layouts/**/*.vue',
        './pages/**/*.vue',
        './plugins/**/*.{js,ts}',
        './nuxt.config.{js,ts}',
    ],
    'theme': {
        'extend': {
            'fontFamily': {
                'serif': ['Merriweather', 'Georgia'],
                'mono': ['DM Mono', 'monospace'],
            },
        },
    },
    'plugins': [],
}

# 定义代码高亮使用的 CSS 类名
CODE_HIGHLIGHT_CLASS = 'highlight'
# 与 PRISM_THEME (atom dark) 接近的 Pygments 样式
PYGMENTS_STYLE = 'monokai'

# --- Markdown 配置 ---
MARKDOWN_EXTENSIONS = [
    'extra',              # fenced_code, tables, footnotes
    'codehilite',         # 代码高亮 (需要 Pygments)
    'toc',
    'sane_lists',
    'pymdownx.tasklist',  # - [ ]
    'pymdownx.tilde',     # ~~text~~
]

MARKDOWN_EXTENSION_CONFIGS = {
    'toc': {
        'baselevel': 2,
        'anchorlink': True,
    },
    'codehilite': {
        'linenums': False,
        'css_class': CODE_HIGHLIGHT_CLASS,
        'use_pygments': True,
        'noclasses': False,
        'guess_lang': False,
    },
    'pymdownx.tasklist': {
        'custom_checkbox': True,
        'clickable_checkbox': False,
    },
}

# --- 目录和文件配置 ---
CONTENT_DIR = 'content'
BUILD_DIR = '_site'
ASSETS_DIR_NAME = 'assets'

CONFIG_FILE = 'nuxt.config.json'
HEAD_FILE = 'head.html'
TAILWIND_FILE = 'tailwind.config.js'
HIGHLIGHT_CSS_FILE = 'highlight.css'
SITEMAP_FILE = 'sitemap.xml'
MANIFEST_FILE = '.build_manifest.json'
