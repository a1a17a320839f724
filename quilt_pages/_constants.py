"""Common literal values used across quilt_pages.

These constants keep reserved directory names, manifest markers, and the
template substitution token centralized so the composer, builder, and tests
import the same values without drifting. Intended for internal use within the
quilt_pages package.

Examples
--------
>>> from quilt_pages import _constants
>>> _constants.BUILTIN_TEMPLATE.count(_constants.TEMPLATE_MARKER)
1
>>> _constants.RECURSIVE_MARKER + _constants.STATIC_OUTPUT_DIR
'!static'
"""

CONTENT_DIR_NAME = "site"
STATIC_DIR_NAME = "static"
THEMES_DIR_NAME = "themes"

CONTENT_EXTENSION = "md"
CONFIG_EXTENSIONS = frozenset({"toml", "yaml", "yml"})
TEMPLATE_EXTENSION = "html"
OUTPUT_EXTENSION = "html"

TEMPLATE_MARKER = "{{content}}"
BUILTIN_TEMPLATE = "<html><body><article>{{content}}</article></body></html>"

MANIFEST_FILENAME = "_quilt"
RECURSIVE_MARKER = "!"
COMMENT_MARKER = "#"
MANIFEST_HEADER = "# quilt build manifest: entries are removed top to bottom"

STATIC_OUTPUT_DIR = "static"
STAGING_DIR_NAME = ".quilt_tmp"
THEME_STATIC_DIR = "static"
THEMES_OUTPUT_DIR = "themes"

NOT_FOUND_PAGE = "404.html"
