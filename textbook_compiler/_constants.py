"""Common literal values used across textbook_compiler.

These constants keep element names, resource paths, and minifier settings
centralized so the renderer, the DOM post-processor, and tests agree on the
same markup. Intended for internal use within the textbook_compiler package.

Examples
--------
>>> from textbook_compiler import _constants
>>> _constants.RESOURCE_PATH_TEMPLATE.format(root="/resources", document="atoms")
'/resources/atoms/images/'
>>> _constants.STEP_CLOSE
'</x-step>'
"""

RESOURCE_PATH_TEMPLATE = "{root}/{document}/images/"
EMOJI_PATH_TEMPLATE = "{root}/{code}.png"

STEP_TAG = "x-step"
STEP_OPEN = f"<{STEP_TAG}>"
STEP_CLOSE = f"</{STEP_TAG}>"
DEFAULT_STEP_ID = "step-{index}"

BLOCK_MARKER = ":::"
COLUMN_KEYWORD = "column"
TAB_KEYWORD = "tab"
COLUMN_GROUP_OPEN = '<div class="row padded">'
COLUMN_GROUP_CLOSE = "</div></div>"
TAB_GROUP_OPEN = "<x-tabbox>"
TAB_GROUP_CLOSE = "</div></x-tabbox>"

TEMPLATE_NAME = "content.pug"
MARKDOWN_CLASS = "md"
PARENT_ATTRIBUTE = "parent"
